"""Validation runner and reporter.

This module orchestrates a validation run:
- run_validation(): Loads schemas, walks the registry, returns a RunReport
- print_report(): Displays validation results to console
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from token_registry.core.schemas import load_schema_descriptors
from .checks.schema_conformance import SchemaValidator
from .config import ValidationConfig
from .models import RunReport
from .walker import RegistryWalker

DEFAULT_SCHEMA_DIRNAME = "schemas"


def run_validation(
    registry_root: Path,
    schema_dir: Optional[Path] = None,
    config: Optional[ValidationConfig] = None,
) -> RunReport:
    """Validate every entry of a registry.

    Args:
        registry_root: Path to the registry checkout.
        schema_dir: Directory holding the `<kind>.schema.json` documents.
            Defaults to `<registry_root>/schemas`.
        config: Run configuration. Defaults apply when None.

    Returns:
        RunReport with per-kind validated counts and ordered violations.

    Raises:
        FileNotFoundError: If registry_root or a schema document is missing.
        ValueError: If a schema document cannot be parsed or is not a valid schema.

    Examples:
        >>> report = run_validation(Path("."))
        >>> print(report.summary())
    """
    if not registry_root.is_dir():
        raise FileNotFoundError(f"Registry root not found: {registry_root}")

    descriptors = load_schema_descriptors(schema_dir or registry_root / DEFAULT_SCHEMA_DIRNAME)
    walker = RegistryWalker(registry_root, SchemaValidator(descriptors), config)
    return walker.load_all()


def print_report(report: RunReport, strict: bool = False) -> None:
    """Print validation report to console.

    Displays per-kind counts, one line per violation and a final banner.

    Examples:
        >>> print_report(report)
        ✅ Validated 1 contract(s)
        ✅ Validated 1 project(s)
        ✅ Validated 0 token(s)

        Violations:
        ❌ contracts/26600/0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed.json [dangling_reference] project: ...
    """
    print("🚀 Token Registry Validation")
    print()
    print(report.to_console_summary(strict=strict))
