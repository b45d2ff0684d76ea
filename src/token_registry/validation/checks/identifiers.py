"""Identifier rules for registry filenames and directories.

Entries must be identifiable from their storage path alone:
- contracts/<chainId>/<ChecksummedAddress>.json
- projects/<slug>.json
- tokens/<ChecksummedAddress>/<ChecksummedAddress>.json

Every violation here is a hard rejection of the entry.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from token_registry.core.checksum import ensure_checksummed
from token_registry.core.enums import RegistryKind, RuleId
from token_registry.core.errors import AddressFormatError, ChecksumMismatchError
from ..config import (
    CHAIN_ID_PATTERN,
    ENTRY_SUFFIX,
    PROJECT_SLUG_PATTERN,
    ValidationConfig,
)
from ..models import ValidationViolation
from . import make_violation


def strip_suffix(raw_name: str) -> str:
    """Return the filename without the entry suffix."""
    if raw_name.endswith(ENTRY_SUFFIX):
        return raw_name[: -len(ENTRY_SUFFIX)]
    return raw_name


def check_partition(
    kind: RegistryKind, partition: str, entry_ref: Optional[str] = None
) -> List[ValidationViolation]:
    """Check a partition directory name (chain id for contracts)."""
    ref = entry_ref or partition
    if kind == RegistryKind.CONTRACT and not CHAIN_ID_PATTERN.fullmatch(partition):
        return [
            make_violation(
                ref,
                kind,
                RuleId.IDENTIFIER_VIOLATION,
                f"Chain id directory '{partition}' must be a numeric string",
            )
        ]
    return []


def _check_address_name(
    kind: RegistryKind, name: str, ref: str
) -> List[ValidationViolation]:
    try:
        ensure_checksummed(name)
    except AddressFormatError:
        return [
            make_violation(
                ref,
                kind,
                RuleId.ADDRESS_FORMAT,
                f"Filename '{name}' must be an address: '0x' followed by 40 hex characters",
            )
        ]
    except ChecksumMismatchError as e:
        return [
            make_violation(
                ref,
                kind,
                RuleId.CHECKSUM_MISMATCH,
                f"Filename must be EIP-55 checksummed: expected {e.canonical}",
            )
        ]
    return []


def _check_project_name(
    name: str, ref: str, config: ValidationConfig
) -> List[ValidationViolation]:
    violations = []
    if not PROJECT_SLUG_PATTERN.fullmatch(name):
        violations.append(
            make_violation(
                ref,
                RegistryKind.PROJECT,
                RuleId.IDENTIFIER_VIOLATION,
                f"Project filename '{name}' must be a lowercase, hyphenated identifier",
            )
        )
    if config.is_reserved(name):
        violations.append(
            make_violation(
                ref,
                RegistryKind.PROJECT,
                RuleId.IDENTIFIER_VIOLATION,
                f"Project filename '{name}' is a reserved name",
            )
        )
    return violations


def check_filename(
    kind: RegistryKind,
    raw_name: str,
    partition: Optional[str] = None,
    *,
    config: Optional[ValidationConfig] = None,
    entry_ref: Optional[str] = None,
) -> List[ValidationViolation]:
    """Check an entry filename against the conventions for its kind.

    Args:
        kind: Registry kind of the entry.
        raw_name: Filename including the `.json` suffix.
        partition: Containing directory name (chain id or token address), if any.
        config: Run configuration (reserved names). Defaults apply when None.
        entry_ref: Path used in violations; defaults to `raw_name`.

    Returns:
        Violations found; empty list if the name is admissible.

    Examples:
        >>> check_filename(RegistryKind.PROJECT, "uniswap.json")
        []
        >>> [v.rule_id.value for v in check_filename(RegistryKind.PROJECT, "main.json")]
        ['identifier_violation']
    """
    config = config or ValidationConfig()
    ref = entry_ref or raw_name
    name = strip_suffix(raw_name)

    if kind == RegistryKind.PROJECT:
        return _check_project_name(name, ref, config)

    violations: List[ValidationViolation] = []
    if partition is not None:
        violations.extend(check_partition(kind, partition, ref))
    violations.extend(_check_address_name(kind, name, ref))

    if kind == RegistryKind.TOKEN and partition is not None:
        expected = f"{partition}{ENTRY_SUFFIX}"
        if raw_name != expected:
            violations.append(
                make_violation(
                    ref,
                    kind,
                    RuleId.IDENTIFIER_VIOLATION,
                    f"Token file '{raw_name}' must be named '{expected}' to match its directory",
                )
            )
    return violations


def check_token_directory(
    dir_name: str, file_names: Iterable[str], entry_ref: Optional[str] = None
) -> List[ValidationViolation]:
    """Check that a token directory holds exactly one file.

    Dotfiles are ignored. The file name itself is checked by `check_filename`.
    """
    ref = entry_ref or dir_name
    files = sorted(name for name in file_names if not name.startswith("."))
    if len(files) == 1:
        return []
    if not files:
        message = f"Token directory '{dir_name}' must contain exactly one file, found none"
    else:
        message = (
            f"Token directory '{dir_name}' must contain exactly one file, "
            f"found {len(files)}: {', '.join(files)}"
        )
    return [make_violation(ref, RegistryKind.TOKEN, RuleId.IDENTIFIER_VIOLATION, message)]


__all__ = ["strip_suffix", "check_partition", "check_filename", "check_token_directory"]
