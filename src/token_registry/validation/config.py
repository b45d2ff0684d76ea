"""Validation configuration constants.

This module centralizes naming rules, field mappings and severity rules.
Defaults below can be overridden per run with a YAML file (see
`config/registry.yaml`) loaded through `load_config()`.

Severity Levels:
    - "error": The entry is not admissible; the run fails
    - "warning": Informational; never changes the exit status
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, FrozenSet, Mapping, Optional, Tuple

import yaml

from token_registry.core.enums import RegistryKind, RuleId

# ============================================================================
# NAMING RULES
# ============================================================================

# Lowercase slug, no leading/trailing hyphen, no double hyphen
PROJECT_SLUG_PATTERN = re.compile(r"[a-z0-9]+(-[a-z0-9]+)*")

# Chain id directories under contracts/
CHAIN_ID_PATTERN = re.compile(r"[0-9]+")

ENTRY_SUFFIX = ".json"

# Names that collide with tooling-significant branch or file names
DEFAULT_RESERVED_NAMES = frozenset(
    {
        "main",
        "master",
        "test",
        "tests",
        "index",
        "schema",
        "schemas",
        "default",
        "null",
        "undefined",
    }
)


# ============================================================================
# FIELD MAPPINGS
# ============================================================================
# Dotted paths into entry payloads.

# Payload field that must equal the filename-derived identifier
DEFAULT_IDENTIFIER_FIELDS: Dict[RegistryKind, str] = {
    RegistryKind.CONTRACT: "address",
    RegistryKind.TOKEN: "address",
}

# Address-typed fields that must be EIP-55 checksummed
DEFAULT_ADDRESS_FIELDS: Dict[RegistryKind, Tuple[str, ...]] = {
    RegistryKind.CONTRACT: ("address",),
    RegistryKind.PROJECT: ("token.address",),
    RegistryKind.TOKEN: ("address",),
}

# Fields naming another entry: {kind: ((field, target_kind), ...)}
DEFAULT_REFERENCE_FIELDS: Dict[RegistryKind, Tuple[Tuple[str, RegistryKind], ...]] = {
    RegistryKind.CONTRACT: (("project", RegistryKind.PROJECT),),
    RegistryKind.TOKEN: (("project", RegistryKind.PROJECT),),
}

# Token field tracked for duplicate-symbol warnings
TOKEN_SYMBOL_FIELD = "symbol"


# ============================================================================
# SEVERITY RULES
# ============================================================================

_SEVERITY_MAP = {
    RuleId.ADDRESS_FORMAT: "error",
    RuleId.CHECKSUM_MISMATCH: "error",
    RuleId.SCHEMA_VIOLATION: "error",
    RuleId.IDENTIFIER_VIOLATION: "error",
    RuleId.PARSE_ERROR: "error",
    RuleId.DUPLICATE_IDENTIFIER: "error",
    RuleId.DANGLING_REFERENCE: "error",
    RuleId.IO_ERROR: "error",
    # Informational only
    RuleId.DUPLICATE_SYMBOL: "warning",
    # A missing kind root skips that kind
    RuleId.REGISTRY_ROOT_MISSING: "warning",
}

DEBUG_ENV_VAR = "TOKEN_REGISTRY_DEBUG"
_TRUTHY = {"1", "true", "yes", "on"}


def get_severity(rule_id: RuleId) -> str:
    """Get severity level for a rule.

    Raises:
        ValueError: If rule_id is unknown.

    Examples:
        >>> get_severity(RuleId.DUPLICATE_SYMBOL)
        'warning'
        >>> get_severity(RuleId.PARSE_ERROR)
        'error'
    """
    try:
        return _SEVERITY_MAP[RuleId(rule_id)]
    except (KeyError, ValueError):
        raise ValueError(f"Unknown rule_id: {rule_id}") from None


def debug_enabled(environ: Optional[Mapping[str, str]] = None) -> bool:
    """Return True when the debug environment toggle is set."""
    env = os.environ if environ is None else environ
    return env.get(DEBUG_ENV_VAR, "").strip().lower() in _TRUTHY


# ============================================================================
# RUN CONFIGURATION
# ============================================================================


@dataclass(frozen=True)
class ValidationConfig:
    """Injected configuration for one validation run.

    Attributes:
        reserved_names: Project slugs that may not be used (compared lowercase).
        identifier_fields: Payload field holding the entry identifier, per kind.
        address_fields: Address-typed payload fields to checksum, per kind.
        reference_fields: Cross-reference fields and their target kind, per kind.
        debug: Attach parse tracebacks to violations.
    """

    reserved_names: FrozenSet[str] = DEFAULT_RESERVED_NAMES
    identifier_fields: Mapping[RegistryKind, str] = field(
        default_factory=lambda: dict(DEFAULT_IDENTIFIER_FIELDS)
    )
    address_fields: Mapping[RegistryKind, Tuple[str, ...]] = field(
        default_factory=lambda: dict(DEFAULT_ADDRESS_FIELDS)
    )
    reference_fields: Mapping[RegistryKind, Tuple[Tuple[str, RegistryKind], ...]] = field(
        default_factory=lambda: dict(DEFAULT_REFERENCE_FIELDS)
    )
    debug: bool = False

    def is_reserved(self, name: str) -> bool:
        return name.lower() in self.reserved_names


def _parse_kind_map(raw: object, key: str) -> Dict[RegistryKind, object]:
    if not isinstance(raw, dict):
        raise ValueError(f"'{key}' must be a mapping of kind to values")
    try:
        return {RegistryKind(str(k)): v for k, v in raw.items()}
    except ValueError as e:
        raise ValueError(f"Unknown registry kind in '{key}': {e}") from e


def load_config(config_file: Optional[Path] = None, debug: Optional[bool] = None) -> ValidationConfig:
    """Build a ValidationConfig, optionally overlaying a YAML file.

    Recognized YAML keys: `reserved_names` (list), `identifier_fields`
    ({kind: field}), `address_fields` ({kind: [field, ...]}),
    `reference_fields` ({kind: {field: target_kind}}).

    Args:
        config_file: Optional YAML file. None uses built-in defaults.
        debug: Overrides the debug toggle; None reads the environment.

    Raises:
        FileNotFoundError: If config_file is given but missing.
        ValueError: If the YAML content has an unexpected shape.
        yaml.YAMLError: If the file is not valid YAML.
    """
    config = ValidationConfig(debug=debug_enabled() if debug is None else debug)
    if config_file is None:
        return config

    if not config_file.exists():
        raise FileNotFoundError(f"Config file not found: {config_file}")
    with config_file.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_file} must contain a mapping")

    overrides: Dict[str, object] = {}
    if "reserved_names" in data:
        names = data["reserved_names"] or []
        if not isinstance(names, list):
            raise ValueError("'reserved_names' must be a list")
        overrides["reserved_names"] = frozenset(str(n).lower() for n in names)
    if "identifier_fields" in data:
        raw = _parse_kind_map(data["identifier_fields"], "identifier_fields")
        overrides["identifier_fields"] = {k: str(v) for k, v in raw.items()}
    if "address_fields" in data:
        raw = _parse_kind_map(data["address_fields"], "address_fields")
        overrides["address_fields"] = {k: tuple(str(f) for f in (v or [])) for k, v in raw.items()}
    if "reference_fields" in data:
        raw = _parse_kind_map(data["reference_fields"], "reference_fields")
        references: Dict[RegistryKind, Tuple[Tuple[str, RegistryKind], ...]] = {}
        for kind, fields in raw.items():
            if not isinstance(fields, dict):
                raise ValueError(f"'reference_fields.{kind.value}' must map field to target kind")
            try:
                references[kind] = tuple(
                    (str(name), RegistryKind(str(target))) for name, target in fields.items()
                )
            except ValueError as e:
                raise ValueError(f"Unknown target kind in 'reference_fields': {e}") from e
        overrides["reference_fields"] = references

    return replace(config, **overrides)


__all__ = [
    "PROJECT_SLUG_PATTERN",
    "CHAIN_ID_PATTERN",
    "ENTRY_SUFFIX",
    "DEFAULT_RESERVED_NAMES",
    "TOKEN_SYMBOL_FIELD",
    "ValidationConfig",
    "get_severity",
    "debug_enabled",
    "load_config",
]
