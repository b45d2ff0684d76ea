"""Core enumerations used across the package."""

from __future__ import annotations

from enum import Enum


class RegistryKind(str, Enum):
    """Kinds of registry entries.

    Values match the schema document names and are used in reports.
    Declaration order is the processing order.
    """

    CONTRACT = "contract"
    PROJECT = "project"
    TOKEN = "token"

    @property
    def root_dir(self) -> str:
        """Top-level directory holding entries of this kind."""
        return f"{self.value}s"


class RuleId(str, Enum):
    """Identifiers of the validation rules reported in violations."""

    ADDRESS_FORMAT = "address_format"
    CHECKSUM_MISMATCH = "checksum_mismatch"
    SCHEMA_VIOLATION = "schema_violation"
    IDENTIFIER_VIOLATION = "identifier_violation"
    PARSE_ERROR = "parse_error"
    DUPLICATE_IDENTIFIER = "duplicate_identifier"
    DANGLING_REFERENCE = "dangling_reference"
    IO_ERROR = "io_error"
    DUPLICATE_SYMBOL = "duplicate_symbol"
    REGISTRY_ROOT_MISSING = "registry_root_missing"


__all__ = ["RegistryKind", "RuleId"]
