"""Payload consistency checks.

- EmbeddedIdentifierCheck: an identifier stored inside the payload (e.g. a
  token's `address`) must equal the identifier derived from the file path.
- AddressChecksumCheck: every address-typed payload field must be EIP-55
  checksummed.
"""

from __future__ import annotations

from typing import List

from token_registry.core.checksum import checksum_result, is_address_shaped
from token_registry.core.enums import RegistryKind, RuleId
from ..config import ValidationConfig
from ..models import RegistryEntry, ValidationViolation
from . import MISSING, lookup_field, make_violation


class EmbeddedIdentifierCheck:
    """Validate that the payload identifier matches the storage path."""

    def __init__(self, config: ValidationConfig) -> None:
        self.config = config

    def validate(self, entry: RegistryEntry) -> List[ValidationViolation]:
        field_name = self.config.identifier_fields[entry.kind]
        value = lookup_field(entry.payload, field_name)
        # Absent or mistyped fields are reported by the schema check
        if value is MISSING or not isinstance(value, str):
            return []
        if value == entry.identifier:
            return []
        return [
            make_violation(
                entry.source_path,
                entry.kind,
                RuleId.IDENTIFIER_VIOLATION,
                f"Declared {field_name} '{value}' does not match "
                f"file-derived identifier '{entry.identifier}'",
            )
        ]

    def applies_to_kind(self, kind: RegistryKind) -> bool:
        return kind in self.config.identifier_fields


class AddressChecksumCheck:
    """Validate that address-typed payload fields are EIP-55 checksummed."""

    def __init__(self, config: ValidationConfig) -> None:
        self.config = config

    def validate(self, entry: RegistryEntry) -> List[ValidationViolation]:
        violations = []
        for field_name in self.config.address_fields.get(entry.kind, ()):
            value = lookup_field(entry.payload, field_name)
            # Shape errors are reported by the schema pattern
            if not is_address_shaped(value):
                continue
            result = checksum_result(value)
            if not result.is_valid:
                violations.append(
                    make_violation(
                        entry.source_path,
                        entry.kind,
                        RuleId.CHECKSUM_MISMATCH,
                        f"{field_name}: '{value}' is not EIP-55 checksummed "
                        f"(expected {result.canonical_form})",
                    )
                )
        return violations

    def applies_to_kind(self, kind: RegistryKind) -> bool:
        return bool(self.config.address_fields.get(kind))
