"""Schema conformance check.

Validates a parsed entry against the JSON Schema document for its kind:
required fields, field types, length bounds and patterns (for example, every
URL field must start with `https://`). All violations of a record are
collected in one pass. Extra fields are accepted.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

from jsonschema import Draft7Validator
from jsonschema.exceptions import ValidationError

from token_registry.core.enums import RegistryKind, RuleId
from token_registry.core.schemas import SchemaDescriptor
from ..models import RegistryEntry, ValidationViolation
from . import make_violation


def _format_path(error: ValidationError) -> str:
    if not error.absolute_path:
        return "<root>"
    return ".".join(str(p) for p in error.absolute_path)


def _sort_key(error: ValidationError):
    return ([str(p) for p in error.absolute_path], str(error.validator), error.message)


class SchemaValidator:
    """Validate records against per-kind schema descriptors.

    Validators are compiled once per kind at construction time.
    """

    def __init__(self, descriptors: Mapping[RegistryKind, SchemaDescriptor]) -> None:
        self.descriptors = descriptors
        self._validators: Dict[RegistryKind, Draft7Validator] = {
            kind: Draft7Validator(descriptor.document) for kind, descriptor in descriptors.items()
        }

    def validate(
        self, kind: RegistryKind, record: Any, entry_ref: str = "<record>"
    ) -> List[ValidationViolation]:
        """Check one record against the schema for `kind`.

        Args:
            kind: Registry kind selecting the schema.
            record: Parsed JSON value. Never mutated.
            entry_ref: Path used in violation messages.

        Returns:
            One violation per schema error, ordered by field path; empty if conformant.

        Raises:
            KeyError: If no schema was loaded for `kind`.
        """
        validator = self._validators[kind]
        errors = sorted(validator.iter_errors(record), key=_sort_key)
        return [
            make_violation(
                entry_ref,
                kind,
                RuleId.SCHEMA_VIOLATION,
                f"{_format_path(e)}: {e.message}",
            )
            for e in errors
        ]


class SchemaConformanceCheck:
    """Entry check wrapping SchemaValidator."""

    def __init__(self, validator: SchemaValidator) -> None:
        self.validator = validator

    def validate(self, entry: RegistryEntry) -> List[ValidationViolation]:
        return self.validator.validate(entry.kind, entry.payload, entry.source_path)

    def applies_to_kind(self, kind: RegistryKind) -> bool:
        """Check applies to every kind with a loaded schema."""
        return kind in self.validator.descriptors
