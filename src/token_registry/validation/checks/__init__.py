"""Validation checks base interface.

This module defines the protocol (interface) that entry-level checks implement,
plus small helpers shared by all checks. An entry check receives a parsed
RegistryEntry and returns the violations it found (empty list = pass).

Filename rules (identifiers.py) run before parsing and cross-reference checks
(references.py) run after all kinds are loaded, so they are plain functions
rather than entry checks.

To implement a new entry check:

1. Create a new file in this directory (e.g., `my_check.py`)
2. Define a class that implements the EntryCheck protocol
3. Add it to `build_entry_checks()` in walker.py

Example:
    ```python
    # checks/my_check.py
    from typing import List
    from token_registry.core.enums import RegistryKind, RuleId
    from ..models import RegistryEntry, ValidationViolation
    from . import make_violation

    class MyCheck:
        def validate(self, entry: RegistryEntry) -> List[ValidationViolation]:
            return [make_violation(entry.source_path, entry.kind, RuleId.SCHEMA_VIOLATION, "...")]

        def applies_to_kind(self, kind: RegistryKind) -> bool:
            return kind == RegistryKind.TOKEN
    ```
"""

from __future__ import annotations

from typing import Any, List, Optional, Protocol

from token_registry.core.enums import RegistryKind, RuleId
from ..config import get_severity
from ..models import RegistryEntry, ValidationViolation

MISSING = object()


class EntryCheck(Protocol):
    """Protocol defining the interface for entry-level checks.

    Methods:
        validate: Run the check on one parsed entry.
        applies_to_kind: Determine if the check is applicable to a registry kind.
    """

    def validate(self, entry: RegistryEntry) -> List[ValidationViolation]:
        """Run the check.

        Args:
            entry: A RegistryEntry whose payload parsed successfully.

        Returns:
            Violations found, in a deterministic order. Empty list if the entry passes.
        """
        ...

    def applies_to_kind(self, kind: RegistryKind) -> bool:
        """Return True if this check should run for entries of `kind`."""
        ...


def make_violation(
    entry_ref: str,
    kind: RegistryKind,
    rule_id: RuleId,
    message: str,
    detail: Optional[str] = None,
) -> ValidationViolation:
    """Build a violation with the configured severity for `rule_id`."""
    return ValidationViolation(
        entry_ref=entry_ref,
        kind=kind,
        rule_id=rule_id,
        message=message,
        severity=get_severity(rule_id),
        detail=detail,
    )


def lookup_field(payload: Any, dotted_path: str) -> Any:
    """Resolve a dotted field path in a parsed payload.

    Returns MISSING if any segment is absent or a non-object is traversed.

    Examples:
        >>> lookup_field({"token": {"address": "0x1"}}, "token.address")
        '0x1'
        >>> lookup_field({"token": "x"}, "token.address") is MISSING
        True
    """
    current = payload
    for part in dotted_path.split("."):
        if not isinstance(current, dict) or part not in current:
            return MISSING
        current = current[part]
    return current


__all__ = ["EntryCheck", "MISSING", "make_violation", "lookup_field"]
