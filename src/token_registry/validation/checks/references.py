"""Cross-reference integrity check.

Runs once after every kind has been loaded. Each reference edge (for example
a contract's `project` field) must name an identifier that exists among the
loaded entries of the target kind.

Entries whose JSON failed to parse contribute no edges: their reference
fields were never extracted. Entries that failed schema validation still
contribute edges whenever the reference field itself is a non-empty string.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Set

from token_registry.core.enums import RegistryKind, RuleId
from ..config import ValidationConfig
from ..models import ReferenceEdge, RegistryEntry, ValidationViolation
from . import lookup_field, make_violation

logger = logging.getLogger(__name__)


def extract_references(entry: RegistryEntry, config: ValidationConfig) -> List[ReferenceEdge]:
    """Return the reference edges declared by an entry's payload."""
    if not isinstance(entry.payload, dict):
        return []
    edges = []
    for field_name, target_kind in config.reference_fields.get(entry.kind, ()):
        value = lookup_field(entry.payload, field_name)
        if isinstance(value, str) and value:
            edges.append(ReferenceEdge(entry, field_name, target_kind, value))
    return edges


def check_references(
    entries: Iterable[RegistryEntry], edges: Iterable[ReferenceEdge]
) -> List[ValidationViolation]:
    """Verify that every edge resolves to a loaded entry.

    Args:
        entries: All entries loaded in the run, of every kind.
        edges: Reference edges in discovery order.

    Returns:
        One dangling_reference violation per unresolved edge, in edge order.
    """
    known: Dict[RegistryKind, Set[str]] = defaultdict(set)
    for entry in entries:
        known[entry.kind].add(entry.identifier)

    violations = []
    checked = 0
    for edge in edges:
        checked += 1
        if edge.to_identifier in known[edge.to_kind]:
            continue
        violations.append(
            make_violation(
                edge.from_entry.source_path,
                edge.from_entry.kind,
                RuleId.DANGLING_REFERENCE,
                f"{edge.field}: {edge.to_kind.value} '{edge.to_identifier}' does not exist "
                f"in {edge.to_kind.root_dir}/",
            )
        )
    logger.debug("Checked %d reference(s), %d unresolved", checked, len(violations))
    return violations


__all__ = ["extract_references", "check_references"]
