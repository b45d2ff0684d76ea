"""Validation data models.

This module defines core data structures for a validation run:
- RegistryEntry: One record on disk
- ReferenceEdge: A pointer from one entry to another entry of a different kind
- ValidationViolation: A single rule failure
- RunReport: Aggregated results from a full run
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from token_registry.core.enums import RegistryKind, RuleId

SEVERITIES = ("error", "warning")


@dataclass(frozen=True)
class RegistryEntry:
    """One registry record loaded from disk.

    Attributes:
        kind: Registry kind of the entry.
        partition_key: Chain id for contracts, token address for tokens, None for projects.
        identifier: Filename-derived key (an address or a slug).
        source_path: Registry-relative path of the file.
        payload: Parsed JSON content, or None if the file could not be parsed.
    """

    kind: RegistryKind
    partition_key: Optional[str]
    identifier: str
    source_path: str
    payload: Optional[Any] = None


@dataclass(frozen=True)
class ReferenceEdge:
    """Declares that `from_entry` names an entry of `to_kind` by identifier."""

    from_entry: RegistryEntry
    field: str
    to_kind: RegistryKind
    to_identifier: str


@dataclass(frozen=True)
class ValidationViolation:
    """A single validation failure.

    Attributes:
        entry_ref: Registry-relative path of the offending file or directory.
        kind: Registry kind the entry belongs to.
        rule_id: Rule that failed (e.g., "schema_violation").
        message: Human-readable description.
        severity: "error" fails the run, "warning" is informational.
        detail: Optional debug detail (e.g., a parse traceback).

    Examples:
        >>> ValidationViolation(
        ...     entry_ref="projects/Bad_Name.json",
        ...     kind=RegistryKind.PROJECT,
        ...     rule_id=RuleId.IDENTIFIER_VIOLATION,
        ...     message="Project filename must be a lowercase hyphenated slug",
        ... )
    """

    entry_ref: str
    kind: RegistryKind
    rule_id: RuleId
    message: str
    severity: str = "error"  # "error" | "warning"
    detail: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate field constraints."""
        if self.severity not in SEVERITIES:
            raise ValueError(f"Invalid severity: {self.severity}. Must be 'error' or 'warning'.")

    @property
    def is_error(self) -> bool:
        return self.severity == "error"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "entry_ref": self.entry_ref,
            "kind": self.kind.value,
            "rule_id": self.rule_id.value,
            "severity": self.severity,
            "message": self.message,
        }
        if self.detail:
            data["detail"] = self.detail
        return data

    def format_line(self) -> str:
        """Single-line console representation."""
        icon = "❌" if self.is_error else "⚠️"
        return f"{icon} {self.entry_ref} [{self.rule_id.value}] {self.message}"


@dataclass
class RunReport:
    """Aggregated results for one validation run.

    Attributes:
        validated_counts: Number of entries that passed, per kind.
        violations: All violations in order of discovery.

    Examples:
        >>> report = RunReport(
        ...     validated_counts={RegistryKind.CONTRACT: 3},
        ...     violations=[violation],
        ... )
        >>> report.has_errors()
        True
    """

    validated_counts: Dict[RegistryKind, int] = field(default_factory=dict)
    violations: List[ValidationViolation] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.has_errors()

    def has_errors(self, strict: bool = False) -> bool:
        """Check if validation failed.

        Args:
            strict: If True, treat warnings as errors. Default False.

        Returns:
            True if any errors found (or warnings in strict mode), False otherwise.
        """
        for violation in self.violations:
            if violation.is_error:
                return True
            if strict and violation.severity == "warning":
                return True
        return False

    def get_error_count(self) -> int:
        return sum(1 for v in self.violations if v.is_error)

    def get_warning_count(self) -> int:
        return sum(1 for v in self.violations if v.severity == "warning")

    def get_violations(self, severity: Optional[str] = None) -> List[ValidationViolation]:
        """Get violations, optionally filtered by severity.

        Examples:
            >>> errors = report.get_violations(severity="error")
            >>> everything = report.get_violations()
        """
        return [v for v in self.violations if severity is None or v.severity == severity]

    def count_for(self, kind: RegistryKind) -> int:
        return self.validated_counts.get(kind, 0)

    def summary(self) -> str:
        """Generate a concise text summary of the run.

        Examples:
            >>> print(report.summary())
            Validation Summary:
              Validated: 3 contract(s), 1 project(s), 2 token(s)
              Issues: 1 errors, 0 warnings
        """
        counts = ", ".join(f"{self.count_for(kind)} {kind.value}(s)" for kind in RegistryKind)
        return (
            f"Validation Summary:\n"
            f"  Validated: {counts}\n"
            f"  Issues: {self.get_error_count()} errors, {self.get_warning_count()} warnings"
        )

    def to_console_summary(self, strict: bool = False) -> str:
        """Generate the console report: counts, one line per violation, final banner."""
        lines = []
        for kind in RegistryKind:
            lines.append(f"✅ Validated {self.count_for(kind)} {kind.value}(s)")
        lines.append("")

        if self.violations:
            lines.append("Violations:")
            for violation in self.violations:
                lines.append(violation.format_line())
                if violation.detail:
                    for detail_line in violation.detail.rstrip().splitlines():
                        lines.append(f"   {detail_line}")
            lines.append("")

        lines.append(self.summary())
        lines.append("")
        if self.has_errors(strict=strict):
            lines.append("❌ Validation failed with errors")
        else:
            lines.append("✨ All validations passed!")
        return "\n".join(lines)

    def to_markdown(self) -> str:
        """Generate detailed Markdown validation report.

        Returns:
            Markdown with a summary table, then warnings and errors grouped by rule.
        """
        errors = self.get_violations("error")
        warnings = self.get_violations("warning")

        lines = [
            "# Registry Validation Report",
            "",
            "## Summary",
            "",
            "| Kind | Validated |",
            "| --- | --- |",
        ]
        for kind in RegistryKind:
            lines.append(f"| {kind.value} | {self.count_for(kind)} |")
        lines.extend(
            [
                "",
                f"- **Errors:** {len(errors)} ❌" if errors else f"- **Errors:** {len(errors)}",
                f"- **Warnings:** {len(warnings)} ⚠️" if warnings else f"- **Warnings:** {len(warnings)}",
                "",
            ]
        )

        if not self.violations:
            lines.append("## ✅ All Checks Passed")
            lines.append("")
            lines.append("No validation issues found.")
            lines.append("")
            return "\n".join(lines)

        for title, icon, group in (("Warnings", "⚠️", warnings), ("Errors", "❌", errors)):
            if not group:
                continue
            lines.append(f"## {icon} {title}")
            lines.append("")
            for rule_id in sorted({v.rule_id.value for v in group}):
                matching = [v for v in group if v.rule_id.value == rule_id]
                lines.append(f"### {icon} {rule_id} ({len(matching)})")
                lines.append("")
                for violation in matching:
                    lines.append(f"- `{violation.entry_ref}`: {violation.message}")
                lines.append("")

        return "\n".join(lines)

    def to_json(self) -> str:
        """Generate a machine-readable JSON report."""
        import json

        report_data = {
            "summary": {
                "passed": self.passed,
                "validated": {kind.value: self.count_for(kind) for kind in RegistryKind},
                "errors": self.get_error_count(),
                "warnings": self.get_warning_count(),
            },
            "violations": [v.to_dict() for v in self.violations],
        }
        return json.dumps(report_data, indent=2, ensure_ascii=False)


def aggregate(
    violations: List[ValidationViolation],
    validated_counts: Optional[Dict[RegistryKind, int]] = None,
) -> RunReport:
    """Build the RunReport for a run.

    Pure function: violations keep their discovery order and the outcome is a
    failure iff at least one violation has error severity.
    """
    counts = {kind: 0 for kind in RegistryKind}
    counts.update(validated_counts or {})
    return RunReport(validated_counts=counts, violations=list(violations))
