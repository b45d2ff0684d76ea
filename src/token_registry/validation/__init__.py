"""Validation system for Token Registry Tools.

This module provides the validation engine for registry entries:

- **Models**: RegistryEntry, ValidationViolation, RunReport - run data structures
- **Checks**: Identifier, schema, consistency and reference checks (see validation/checks/)
- **Config**: Naming rules, field mappings and severity rules (import from .config)
- **Walker**: RegistryWalker - traversal and per-entry pipeline
- **Registry**: run_validation(), print_report() - run orchestration and output

Public API:
    RegistryEntry: One record loaded from disk
    ValidationViolation: A single rule failure with severity
    RunReport: Aggregated run results with helper methods
    run_validation: Validate a registry checkout
    print_report: Display validation results to console

Usage:
    >>> from pathlib import Path
    >>> from token_registry.validation import run_validation, print_report
    >>> report = run_validation(Path("."))
    >>> print_report(report)
"""

from __future__ import annotations

from token_registry.core.enums import RegistryKind, RuleId

from .models import RegistryEntry, RunReport, ValidationViolation, aggregate
from .registry import print_report, run_validation

__all__ = [
    # Data models
    "RegistryEntry",
    "ValidationViolation",
    "RunReport",
    "aggregate",
    # Runner functions
    "run_validation",
    "print_report",
    # Enums
    "RegistryKind",
    "RuleId",
]
