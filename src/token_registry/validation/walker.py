"""Registry walker.

Enumerates every entry of every kind in a fixed, lexicographic order and
feeds each one through the validation pipeline:

    duplicate detection -> identifier rules -> read + JSON parse ->
    entry checks (schema, embedded identifier, address checksums)

Cross-reference checks run once all kinds are loaded. All accumulated state
lives in a WalkState created fresh for each `load_all()` call.
"""

from __future__ import annotations

import json
import logging
import traceback
from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from token_registry.core.enums import RegistryKind, RuleId
from token_registry.core.errors import ParseError, RegistryError, RegistryIOError
from token_registry.core.utils import entry_ref, get_registry_paths
from .checks import EntryCheck, make_violation
from .checks.consistency import AddressChecksumCheck, EmbeddedIdentifierCheck
from .checks.identifiers import (
    check_filename,
    check_partition,
    check_token_directory,
    strip_suffix,
)
from .checks.references import check_references, extract_references
from .checks.schema_conformance import SchemaConformanceCheck, SchemaValidator
from .config import ENTRY_SUFFIX, TOKEN_SYMBOL_FIELD, ValidationConfig
from .models import ReferenceEdge, RegistryEntry, RunReport, ValidationViolation, aggregate

logger = logging.getLogger(__name__)

DuplicateKey = Tuple[Optional[str], str]


@dataclass
class WalkState:
    """Accumulator for one run. Never shared between runs."""

    entries: List[RegistryEntry] = field(default_factory=list)
    edges: List[ReferenceEdge] = field(default_factory=list)
    violations: List[ValidationViolation] = field(default_factory=list)
    validated_counts: Dict[RegistryKind, int] = field(
        default_factory=lambda: {kind: 0 for kind in RegistryKind}
    )
    seen: Dict[RegistryKind, Dict[DuplicateKey, str]] = field(
        default_factory=lambda: defaultdict(dict)
    )
    # upper-cased symbol -> (token identifier, path)
    symbols: Dict[str, Tuple[str, str]] = field(default_factory=dict)


def build_entry_checks(
    schema_validator: SchemaValidator, config: ValidationConfig
) -> List[EntryCheck]:
    """Entry checks in the order they run for each parsed entry."""
    return [
        SchemaConformanceCheck(schema_validator),
        EmbeddedIdentifierCheck(config),
        AddressChecksumCheck(config),
    ]


def read_payload(path: Path, debug: bool = False):
    """Read and parse one JSON entry file.

    Raises:
        RegistryIOError: If the file cannot be read.
        ParseError: If the content is not valid UTF-8 JSON. With `debug`, the
            error carries the formatted traceback.
    """
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise RegistryIOError(f"Cannot read file: {e.strerror or e}") from e
    try:
        return json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        detail = traceback.format_exc() if debug else None
        raise ParseError(f"Invalid JSON: {e}", detail=detail) from e


def list_dir(path: Path) -> List[Path]:
    """Return the children of a directory sorted by name.

    Raises:
        RegistryIOError: If the directory cannot be listed.
    """
    try:
        return sorted(path.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise RegistryIOError(f"Cannot read directory: {e.strerror or e}") from e


class RegistryWalker:
    """Walk a registry tree and validate every entry.

    Args:
        registry_root: Directory holding `contracts/`, `projects/` and `tokens/`.
        schema_validator: Validator built from the loaded schema descriptors.
        config: Run configuration; defaults apply when None.
        checks: Entry checks to run; defaults to `build_entry_checks()`.

    Examples:
        >>> walker = RegistryWalker(Path("."), SchemaValidator(descriptors))
        >>> report = walker.load_all()
        >>> report.passed
        True
    """

    def __init__(
        self,
        registry_root: Path,
        schema_validator: SchemaValidator,
        config: Optional[ValidationConfig] = None,
        checks: Optional[Sequence[EntryCheck]] = None,
    ) -> None:
        self.registry_root = registry_root
        self.config = config or ValidationConfig()
        self.checks = list(checks) if checks is not None else build_entry_checks(
            schema_validator, self.config
        )

    def load_all(self) -> RunReport:
        """Validate the whole registry and return the aggregated report."""
        state = WalkState()
        for kind, root in get_registry_paths(self.registry_root).items():
            self._walk_kind(kind, root, state)
            logger.info(
                "Validated %d %s(s)", state.validated_counts[kind], kind.value
            )

        # Barrier: every kind is loaded before references are resolved
        state.violations.extend(check_references(state.entries, state.edges))
        return aggregate(state.violations, state.validated_counts)

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def _ref(self, path: Path) -> str:
        return entry_ref(path, self.registry_root)

    def _record(self, state: WalkState, violations: List[ValidationViolation]) -> None:
        for violation in violations:
            log = logger.warning if violation.severity == "warning" else logger.debug
            log("%s [%s] %s", violation.entry_ref, violation.rule_id.value, violation.message)
        state.violations.extend(violations)

    def _io_violation(self, kind: RegistryKind, path: Path, error: RegistryError) -> ValidationViolation:
        return make_violation(self._ref(path), kind, error.rule_id, str(error))

    def _walk_kind(self, kind: RegistryKind, root: Path, state: WalkState) -> None:
        if not root.exists():
            self._record(
                state,
                [
                    make_violation(
                        f"{kind.root_dir}/",
                        kind,
                        RuleId.REGISTRY_ROOT_MISSING,
                        f"No {kind.root_dir} directory found; skipping {kind.value} validation",
                    )
                ],
            )
            return
        if not root.is_dir():
            self._record(
                state,
                [
                    make_violation(
                        f"{kind.root_dir}/",
                        kind,
                        RuleId.IO_ERROR,
                        f"Registry root {kind.root_dir} is not a directory",
                    )
                ],
            )
            return

        try:
            children = list_dir(root)
        except RegistryIOError as e:
            self._record(state, [self._io_violation(kind, root, e)])
            return

        logger.debug("Walking %s (%d children)", root, len(children))
        if kind == RegistryKind.CONTRACT:
            self._walk_contracts(children, state)
        elif kind == RegistryKind.PROJECT:
            self._walk_projects(children, state)
        else:
            self._walk_tokens(children, state)

    def _walk_contracts(self, children: List[Path], state: WalkState) -> None:
        kind = RegistryKind.CONTRACT
        for chain_dir in children:
            if not chain_dir.is_dir():
                if chain_dir.name.endswith(ENTRY_SUFFIX):
                    self._record(
                        state,
                        [
                            make_violation(
                                self._ref(chain_dir),
                                kind,
                                RuleId.IDENTIFIER_VIOLATION,
                                "Contract files must live in a <chainId>/ directory",
                            )
                        ],
                    )
                else:
                    logger.debug("Skipping non-directory %s", chain_dir)
                continue
            partition_violations = check_partition(kind, chain_dir.name, self._ref(chain_dir))
            if partition_violations:
                self._record(state, partition_violations)
                continue
            try:
                files = list_dir(chain_dir)
            except RegistryIOError as e:
                self._record(state, [self._io_violation(kind, chain_dir, e)])
                continue
            for path in files:
                if path.is_file() and path.name.endswith(ENTRY_SUFFIX):
                    self._process_file(kind, path, chain_dir.name, state)

    def _walk_projects(self, children: List[Path], state: WalkState) -> None:
        for path in children:
            if path.is_file() and path.name.endswith(ENTRY_SUFFIX):
                self._process_file(RegistryKind.PROJECT, path, None, state)

    def _walk_tokens(self, children: List[Path], state: WalkState) -> None:
        kind = RegistryKind.TOKEN
        for token_dir in children:
            if token_dir.name.startswith("."):
                continue
            if not token_dir.is_dir():
                self._record(
                    state,
                    [
                        make_violation(
                            self._ref(token_dir),
                            kind,
                            RuleId.IDENTIFIER_VIOLATION,
                            "Token files must live in their own <address>/ directory",
                        )
                    ],
                )
                continue
            try:
                files = [p for p in list_dir(token_dir) if not p.name.startswith(".")]
            except RegistryIOError as e:
                self._record(state, [self._io_violation(kind, token_dir, e)])
                continue
            structure_violations = check_token_directory(
                token_dir.name, [p.name for p in files], self._ref(token_dir)
            )
            if structure_violations:
                self._record(state, structure_violations)
                continue
            self._process_file(kind, files[0], token_dir.name, state)

    # ------------------------------------------------------------------
    # Per-entry pipeline
    # ------------------------------------------------------------------

    def _duplicate_key(self, kind: RegistryKind, identifier: str, partition: Optional[str]) -> DuplicateKey:
        # The same address may appear once per chain id
        scope = partition if kind == RegistryKind.CONTRACT else None
        return scope, identifier.lower()

    def _process_file(
        self, kind: RegistryKind, path: Path, partition: Optional[str], state: WalkState
    ) -> None:
        ref = self._ref(path)
        identifier = strip_suffix(path.name)

        key = self._duplicate_key(kind, identifier, partition)
        first_ref = state.seen[kind].get(key)
        if first_ref is not None:
            self._record(
                state,
                [
                    make_violation(
                        ref,
                        kind,
                        RuleId.DUPLICATE_IDENTIFIER,
                        f"Duplicate {kind.value} identifier '{identifier}' (already defined by {first_ref})",
                    )
                ],
            )
            return

        name_violations = check_filename(
            kind, path.name, partition, config=self.config, entry_ref=ref
        )
        if name_violations:
            self._record(state, name_violations)
            return
        # Only admissible names claim an identifier
        state.seen[kind][key] = ref

        try:
            payload = read_payload(path, debug=self.config.debug)
        except ParseError as e:
            # The file exists, so it still resolves references pointing at it
            state.entries.append(RegistryEntry(kind, partition, identifier, ref))
            self._record(
                state, [make_violation(ref, kind, e.rule_id, str(e), detail=e.detail)]
            )
            return
        except RegistryIOError as e:
            state.entries.append(RegistryEntry(kind, partition, identifier, ref))
            self._record(state, [make_violation(ref, kind, e.rule_id, str(e))])
            return

        entry = RegistryEntry(kind, partition, identifier, ref, payload)
        state.entries.append(entry)
        state.edges.extend(extract_references(entry, self.config))

        violations: List[ValidationViolation] = []
        for check in self.checks:
            if check.applies_to_kind(kind):
                violations.extend(check.validate(entry))
        if kind == RegistryKind.TOKEN:
            violations.extend(self._check_symbol(entry, state))

        self._record(state, violations)
        if not any(v.is_error for v in violations):
            state.validated_counts[kind] += 1

    def _check_symbol(self, entry: RegistryEntry, state: WalkState) -> List[ValidationViolation]:
        if not isinstance(entry.payload, dict):
            return []
        symbol = entry.payload.get(TOKEN_SYMBOL_FIELD)
        if not isinstance(symbol, str) or not symbol:
            return []
        key = symbol.upper()
        previous = state.symbols.get(key)
        if previous is None:
            state.symbols[key] = (entry.identifier, entry.source_path)
            return []
        return [
            make_violation(
                entry.source_path,
                entry.kind,
                RuleId.DUPLICATE_SYMBOL,
                f"Symbol '{symbol}' is also declared by {previous[1]}",
            )
        ]


__all__ = ["RegistryWalker", "WalkState", "build_entry_checks", "read_payload", "list_dir"]
