"""Schema descriptors for registry entries.

Each registry kind is described by a JSON Schema document stored as
`<kind>.schema.json` in a schema directory (by default `schemas/` at the
registry root). Documents are loaded once at startup and never mutated.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping

from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError

from .enums import RegistryKind

logger = logging.getLogger(__name__)

UNVERSIONED = "unversioned"


@dataclass(frozen=True)
class SchemaDescriptor:
    """A named, versioned structural contract for one registry kind.

    Attributes:
        kind: Registry kind the schema applies to.
        version: Value of the document's `version` keyword.
        path: File the document was loaded from.
        document: Parsed JSON Schema document.
    """

    kind: RegistryKind
    version: str
    path: Path
    document: Mapping[str, Any]

    @property
    def required_fields(self) -> List[str]:
        """Top-level required fields declared by the schema."""
        return list(self.document.get("required", []))


def get_schema_path(schema_dir: Path, kind: RegistryKind) -> Path:
    """Return the expected schema document path for a kind.

    Examples:
        >>> get_schema_path(Path("schemas"), RegistryKind.TOKEN)
        PosixPath('schemas/token.schema.json')
    """
    return schema_dir / f"{kind.value}.schema.json"


def load_schema_descriptor(schema_dir: Path, kind: RegistryKind) -> SchemaDescriptor:
    """Load and check the schema document for a single kind.

    Raises:
        FileNotFoundError: If the schema document does not exist.
        ValueError: If the document is not valid JSON or not a valid Draft 7 schema.
    """
    path = get_schema_path(schema_dir, kind)
    if not path.exists():
        raise FileNotFoundError(f"Schema document not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            document = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Failed to parse schema document {path}: {e}") from e

    try:
        Draft7Validator.check_schema(document)
    except SchemaError as e:
        raise ValueError(f"Invalid schema document {path}: {e.message}") from e

    version = str(document.get("version", UNVERSIONED))
    logger.debug("Loaded %s schema %s from %s", kind.value, version, path)
    return SchemaDescriptor(kind=kind, version=version, path=path, document=document)


def load_schema_descriptors(schema_dir: Path) -> Dict[RegistryKind, SchemaDescriptor]:
    """Load one schema descriptor per registry kind.

    Args:
        schema_dir: Directory containing `contract.schema.json`,
            `project.schema.json` and `token.schema.json`.

    Returns:
        Mapping of kind to its descriptor.
    """
    if not schema_dir.is_dir():
        raise FileNotFoundError(f"Schema directory not found: {schema_dir}")
    return {kind: load_schema_descriptor(schema_dir, kind) for kind in RegistryKind}


__all__ = [
    "SchemaDescriptor",
    "get_schema_path",
    "load_schema_descriptor",
    "load_schema_descriptors",
]
