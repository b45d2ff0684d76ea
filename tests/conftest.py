"""Shared pytest configuration, fixtures, and utilities for registry testing."""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import pytest

from token_registry.core.schemas import load_schema_descriptors
from token_registry.validation import run_validation
from token_registry.validation.checks.schema_conformance import SchemaValidator
from token_registry.validation.config import ValidationConfig
from token_registry.validation.models import RunReport

REPO_ROOT = Path(__file__).resolve().parent.parent
SCHEMAS_DIR = REPO_ROOT / "schemas"

# EIP-55 reference vectors (mixed case)
ADDRESS_A = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
ADDRESS_B = "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359"
ADDRESS_C = "0xdbF03B407c01E7cD3CBea99509d93f8DDDC8C6FB"
ADDRESS_D = "0xD1220A0cf47c7B9Be7A2E6BA89F429762e7b9aDb"

CHAIN_ID = "26600"
PROJECT_SLUG = "example-project"


def contract_payload(address: str = ADDRESS_A, **overrides: Any) -> Dict[str, Any]:
    """Minimal valid contract record."""
    payload = {
        "project": PROJECT_SLUG,
        "name": "Example Token",
        "contract": "ERC-20",
        "address": address,
        "source": "https://github.com/example/example-token",
    }
    payload.update(overrides)
    return payload


def project_payload(**overrides: Any) -> Dict[str, Any]:
    """Minimal valid project record."""
    payload = {
        "name": "Example Project",
        "website": "https://example.com",
        "contact": "hello@example.com",
    }
    payload.update(overrides)
    return payload


def token_payload(address: str = ADDRESS_B, **overrides: Any) -> Dict[str, Any]:
    """Minimal valid token record."""
    payload = {
        "address": address,
        "name": "Example Stable",
        "symbol": "EXS",
        "decimals": 6,
        "project": PROJECT_SLUG,
    }
    payload.update(overrides)
    return payload


def _write(path: Path, payload: Any, raw: Optional[str]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    text = raw if raw is not None else json.dumps(payload, indent=2)
    path.write_text(text, encoding="utf-8")
    return path


@dataclass
class RegistryBuilder:
    """Builds a registry tree under a temporary directory."""

    root: Path

    def write_contract(
        self,
        address: str = ADDRESS_A,
        payload: Any = None,
        chain_id: str = CHAIN_ID,
        raw: Optional[str] = None,
        filename: Optional[str] = None,
    ) -> Path:
        path = self.root / "contracts" / chain_id / (filename or f"{address}.json")
        return _write(path, payload if payload is not None else contract_payload(address), raw)

    def write_project(
        self, slug: str = PROJECT_SLUG, payload: Any = None, raw: Optional[str] = None
    ) -> Path:
        path = self.root / "projects" / f"{slug}.json"
        return _write(path, payload if payload is not None else project_payload(), raw)

    def write_token(
        self,
        address: str = ADDRESS_B,
        payload: Any = None,
        raw: Optional[str] = None,
        filename: Optional[str] = None,
    ) -> Path:
        path = self.root / "tokens" / address / (filename or f"{address}.json")
        return _write(path, payload if payload is not None else token_payload(address), raw)

    def run(self, config: Optional[ValidationConfig] = None) -> RunReport:
        return run_validation(self.root, SCHEMAS_DIR, config)


@pytest.fixture
def registry(tmp_path: Path) -> RegistryBuilder:
    """Empty registry with all three kind roots present."""
    for name in ("contracts", "projects", "tokens"):
        (tmp_path / name).mkdir()
    return RegistryBuilder(tmp_path)


@pytest.fixture
def valid_registry(registry: RegistryBuilder) -> RegistryBuilder:  # pylint: disable=redefined-outer-name
    """Registry with one valid entry of each kind."""
    registry.write_project()
    registry.write_contract()
    registry.write_token()
    return registry


@pytest.fixture(scope="session")
def descriptors():
    """Schema descriptors loaded from the repository schemas/ directory."""
    return load_schema_descriptors(SCHEMAS_DIR)


@pytest.fixture
def schema_validator(descriptors):  # pylint: disable=redefined-outer-name
    return SchemaValidator(descriptors)
