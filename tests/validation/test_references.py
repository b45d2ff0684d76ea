"""Tests for cross-reference extraction and resolution."""

from token_registry.core.enums import RegistryKind, RuleId
from token_registry.validation.checks.references import check_references, extract_references
from token_registry.validation.config import ValidationConfig
from token_registry.validation.models import RegistryEntry
from conftest import ADDRESS_A, ADDRESS_B, CHAIN_ID, contract_payload, project_payload, token_payload


def contract_entry(payload):
    return RegistryEntry(
        RegistryKind.CONTRACT, CHAIN_ID, ADDRESS_A, f"contracts/{CHAIN_ID}/{ADDRESS_A}.json", payload
    )


def project_entry(slug="example-project", payload=None):
    return RegistryEntry(RegistryKind.PROJECT, None, slug, f"projects/{slug}.json", payload)


def test_extract_references_from_contract():
    entry = contract_entry(contract_payload())
    edges = extract_references(entry, ValidationConfig())
    assert len(edges) == 1
    edge = edges[0]
    assert edge.from_entry is entry
    assert edge.field == "project"
    assert edge.to_kind == RegistryKind.PROJECT
    assert edge.to_identifier == "example-project"


def test_token_without_project_has_no_edges():
    payload = token_payload()
    del payload["project"]
    entry = RegistryEntry(RegistryKind.TOKEN, ADDRESS_B, ADDRESS_B, "tokens/x.json", payload)
    assert extract_references(entry, ValidationConfig()) == []


def test_projects_declare_no_references():
    assert extract_references(project_entry(payload=project_payload()), ValidationConfig()) == []


def test_unparsed_entry_contributes_no_edges():
    assert extract_references(contract_entry(None), ValidationConfig()) == []


def test_empty_or_mistyped_reference_is_not_an_edge():
    config = ValidationConfig()
    assert extract_references(contract_entry(contract_payload(project="")), config) == []
    assert extract_references(contract_entry(contract_payload(project=["x"])), config) == []


def test_schema_invalid_entry_still_contributes_edges():
    # Missing `name` fails the schema but the reference is still readable
    payload = {"project": "ghost", "contract": "ERC-20"}
    assert len(extract_references(contract_entry(payload), ValidationConfig())) == 1


def test_resolved_reference_passes():
    contract = contract_entry(contract_payload())
    entries = [contract, project_entry(payload=project_payload())]
    edges = extract_references(contract, ValidationConfig())
    assert check_references(entries, edges) == []


def test_unparsed_target_still_resolves():
    contract = contract_entry(contract_payload())
    entries = [contract, project_entry(payload=None)]
    edges = extract_references(contract, ValidationConfig())
    assert check_references(entries, edges) == []


def test_dangling_reference_is_reported_on_source_entry():
    contract = contract_entry(contract_payload(project="ghost"))
    edges = extract_references(contract, ValidationConfig())
    violations = check_references([contract], edges)

    assert len(violations) == 1
    violation = violations[0]
    assert violation.rule_id == RuleId.DANGLING_REFERENCE
    assert violation.severity == "error"
    assert violation.kind == RegistryKind.CONTRACT
    assert violation.entry_ref == contract.source_path
    assert violation.message == "project: project 'ghost' does not exist in projects/"


def test_target_kind_is_respected():
    # A contract whose identifier happens to equal the slug does not satisfy the edge
    contract = contract_entry(contract_payload(project=ADDRESS_A))
    config = ValidationConfig()
    violations = check_references([contract], extract_references(contract, config))
    assert [v.rule_id for v in violations] == [RuleId.DANGLING_REFERENCE]


def test_violations_follow_edge_order():
    first = contract_entry(contract_payload(project="alpha"))
    second = RegistryEntry(
        RegistryKind.TOKEN, ADDRESS_B, ADDRESS_B, "tokens/b.json", token_payload(project="beta")
    )
    config = ValidationConfig()
    edges = extract_references(first, config) + extract_references(second, config)
    violations = check_references([first, second], edges)
    assert [v.entry_ref for v in violations] == [first.source_path, second.source_path]
