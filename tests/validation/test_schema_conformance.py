"""Tests for JSON Schema conformance of registry records."""

import copy

from token_registry.core.enums import RegistryKind, RuleId
from token_registry.validation.checks.schema_conformance import SchemaConformanceCheck
from token_registry.validation.models import RegistryEntry
from conftest import ADDRESS_A, contract_payload, project_payload, token_payload


def messages(violations):
    return [v.message for v in violations]


def test_valid_records_pass(schema_validator):
    assert schema_validator.validate(RegistryKind.CONTRACT, contract_payload()) == []
    assert schema_validator.validate(RegistryKind.PROJECT, project_payload()) == []
    assert schema_validator.validate(RegistryKind.TOKEN, token_payload()) == []


def test_missing_required_field_is_named(schema_validator):
    record = contract_payload()
    del record["name"]
    violations = schema_validator.validate(RegistryKind.CONTRACT, record, "contracts/x.json")

    assert len(violations) == 1
    violation = violations[0]
    assert violation.rule_id == RuleId.SCHEMA_VIOLATION
    assert violation.severity == "error"
    assert violation.entry_ref == "contracts/x.json"
    assert violation.message == "<root>: 'name' is a required property"


def test_all_errors_are_collected(schema_validator):
    record = {"project": "example-project"}
    violations = schema_validator.validate(RegistryKind.CONTRACT, record)
    assert sorted(messages(violations)) == [
        "<root>: 'contract' is a required property",
        "<root>: 'name' is a required property",
    ]


def test_http_urls_are_rejected(schema_validator):
    record = contract_payload(source="http://github.com/example/example-token")
    violations = schema_validator.validate(RegistryKind.CONTRACT, record)
    assert len(violations) == 1
    assert violations[0].message.startswith("source: ")
    assert "^https://" in violations[0].message


def test_social_links_must_be_https(schema_validator):
    record = project_payload(social={"twitter": "http://twitter.com/example"})
    violations = schema_validator.validate(RegistryKind.PROJECT, record)
    assert len(violations) == 1
    assert violations[0].message.startswith("social.twitter: ")


def test_nested_token_requires_name(schema_validator):
    record = project_payload(token={"symbol": "EXT"})
    assert messages(schema_validator.validate(RegistryKind.PROJECT, record)) == [
        "token: 'name' is a required property"
    ]


def test_length_bounds(schema_validator):
    record = project_payload(contact="a" * 321)
    violations = schema_validator.validate(RegistryKind.PROJECT, record)
    assert len(violations) == 1
    assert violations[0].message.startswith("contact: ")

    record = project_payload(contact="a" * 320)
    assert schema_validator.validate(RegistryKind.PROJECT, record) == []


def test_field_types(schema_validator):
    record = token_payload(decimals="18")
    violations = schema_validator.validate(RegistryKind.TOKEN, record)
    assert messages(violations) == ["decimals: '18' is not of type 'integer'"]


def test_non_object_record(schema_validator):
    violations = schema_validator.validate(RegistryKind.TOKEN, ["not", "an", "object"])
    assert len(violations) == 1
    assert violations[0].message.startswith("<root>: ")


def test_extra_fields_are_accepted(schema_validator):
    record = contract_payload(deployedAt="2024-01-01", audited=True)
    assert schema_validator.validate(RegistryKind.CONTRACT, record) == []


def test_violations_are_ordered_by_path(schema_validator):
    record = token_payload(website="http://example.com", decimals=-1, name="")
    paths = [m.split(":")[0] for m in messages(schema_validator.validate(RegistryKind.TOKEN, record))]
    assert paths == ["decimals", "name", "website"]


def test_record_is_not_mutated(schema_validator):
    record = project_payload(token={"symbol": "EXT", "address": ADDRESS_A})
    snapshot = copy.deepcopy(record)
    schema_validator.validate(RegistryKind.PROJECT, record)
    assert record == snapshot


def test_conformance_check_wraps_validator(schema_validator):
    check = SchemaConformanceCheck(schema_validator)
    entry = RegistryEntry(
        RegistryKind.TOKEN, ADDRESS_A, ADDRESS_A, f"tokens/{ADDRESS_A}/{ADDRESS_A}.json", {}
    )
    assert all(check.applies_to_kind(kind) for kind in RegistryKind)
    violations = check.validate(entry)
    assert {v.entry_ref for v in violations} == {entry.source_path}
    assert len(violations) == 4
