"""Tests for auditgen.codegen.core.classifier."""

from __future__ import annotations

from auditgen.codegen.core.classifier import AUDIT_FIELD_NAMES, classify_properties
from auditgen.codegen.core.schema import PropertyType


def _names(properties) -> list[str]:
    return [prop.name for prop in properties]


def test_audit_fields_are_separated_from_eligible_fields(make_property) -> None:
    properties = [
        make_property("CreatedAt", PropertyType.DATETIME),
        make_property("Name", PropertyType.STRING),
        make_property("Age", PropertyType.INT32),
    ]

    partition = classify_properties(properties)

    assert _names(partition.audit) == ["CreatedAt"]
    assert _names(partition.eligible) == ["Name", "Age"]
    assert partition.excluded == []


def test_all_reserved_names_are_audit_fields(make_property) -> None:
    properties = [make_property(name, PropertyType.STRING) for name in AUDIT_FIELD_NAMES]

    partition = classify_properties(properties)

    assert _names(partition.audit) == list(AUDIT_FIELD_NAMES)
    assert partition.eligible == []


def test_audit_name_match_is_case_sensitive(make_property) -> None:
    partition = classify_properties([make_property("createdAt", PropertyType.DATETIME)])

    assert partition.audit == []
    assert _names(partition.eligible) == ["createdAt"]


def test_non_public_static_and_unsupported_properties_are_excluded(make_property) -> None:
    properties = [
        make_property("Secret", PropertyType.STRING, is_public=False),
        make_property("Instances", PropertyType.INT32, is_static=True),
        make_property("Tags", PropertyType.OTHER, type_name="List<string>"),
        make_property("Title", PropertyType.STRING),
    ]

    partition = classify_properties(properties)

    assert _names(partition.excluded) == ["Secret", "Instances", "Tags"]
    assert _names(partition.eligible) == ["Title"]


def test_every_supported_type_is_eligible_in_declaration_order(make_property) -> None:
    supported = [
        ("Status", PropertyType.ENUM),
        ("Id", PropertyType.GUID),
        ("Title", PropertyType.STRING),
        ("PublishedOn", PropertyType.DATETIME),
        ("Price", PropertyType.DOUBLE),
        ("Quantity", PropertyType.INT32),
        ("InStock", PropertyType.BOOLEAN),
    ]
    properties = [make_property(name, prop_type) for name, prop_type in supported]

    partition = classify_properties(properties)

    assert _names(partition.eligible) == [name for name, _ in supported]


def test_custom_audit_field_names(make_property) -> None:
    properties = [
        make_property("CreatedAt", PropertyType.DATETIME),
        make_property("DeletedAt", PropertyType.DATETIME),
    ]

    partition = classify_properties(properties, audit_field_names=["DeletedAt"])

    assert _names(partition.audit) == ["DeletedAt"]
    assert _names(partition.eligible) == ["CreatedAt"]
