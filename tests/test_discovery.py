"""Tests for the manifest adapter in auditgen.discovery."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from auditgen.codegen.core.schema import AnnotationKind, PropertyType
from auditgen.discovery import (
    ManifestError,
    ManifestIndex,
    builder_type_argument,
    classify_type,
    has_marker,
    load_candidates,
    load_manifest,
    parse_annotation,
    short_attribute_name,
    split_type_arguments,
)
from auditgen.utils import ResourceLoadError


def test_load_candidates_resolves_marked_declarations(manifest) -> None:
    candidates = load_candidates(manifest)

    assert [c.name for c in candidates] == ["UserConfiguration", "MissingConfiguration"]
    assert all(c.has_marker for c in candidates)
    assert candidates[0].namespace == "Shop.Data"
    assert candidates[0].target.name == "User"
    assert candidates[0].target.namespace == "Shop.Domain"
    assert candidates[1].target is None


def test_properties_keep_declaration_order_and_types(manifest) -> None:
    user = load_candidates(manifest)[0].target

    types = {prop.name: prop.type for prop in user.properties}

    assert [prop.name for prop in user.properties] == [
        "CreatedAt",
        "Id",
        "Email",
        "DisplayName",
        "Status",
        "Secret",
        "Instances",
        "Tags",
    ]
    assert types["CreatedAt"] == PropertyType.DATETIME
    assert types["Id"] == PropertyType.GUID
    assert types["DisplayName"] == PropertyType.STRING
    assert types["Status"] == PropertyType.ENUM
    assert types["Tags"] == PropertyType.OTHER


def test_accessibility_and_static_flags(manifest) -> None:
    user = load_candidates(manifest)[0].target
    props = {prop.name: prop for prop in user.properties}

    assert props["Email"].is_public
    assert not props["Secret"].is_public
    assert props["Instances"].is_static
    assert not props["Email"].is_static


def test_attributes_are_recognized_by_short_name(manifest) -> None:
    user = load_candidates(manifest)[0].target
    props = {prop.name: prop for prop in user.properties}

    column = props["DisplayName"].find_annotation(AnnotationKind.COLUMN)
    assert column.first_argument == "NickName"
    assert column.named_arguments == {"TypeName": "varchar(64)"}
    assert props["Email"].has_annotation(AnnotationKind.REQUIRED)
    assert props["Email"].find_annotation(AnnotationKind.MAX_LENGTH).first_argument == 120


def test_unmarked_declaration_is_reported_without_marker(manifest) -> None:
    manifest["declarations"][0]["attributes"] = ["Serializable"]

    candidate = load_candidates(manifest)[0]

    assert candidate.has_marker is False
    assert candidate.target.name == "User"


def test_declaration_without_configure_has_no_target(manifest) -> None:
    manifest["declarations"][0]["methods"] = [
        {"name": "Setup", "parameters": [{"name": "b", "type": "EntityTypeBuilder<User>"}]}
    ]

    assert load_candidates(manifest)[0].target is None


def test_configure_with_other_parameter_type_has_no_target(manifest) -> None:
    manifest["declarations"][0]["methods"][0]["parameters"] = [
        {"name": "builder", "type": "ModelBuilder"}
    ]

    assert load_candidates(manifest)[0].target is None


def test_enum_target_is_not_resolved(manifest) -> None:
    manifest["declarations"][0]["methods"][0]["parameters"][0]["type"] = (
        "EntityTypeBuilder<UserStatus>"
    )

    assert load_candidates(manifest)[0].target is None


def test_custom_builder_type(manifest) -> None:
    manifest["declarations"][0]["methods"][0]["parameters"][0]["type"] = "TableBuilder<User>"

    assert load_candidates(manifest)[0].target is None
    assert load_candidates(manifest, builder_type="TableBuilder")[0].target.name == "User"


def test_index_resolves_qualified_names_to_the_same_entity(manifest) -> None:
    index = ManifestIndex(manifest["types"])

    assert index.resolve("User") is index.resolve("Shop.Domain.User")
    assert index.resolve("Ghost") is None
    assert "UserStatus" in index.enum_names


@pytest.mark.parametrize(
    ("type_name", "expected"),
    [
        ("string", PropertyType.STRING),
        ("System.String", PropertyType.STRING),
        ("string?", PropertyType.STRING),
        ("DateTime", PropertyType.DATETIME),
        ("Int32", PropertyType.INT32),
        ("double", PropertyType.DOUBLE),
        ("bool", PropertyType.BOOLEAN),
        ("Guid", PropertyType.GUID),
        ("int?", PropertyType.OTHER),
        ("DateTime?", PropertyType.OTHER),
        ("decimal", PropertyType.OTHER),
        ("List<string>", PropertyType.OTHER),
        ("OrderStatus", PropertyType.ENUM),
    ],
)
def test_classify_type(type_name: str, expected: PropertyType) -> None:
    assert classify_type(type_name, {"OrderStatus"}) == expected


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("Required", "Required"),
        ("RequiredAttribute", "Required"),
        ("System.ComponentModel.DataAnnotations.MaxLengthAttribute", "MaxLength"),
        ("Attribute", "Attribute"),
    ],
)
def test_short_attribute_name(name: str, expected: str) -> None:
    assert short_attribute_name(name) == expected


def test_has_marker_accepts_strings_and_objects() -> None:
    assert has_marker(["GenerateConfiguration"])
    assert has_marker([{"name": "Gen.GenerateConfigurationAttribute"}])
    assert not has_marker(["Serializable", {"name": "Table"}])
    assert not has_marker([])


def test_parse_annotation_rejects_invalid_arguments() -> None:
    with pytest.raises(ManifestError):
        parse_annotation({"name": "MaxLength", "arguments": 50})


def test_parse_annotation_unknown_attribute_is_other() -> None:
    record = parse_annotation({"name": "Key"})

    assert record.kind == AnnotationKind.OTHER
    assert record.arguments == ()


@pytest.mark.parametrize(
    ("type_name", "expected"),
    [
        ("EntityTypeBuilder<User>", "User"),
        ("Microsoft.EntityFrameworkCore.Metadata.Builders.EntityTypeBuilder<Shop.User>", "Shop.User"),
        (" EntityTypeBuilder< User > ", "User"),
        ("ModelBuilder", None),
        ("List<User>", None),
    ],
)
def test_builder_type_argument(type_name: str, expected: str | None) -> None:
    assert builder_type_argument(type_name) == expected


def test_split_type_arguments_respects_nesting() -> None:
    assert split_type_arguments("string, Dictionary<int, string>") == [
        "string",
        "Dictionary<int, string>",
    ]


@pytest.mark.parametrize(
    "data",
    [
        [],
        {"types": {}, "declarations": []},
        {"types": [], "declarations": [{"namespace": "Shop"}]},
        {"types": [{"namespace": "Shop"}], "declarations": []},
    ],
)
def test_invalid_manifest_raises(data) -> None:
    with pytest.raises(ManifestError):
        load_candidates(data)


def test_load_manifest_reads_file(manifest_file: Path) -> None:
    candidates = load_manifest(manifest_file)

    assert [c.name for c in candidates] == ["UserConfiguration", "MissingConfiguration"]


def test_load_manifest_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_manifest(tmp_path / "absent.json")


def test_load_manifest_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ResourceLoadError):
        load_manifest(path)


def test_empty_manifest_has_no_candidates(tmp_path: Path) -> None:
    path = tmp_path / "empty.json"
    path.write_text(json.dumps({}), encoding="utf-8")

    assert load_manifest(path) == []


def test_null_lists_are_treated_as_empty(manifest) -> None:
    manifest["types"][0]["properties"][0]["attributes"] = None
    manifest["declarations"][0]["attributes"] = None

    candidates = load_candidates(manifest)

    assert candidates[0].target.properties[0].annotations == []
    assert candidates[0].has_marker is False


def test_null_properties_and_methods_are_treated_as_empty(manifest) -> None:
    manifest["types"][0]["properties"] = None
    manifest["declarations"][1]["methods"] = None

    candidates = load_candidates(manifest)

    assert candidates[0].target.properties == []
    assert candidates[1].target is None


@pytest.mark.parametrize(
    ("location", "key", "value"),
    [
        ("property", "attributes", "Required"),
        ("type", "properties", {"name": "Id"}),
        ("declaration", "attributes", 1),
        ("declaration", "methods", "Configure"),
    ],
)
def test_non_list_fields_raise(manifest, location: str, key: str, value) -> None:
    target = {
        "property": manifest["types"][0]["properties"][0],
        "type": manifest["types"][0],
        "declaration": manifest["declarations"][0],
    }[location]
    target[key] = value

    with pytest.raises(ManifestError, match=f"'{key}'"):
        load_candidates(manifest)


def test_non_object_parameter_raises(manifest) -> None:
    configure = manifest["declarations"][0]["methods"][0]
    configure["parameters"] = ["EntityTypeBuilder<User>"]

    with pytest.raises(ManifestError, match="Invalid parameter entry"):
        load_candidates(manifest)
