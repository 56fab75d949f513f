from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from auditgen.codegen.core.config import load_config
from auditgen.codegen.core.schema import (
    AnnotationKind,
    AnnotationRecord,
    CandidateDeclaration,
    EntityType,
    PropertyDescriptor,
    PropertyType,
)
from auditgen.codegen.languages.csharp import CSharpGenerator

AUDIT_FIELD_LINES = [
    "datetime:CreatedAt",
    "datetime:UpdatedAt",
    "string:CreatedBy",
    "string:ModifiedBy",
]


@pytest.fixture
def annotation() -> Callable[..., AnnotationRecord]:
    """Build an annotation record: annotation(kind, *arguments, **named_arguments)."""

    def _make(kind: AnnotationKind, *arguments: Any, **named_arguments: Any) -> AnnotationRecord:
        return AnnotationRecord(
            kind=kind,
            name=kind.value,
            arguments=tuple(arguments),
            named_arguments=named_arguments,
        )

    return _make


@pytest.fixture
def make_property() -> Callable[..., PropertyDescriptor]:
    """Build a property: make_property(name, type, *annotations, **flags)."""

    def _make(
        name: str,
        prop_type: PropertyType = PropertyType.STRING,
        *annotations: AnnotationRecord,
        **flags: Any,
    ) -> PropertyDescriptor:
        return PropertyDescriptor(
            name=name, type=prop_type, annotations=list(annotations), **flags
        )

    return _make


@pytest.fixture
def user_entity(make_property, annotation) -> EntityType:
    return EntityType(
        name="User",
        namespace="Shop.Domain",
        properties=[
            make_property("CreatedAt", PropertyType.DATETIME),
            make_property("Id", PropertyType.GUID),
            make_property(
                "Email",
                PropertyType.STRING,
                annotation(AnnotationKind.REQUIRED),
                annotation(AnnotationKind.MAX_LENGTH, 120),
            ),
            make_property("Name", PropertyType.STRING),
            make_property("Age", PropertyType.INT32),
            make_property("Avatar", PropertyType.OTHER, type_name="byte[]"),
            make_property("UpdatedBy", PropertyType.STRING, is_public=False),
        ],
    )


@pytest.fixture
def order_entity(make_property, annotation) -> EntityType:
    return EntityType(
        name="Order",
        namespace="Shop.Domain",
        properties=[
            make_property("Total", PropertyType.DOUBLE),
            make_property(
                "Stamp", PropertyType.INT32, annotation(AnnotationKind.CONCURRENCY_CHECK)
            ),
            make_property("IsPaid", PropertyType.BOOLEAN),
            make_property("ModifiedBy", PropertyType.STRING),
        ],
    )


@pytest.fixture
def candidates(user_entity, order_entity) -> list[CandidateDeclaration]:
    return [
        CandidateDeclaration("UserConfiguration", "Shop.Data", user_entity),
        CandidateDeclaration("OrderConfiguration", "Shop.Data", order_entity),
    ]


@pytest.fixture
def audit_field_lines() -> list[str]:
    return list(AUDIT_FIELD_LINES)


@pytest.fixture
def csharp_generator() -> CSharpGenerator:
    return CSharpGenerator(load_config("csharp"))


@pytest.fixture
def manifest() -> dict[str, Any]:
    return {
        "types": [
            {
                "name": "User",
                "namespace": "Shop.Domain",
                "kind": "class",
                "properties": [
                    {"name": "CreatedAt", "type": "DateTime"},
                    {"name": "Id", "type": "System.Guid"},
                    {
                        "name": "Email",
                        "type": "string",
                        "attributes": [
                            "Required",
                            {"name": "MaxLength", "arguments": [120]},
                        ],
                    },
                    {
                        "name": "DisplayName",
                        "type": "string?",
                        "attributes": [
                            {
                                "name": "System.ComponentModel.DataAnnotations.Schema.ColumnAttribute",
                                "arguments": ["NickName"],
                                "named_arguments": {"TypeName": "varchar(64)"},
                            }
                        ],
                    },
                    {"name": "Status", "type": "UserStatus"},
                    {"name": "Secret", "type": "string", "accessibility": "private"},
                    {"name": "Instances", "type": "int", "static": True},
                    {"name": "Tags", "type": "List<string>"},
                ],
            },
            {"name": "UserStatus", "namespace": "Shop.Domain", "kind": "enum"},
        ],
        "declarations": [
            {
                "name": "UserConfiguration",
                "namespace": "Shop.Data",
                "attributes": ["GenerateConfiguration"],
                "methods": [
                    {
                        "name": "Configure",
                        "parameters": [
                            {"name": "builder", "type": "EntityTypeBuilder<User>"}
                        ],
                    }
                ],
            },
            {
                "name": "MissingConfiguration",
                "namespace": "Shop.Data",
                "attributes": ["GenerateConfigurationAttribute"],
                "methods": [
                    {
                        "name": "Configure",
                        "parameters": [
                            {"name": "builder", "type": "EntityTypeBuilder<Ghost>"}
                        ],
                    }
                ],
            },
        ],
    }


@pytest.fixture
def manifest_file(tmp_path: Path, manifest) -> Path:
    path = tmp_path / "manifest.json"
    path.write_text(json.dumps(manifest), encoding="utf-8")
    return path
