"""
Per-property configuration rules.

Turns the annotations found on an eligible property into an ordered list of
directives. The order is fixed and determines the shape of generated code:

1. column name override (no directive of its own)
2. column type
3. required
4. max length, from MaxLength or else StringLength
5. concurrency token
6. row version
7. default max length for strings without one
8. column name, always last
"""

from dataclasses import dataclass
from typing import Any, List
from enum import Enum

from .naming import to_storage_name
from .schema import AnnotationKind, PropertyDescriptor, PropertyType

DEFAULT_STRING_LENGTH = 255


class DirectiveKind(Enum):
    """Configuration instructions a generator knows how to render."""

    COLUMN_TYPE = "column_type"
    REQUIRED = "required"
    MAX_LENGTH = "max_length"
    CONCURRENCY_TOKEN = "concurrency_token"
    ROW_VERSION = "row_version"
    COLUMN_NAME = "column_name"


@dataclass(frozen=True)
class Directive:
    """One configuration instruction for a column."""

    kind: DirectiveKind
    value: Any = None


@dataclass
class ResolvedProperty:
    """An eligible property together with its directives."""

    property: PropertyDescriptor
    directives: List[Directive]

    @property
    def name(self) -> str:
        return self.property.name


def resolve_column_name(prop: PropertyDescriptor) -> str:
    """Return the column name override from a Column annotation, or the property name."""
    column = prop.find_annotation(AnnotationKind.COLUMN)
    if column is not None and isinstance(column.first_argument, str):
        return column.first_argument
    return prop.name


def _single_argument(prop: PropertyDescriptor, kind: AnnotationKind) -> Any:
    annotation = prop.find_annotation(kind)
    if annotation is not None and len(annotation.arguments) == 1:
        return annotation.arguments[0]
    return None


def resolve_directives(
    prop: PropertyDescriptor, default_string_length: int = DEFAULT_STRING_LENGTH
) -> List[Directive]:
    """
    Resolve the directives for one eligible property.

    Args:
        prop: Property to configure
        default_string_length: Max length applied to strings without one

    Returns:
        Directives in rendering order, always ending with the column name
    """
    directives: List[Directive] = []
    column_name = resolve_column_name(prop)

    column = prop.find_annotation(AnnotationKind.COLUMN)
    if column is not None:
        type_name = column.named_arguments.get("TypeName")
        if isinstance(type_name, str):
            directives.append(Directive(DirectiveKind.COLUMN_TYPE, type_name))

    if prop.has_annotation(AnnotationKind.REQUIRED):
        directives.append(Directive(DirectiveKind.REQUIRED))

    # MaxLength wins over StringLength; only one of them is applied
    max_length = _single_argument(prop, AnnotationKind.MAX_LENGTH)
    if max_length is None:
        max_length = _single_argument(prop, AnnotationKind.STRING_LENGTH)
    if max_length is not None:
        directives.append(Directive(DirectiveKind.MAX_LENGTH, max_length))

    if prop.has_annotation(AnnotationKind.CONCURRENCY_CHECK):
        directives.append(Directive(DirectiveKind.CONCURRENCY_TOKEN))

    if prop.has_annotation(AnnotationKind.TIMESTAMP):
        directives.append(Directive(DirectiveKind.ROW_VERSION))

    if max_length is None and prop.type == PropertyType.STRING:
        directives.append(Directive(DirectiveKind.MAX_LENGTH, default_string_length))

    directives.append(
        Directive(DirectiveKind.COLUMN_NAME, to_storage_name(column_name))
    )
    return directives


def resolve_property(
    prop: PropertyDescriptor, default_string_length: int = DEFAULT_STRING_LENGTH
) -> ResolvedProperty:
    """Bundle a property with its resolved directives."""
    return ResolvedProperty(prop, resolve_directives(prop, default_string_length))
