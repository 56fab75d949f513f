"""Manifest adapter producing candidate declarations.

A host tool that scans the source tree exports declarations and types as a
JSON manifest. This module applies the discovery rules to that manifest:

* a declaration is a candidate when it carries the ``GenerateConfiguration``
  attribute;
* its target entity is the type argument of the first ``Configure`` method
  parameter typed ``EntityTypeBuilder<T>``;
* properties are classified by their declared type and their data
  annotation attributes are recognized by name.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from .codegen.core.schema import (
    AnnotationKind,
    AnnotationRecord,
    CandidateDeclaration,
    EntityType,
    PropertyDescriptor,
    PropertyType,
)
from .logging_config import get_logger
from .utils import load_json

logger = get_logger(__name__)

MARKER_ATTRIBUTE = "GenerateConfiguration"
CONFIGURE_METHOD = "Configure"
DEFAULT_BUILDER_TYPE = "EntityTypeBuilder"

_GENERIC_TYPE = re.compile(r"^\s*(?P<name>[\w.]+)\s*<(?P<args>.*)>\s*$")

TYPE_CLASSIFICATION = {
    "string": PropertyType.STRING,
    "System.String": PropertyType.STRING,
    "DateTime": PropertyType.DATETIME,
    "System.DateTime": PropertyType.DATETIME,
    "int": PropertyType.INT32,
    "Int32": PropertyType.INT32,
    "System.Int32": PropertyType.INT32,
    "double": PropertyType.DOUBLE,
    "Double": PropertyType.DOUBLE,
    "System.Double": PropertyType.DOUBLE,
    "bool": PropertyType.BOOLEAN,
    "Boolean": PropertyType.BOOLEAN,
    "System.Boolean": PropertyType.BOOLEAN,
    "Guid": PropertyType.GUID,
    "System.Guid": PropertyType.GUID,
}

ANNOTATION_KINDS = {
    "Column": AnnotationKind.COLUMN,
    "Required": AnnotationKind.REQUIRED,
    "MaxLength": AnnotationKind.MAX_LENGTH,
    "StringLength": AnnotationKind.STRING_LENGTH,
    "ConcurrencyCheck": AnnotationKind.CONCURRENCY_CHECK,
    "Timestamp": AnnotationKind.TIMESTAMP,
}


class ManifestError(Exception):
    """Raised when a manifest does not have the expected structure."""

    pass


def _entry_list(data: dict[str, Any], key: str) -> list[Any]:
    """Return a list-valued manifest field; a missing or null field is empty."""
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ManifestError(
            f"'{key}' of {data.get('name', '<unnamed>')!r} must be a list, "
            f"got {type(value).__name__}"
        )
    return value


def short_attribute_name(name: str) -> str:
    """Strip namespace and ``Attribute`` suffix from an attribute name."""
    short = name.strip().rsplit(".", 1)[-1]
    if short.endswith("Attribute") and short != "Attribute":
        short = short[: -len("Attribute")]
    return short


def _attribute_name(data: Any) -> str:
    if isinstance(data, str):
        return data
    if isinstance(data, dict):
        return str(data.get("name", ""))
    return ""


def has_marker(attributes: list[Any], marker: str = MARKER_ATTRIBUTE) -> bool:
    """Check whether the marker attribute is present."""
    return any(short_attribute_name(_attribute_name(a)) == marker for a in attributes)


def parse_annotation(data: Any) -> AnnotationRecord:
    """Build an annotation record from a name string or an attribute object."""
    name = _attribute_name(data)
    kind = ANNOTATION_KINDS.get(short_attribute_name(name), AnnotationKind.OTHER)

    if not isinstance(data, dict):
        return AnnotationRecord(kind=kind, name=name)

    arguments = data.get("arguments") or []
    named_arguments = data.get("named_arguments") or {}
    if not isinstance(arguments, list) or not isinstance(named_arguments, dict):
        raise ManifestError(f"Invalid arguments for attribute {name!r}")

    return AnnotationRecord(
        kind=kind,
        name=name,
        arguments=tuple(arguments),
        named_arguments=dict(named_arguments),
    )


def classify_type(type_name: str, enum_names: set[str] | frozenset[str] = frozenset()) -> PropertyType:
    """Classify a declared type name.

    Nullable reference annotations (``string?``) keep their classification;
    nullable value types (``int?``) and everything unknown are OTHER.
    """
    name = type_name.strip()
    if name.endswith("?"):
        if TYPE_CLASSIFICATION.get(name[:-1]) == PropertyType.STRING:
            return PropertyType.STRING
        return PropertyType.OTHER

    if name in TYPE_CLASSIFICATION:
        return TYPE_CLASSIFICATION[name]
    if name in enum_names:
        return PropertyType.ENUM
    return PropertyType.OTHER


def parse_property(data: dict[str, Any], enum_names: set[str]) -> PropertyDescriptor:
    """Build a property descriptor from its manifest entry."""
    if not isinstance(data, dict) or "name" not in data:
        raise ManifestError(f"Invalid property entry: {data!r}")

    type_name = str(data.get("type", ""))
    accessibility = str(data.get("accessibility", "public")).lower()

    return PropertyDescriptor(
        name=str(data["name"]),
        type=classify_type(type_name, enum_names),
        annotations=[parse_annotation(a) for a in _entry_list(data, "attributes")],
        type_name=type_name,
        is_public=accessibility == "public",
        is_static=bool(data.get("static", False)),
    )


def split_type_arguments(arguments: str) -> list[str]:
    """Split generic type arguments on top-level commas."""
    parts = []
    depth = 0
    current = []
    for char in arguments:
        if char == "<":
            depth += 1
        elif char == ">":
            depth -= 1
        if char == "," and depth == 0:
            parts.append("".join(current).strip())
            current = []
        else:
            current.append(char)
    if current:
        parts.append("".join(current).strip())
    return [part for part in parts if part]


def builder_type_argument(type_name: str, builder_type: str = DEFAULT_BUILDER_TYPE) -> str | None:
    """Return ``T`` for ``EntityTypeBuilder<T>``, or None for any other type."""
    match = _GENERIC_TYPE.match(type_name)
    if not match:
        return None

    short_name = match.group("name").rsplit(".", 1)[-1]
    if not short_name.startswith(builder_type):
        return None

    arguments = split_type_arguments(match.group("args"))
    return arguments[0] if arguments else None


class ManifestIndex:
    """Lookup of the types declared in a manifest."""

    def __init__(self, types: list[dict[str, Any]]):
        self._entries: dict[str, dict[str, Any]] = {}
        self.enum_names: set[str] = set()

        for entry in types:
            if not isinstance(entry, dict) or "name" not in entry:
                raise ManifestError(f"Invalid type entry: {entry!r}")
            name = str(entry["name"])
            namespace = str(entry.get("namespace", ""))
            keys = [name, f"{namespace}.{name}"] if namespace else [name]

            for key in keys:
                self._entries.setdefault(key, entry)
                if entry.get("kind") == "enum":
                    self.enum_names.add(key)

        self._entities: dict[int, EntityType] = {}

    def resolve(self, type_name: str) -> EntityType | None:
        """Resolve a type reference to an entity type."""
        entry = self._entries.get(type_name.strip())
        if entry is None or entry.get("kind") == "enum":
            return None

        # One EntityType per manifest entry, shared by every declaration using it
        key = id(entry)
        if key not in self._entities:
            self._entities[key] = EntityType(
                name=str(entry["name"]),
                namespace=str(entry.get("namespace", "")),
                properties=[
                    parse_property(p, self.enum_names)
                    for p in _entry_list(entry, "properties")
                ],
            )
        return self._entities[key]


def resolve_target_type(
    declaration: dict[str, Any],
    index: ManifestIndex,
    builder_type: str = DEFAULT_BUILDER_TYPE,
) -> EntityType | None:
    """Find the entity configured by a declaration's ``Configure`` method."""
    configure = next(
        (
            method
            for method in _entry_list(declaration, "methods")
            if isinstance(method, dict) and method.get("name") == CONFIGURE_METHOD
        ),
        None,
    )
    if configure is None:
        return None

    for parameter in _entry_list(configure, "parameters"):
        if not isinstance(parameter, dict):
            raise ManifestError(f"Invalid parameter entry: {parameter!r}")
        type_argument = builder_type_argument(str(parameter.get("type", "")), builder_type)
        if type_argument is not None:
            return index.resolve(type_argument)
    return None


def load_candidates(
    manifest: dict[str, Any], builder_type: str = DEFAULT_BUILDER_TYPE
) -> list[CandidateDeclaration]:
    """Turn a manifest into candidate declarations.

    Args:
        manifest: Parsed manifest object with ``types`` and ``declarations``.
        builder_type: Name prefix of the builder parameter type.

    Returns:
        Candidates in manifest order; unresolvable targets are left as None.

    Raises:
        ManifestError: If the manifest structure is invalid.
    """
    if not isinstance(manifest, dict):
        raise ManifestError("Manifest must be a JSON object")

    types = manifest.get("types", [])
    declarations = manifest.get("declarations", [])
    if not isinstance(types, list) or not isinstance(declarations, list):
        raise ManifestError("Manifest 'types' and 'declarations' must be lists")

    index = ManifestIndex(types)
    candidates = []

    for declaration in declarations:
        if not isinstance(declaration, dict) or "name" not in declaration:
            raise ManifestError(f"Invalid declaration entry: {declaration!r}")

        candidate = CandidateDeclaration(
            name=str(declaration["name"]),
            namespace=str(declaration.get("namespace", "")),
            target=resolve_target_type(declaration, index, builder_type),
            has_marker=has_marker(_entry_list(declaration, "attributes")),
        )
        if candidate.target is None:
            logger.debug("No target entity resolved for %s", candidate.name)
        candidates.append(candidate)

    logger.info("Loaded %d declaration(s) from manifest", len(candidates))
    return candidates


def load_manifest(
    path: str | Path, builder_type: str = DEFAULT_BUILDER_TYPE
) -> list[CandidateDeclaration]:
    """Read a manifest file and return its candidate declarations."""
    _, data = load_json(file_path=path)
    return load_candidates(data, builder_type)
