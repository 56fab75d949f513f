"""
Core metadata representation for configuration generation.

Normalized records describing candidate declarations, their target entity
types and properties, audit-field specifications and generated artifacts.
Host adapters build these; generators only read them.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
from enum import Enum


class PropertyType(Enum):
    """Classification of a property's declared type."""

    STRING = "string"
    DATETIME = "datetime"
    INT32 = "int32"
    DOUBLE = "double"
    BOOLEAN = "boolean"
    ENUM = "enum"
    GUID = "guid"
    OTHER = "other"  # Unsupported, never mapped


SUPPORTED_PROPERTY_TYPES = frozenset(
    member for member in PropertyType if member is not PropertyType.OTHER
)


class AnnotationKind(Enum):
    """Declarative directives recognized on entity properties."""

    COLUMN = "column"
    REQUIRED = "required"
    MAX_LENGTH = "max_length"
    STRING_LENGTH = "string_length"
    CONCURRENCY_CHECK = "concurrency_check"
    TIMESTAMP = "timestamp"
    OTHER = "other"


@dataclass(frozen=True)
class AnnotationRecord:
    """A single annotation attached to a property."""

    kind: AnnotationKind
    name: str = ""  # Attribute name as declared, for diagnostics
    arguments: Tuple[Any, ...] = ()
    named_arguments: Dict[str, Any] = field(default_factory=dict)

    @property
    def first_argument(self) -> Any:
        """Return the first positional argument or None."""
        return self.arguments[0] if self.arguments else None


@dataclass
class PropertyDescriptor:
    """One member of a target entity type."""

    name: str
    type: PropertyType
    annotations: List[AnnotationRecord] = field(default_factory=list)
    type_name: str = ""  # Declared type as written in the source
    is_public: bool = True
    is_static: bool = False

    def find_annotation(self, kind: AnnotationKind) -> Optional[AnnotationRecord]:
        """Get the first annotation of the given kind."""
        for annotation in self.annotations:
            if annotation.kind == kind:
                return annotation
        return None

    def has_annotation(self, kind: AnnotationKind) -> bool:
        """Check whether an annotation of the given kind is present."""
        return self.find_annotation(kind) is not None


@dataclass
class EntityType:
    """Target entity type whose properties are mapped."""

    name: str
    namespace: str = ""
    properties: List[PropertyDescriptor] = field(default_factory=list)


@dataclass
class CandidateDeclaration:
    """A declaration that asks for a configuration artifact."""

    name: str
    namespace: str
    target: Optional[EntityType] = None
    has_marker: bool = True


@dataclass(frozen=True)
class AuditFieldSpec:
    """A ``type:name`` entry from the audit field list."""

    type_keyword: str
    name: str


class ArtifactRole(Enum):
    """Role of a generated artifact."""

    SHARED_BASE = "shared_base"
    ENTITY = "entity"


@dataclass
class GeneratedArtifact:
    """Named block of generated text."""

    name: str
    role: ArtifactRole
    text: str
    entity_name: Optional[str] = None

    def file_name(self, extension: str) -> str:
        """Return the file name used when writing this artifact."""
        return f"{self.name}{extension}"
