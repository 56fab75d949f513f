"""
Core configuration generation components.

Provides the metadata model, rule pipeline and base classes used by all
generation targets.
"""

from .generator import ConfigGenerator, GeneratorError, GenerationResult, generate_artifacts
from .coordinator import GenerationCoordinator
from .schema import (
    AnnotationKind,
    AnnotationRecord,
    ArtifactRole,
    AuditFieldSpec,
    CandidateDeclaration,
    EntityType,
    GeneratedArtifact,
    PropertyDescriptor,
    PropertyType,
    SUPPORTED_PROPERTY_TYPES,
)
from .naming import to_storage_name
from .classifier import AUDIT_FIELD_NAMES, PropertyPartition, classify_properties
from .rules import (
    DEFAULT_STRING_LENGTH,
    Directive,
    DirectiveKind,
    ResolvedProperty,
    resolve_column_name,
    resolve_directives,
    resolve_property,
)
from .audit_base import audit_field_directives, parse_audit_field, parse_audit_fields
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "ConfigGenerator",
    "GeneratorError",
    "GenerationResult",
    "generate_artifacts",
    "GenerationCoordinator",
    # Metadata model
    "AnnotationKind",
    "AnnotationRecord",
    "ArtifactRole",
    "AuditFieldSpec",
    "CandidateDeclaration",
    "EntityType",
    "GeneratedArtifact",
    "PropertyDescriptor",
    "PropertyType",
    "SUPPORTED_PROPERTY_TYPES",
    # Naming
    "to_storage_name",
    # Classification and rules
    "AUDIT_FIELD_NAMES",
    "PropertyPartition",
    "classify_properties",
    "DEFAULT_STRING_LENGTH",
    "Directive",
    "DirectiveKind",
    "ResolvedProperty",
    "resolve_column_name",
    "resolve_directives",
    "resolve_property",
    # Audit field list
    "audit_field_directives",
    "parse_audit_field",
    "parse_audit_fields",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
