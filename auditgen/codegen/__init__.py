"""
Auditgen Configuration Generation Module

Generates persistence mapping configuration from entity metadata.
"""

from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_target_info,
    get_registry,
    is_target_supported,
    list_targets,
    register_generator,
)
from .core.generator import (
    ConfigGenerator,
    GeneratorError,
    GenerationResult,
    generate_artifacts,
)
from .core.coordinator import GenerationCoordinator
from .core.schema import (
    ArtifactRole,
    CandidateDeclaration,
    EntityType,
    GeneratedArtifact,
    PropertyDescriptor,
    PropertyType,
)
from .core.config import GeneratorConfig, ConfigManager, load_config


# Convenience functions
def generate_from_candidates(
    candidates, target="csharp", config=None, audit_field_lines=None
):
    """
    Generate configuration artifacts from candidate declarations.

    Args:
        candidates: CandidateDeclaration records from a host adapter
        target: Target name or alias
        config: Generator configuration dict, path or GeneratorConfig
        audit_field_lines: Lines of the audit field list, None when absent

    Returns:
        GenerationResult with generated artifacts
    """
    generator = get_generator(target, config)
    return generate_artifacts(generator, candidates, audit_field_lines)


def generate_from_manifest(
    manifest, target="csharp", config=None, audit_field_lines=None
):
    """
    Generate configuration artifacts from a parsed manifest.

    Args:
        manifest: Manifest dict (see auditgen.discovery)
        target: Target name or alias
        config: Generator configuration dict, path or GeneratorConfig
        audit_field_lines: Lines of the audit field list, None when absent

    Returns:
        GenerationResult with generated artifacts
    """
    from auditgen.discovery import load_candidates

    generator = get_generator(target, config)
    builder_type = generator.config.custom.get("builder_type", "EntityTypeBuilder")
    candidates = load_candidates(manifest, builder_type)
    return generate_artifacts(generator, candidates, audit_field_lines)


# Export main interfaces
__all__ = [
    "GeneratorRegistry",
    "RegistryError",
    "ConfigGenerator",
    "GeneratorError",
    "GenerationResult",
    "GenerationCoordinator",
    "ArtifactRole",
    "CandidateDeclaration",
    "EntityType",
    "GeneratedArtifact",
    "PropertyDescriptor",
    "PropertyType",
    "GeneratorConfig",
    "ConfigManager",
    "load_config",
    "generate_artifacts",
    "generate_from_candidates",
    "generate_from_manifest",
    "get_generator",
    "get_target_info",
    "get_registry",
    "is_target_supported",
    "list_targets",
    "register_generator",
]
