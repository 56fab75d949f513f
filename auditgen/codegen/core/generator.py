"""
Base generator interface for all configuration targets.

Defines the contract that every target (template set plus directive
renderer) must implement, and the error-handling wrapper used to run a
generation pass.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Any, Iterable, Optional, Sequence
from pathlib import Path

from .audit_base import audit_field_directives
from .config import GeneratorConfig
from .rules import Directive, ResolvedProperty
from .schema import AuditFieldSpec, CandidateDeclaration, EntityType, GeneratedArtifact
from .templates import TemplateEngine, create_template_engine
from ...logging_config import get_logger

logger = get_logger(__name__)


class GeneratorError(Exception):
    """Base exception for configuration generation errors."""

    pass


class ConfigGenerator(ABC):
    """Abstract base class for all configuration generators."""

    base_template_name = "audit_base.j2"
    entity_template_name = "entity_config.j2"

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or GeneratorConfig()
        self._template_engine = None
        self._setup_templates()

    def _setup_templates(self):
        """Setup template engine for this generator."""
        template_dir = self.get_template_directory()
        self._template_engine = create_template_engine(template_dir)

    @property
    @abstractmethod
    def target_name(self) -> str:
        """Return the name of the target (e.g., 'csharp')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.g.cs')."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """
        Return the directory containing templates for this generator.

        A ``template_dir`` in the configuration always wins. Subclasses
        should fall back to their bundled templates.

        Returns:
            Path to template directory or None
        """
        if self.config.template_dir:
            return Path(self.config.template_dir)
        return None

    @property
    def template_engine(self) -> TemplateEngine:
        """Get the template engine for this generator."""
        if self._template_engine is None:
            self._setup_templates()
        return self._template_engine

    @abstractmethod
    def render_directive(self, directive: Directive) -> str:
        """
        Render one directive in the target syntax.

        Args:
            directive: Directive to render

        Returns:
            Code fragment appended to a property configuration statement
        """
        pass

    def render_directives(self, directives: Iterable[Directive]) -> str:
        """Render directives in order as one fragment."""
        return "".join(self.render_directive(directive) for directive in directives)

    def base_artifact_name(self) -> str:
        """Name of the shared base artifact."""
        return self.config.base_class_name

    def entity_artifact_name(self, entity_name: str) -> str:
        """Name of the artifact generated for an entity."""
        return self.config.entity_artifact_name(entity_name)

    def generate_audit_base(self, namespace: str, fields: Sequence[AuditFieldSpec]) -> str:
        """
        Generate the shared audit base configuration.

        Args:
            namespace: Namespace of the generated base class
            fields: Parsed audit fields, possibly empty

        Returns:
            Generated code for the base artifact
        """
        field_data = []
        for spec in fields:
            directives = audit_field_directives(spec, self.config.default_string_length)
            field_data.append(
                {
                    "name": spec.name,
                    "type_keyword": spec.type_keyword,
                    "directives": directives,
                    "chain": self.render_directives(directives),
                }
            )

        context = {
            **self.get_common_context(),
            "namespace": namespace,
            "fields": field_data,
        }
        code = self.render_template(self.base_template_name, context)
        return self.format_code(code)

    def generate_entity_config(
        self,
        entity: EntityType,
        namespace: str,
        properties: Sequence[ResolvedProperty],
        base_namespace: Optional[str] = None,
    ) -> str:
        """
        Generate the configuration of one entity.

        Args:
            entity: Target entity type
            namespace: Namespace of the generated configuration class
            properties: Eligible properties with directives, in declaration order
            base_namespace: Namespace holding the shared base class

        Returns:
            Generated code for the entity artifact
        """
        property_data = [
            {
                "name": resolved.name,
                "type": resolved.property.type.value,
                "directives": resolved.directives,
                "chain": self.render_directives(resolved.directives),
            }
            for resolved in properties
        ]

        extra_namespaces = {entity.namespace, base_namespace or namespace}
        usings = sorted(ns for ns in extra_namespaces if ns and ns != namespace)

        context = {
            **self.get_common_context(),
            "namespace": namespace,
            "usings": usings,
            "entity_name": entity.name,
            "entity_namespace": entity.namespace,
            "class_name": self.entity_artifact_name(entity.name),
            "properties": property_data,
        }
        code = self.render_template(self.entity_template_name, context)
        return self.format_code(code)

    def get_common_context(self) -> Dict[str, Any]:
        """Template variables shared by every artifact."""
        return {
            "add_comments": self.config.add_comments,
            "base_class": self.config.base_class_name,
            "config": self.config,
        }

    def format_code(self, code: str) -> str:
        """
        Apply formatting to generated code.

        Strips trailing whitespace, collapses runs of blank lines and
        guarantees exactly one trailing newline.
        """
        lines = code.strip("\n").split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 1:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines) + "\n"

    # Template helper methods

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with context.

        Args:
            template_name: Template file name
            context: Template variables

        Returns:
            Rendered content
        """
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        return self.template_engine.template_exists(template_name)


class GenerationResult:
    """Container for generation results and metadata."""

    def __init__(
        self,
        artifacts: Dict[str, GeneratedArtifact],
        warnings: List[str] = None,
        metadata: Dict[str, Any] = None,
    ):
        """
        Initialize generation result.

        Args:
            artifacts: Generated artifacts keyed by name
            warnings: Diagnostics collected during generation
            metadata: Additional metadata about generation
        """
        self.artifacts = artifacts
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message = None
        self.exception = None

    @classmethod
    def error(cls, message: str, exception: Exception = None) -> "GenerationResult":
        """Create a failed generation result."""
        result = cls(artifacts={})
        result.success = False
        result.error_message = message
        result.exception = exception
        return result

    @property
    def texts(self) -> Dict[str, str]:
        """Generated text keyed by artifact name."""
        return {name: artifact.text for name, artifact in self.artifacts.items()}


def generate_artifacts(
    generator: ConfigGenerator,
    candidates: Iterable[CandidateDeclaration],
    audit_field_lines: Optional[Sequence[str]] = None,
) -> GenerationResult:
    """
    Run one generation pass with error handling.

    Args:
        generator: Target generator instance
        candidates: Candidate declarations from the host adapter
        audit_field_lines: Lines of the audit field list, None when absent

    Returns:
        GenerationResult with artifacts, diagnostics and metadata
    """
    from .coordinator import GenerationCoordinator

    candidates = list(candidates)
    try:
        coordinator = GenerationCoordinator(generator, audit_field_lines)
        artifacts = coordinator.run(candidates)

        metadata = {
            "target": generator.target_name,
            "file_extension": generator.file_extension,
            "candidate_count": len(candidates),
            "entity_count": coordinator.entity_count,
            "base_generated": coordinator.base_generated,
            "audit_fields_available": audit_field_lines is not None,
        }
        return GenerationResult(artifacts, list(coordinator.diagnostics), metadata)

    except Exception as e:
        logger.error("Configuration generation failed: %s", e, exc_info=True)
        return GenerationResult.error(
            f"Configuration generation failed: {str(e)}", exception=e
        )
