"""
Generation coordinator.

Drives one generation run over all candidate declarations: classifies and
resolves each target entity, renders one artifact per entity and renders the
shared audit base exactly once.
"""

from typing import Dict, Iterable, List, Optional, Sequence

from .audit_base import parse_audit_fields
from .classifier import classify_properties
from .generator import ConfigGenerator
from .rules import resolve_property
from .schema import ArtifactRole, CandidateDeclaration, GeneratedArtifact
from ...logging_config import get_logger

logger = get_logger(__name__)


class GenerationCoordinator:
    """Runs the per-candidate pipeline and owns the run's results."""

    def __init__(
        self,
        generator: ConfigGenerator,
        audit_field_lines: Optional[Sequence[str]] = None,
    ):
        """
        Initialize coordinator for one generation run.

        Args:
            generator: Target generator used for rendering
            audit_field_lines: Audit field list lines, None if the resource is absent
        """
        self.generator = generator
        self.audit_field_lines = audit_field_lines

        # Run state
        self.artifacts: Dict[str, GeneratedArtifact] = {}
        self.diagnostics: List[str] = []
        self.base_generated = False
        self.base_namespace: Optional[str] = None
        self._entities_seen = set()

    @property
    def config(self):
        return self.generator.config

    @property
    def entity_count(self) -> int:
        return len(self._entities_seen)

    def run(self, candidates: Iterable[CandidateDeclaration]) -> Dict[str, GeneratedArtifact]:
        """
        Generate all artifacts for the given candidates.

        Args:
            candidates: Candidate declarations in discovery order

        Returns:
            Artifacts keyed by name: one shared base plus one per entity
        """
        # Reset state
        self.artifacts = {}
        self.diagnostics = []
        self.base_generated = False
        self.base_namespace = None
        self._entities_seen = set()

        for candidate in candidates:
            self.process(candidate)

        logger.info(
            "Generated %d artifact(s) for %d entit%s",
            len(self.artifacts),
            self.entity_count,
            "y" if self.entity_count == 1 else "ies",
        )
        return self.artifacts

    def process(self, candidate: CandidateDeclaration) -> Optional[GeneratedArtifact]:
        """
        Run the pipeline for a single candidate.

        Returns:
            The entity artifact, or None when the candidate was skipped
        """
        if not candidate.has_marker:
            self._skip(candidate, "no generation marker")
            return None

        entity = candidate.target
        if entity is None:
            self._skip(candidate, "target entity type could not be resolved")
            return None

        if entity.name in self._entities_seen:
            self._skip(candidate, f"entity {entity.name} already configured")
            return None

        namespace = self.config.namespace or candidate.namespace

        if not self.base_generated:
            self._generate_base(namespace)

        partition = classify_properties(entity.properties, self.config.audit_field_names)
        for prop in partition.excluded:
            self.diagnostics.append(
                f"{entity.name}.{prop.name}: not mapped "
                f"({prop.type_name or prop.type.value})"
            )

        resolved = [
            resolve_property(prop, self.config.default_string_length)
            for prop in partition.eligible
        ]
        text = self.generator.generate_entity_config(
            entity, namespace, resolved, base_namespace=self.base_namespace
        )

        artifact = GeneratedArtifact(
            name=self.generator.entity_artifact_name(entity.name),
            role=ArtifactRole.ENTITY,
            text=text,
            entity_name=entity.name,
        )
        self.artifacts[artifact.name] = artifact
        self._entities_seen.add(entity.name)

        logger.debug(
            "Configured %s: %d propert%s, %d audit field(s) left to base",
            entity.name,
            len(resolved),
            "y" if len(resolved) == 1 else "ies",
            len(partition.audit),
        )
        return artifact

    def _generate_base(self, namespace: str):
        """Render the shared base artifact; called once per run."""
        if self.audit_field_lines is None:
            self.diagnostics.append(
                f"Audit field list '{self.config.audit_fields_file}' not available; "
                "generating an empty base"
            )

        fields = parse_audit_fields(self.audit_field_lines)
        text = self.generator.generate_audit_base(namespace, fields)

        artifact = GeneratedArtifact(
            name=self.generator.base_artifact_name(),
            role=ArtifactRole.SHARED_BASE,
            text=text,
        )
        self.artifacts[artifact.name] = artifact
        self.base_generated = True
        self.base_namespace = namespace

    def _skip(self, candidate: CandidateDeclaration, reason: str):
        message = f"Skipping {candidate.namespace}.{candidate.name}: {reason}"
        logger.debug(message)
        self.diagnostics.append(message)
