"""
C# code generator implementation.

Generates Entity Framework Core fluent configuration classes: one abstract
audit base implementing IEntityTypeConfiguration<T> and one partial
configuration class per entity deriving from it.
"""

from typing import Optional
from pathlib import Path

from ...core.config import GeneratorConfig
from ...core.generator import ConfigGenerator, GeneratorError
from ...core.rules import Directive, DirectiveKind


def csharp_string(value) -> str:
    """Render a value as a C# string literal."""
    escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class CSharpGenerator(ConfigGenerator):
    """Code generator for EF Core entity type configurations."""

    base_template_name = "audit_base.cs.j2"
    entity_template_name = "entity_config.cs.j2"

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize C# generator with configuration."""
        super().__init__(config)
        self.file_suffix = self.config.custom.get("file_suffix", ".g.cs")

    def _setup_templates(self):
        super()._setup_templates()
        self._template_engine.add_filter("csharp_string", csharp_string)

    @property
    def target_name(self) -> str:
        """Return the target name."""
        return "csharp"

    @property
    def file_extension(self) -> str:
        """Return the generated source suffix."""
        return self.file_suffix

    def get_template_directory(self) -> Path:
        """Return the configured or bundled C# templates directory."""
        return super().get_template_directory() or Path(__file__).parent / "templates"

    def render_directive(self, directive: Directive) -> str:
        """Render a directive as a fluent API call."""
        if directive.kind == DirectiveKind.COLUMN_TYPE:
            return f".HasColumnType({csharp_string(directive.value)})"
        elif directive.kind == DirectiveKind.REQUIRED:
            return ".IsRequired()"
        elif directive.kind == DirectiveKind.MAX_LENGTH:
            return f".HasMaxLength({directive.value})"
        elif directive.kind == DirectiveKind.CONCURRENCY_TOKEN:
            return ".IsConcurrencyToken()"
        elif directive.kind == DirectiveKind.ROW_VERSION:
            return ".IsRowVersion()"
        elif directive.kind == DirectiveKind.COLUMN_NAME:
            return f".HasColumnName({csharp_string(directive.value)})"
        raise GeneratorError(f"Unsupported directive: {directive.kind}")


def create_csharp_generator(config: GeneratorConfig = None) -> CSharpGenerator:
    """Create a C# generator with the default EF Core configuration."""
    if config is None:
        from ...core.config import load_config

        config = load_config("csharp")

    return CSharpGenerator(config)
