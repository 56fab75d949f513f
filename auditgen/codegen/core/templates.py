"""
Jinja2 rendering for generated artifacts.

Targets ship their templates in a directory; a user-supplied template
directory replaces them entirely.
"""

from typing import Callable, Dict, Any, List, Optional
from pathlib import Path

from jinja2 import (
    Environment,
    FileSystemLoader,
    DictLoader,
    StrictUndefined,
    TemplateError as JinjaTemplateError,
)

from .naming import to_storage_name


class TemplateError(Exception):
    """Raised when a template is missing or fails to render."""

    pass


class TemplateEngine:
    """Jinja2 environment bound to one template directory."""

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Args:
            template_dir: Directory holding ``*.j2`` templates. A missing
                directory yields an engine without templates.
        """
        self.template_dir = template_dir
        self._env = self._create_environment()

    def _create_environment(self) -> Environment:
        if self.template_dir and self.template_dir.is_dir():
            loader = FileSystemLoader(str(self.template_dir))
        else:
            loader = DictLoader({})

        # Output is source code, never HTML
        env = Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        env.filters["storage_name"] = to_storage_name
        return env

    def add_filter(self, name: str, func: Callable[..., Any]):
        """Make a filter available to every template of this engine."""
        self._env.filters[name] = func

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a named template.

        Raises:
            TemplateError: If the template is missing or rendering fails
        """
        try:
            return self._env.get_template(template_name).render(**context)
        except JinjaTemplateError as e:
            raise TemplateError(f"Failed to render template {template_name}: {e}") from e

    def list_templates(self) -> List[str]:
        return self._env.list_templates()

    def template_exists(self, template_name: str) -> bool:
        return template_name in self.list_templates()


def create_template_engine(template_dir: Optional[Path] = None) -> TemplateEngine:
    """Create a template engine, optionally bound to a template directory."""
    return TemplateEngine(template_dir)
