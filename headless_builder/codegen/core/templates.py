"""
Jinja2 rendering for text export targets.

Targets ship their templates in memory; a directory given through the
``template_dir`` config setting may override any of them by file name.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from jinja2 import (
    ChoiceLoader,
    DictLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError as JinjaTemplateError,
    select_autoescape,
)

from .errors import GeneratorError
from .naming import to_pascal_case


class TemplateError(GeneratorError):
    """A template is missing or failed to render."""

    pass


def block_string(value: Any) -> str:
    """Escape text placed inside a GraphQL ``\"\"\"`` block string."""
    return str(value).replace('"""', '\\"""')


def comment_lines(value: Any, marker: str = "#") -> str:
    """Prefix every line with a comment marker; blank lines keep the bare marker."""
    return "\n".join(
        f"{marker} {line}" if line.strip() else marker
        for line in str(value).split("\n")
    )


class TemplateEngine:
    """Renders named templates for one generator."""

    def __init__(
        self,
        builtin_templates: Optional[Dict[str, str]] = None,
        override_dir: Optional[Path] = None,
    ):
        """
        Args:
            builtin_templates: Template name to source, always available
            override_dir: Directory whose files shadow builtins of the same name
        """
        self.override_dir = override_dir
        self._builtins = DictLoader(dict(builtin_templates or {}))

        loaders = []
        if override_dir is not None and override_dir.is_dir():
            loaders.append(FileSystemLoader(str(override_dir)))
        loaders.append(self._builtins)

        self._env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(["html", "xml"], default_for_string=False),
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        self._env.filters["pascal_case"] = to_pascal_case
        self._env.filters["block_string"] = block_string
        self._env.filters["comment"] = comment_lines

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        try:
            return self._env.get_template(template_name).render(**context)
        except JinjaTemplateError as e:
            raise TemplateError(f"Failed to render template {template_name}: {e}") from e

    def add_template(self, name: str, source: str):
        """Register or replace an in-memory template."""
        self._builtins.mapping[name] = source

    def list_templates(self) -> List[str]:
        return self._env.list_templates()

    def template_exists(self, template_name: str) -> bool:
        return template_name in self.list_templates()


def create_template_engine(
    builtin_templates: Optional[Dict[str, str]] = None,
    override_dir: Optional[Path] = None,
) -> TemplateEngine:
    return TemplateEngine(builtin_templates, override_dir)
