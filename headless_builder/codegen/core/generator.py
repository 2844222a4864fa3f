"""
Base generator interface for all export targets.

Defines the contract that the ACF and GraphQL generators implement.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Any, Optional
from pathlib import Path

from ...logging_config import get_logger
from .config import GeneratorConfig, load_config
from .errors import GeneratorError
from .normalizer import NormalizedComponent, normalize_component
from .page import Component, Page, Project
from .templates import TemplateEngine, create_template_engine

logger = get_logger(__name__)


class CodeGenerator(ABC):
    """Abstract base class for all export generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize generator with optional configuration."""
        self.config = config or load_config(self.target_name)
        self._template_engine: Optional[TemplateEngine] = None

    @property
    @abstractmethod
    def target_name(self) -> str:
        """Return the name of the export target (e.g., 'acf', 'graphql')."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for generated files (e.g., '.json')."""
        pass

    def get_template_directory(self) -> Optional[Path]:
        """Directory of user templates from the ``template_dir`` setting, if any."""
        template_dir = self.config.custom.get("template_dir")
        return Path(template_dir) if template_dir else None

    def get_builtin_templates(self) -> Dict[str, str]:
        """In-memory templates, shadowed by same-named files in the template dir."""
        return {}

    @property
    def template_engine(self) -> TemplateEngine:
        """Template engine for this generator, created on first use."""
        if self._template_engine is None:
            self._template_engine = create_template_engine(
                self.get_builtin_templates(), self.get_template_directory()
            )
        return self._template_engine

    @abstractmethod
    def generate_page(self, page: Page) -> Any:
        """
        Generate output for a single page.

        Args:
            page: Page with its component bindings

        Returns:
            Target-specific output (field group list, SDL text ...)
        """
        pass

    @abstractmethod
    def generate_project(self, project: Project, pages: List[Page]) -> Any:
        """
        Generate output for every page of a project.

        Args:
            project: Project metadata
            pages: The project's pages in iteration order

        Returns:
            Target-specific output
        """
        pass

    def render(self, output: Any) -> str:
        """Serialize generate_page/generate_project output to text."""
        return str(output)

    def normalize(self, component: Component) -> NormalizedComponent:
        """Normalize a component's schema; SchemaError propagates."""
        return normalize_component(component.slug, component.schema)

    def validate_pages(self, pages: List[Page]) -> List[str]:
        """
        Collect warnings for pages about to be generated.

        Never raises; hard schema errors surface during generation.

        Args:
            pages: Pages to inspect

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        for page in pages:
            if not page.components:
                warnings.append(f"Page '{page.slug}' has no components")

            for binding in page.components:
                try:
                    normalized = self.normalize(binding.component)
                except GeneratorError:
                    continue
                for warning in normalized.warnings:
                    if warning not in warnings:
                        warnings.append(warning)

        return warnings

    def format_code(self, code: str) -> str:
        """Strip trailing whitespace from every line of rendered output."""
        return "\n".join(line.rstrip() for line in code.split("\n"))

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        return self.template_engine.render_template(template_name, context)

    def template_exists(self, template_name: str) -> bool:
        return self.template_engine.template_exists(template_name)


class GenerationResult:
    """Rendered output of one generation call, or the reason it failed.

    ``code`` is empty whenever ``success`` is False.
    """

    def __init__(
        self,
        code: str,
        warnings: Optional[List[str]] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        self.code = code
        self.warnings = warnings or []
        self.metadata = metadata or {}
        self.success = True
        self.error_message: Optional[str] = None
        self.exception: Optional[Exception] = None

    @classmethod
    def error(
        cls, message: str, exception: Optional[Exception] = None
    ) -> "GenerationResult":
        failed = cls(code="")
        failed.success = False
        failed.error_message = message
        failed.exception = exception
        return failed


def generate_code(
    generator: CodeGenerator,
    page: Optional[Page] = None,
    project: Optional[Project] = None,
    pages: Optional[List[Page]] = None,
) -> GenerationResult:
    """
    Generate output for a page or a project, capturing failures.

    Either ``page`` or ``project`` together with ``pages`` must be given.
    Generation is all-or-nothing: any error yields a failed result with
    empty code.

    Returns:
        GenerationResult with code, warnings, and metadata
    """
    if page is None and project is None:
        raise ValueError("generate_code needs a page or a project")

    scope_pages = [page] if page is not None else list(pages or [])

    try:
        warnings = generator.validate_pages(scope_pages)

        if page is not None:
            output = generator.generate_page(page)
        else:
            output = generator.generate_project(project, scope_pages)

        code = generator.format_code(generator.render(output))

        metadata = {
            "target": generator.target_name,
            "file_extension": generator.file_extension,
            "scope": "page" if page is not None else "project",
            "name": page.name if page is not None else project.name,
            "page_count": len(scope_pages),
            "component_bindings": sum(len(p.components) for p in scope_pages),
        }

        return GenerationResult(code, warnings, metadata)

    except GeneratorError as e:
        logger.error(f"{generator.target_name} generation failed: {e}")
        return GenerationResult.error(f"Code generation failed: {e}", exception=e)
