"""
GraphQL SDL generator.

Produces one object type per distinct component, a ``PageComponent`` union
over those types and one page type per page.
"""

from typing import Any, Dict, List, Optional

from ....logging_config import get_logger
from ...core.config import GeneratorConfig
from ...core.generator import CodeGenerator
from ...core.naming import is_valid_graphql_name, type_name
from ...core.normalizer import NormalizedField
from ...core.page import Component, Page, Project, unique_components
from .templates import BUILTIN_TEMPLATES
from .types import DEFAULT_MEDIA_TYPE, field_type_expression, map_graphql_type

logger = get_logger(__name__)

UNION_NAME = "PageComponent"
HEADER_TITLE = "Auto-generated GraphQL schema"


class GraphQLGenerator(CodeGenerator):
    """Generator for GraphQL schema definition language."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        super().__init__(config)
        self.media_type = self.config.custom.get("media_type", DEFAULT_MEDIA_TYPE)

    @property
    def target_name(self) -> str:
        return "graphql"

    @property
    def file_extension(self) -> str:
        return ".graphql"

    def get_builtin_templates(self) -> Dict[str, str]:
        return dict(BUILTIN_TEMPLATES)

    def component_type_name(self, component: Component) -> str:
        return type_name(component.slug, "Component")

    def page_type_name(self, page: Page) -> str:
        return type_name(page.slug, "Page")

    def generate_page(self, page: Page) -> str:
        """Generate the SDL document for a single page."""
        sdl = self._assemble(f"Page: {page.name}", page.unique_components(), [page])
        logger.info(f"Generated GraphQL schema for page {page.slug}")
        return sdl

    def generate_project(self, project: Project, pages: List[Page]) -> str:
        """Generate one SDL document covering every page of a project."""
        sdl = self._assemble(
            f"Project: {project.name}", unique_components(pages), pages
        )
        logger.info(
            f"Generated GraphQL schema for project {project.name} ({len(pages)} pages)"
        )
        return sdl

    def _assemble(
        self, scope_line: str, components: List[Component], pages: List[Page]
    ) -> str:
        # Render every block before joining so a failure leaves no output
        component_blocks = [self.generate_component_type(c) for c in components]
        union_block = self.generate_union(components)
        page_blocks = [self.generate_page_type(page) for page in pages]

        header = self.render_template(
            "header.graphql.j2", {"header": f"{HEADER_TITLE}\n{scope_line}"}
        )
        sections = [
            header,
            "\n\n".join(component_blocks),
            union_block,
            "\n\n".join(page_blocks),
        ]
        return "\n\n".join(section for section in sections if section)

    def generate_component_type(self, component: Component) -> str:
        """Render the object type for one component."""
        normalized = self.normalize(component)
        context = {
            "component_name": component.name,
            "type_name": self.component_type_name(component),
            "fields": [self._field_context(field) for field in normalized.fields],
        }
        return self.render_template("component_type.graphql.j2", context)

    def _field_context(self, field: NormalizedField) -> Dict[str, Any]:
        base_type = map_graphql_type(field.field_type, self.media_type)
        return {
            "name": field.name,
            "type": field_type_expression(base_type, field.required),
            "description": field.description,
        }

    def generate_union(self, components: List[Component]) -> str:
        """Render the union over all component types, first-seen order."""
        return self.render_template(
            "union.graphql.j2",
            {
                "union_name": UNION_NAME,
                "members": [self.component_type_name(c) for c in components],
            },
        )

    def generate_page_type(self, page: Page) -> str:
        """Render the fixed-shape type for a page."""
        return self.render_template(
            "page_type.graphql.j2",
            {
                "page_name": page.name,
                "type_name": self.page_type_name(page),
                "union_name": UNION_NAME,
            },
        )

    def validate_pages(self, pages: List[Page]) -> List[str]:
        """Add SDL-specific warnings to the base checks."""
        warnings = super().validate_pages(pages)

        type_owners: Dict[str, str] = {}
        for component in unique_components(pages):
            component_type = self.component_type_name(component)
            owner = type_owners.setdefault(component_type, component.slug)
            if owner != component.slug:
                warnings.append(
                    f"Components '{owner}' and '{component.slug}' both map to "
                    f"type {component_type}"
                )
            if not is_valid_graphql_name(component_type):
                warnings.append(
                    f"{component_type} (component '{component.slug}') is not a "
                    f"valid GraphQL type name"
                )

            for field in component.schema.fields:
                if not is_valid_graphql_name(field.name):
                    warnings.append(
                        f"{component_type}.{field.name} is not a valid GraphQL field name"
                    )
                if field.field_type.is_structural:
                    warnings.append(
                        f"{component_type}.{field.name} ({field.type}) is exposed as "
                        f"String; nested types are not generated"
                    )

        for page in pages:
            page_type = self.page_type_name(page)
            if not is_valid_graphql_name(page_type):
                warnings.append(
                    f"{page_type} (page '{page.slug}') is not a valid GraphQL type name"
                )

        if pages and not any(page.components for page in pages):
            warnings.append(f"Union {UNION_NAME} has no member types")

        return warnings


def generate_page_graphql_schema(
    store, page_id: str, config: Optional[GeneratorConfig] = None
) -> str:
    """
    Generate SDL for one page.

    Args:
        store: Persistence collaborator (PageStore)
        page_id: Page identifier
        config: Optional generator configuration

    Returns:
        SDL text

    Raises:
        NotFoundError: If the page does not exist
        SchemaError: If any bound component schema is malformed
    """
    page = store.get_page(page_id)
    return GraphQLGenerator(config).generate_page(page)


def generate_project_graphql_schema(
    store, project_id: str, config: Optional[GeneratorConfig] = None
) -> str:
    """
    Generate SDL for a project: shared component types, one union and a
    page type per page.
    """
    project, pages = store.get_project_pages(project_id)
    return GraphQLGenerator(config).generate_project(project, pages)
