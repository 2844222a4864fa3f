"""
Headless Builder Code Generation Module

Generates ACF field groups and GraphQL schemas from component schemas.
"""

from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_registry,
    get_target_info,
    list_all_target_info,
    list_supported_targets,
)
from .core.generator import CodeGenerator, GenerationResult, generate_code
from .core.errors import GeneratorError, NotFoundError, SchemaError, ValidationError
from .core.schema import ComponentSchema, FieldSpec, FieldType, Layout
from .core.page import Component, Page, PageComponent, Project
from .core.normalizer import normalize_component
from .core.config import GeneratorConfig, ConfigManager, load_config
from .languages.acf import (
    ACFGenerator,
    generate_acf_field_groups,
    generate_project_acf_field_groups,
)
from .languages.graphql import (
    GraphQLGenerator,
    generate_page_graphql_schema,
    generate_project_graphql_schema,
)


def generate_for_page(store, page_id, target="acf", config=None):
    """
    Generate a page export for any registered target.

    Args:
        store: Persistence collaborator (PageStore)
        page_id: Page identifier
        target: Target name or alias
        config: Generator configuration (GeneratorConfig, dict or path)

    Returns:
        GenerationResult with rendered text
    """
    generator = get_generator(target, config)
    page = store.get_page(page_id)
    return generate_code(generator, page=page)


def generate_for_project(store, project_id, target="acf", config=None):
    """Generate a project export for any registered target."""
    generator = get_generator(target, config)
    project, pages = store.get_project_pages(project_id)
    return generate_code(generator, project=project, pages=pages)


__all__ = [
    "GeneratorRegistry",
    "RegistryError",
    "CodeGenerator",
    "GenerationResult",
    "GeneratorError",
    "NotFoundError",
    "SchemaError",
    "ValidationError",
    "ComponentSchema",
    "FieldSpec",
    "FieldType",
    "Layout",
    "Component",
    "Page",
    "PageComponent",
    "Project",
    "GeneratorConfig",
    "ConfigManager",
    "load_config",
    "normalize_component",
    "ACFGenerator",
    "GraphQLGenerator",
    "generate_acf_field_groups",
    "generate_project_acf_field_groups",
    "generate_page_graphql_schema",
    "generate_project_graphql_schema",
    "generate_code",
    "generate_for_page",
    "generate_for_project",
    "get_generator",
    "get_registry",
    "get_target_info",
    "list_all_target_info",
    "list_supported_targets",
]
