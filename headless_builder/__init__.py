"""
Headless Builder

Turns schema-driven page components into WordPress ACF field groups and
GraphQL schemas for headless front ends.
"""

from .codegen import (
    ACFGenerator,
    GraphQLGenerator,
    GeneratorConfig,
    GeneratorError,
    NotFoundError,
    SchemaError,
    ValidationError,
    generate_acf_field_groups,
    generate_page_graphql_schema,
    generate_project_acf_field_groups,
    generate_project_graphql_schema,
    load_config,
)
from .export import ExportService, error_response
from .store import InMemoryPageStore, PageStore, StoreLoadError, load_store
from .versioning import compare_versions, diff_schemas, increment_version

__version__ = "0.1.0"

__all__ = [
    "ACFGenerator",
    "GraphQLGenerator",
    "GeneratorConfig",
    "GeneratorError",
    "NotFoundError",
    "SchemaError",
    "ValidationError",
    "generate_acf_field_groups",
    "generate_page_graphql_schema",
    "generate_project_acf_field_groups",
    "generate_project_graphql_schema",
    "load_config",
    "ExportService",
    "error_response",
    "InMemoryPageStore",
    "PageStore",
    "StoreLoadError",
    "load_store",
    "compare_versions",
    "diff_schemas",
    "increment_version",
]
