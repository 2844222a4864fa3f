"""
Core code generation components.

Provides the schema model, normalizer and base classes used by all
export targets.
"""

from .errors import GeneratorError, NotFoundError, SchemaError, ValidationError
from .generator import CodeGenerator, GenerationResult, generate_code
from .schema import (
    UNSET,
    Choice,
    ComponentSchema,
    FieldSpec,
    FieldType,
    Layout,
)
from .page import Component, Page, PageComponent, Project, unique_components
from .normalizer import (
    FlexibleContentField,
    GroupField,
    LeafField,
    NormalizedComponent,
    NormalizedField,
    NormalizedLayout,
    RepeaterField,
    iter_fields,
    normalize_component,
)
from .naming import is_valid_graphql_name, to_pascal_case, type_name
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Errors
    "GeneratorError",
    "NotFoundError",
    "SchemaError",
    "ValidationError",
    # Base generator interface
    "CodeGenerator",
    "GenerationResult",
    "generate_code",
    # Schema system
    "UNSET",
    "Choice",
    "ComponentSchema",
    "FieldSpec",
    "FieldType",
    "Layout",
    "Component",
    "Page",
    "PageComponent",
    "Project",
    "unique_components",
    # Normalizer
    "FlexibleContentField",
    "GroupField",
    "LeafField",
    "NormalizedComponent",
    "NormalizedField",
    "NormalizedLayout",
    "RepeaterField",
    "iter_fields",
    "normalize_component",
    # Naming
    "is_valid_graphql_name",
    "type_name",
    "to_pascal_case",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
