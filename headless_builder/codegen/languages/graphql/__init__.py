"""
GraphQL export target.

Generates schema definition language for headless front ends.
"""

from .generator import (
    GraphQLGenerator,
    generate_page_graphql_schema,
    generate_project_graphql_schema,
)
from .types import GRAPHQL_TYPE_MAP, map_graphql_type

__all__ = [
    "GraphQLGenerator",
    "generate_page_graphql_schema",
    "generate_project_graphql_schema",
    "GRAPHQL_TYPE_MAP",
    "map_graphql_type",
]
