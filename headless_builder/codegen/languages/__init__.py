"""
Export targets.

Each sub-package implements one CodeGenerator.
"""

from .acf import ACFGenerator
from .graphql import GraphQLGenerator

__all__ = ["ACFGenerator", "GraphQLGenerator"]
