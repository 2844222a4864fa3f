"""
ACF export target.

Generates WordPress Advanced Custom Fields field-group JSON.
"""

from .generator import (
    ACFGenerator,
    generate_acf_field_groups,
    generate_project_acf_field_groups,
)
from .types import ACF_TYPE_MAP, LocationStrategy, build_location, map_acf_type

__all__ = [
    "ACFGenerator",
    "generate_acf_field_groups",
    "generate_project_acf_field_groups",
    "ACF_TYPE_MAP",
    "LocationStrategy",
    "build_location",
    "map_acf_type",
]
