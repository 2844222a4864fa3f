"""
Naming utilities for generated type names.

Handles slug to PascalCase conversion and the GraphQL name rules the
generated SDL must satisfy.
"""

import re

GRAPHQL_NAME_PATTERN = re.compile(r"^[_A-Za-z][_0-9A-Za-z]*$")


def to_pascal_case(value: str) -> str:
    """
    Convert a slug to PascalCase.

    Splits on ``-`` and ``_``, upper-cases the first character of each
    segment and lower-cases the rest: ``hero-banner`` -> ``HeroBanner``,
    ``FAQ_list`` -> ``FaqList``.
    """
    segments = re.split(r"[-_]", value)
    return "".join(segment[:1].upper() + segment[1:].lower() for segment in segments)


def is_valid_graphql_name(name: str) -> bool:
    """Check a name against the GraphQL Name grammar."""
    return bool(GRAPHQL_NAME_PATTERN.match(name)) and not name.startswith("__")


def type_name(slug: str, suffix: str = "") -> str:
    """
    Build a type name from a slug: ``PascalCase(slug) + suffix``.

    The result is not rewritten to fit the GraphQL grammar; callers check it
    with is_valid_graphql_name and report problems.
    """
    return to_pascal_case(slug) + suffix
