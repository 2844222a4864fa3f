"""Name conversion tests"""

import pytest

from headless_builder.codegen.core.naming import (
    is_valid_graphql_name,
    to_pascal_case,
    type_name,
)


@pytest.mark.parametrize(
    "slug, expected",
    [
        ("hero", "Hero"),
        ("hero-banner", "HeroBanner"),
        ("faq_list", "FaqList"),
        ("FAQ-LIST", "FaqList"),
        ("call-to_action", "CallToAction"),
    ],
)
def test_to_pascal_case(slug, expected):
    assert to_pascal_case(slug) == expected


def test_type_name_keeps_pascal_case_slug():
    assert type_name("hero", "Component") == "HeroComponent"
    assert type_name("hero.v2", "Component") == "Hero.v2Component"
    assert type_name("3-col", "Component") == "3ColComponent"
    assert type_name("string") == "String"


def test_graphql_names():
    assert is_valid_graphql_name("title")
    assert is_valid_graphql_name("_private")
    assert not is_valid_graphql_name("cta-label")
    assert not is_valid_graphql_name("2col")
    assert not is_valid_graphql_name("__typename")
