"""Template engine tests"""

import pytest

from headless_builder.codegen import generate_code, load_config
from headless_builder.codegen.core.templates import (
    TemplateEngine,
    TemplateError,
    block_string,
    comment_lines,
)
from headless_builder.codegen.languages.graphql import GraphQLGenerator


def test_filters():
    assert block_string('a """b"""') == 'a \\"""b\\"""'
    assert comment_lines("one\n\ntwo") == "# one\n#\n# two"
    assert comment_lines("x", "//") == "// x"


def test_builtin_templates_render():
    engine = TemplateEngine({"hello.j2": "Hello {{ name | pascal_case }}"})
    assert engine.template_exists("hello.j2")
    assert engine.render_template("hello.j2", {"name": "hero-banner"}) == "Hello HeroBanner"


def test_missing_variable_is_an_error():
    engine = TemplateEngine({"hello.j2": "Hello {{ name }}"})
    with pytest.raises(TemplateError, match="hello.j2"):
        engine.render_template("hello.j2", {})


def test_unknown_template():
    with pytest.raises(TemplateError):
        TemplateEngine().render_template("nope.j2", {})


def test_add_template_replaces_builtin():
    engine = TemplateEngine({"t.j2": "old"})
    engine.add_template("t.j2", "new")
    assert engine.render_template("t.j2", {}) == "new"


def test_directory_overrides_builtin(tmp_path):
    (tmp_path / "union.graphql.j2").write_text(
        "union {{ union_name }} = {{ members | join(' | ') }} # custom",
        encoding="utf-8",
    )
    config = load_config("graphql", custom_config={"templateDir": str(tmp_path)})
    generator = GraphQLGenerator(config)

    assert generator.generate_union([]) == "union PageComponent =  # custom"
    assert generator.template_exists("page_type.graphql.j2")


def test_broken_override_fails_generation(tmp_path, store):
    (tmp_path / "header.graphql.j2").write_text("{{ missing }}", encoding="utf-8")
    config = load_config("graphql", custom_config={"template_dir": str(tmp_path)})

    result = generate_code(GraphQLGenerator(config), page=store.get_page("home"))
    assert not result.success
    assert result.code == ""
