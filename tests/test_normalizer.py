"""Field-schema normalizer tests"""

import pytest

from headless_builder.codegen.core.errors import SchemaError
from headless_builder.codegen.core.normalizer import (
    FlexibleContentField,
    GroupField,
    LeafField,
    RepeaterField,
    field_index,
    iter_fields,
    normalize_component,
)
from headless_builder.codegen.core.schema import UNSET, ComponentSchema, FieldType


def normalize(slug, fields):
    return normalize_component(slug, ComponentSchema.from_dict({"fields": fields}, slug))


def test_top_level_and_nested_keys():
    component = normalize(
        "list",
        [
            {
                "name": "items",
                "type": "repeater",
                "label": "Items",
                "subFields": [
                    {"name": "label", "type": "text", "label": "Label"},
                    {
                        "name": "meta",
                        "type": "group",
                        "label": "Meta",
                        "subFields": [{"name": "note", "type": "text", "label": "Note"}],
                    },
                ],
            }
        ],
    )

    items = component.fields[0]
    assert isinstance(items, RepeaterField)
    assert items.key == "field_list_items"
    assert [f.key for f in items.sub_fields] == [
        "field_list_items_label",
        "field_list_items_meta",
    ]
    meta = items.sub_fields[1]
    assert isinstance(meta, GroupField)
    assert meta.sub_fields[0].key == "field_list_items_meta_note"


def test_flexible_content_layout_keys():
    component = normalize(
        "blocks",
        [
            {
                "name": "sections",
                "type": "flexible_content",
                "label": "Sections",
                "layouts": [
                    {
                        "name": "quote",
                        "label": "Quote",
                        "subFields": [{"name": "text", "type": "textarea", "label": "Text"}],
                    },
                    {
                        "name": "cta",
                        "label": "Call to action",
                        "display": "row",
                        "subFields": [{"name": "url", "type": "url", "label": "URL"}],
                    },
                ],
            }
        ],
    )

    sections = component.fields[0]
    assert isinstance(sections, FlexibleContentField)
    assert [layout.key for layout in sections.layouts] == [
        "field_blocks_sections_layout_0",
        "field_blocks_sections_layout_1",
    ]
    assert sections.layouts[1].sub_fields[0].key == "field_blocks_sections_layout_1_url"
    assert sections.layouts[1].display == "row"


def test_keys_are_stable_across_runs():
    fields = [
        {"name": "title", "type": "text", "label": "Title"},
        {
            "name": "items",
            "type": "repeater",
            "label": "Items",
            "subFields": [{"name": "label", "type": "text", "label": "Label"}],
        },
    ]
    first = [f.key for f in iter_fields(normalize("hero", fields).fields)]
    second = [f.key for f in iter_fields(normalize("hero", fields).fields)]
    assert first == second


def test_key_changes_only_when_path_changes():
    before = field_index(
        normalize("hero", [{"name": "title", "type": "text", "label": "Title"}])
    )
    relabeled = field_index(
        normalize("hero", [{"name": "title", "type": "textarea", "label": "Heading"}])
    )
    renamed = field_index(
        normalize("hero", [{"name": "heading", "type": "text", "label": "Title"}])
    )
    assert list(before) == list(relabeled) == ["field_hero_title"]
    assert list(renamed) == ["field_hero_heading"]


def test_iteration_is_depth_first_in_declaration_order():
    component = normalize(
        "c",
        [
            {
                "name": "a",
                "type": "group",
                "label": "A",
                "subFields": [{"name": "b", "type": "text", "label": "B"}],
            },
            {"name": "z", "type": "text", "label": "Z"},
        ],
    )
    assert [f.name for f in iter_fields(component.fields)] == ["a", "b", "z"]


def test_unknown_type_is_leaf_with_warning():
    component = normalize("c", [{"name": "when", "type": "date", "label": "When"}])
    field = component.fields[0]
    assert isinstance(field, LeafField)
    assert field.field_type == FieldType.UNKNOWN
    assert field.declared_type == "date"
    assert any("unknown field type 'date'" in w for w in component.warnings)


def test_select_without_choices_warns_only():
    component = normalize("c", [{"name": "size", "type": "select", "label": "Size"}])
    assert component.fields[0].choices is None
    assert component.warnings == ("c.size: select field has no choices",)


def test_select_with_empty_choices_warns_and_keeps_them():
    component = normalize(
        "c", [{"name": "size", "type": "select", "label": "Size", "choices": []}]
    )
    assert component.fields[0].choices == ()
    assert component.warnings == ("c.size: select field has no choices",)


def test_select_reads_options_when_choices_missing():
    component = normalize(
        "c",
        [
            {
                "name": "size",
                "type": "select",
                "label": "Size",
                "options": [{"value": "s", "label": "Small"}, "m"],
            }
        ],
    )
    choices = component.fields[0].choices
    assert [(c.value, c.label) for c in choices] == [("s", "Small"), ("m", "m")]
    assert component.warnings == ()


def test_default_value_keeps_falsy_values():
    component = normalize(
        "c",
        [
            {"name": "count", "type": "number", "label": "Count", "defaultValue": 0},
            {"name": "on", "type": "boolean", "label": "On", "defaultValue": False},
            {"name": "none", "type": "text", "label": "None", "defaultValue": None},
            {"name": "unset", "type": "text", "label": "Unset"},
        ],
    )
    count, on, none, unset = component.fields
    assert count.has_default and count.default_value == 0
    assert on.has_default and on.default_value is False
    assert none.has_default and none.default_value is None
    assert not unset.has_default and unset.default_value is UNSET


@pytest.mark.parametrize(
    "fields, path, reason",
    [
        ([], ("c",), "component schema declares no fields"),
        ([{"type": "text", "label": "X"}], ("c", "<unnamed>"), "field is missing a 'name'"),
        ([{"name": "x", "type": "text"}], ("c", "x"), "field is missing a 'label'"),
        (
            [
                {"name": "x", "type": "text", "label": "X"},
                {"name": "x", "type": "number", "label": "X2"},
            ],
            ("c", "x"),
            "duplicate field name 'x'",
        ),
        (
            [{"name": "rows", "type": "repeater", "label": "Rows"}],
            ("c", "rows"),
            "repeater field requires 'subFields'",
        ),
        (
            [{"name": "box", "type": "group", "label": "Box", "subFields": []}],
            ("c", "box"),
            "group field requires 'subFields'",
        ),
        (
            [{"name": "flex", "type": "flexible_content", "label": "Flex"}],
            ("c", "flex"),
            "flexible_content field requires 'layouts'",
        ),
        (
            [
                {
                    "name": "flex",
                    "type": "flexible_content",
                    "label": "Flex",
                    "layouts": [{"name": "empty", "label": "Empty", "subFields": []}],
                }
            ],
            ("c", "flex", "layouts[0]"),
            "layout requires at least one sub-field",
        ),
    ],
)
def test_schema_errors_name_the_offending_path(fields, path, reason):
    with pytest.raises(SchemaError) as excinfo:
        normalize("c", fields)
    assert excinfo.value.path == path
    assert excinfo.value.reason == reason


def test_nested_schema_error_path():
    with pytest.raises(SchemaError) as excinfo:
        normalize(
            "list",
            [
                {
                    "name": "items",
                    "type": "repeater",
                    "label": "Items",
                    "subFields": [{"name": "label", "type": "text"}],
                }
            ],
        )
    assert str(excinfo.value) == "list.items.label: field is missing a 'label'"


def test_same_name_allowed_in_different_scopes():
    component = normalize(
        "c",
        [
            {"name": "title", "type": "text", "label": "Title"},
            {
                "name": "box",
                "type": "group",
                "label": "Box",
                "subFields": [{"name": "title", "type": "text", "label": "Title"}],
            },
        ],
    )
    assert set(field_index(component)) == {
        "field_c_title",
        "field_c_box",
        "field_c_box_title",
    }


def test_component_schema_requires_field_list():
    with pytest.raises(SchemaError):
        ComponentSchema.from_dict({"title": "no fields"}, "c")
