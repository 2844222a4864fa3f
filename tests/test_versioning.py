"""Component version helper tests"""

import pytest

from headless_builder.codegen.core.errors import NotFoundError, ValidationError
from headless_builder.codegen.core.schema import ComponentSchema
from headless_builder.store import InMemoryPageStore
from headless_builder.versioning import (
    compare_versions,
    diff_schemas,
    increment_version,
    parse_version,
)


@pytest.mark.parametrize(
    "version, bump, expected",
    [
        ("1.2.3", "patch", "1.2.4"),
        ("1.2.3", "minor", "1.3.0"),
        ("1.2.3", "major", "2.0.0"),
        ("v0.9.9", "patch", "0.9.10"),
    ],
)
def test_increment_version(version, bump, expected):
    assert increment_version(version, bump) == expected


def test_increment_defaults_to_patch():
    assert increment_version("1.0.0") == "1.0.1"


@pytest.mark.parametrize("version", ["1.2", "1.2.x", "", "one.two.three", "1.2.3.4"])
def test_malformed_versions(version):
    with pytest.raises(ValidationError):
        parse_version(version)


def test_unknown_bump_part():
    with pytest.raises(ValidationError, match="Invalid version part"):
        increment_version("1.0.0", "build")


def schema(*fields):
    return ComponentSchema.from_dict({"fields": list(fields)}, "card")


def test_diff_schemas():
    old = schema(
        {"name": "title", "type": "text", "label": "Title"},
        {"name": "image", "type": "image", "label": "Image"},
        {"name": "body", "type": "textarea", "label": "Body"},
    )
    new = schema(
        {"name": "title", "type": "text", "label": "Title", "required": True},
        {"name": "body", "type": "textarea", "label": "Body"},
        {
            "name": "links",
            "type": "repeater",
            "label": "Links",
            "subFields": [{"name": "url", "type": "url", "label": "URL"}],
        },
    )
    assert diff_schemas("card", old, new) == {
        "added": ["field_card_links", "field_card_links_url"],
        "removed": ["field_card_image"],
        "changed": ["field_card_title"],
    }


def test_diff_of_identical_schemas_is_empty():
    same = schema({"name": "title", "type": "text", "label": "Title"})
    assert diff_schemas("card", same, same) == {"added": [], "removed": [], "changed": []}


def test_diff_tolerates_incomplete_snapshots():
    empty = schema()
    legacy = schema(
        {"name": "title", "type": "text"},
        {"type": "text", "label": "No name"},
        {"name": "items", "type": "repeater", "label": "Items"},
    )
    assert diff_schemas("card", empty, legacy) == {
        "added": ["field_card_title", "field_card_items"],
        "removed": [],
        "changed": [],
    }


def test_diff_walks_flexible_layouts():
    old = schema(
        {
            "name": "blocks",
            "type": "flexible_content",
            "label": "Blocks",
            "layouts": [
                {
                    "name": "quote",
                    "label": "Quote",
                    "subFields": [{"name": "text", "type": "text", "label": "Text"}],
                }
            ],
        }
    )
    assert diff_schemas("card", schema(), old)["added"] == [
        "field_card_blocks",
        "field_card_blocks_layout_0_text",
    ]


def test_compare_versions(store):
    result = compare_versions(store, "c-hero", "1.0.0", "1.1.0")

    assert result["versionA"]["version"] == "1.0.0"
    assert result["versionB"]["changelog"] == "Title is required, image dropped"
    assert result["versionB"]["fieldCount"] == 2
    assert result["diff"] == {
        "added": ["field_hero_subtitle"],
        "removed": ["field_hero_image"],
        "changed": ["field_hero_title"],
    }


def test_compare_missing_version(store):
    with pytest.raises(ValidationError, match="9.9.9"):
        compare_versions(store, "c-hero", "1.0.0", "9.9.9")


def test_compare_missing_component(store):
    with pytest.raises(NotFoundError):
        compare_versions(store, "c-gone", "1.0.0", "1.1.0")


def test_compare_against_empty_snapshot(document):
    document["components"][0]["versions"][0]["schema"] = {"fields": []}
    store = InMemoryPageStore(document)

    result = compare_versions(store, "c-hero", "1.0.0", "1.1.0")

    assert result["versionA"]["fieldCount"] == 0
    assert result["diff"] == {
        "added": ["field_hero_title", "field_hero_subtitle"],
        "removed": [],
        "changed": [],
    }
