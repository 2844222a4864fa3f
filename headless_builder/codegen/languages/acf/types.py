"""
ACF type mapping and location rules.

Maps component field types onto ACF field types and builds the
``location`` rule sets that bind a field group to a page.
"""

from enum import Enum
from typing import Dict, List

from ...core.errors import ValidationError
from ...core.schema import FieldType

# Component field type -> ACF field type
ACF_TYPE_MAP: Dict[FieldType, str] = {
    FieldType.TEXT: "text",
    FieldType.TEXTAREA: "textarea",
    FieldType.WYSIWYG: "wysiwyg",
    FieldType.IMAGE: "image",
    FieldType.URL: "url",
    FieldType.NUMBER: "number",
    FieldType.BOOLEAN: "true_false",
    FieldType.SELECT: "select",
    FieldType.REPEATER: "repeater",
    FieldType.GROUP: "group",
    FieldType.FLEXIBLE_CONTENT: "flexible_content",
}

ACF_FALLBACK_TYPE = "text"

LocationRule = Dict[str, str]


class LocationStrategy(Enum):
    """How a field group is bound to its page."""

    PAGE_PARAM = "page-param"  # page == <slug>
    POST_TYPE_TEMPLATE = "post-type-template"  # post_type == page AND page_template == <file>

    @classmethod
    def from_value(cls, value: str) -> "LocationStrategy":
        try:
            return cls(value)
        except ValueError:
            valid = ", ".join(strategy.value for strategy in cls)
            raise ValidationError(
                f"Unknown location strategy '{value}' (expected one of: {valid})"
            ) from None


def map_acf_type(field_type: FieldType) -> str:
    """Return the ACF type for a field type, ``text`` when unmapped."""
    return ACF_TYPE_MAP.get(field_type, ACF_FALLBACK_TYPE)


def build_location(
    strategy: LocationStrategy,
    page_slug: str,
    page_template_format: str = "page-{slug}.php",
) -> List[List[LocationRule]]:
    """
    Build the ACF ``location`` value for a page.

    The outer list is OR-ed, each inner list AND-ed; both strategies produce
    a single AND-clause rule set.
    """
    if strategy == LocationStrategy.POST_TYPE_TEMPLATE:
        try:
            template = page_template_format.format(slug=page_slug)
        except (KeyError, IndexError, ValueError) as e:
            raise ValidationError(
                f"Invalid page_template_format '{page_template_format}': {e}"
            ) from e
        return [
            [
                {"param": "post_type", "operator": "==", "value": "page"},
                {"param": "page_template", "operator": "==", "value": template},
            ]
        ]

    return [[{"param": "page", "operator": "==", "value": page_slug}]]
