"""
GraphQL scalar mapping for component fields.
"""

from typing import Dict

from ...core.schema import FieldType

GRAPHQL_FALLBACK_TYPE = "String"
DEFAULT_MEDIA_TYPE = "MediaItem"

# Structural types are intentionally absent: repeater, group and
# flexible_content fields degrade to the fallback scalar.
GRAPHQL_TYPE_MAP: Dict[FieldType, str] = {
    FieldType.TEXT: "String",
    FieldType.TEXTAREA: "String",
    FieldType.WYSIWYG: "String",
    FieldType.IMAGE: DEFAULT_MEDIA_TYPE,
    FieldType.URL: "String",
    FieldType.NUMBER: "Int",
    FieldType.BOOLEAN: "Boolean",
    FieldType.SELECT: "String",
}


def map_graphql_type(field_type: FieldType, media_type: str = DEFAULT_MEDIA_TYPE) -> str:
    """Return the SDL type name for a field type, ``String`` when unmapped."""
    if field_type == FieldType.IMAGE:
        return media_type
    return GRAPHQL_TYPE_MAP.get(field_type, GRAPHQL_FALLBACK_TYPE)


def field_type_expression(base_type: str, required: bool) -> str:
    """Append the non-null marker for required fields."""
    return f"{base_type}!" if required else base_type
