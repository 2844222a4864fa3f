"""
Core schema representation for component field definitions.

Parses the component schema wire format (camelCase JSON as stored with each
component) into dataclasses that the normalizer and generators work with.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any, Tuple
from enum import Enum

from .errors import SchemaError


class FieldType(Enum):
    """Field types a component schema may declare."""

    TEXT = "text"
    TEXTAREA = "textarea"
    WYSIWYG = "wysiwyg"
    IMAGE = "image"
    URL = "url"
    NUMBER = "number"
    BOOLEAN = "boolean"
    SELECT = "select"
    REPEATER = "repeater"
    GROUP = "group"
    FLEXIBLE_CONTENT = "flexible_content"
    UNKNOWN = "unknown"  # Anything else; generators fall back to text/String

    @classmethod
    def from_value(cls, value: Any) -> "FieldType":
        """Map a declared type string to a FieldType, never raising."""
        try:
            member = cls(value)
        except ValueError:
            return cls.UNKNOWN
        return member

    @property
    def is_structural(self) -> bool:
        """Whether fields of this type own nested fields."""
        return self in STRUCTURAL_TYPES


STRUCTURAL_TYPES = frozenset(
    {FieldType.REPEATER, FieldType.GROUP, FieldType.FLEXIBLE_CONTENT}
)


class _Unset:
    """Marker for optional values that were not supplied at all."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET = _Unset()


@dataclass(frozen=True)
class Choice:
    """One selectable option of a select field."""

    value: str
    label: str


@dataclass
class FieldSpec:
    """A single declared field of a component schema."""

    name: str
    type: str
    label: str
    required: bool = False
    default_value: Any = UNSET
    placeholder: Optional[str] = None
    help_text: Optional[str] = None
    choices: Optional[List[Choice]] = None
    validation: Optional[Dict[str, Any]] = None
    sub_fields: Optional[List["FieldSpec"]] = None
    layouts: Optional[List["Layout"]] = None
    min: Optional[int] = None
    max: Optional[int] = None
    layout: Optional[str] = None
    button_label: Optional[str] = None

    @property
    def field_type(self) -> FieldType:
        return FieldType.from_value(self.type)

    @classmethod
    def from_dict(cls, data: Any, path: Tuple[str, ...] = ()) -> "FieldSpec":
        """
        Build a FieldSpec from its wire representation.

        Args:
            data: Mapping with camelCase keys (``helpText``, ``subFields`` ...)
            path: Path of the parent scope, used in error messages

        Returns:
            Parsed FieldSpec

        Raises:
            SchemaError: If the entry is not a mapping or nested lists are malformed
        """
        if not isinstance(data, dict):
            raise SchemaError(
                f"field definition must be an object, got {type(data).__name__}",
                path,
            )

        name = data.get("name") or ""
        field_path = path + (str(name) or "<unnamed>",)

        sub_fields = None
        if data.get("subFields") is not None:
            sub_fields = [
                cls.from_dict(item, field_path)
                for item in _as_list(data["subFields"], "subFields", field_path)
            ]

        layouts = None
        if data.get("layouts") is not None:
            layouts = [
                Layout.from_dict(item, field_path + (f"layouts[{index}]",))
                for index, item in enumerate(
                    _as_list(data["layouts"], "layouts", field_path)
                )
            ]

        return cls(
            name=str(name),
            type=str(data.get("type") or ""),
            label=str(data.get("label") or ""),
            required=bool(data.get("required", False)),
            default_value=data["defaultValue"] if "defaultValue" in data else UNSET,
            placeholder=data.get("placeholder"),
            help_text=data.get("helpText"),
            choices=_parse_choices(data, field_path),
            validation=data.get("validation"),
            sub_fields=sub_fields,
            layouts=layouts,
            min=data.get("min"),
            max=data.get("max"),
            layout=data.get("layout"),
            button_label=data.get("buttonLabel"),
        )


@dataclass
class Layout:
    """A flexible content layout and its fields."""

    name: str
    label: str
    display: Optional[str] = None
    sub_fields: List[FieldSpec] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any, path: Tuple[str, ...] = ()) -> "Layout":
        """Build a Layout from its wire representation."""
        if not isinstance(data, dict):
            raise SchemaError("layout definition must be an object", path)

        sub_fields = [
            FieldSpec.from_dict(item, path)
            for item in _as_list(data.get("subFields") or [], "subFields", path)
        ]
        return cls(
            name=str(data.get("name") or ""),
            label=str(data.get("label") or ""),
            display=data.get("display"),
            sub_fields=sub_fields,
        )


@dataclass
class ComponentSchema:
    """Ordered field list owned by a component."""

    fields: List[FieldSpec] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any, component_slug: str = "") -> "ComponentSchema":
        """
        Parse a component schema document.

        Accepts either ``{"fields": [...]}`` or a bare list of fields.
        """
        path = (component_slug,) if component_slug else ()
        if isinstance(data, dict):
            raw_fields = data.get("fields")
        else:
            raw_fields = data
        if raw_fields is None:
            raise SchemaError("component schema has no 'fields' list", path)

        return cls(
            fields=[
                FieldSpec.from_dict(item, path)
                for item in _as_list(raw_fields, "fields", path)
            ]
        )


def _as_list(value: Any, key: str, path: Tuple[str, ...]) -> List[Any]:
    if not isinstance(value, list):
        raise SchemaError(f"'{key}' must be a list", path)
    return value


def _parse_choices(data: Dict[str, Any], path: Tuple[str, ...]) -> Optional[List[Choice]]:
    """Read select choices from ``choices`` or, failing that, ``options``."""
    raw = data.get("choices")
    if raw is None:
        raw = data.get("options")
    if raw is None:
        return None

    choices = []
    for item in _as_list(raw, "choices", path):
        if isinstance(item, dict):
            value = item.get("value")
            label = item.get("label", value)
        else:
            # Plain strings act as both value and label
            value = label = item
        if value is None:
            raise SchemaError("choice entries need a 'value'", path)
        choices.append(Choice(value=str(value), label=str(label)))
    return choices
