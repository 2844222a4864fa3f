"""
Field-schema normalizer.

Turns a component's declared fields into an immutable tree of normalized
fields, each carrying a deterministic key derived only from the component
slug and the field's path:

- top-level field:            ``field_<componentSlug>_<fieldName>``
- field inside repeater/group: ``<parentKey>_<fieldName>``
- flexible content layout:     ``<parentKey>_layout_<layoutIndex>``
- field inside a layout:       ``<layoutKey>_<fieldName>``

Validation happens during the walk and fails fast with SchemaError, so a
tree that comes back from normalize_component is always safe to emit.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from ...logging_config import get_logger
from .errors import SchemaError
from .schema import UNSET, Choice, ComponentSchema, FieldSpec, FieldType, Layout

logger = get_logger(__name__)


@dataclass(frozen=True)
class NormalizedField:
    """Common attributes of every normalized field."""

    key: str
    name: str
    label: str
    field_type: FieldType
    declared_type: str
    path: Tuple[str, ...]
    required: bool = False
    default_value: Any = UNSET
    placeholder: Optional[str] = None
    help_text: Optional[str] = None

    @property
    def has_default(self) -> bool:
        return self.default_value is not UNSET

    @property
    def description(self) -> str:
        """Help text when present, label otherwise."""
        return self.help_text or self.label


@dataclass(frozen=True)
class LeafField(NormalizedField):
    """A scalar field; also used for undeclared/unknown types."""

    choices: Optional[Tuple[Choice, ...]] = None
    validation: Optional[Tuple[Tuple[str, Any], ...]] = None


@dataclass(frozen=True)
class RepeaterField(NormalizedField):
    sub_fields: Tuple[NormalizedField, ...] = ()
    min: Optional[int] = None
    max: Optional[int] = None
    layout: Optional[str] = None
    button_label: Optional[str] = None


@dataclass(frozen=True)
class GroupField(NormalizedField):
    sub_fields: Tuple[NormalizedField, ...] = ()
    layout: Optional[str] = None


@dataclass(frozen=True)
class NormalizedLayout:
    """A flexible content layout with its key and fields."""

    key: str
    name: str
    label: str
    index: int
    display: Optional[str] = None
    sub_fields: Tuple[NormalizedField, ...] = ()


@dataclass(frozen=True)
class FlexibleContentField(NormalizedField):
    layouts: Tuple[NormalizedLayout, ...] = ()
    button_label: Optional[str] = None


StructuralField = Union[RepeaterField, GroupField, FlexibleContentField]


@dataclass(frozen=True)
class NormalizedComponent:
    """Normalized field tree of one component."""

    slug: str
    fields: Tuple[NormalizedField, ...]
    warnings: Tuple[str, ...] = ()


def top_level_key(component_slug: str, field_name: str) -> str:
    return f"field_{component_slug}_{field_name}"


def nested_key(parent_key: str, field_name: str) -> str:
    return f"{parent_key}_{field_name}"


def layout_key(parent_key: str, index: int) -> str:
    return f"{parent_key}_layout_{index}"


class SchemaNormalizer:
    """Walks one component schema and builds its normalized tree.

    Instances hold per-call state (collected warnings) and are cheap; use a
    new one per component or call normalize_component().
    """

    def __init__(self, component_slug: str):
        self.component_slug = component_slug
        self.warnings: List[str] = []

    def normalize(self, schema: ComponentSchema) -> NormalizedComponent:
        root_path = (self.component_slug,)
        if not schema.fields:
            raise SchemaError("component schema declares no fields", root_path)

        fields = self._normalize_scope(schema.fields, root_path, parent_key=None)
        logger.debug(
            f"Normalized component {self.component_slug}: {len(fields)} top-level fields"
        )
        return NormalizedComponent(
            slug=self.component_slug, fields=fields, warnings=tuple(self.warnings)
        )

    def _normalize_scope(
        self,
        specs: List[FieldSpec],
        scope_path: Tuple[str, ...],
        parent_key: Optional[str],
    ) -> Tuple[NormalizedField, ...]:
        seen = set()
        result = []
        for spec in specs:
            path = scope_path + (spec.name or "<unnamed>",)
            if not spec.name:
                raise SchemaError("field is missing a 'name'", path)
            if spec.name in seen:
                raise SchemaError(f"duplicate field name '{spec.name}'", path)
            seen.add(spec.name)

            if parent_key is None:
                key = top_level_key(self.component_slug, spec.name)
            else:
                key = nested_key(parent_key, spec.name)
            result.append(self._normalize_field(spec, key, path))
        return tuple(result)

    def _normalize_field(
        self, spec: FieldSpec, key: str, path: Tuple[str, ...]
    ) -> NormalizedField:
        if not spec.label:
            raise SchemaError("field is missing a 'label'", path)

        field_type = spec.field_type
        common = dict(
            key=key,
            name=spec.name,
            label=spec.label,
            field_type=field_type,
            declared_type=spec.type,
            path=path,
            required=spec.required,
            default_value=spec.default_value,
            placeholder=spec.placeholder,
            help_text=spec.help_text,
        )

        if field_type == FieldType.REPEATER:
            return RepeaterField(
                sub_fields=self._children(spec, key, path),
                min=spec.min,
                max=spec.max,
                layout=spec.layout,
                button_label=spec.button_label,
                **common,
            )
        elif field_type == FieldType.GROUP:
            return GroupField(
                sub_fields=self._children(spec, key, path),
                layout=spec.layout,
                **common,
            )
        elif field_type == FieldType.FLEXIBLE_CONTENT:
            return FlexibleContentField(
                layouts=self._layouts(spec, key, path),
                button_label=spec.button_label,
                **common,
            )

        # Leaf types, plus the fallback arm for unknown declared types
        if field_type == FieldType.UNKNOWN:
            self._warn(path, f"unknown field type '{spec.type}', treated as text")
        if spec.sub_fields or spec.layouts:
            logger.debug(f"Ignoring nested fields on leaf field {'.'.join(path)}")

        choices = None
        if field_type == FieldType.SELECT:
            if spec.choices is not None:
                choices = tuple(spec.choices)
            if not spec.choices:
                self._warn(path, "select field has no choices")

        validation = None
        if spec.validation:
            validation = tuple(sorted(spec.validation.items()))

        return LeafField(choices=choices, validation=validation, **common)

    def _children(
        self, spec: FieldSpec, key: str, path: Tuple[str, ...]
    ) -> Tuple[NormalizedField, ...]:
        if not spec.sub_fields:
            raise SchemaError(f"{spec.type} field requires 'subFields'", path)
        return self._normalize_scope(spec.sub_fields, path, parent_key=key)

    def _layouts(
        self, spec: FieldSpec, key: str, path: Tuple[str, ...]
    ) -> Tuple[NormalizedLayout, ...]:
        if not spec.layouts:
            raise SchemaError("flexible_content field requires 'layouts'", path)

        layouts = []
        for index, layout in enumerate(spec.layouts):
            layouts.append(self._normalize_layout(layout, key, index, path))
        return tuple(layouts)

    def _normalize_layout(
        self, layout: Layout, parent_key: str, index: int, path: Tuple[str, ...]
    ) -> NormalizedLayout:
        layout_path = path + (f"layouts[{index}]",)
        if not layout.name:
            raise SchemaError("layout is missing a 'name'", layout_path)
        if not layout.label:
            raise SchemaError("layout is missing a 'label'", layout_path)
        if not layout.sub_fields:
            raise SchemaError("layout requires at least one sub-field", layout_path)

        key = layout_key(parent_key, index)
        return NormalizedLayout(
            key=key,
            name=layout.name,
            label=layout.label,
            index=index,
            display=layout.display,
            sub_fields=self._normalize_scope(layout.sub_fields, layout_path, key),
        )

    def _warn(self, path: Tuple[str, ...], message: str) -> None:
        warning = f"{'.'.join(path)}: {message}"
        self.warnings.append(warning)
        logger.warning(warning)


def normalize_component(component_slug: str, schema: ComponentSchema) -> NormalizedComponent:
    """
    Normalize a component schema into a keyed field tree.

    Args:
        component_slug: Slug of the owning component (key prefix)
        schema: Declared fields

    Returns:
        NormalizedComponent with fields in declaration order

    Raises:
        SchemaError: On the first malformed field, naming its path
    """
    return SchemaNormalizer(component_slug).normalize(schema)


def child_fields(field: NormalizedField) -> Tuple[NormalizedField, ...]:
    """Direct children of a field, flattening layouts in order."""
    if isinstance(field, (RepeaterField, GroupField)):
        return field.sub_fields
    if isinstance(field, FlexibleContentField):
        return tuple(
            sub_field for layout in field.layouts for sub_field in layout.sub_fields
        )
    return ()


def iter_fields(fields: Tuple[NormalizedField, ...]) -> Iterator[NormalizedField]:
    """Yield every field depth-first in declaration order."""
    for field in fields:
        yield field
        yield from iter_fields(child_fields(field))


def field_index(component: NormalizedComponent) -> Dict[str, NormalizedField]:
    """Map every generated key of a component to its field."""
    return {field.key: field for field in iter_fields(component.fields)}
