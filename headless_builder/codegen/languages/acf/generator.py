"""
ACF field group generator.

Renders normalized component schemas into WordPress Advanced Custom Fields
field-group JSON, one field group per component binding on a page.
"""

import json
from typing import Any, Dict, List, Optional

from ....logging_config import get_logger
from ...core.config import GeneratorConfig
from ...core.generator import CodeGenerator
from ...core.normalizer import (
    FlexibleContentField,
    GroupField,
    LeafField,
    NormalizedField,
    NormalizedLayout,
    RepeaterField,
)
from ...core.page import Component, Page, Project
from .types import LocationStrategy, build_location, map_acf_type

logger = get_logger(__name__)

# Metadata shared by every exported field group
FIELD_GROUP_DEFAULTS = {
    "position": "normal",
    "style": "default",
    "label_placement": "top",
    "instruction_placement": "label",
    "active": True,
}


class ACFGenerator(CodeGenerator):
    """Generator for ACF field-group JSON."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        super().__init__(config)
        self.location_strategy = LocationStrategy.from_value(
            self.config.location_strategy
        )

    @property
    def target_name(self) -> str:
        return "acf"

    @property
    def file_extension(self) -> str:
        return ".json"

    def generate_page(self, page: Page) -> List[Dict[str, Any]]:
        """Generate one field group per component binding, in page order."""
        field_groups = [
            self.generate_field_group(binding.component, page.slug, index)
            for index, binding in enumerate(page.ordered_components())
        ]
        logger.info(f"Generated {len(field_groups)} ACF field groups for page {page.slug}")
        return field_groups

    def generate_project(
        self, project: Project, pages: List[Page]
    ) -> List[Dict[str, Any]]:
        """Concatenate the field groups of every page in iteration order."""
        field_groups = []
        for page in pages:
            field_groups.extend(self.generate_page(page))
        logger.info(
            f"Generated {len(field_groups)} ACF field groups for project {project.name}"
        )
        return field_groups

    def render(self, output: List[Dict[str, Any]]) -> str:
        return json.dumps(output, indent=self.config.json_indent, ensure_ascii=False)

    def generate_field_group(
        self, component: Component, page_slug: str, order: int
    ) -> Dict[str, Any]:
        """
        Build the field group for a component placed on a page.

        Args:
            component: Bound component
            page_slug: Slug of the page the group is bound to
            order: Zero-based position of the binding on the page

        Returns:
            ACF field group dictionary
        """
        normalized = self.normalize(component)

        field_group = {
            "key": f"group_{page_slug}_{component.slug}",
            "title": f"{component.name} - {page_slug}",
            "fields": [self.generate_field(field) for field in normalized.fields],
            "location": build_location(
                self.location_strategy, page_slug, self.config.page_template_format
            ),
            "menu_order": order,
        }
        field_group.update(FIELD_GROUP_DEFAULTS)
        return field_group

    def generate_field(self, field: NormalizedField) -> Dict[str, Any]:
        """Render one normalized field (recursively for structural types)."""
        acf_field = {
            "key": field.key,
            "label": field.label,
            "name": field.name,
            "type": map_acf_type(field.field_type),
            "required": 1 if field.required else 0,
        }

        if field.has_default:
            acf_field["default_value"] = field.default_value
        if field.placeholder:
            acf_field["placeholder"] = field.placeholder
        if field.help_text:
            acf_field["instructions"] = field.help_text

        if isinstance(field, RepeaterField):
            acf_field["sub_fields"] = self._sub_fields(field.sub_fields)
            acf_field["layout"] = field.layout or self.config.repeater_layout
            acf_field["button_label"] = field.button_label or self.config.button_label
            if field.min is not None:
                acf_field["min"] = field.min
            if field.max is not None:
                acf_field["max"] = field.max
        elif isinstance(field, GroupField):
            acf_field["sub_fields"] = self._sub_fields(field.sub_fields)
            acf_field["layout"] = field.layout or self.config.group_layout
        elif isinstance(field, FlexibleContentField):
            acf_field["layouts"] = [
                self._generate_layout(layout) for layout in field.layouts
            ]
            acf_field["button_label"] = field.button_label or self.config.button_label
        elif isinstance(field, LeafField):
            if field.choices is not None:
                acf_field["choices"] = {
                    choice.value: choice.label for choice in field.choices
                }
        else:
            raise TypeError(f"Unsupported normalized field: {type(field).__name__}")

        return acf_field

    def _sub_fields(self, fields) -> List[Dict[str, Any]]:
        return [self.generate_field(sub_field) for sub_field in fields]

    def _generate_layout(self, layout: NormalizedLayout) -> Dict[str, Any]:
        return {
            "key": layout.key,
            "name": layout.name,
            "label": layout.label,
            "display": layout.display or self.config.layout_display,
            "sub_fields": self._sub_fields(layout.sub_fields),
        }


def generate_acf_field_groups(
    store, page_id: str, config: Optional[GeneratorConfig] = None
) -> List[Dict[str, Any]]:
    """
    Generate the ACF field groups for one page.

    Args:
        store: Persistence collaborator (PageStore)
        page_id: Page identifier
        config: Optional generator configuration

    Returns:
        Field groups in the page's component order

    Raises:
        NotFoundError: If the page does not exist
        SchemaError: If any bound component schema is malformed
    """
    page = store.get_page(page_id)
    return ACFGenerator(config).generate_page(page)


def generate_project_acf_field_groups(
    store, project_id: str, config: Optional[GeneratorConfig] = None
) -> List[Dict[str, Any]]:
    """
    Generate the ACF field groups for every page of a project.

    Raises:
        NotFoundError: If the project (or one of its pages) does not exist
        SchemaError: If any bound component schema is malformed
    """
    project, pages = store.get_project_pages(project_id)
    return ACFGenerator(config).generate_project(project, pages)
