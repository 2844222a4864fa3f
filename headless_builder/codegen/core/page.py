"""
Page and project structures supplied by the persistence collaborator.

Generators only read these objects; they are built fresh from stored data
for every export call.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any

from .schema import ComponentSchema


@dataclass
class Component:
    """A reusable, schema-driven content block."""

    id: str
    slug: str
    name: str
    schema: ComponentSchema
    category: Optional[str] = None
    description: Optional[str] = None
    current_version: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Component":
        slug = str(data.get("slug") or "")
        return cls(
            id=str(data.get("id") or slug),
            slug=slug,
            name=str(data.get("name") or slug),
            schema=ComponentSchema.from_dict(data.get("schema") or {}, slug),
            category=data.get("category"),
            description=data.get("description"),
            current_version=data.get("currentVersion"),
        )


@dataclass
class PageComponent:
    """Binding of a component to a page at a position."""

    order: int
    component: Component


@dataclass
class Page:
    """A page with its ordered component bindings."""

    id: str
    slug: str
    name: str
    title: Optional[str] = None
    description: Optional[str] = None
    components: List[PageComponent] = field(default_factory=list)

    def ordered_components(self) -> List[PageComponent]:
        """Return bindings sorted by ``order`` (stable for equal values)."""
        return sorted(self.components, key=lambda binding: binding.order)

    def unique_components(self) -> List[Component]:
        """Distinct components in first-seen order."""
        return unique_components([self])

    def summary(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "title": self.title,
            "description": self.description,
            "componentCount": len(self.components),
        }


@dataclass
class Project:
    """Project metadata; pages are fetched separately."""

    id: str
    name: str
    client: Optional[str] = None
    page_ids: List[str] = field(default_factory=list)


def unique_components(pages: List[Page]) -> List[Component]:
    """
    Deduplicate components across pages by component id.

    Order is the order in which each component is first seen while walking
    the pages and their ordered bindings.
    """
    seen: Dict[str, Component] = {}
    for page in pages:
        for binding in page.ordered_components():
            seen.setdefault(binding.component.id, binding.component)
    return list(seen.values())
