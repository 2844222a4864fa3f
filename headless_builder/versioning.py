"""
Component version helpers.

Semantic version bumps and comparison of stored component snapshots. The
store is passed in by the caller; nothing here keeps state between calls.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .codegen.core.errors import ValidationError
from .codegen.core.normalizer import layout_key, nested_key, top_level_key
from .codegen.core.schema import ComponentSchema, FieldSpec, FieldType
from .logging_config import get_logger

logger = get_logger(__name__)

VERSION_PATTERN = re.compile(r"^v?(\d+)\.(\d+)\.(\d+)$")
BUMP_PARTS = ("major", "minor", "patch")


@dataclass
class ComponentVersion:
    """A stored snapshot of a component's schema."""

    id: str
    version: str
    name: str
    schema: ComponentSchema
    description: Optional[str] = None
    changelog: Optional[str] = None
    created_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "version": self.version,
            "name": self.name,
            "description": self.description,
            "changelog": self.changelog,
            "createdAt": self.created_at,
            "fieldCount": len(self.schema.fields),
        }


def parse_version(version: str) -> Tuple[int, int, int]:
    """
    Parse ``MAJOR.MINOR.PATCH`` (an optional leading ``v`` is accepted).

    Raises:
        ValidationError: If the string is not a three-part numeric version
    """
    match = VERSION_PATTERN.match(str(version).strip())
    if not match:
        raise ValidationError(f"Invalid version: {version!r}")
    major, minor, patch = (int(part) for part in match.groups())
    return major, minor, patch


def increment_version(version: str, bump: str = "patch") -> str:
    """
    Return the next version after ``version``.

    A major bump resets minor and patch, a minor bump resets patch.

    Raises:
        ValidationError: On a malformed version or an unknown bump part
    """
    if bump not in BUMP_PARTS:
        raise ValidationError(
            f"Invalid version part: {bump!r} (expected one of {', '.join(BUMP_PARTS)})"
        )

    major, minor, patch = parse_version(version)
    if bump == "major":
        major, minor, patch = major + 1, 0, 0
    elif bump == "minor":
        minor, patch = minor + 1, 0
    else:
        patch += 1
    return f"{major}.{minor}.{patch}"


def _snapshot_fields(
    specs: Optional[List[FieldSpec]], parent_key: Optional[str], component_slug: str
) -> Iterator[Tuple[str, FieldSpec]]:
    """Yield ``(key, spec)`` depth-first; unnamed entries are skipped, not rejected."""
    for spec in specs or []:
        if not spec.name:
            continue
        if parent_key is None:
            key = top_level_key(component_slug, spec.name)
        else:
            key = nested_key(parent_key, spec.name)
        yield key, spec

        field_type = spec.field_type
        if field_type in (FieldType.REPEATER, FieldType.GROUP):
            yield from _snapshot_fields(spec.sub_fields, key, component_slug)
        elif field_type == FieldType.FLEXIBLE_CONTENT:
            for index, layout in enumerate(spec.layouts or []):
                yield from _snapshot_fields(
                    layout.sub_fields, layout_key(key, index), component_slug
                )


def snapshot_index(component_slug: str, schema: ComponentSchema) -> Dict[str, FieldSpec]:
    """
    Map generated field keys to declared fields of a stored snapshot.

    Stored snapshots may predate current validation rules, so empty schemas
    and incomplete fields are indexed as they are. The first field wins on a
    duplicate key.
    """
    index: Dict[str, FieldSpec] = {}
    for key, spec in _snapshot_fields(schema.fields, None, component_slug):
        index.setdefault(key, spec)
    return index


def diff_schemas(
    component_slug: str, old: ComponentSchema, new: ComponentSchema
) -> Dict[str, List[str]]:
    """
    Compare two schemas of the same component by generated field key.

    Returns:
        ``{"added": [...], "removed": [...], "changed": [...]}``; a key is
        changed when its declared type, label or required flag differs.
    """
    old_fields = snapshot_index(component_slug, old)
    new_fields = snapshot_index(component_slug, new)

    added = [key for key in new_fields if key not in old_fields]
    removed = [key for key in old_fields if key not in new_fields]
    changed = []
    for key, field in new_fields.items():
        previous = old_fields.get(key)
        if previous is None:
            continue
        if (
            previous.type != field.type
            or previous.label != field.label
            or previous.required != field.required
        ):
            changed.append(key)

    return {"added": added, "removed": removed, "changed": changed}


def compare_versions(
    store, component_id: str, version_a: str, version_b: str
) -> Dict[str, Any]:
    """
    Compare two stored versions of a component.

    Args:
        store: Persistence collaborator (PageStore)
        component_id: Component identifier
        version_a: Base version string
        version_b: Version string compared against the base

    Returns:
        Dict with ``versionA``, ``versionB`` snapshots and the schema ``diff``

    Raises:
        NotFoundError: If the component does not exist
        ValidationError: If either version is not stored for the component
    """
    component = store.get_component(component_id)
    versions = {v.version: v for v in store.get_component_versions(component_id)}

    missing = [v for v in (version_a, version_b) if v not in versions]
    if missing:
        raise ValidationError(
            f"Version(s) not found for component {component.slug}: "
            f"{', '.join(missing)}"
        )

    snapshot_a = versions[version_a]
    snapshot_b = versions[version_b]
    diff = diff_schemas(component.slug, snapshot_a.schema, snapshot_b.schema)
    logger.debug(
        f"Compared {component.slug} {version_a}..{version_b}: "
        f"+{len(diff['added'])} -{len(diff['removed'])} ~{len(diff['changed'])}"
    )

    return {
        "versionA": snapshot_a.to_dict(),
        "versionB": snapshot_b.to_dict(),
        "diff": diff,
    }
