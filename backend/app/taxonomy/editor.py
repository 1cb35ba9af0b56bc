"""Taxonomy editing - pure operations over a user's tag group list.

Every function returns a new list of groups and leaves its input untouched.
Saving the result alongside the user profile is the caller's job.
"""

import uuid
from collections.abc import Iterable
from typing import Any

from backend.app.models.tags import TagGroup
from backend.app.taxonomy.store import is_group_required


class TaxonomyError(ValueError):
    """Raised when a taxonomy edit cannot be applied."""


def _find_index(groups: list[TagGroup], group_id: str | int) -> int:
    key = str(group_id)
    for index, group in enumerate(groups):
        if group.group_id == key:
            return index
    raise TaxonomyError(f"Unknown tag group: {key}")


def add_group(
    groups: Iterable[TagGroup],
    name: str,
    tags: Iterable[str] = (),
    is_required: bool = True,
) -> list[TagGroup]:
    """Append a new group. New groups are required unless stated otherwise."""
    name = name.strip() if name else ""
    if not name:
        raise TaxonomyError("Tag group name must not be blank")

    group = TagGroup(
        id=uuid.uuid4().hex,
        name=name,
        tags=[tag.strip() for tag in tags if isinstance(tag, str)],
        is_required=is_required,
    )
    return [*groups, group]


def update_group(groups: Iterable[TagGroup], group_id: str | int, **changes: Any) -> list[TagGroup]:
    """Replace fields of one group, re-validating the result."""
    updated = list(groups)
    index = _find_index(updated, group_id)

    if "name" in changes:
        name = changes["name"].strip() if isinstance(changes["name"], str) else ""
        if not name:
            raise TaxonomyError("Tag group name must not be blank")
        changes["name"] = name

    data = updated[index].model_dump()
    data.update(changes)
    data["id"] = updated[index].id
    updated[index] = TagGroup.model_validate(data)
    return updated


def remove_group(groups: Iterable[TagGroup], group_id: str | int) -> list[TagGroup]:
    """Drop a group. Unknown ids leave the taxonomy unchanged."""
    key = str(group_id)
    return [group for group in groups if group.group_id != key]


def add_group_tag(groups: Iterable[TagGroup], group_id: str | int, tag: str) -> list[TagGroup]:
    """Append a tag to a group's vocabulary if it is new and not blank."""
    current = list(groups)
    index = _find_index(current, group_id)
    tag = tag.strip() if isinstance(tag, str) else ""
    group = current[index]
    if not tag or tag in group.vocabulary:
        return current
    return update_group(current, group_id, tags=[*group.tags, tag])


def remove_group_tag(groups: Iterable[TagGroup], group_id: str | int, tag: str) -> list[TagGroup]:
    """Remove a tag from a group's vocabulary."""
    current = list(groups)
    group = current[_find_index(current, group_id)]
    return update_group(current, group_id, tags=[t for t in group.tags if t != tag])


def set_group_required(groups: Iterable[TagGroup], group_id: str | int, required: bool) -> list[TagGroup]:
    """Mark a group required or optional."""
    return update_group(groups, group_id, is_required=required)


def taxonomy_warnings(groups: Iterable[TagGroup]) -> list[str]:
    """Describe taxonomy defects that make documents impossible to save.

    A required group with an empty vocabulary can never be satisfied. Groups
    sharing an id are ambiguous; stores keep only the first of them.
    """
    warnings: list[str] = []
    seen_ids: set[str] = set()
    for group in groups:
        if group.group_id in seen_ids:
            warnings.append(f"Tag group '{group.name}' reuses id '{group.group_id}' and is ignored.")
            continue
        seen_ids.add(group.group_id)
        if is_group_required(group) and not group.tags:
            warnings.append(
                f"Required tag group '{group.name}' has no tags; documents can never satisfy it."
            )
    return warnings
