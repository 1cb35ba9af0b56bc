"""TagGroup store - read-only view over a user's tag taxonomy."""

import logging
from collections.abc import Iterable
from typing import Any

from pydantic import ValidationError

from backend.app.models.tags import TagGroup, TagSet

logger = logging.getLogger(__name__)


def is_group_required(group: TagGroup) -> bool:
    """Return whether a group must be satisfied before a document is saved.

    Groups are required by default: only an explicit ``is_required=False``
    makes a group optional.
    """
    return group.is_required is not False


def load_groups(raw_groups: Iterable[Any] | None) -> list[TagGroup]:
    """Build TagGroup models from stored taxonomy records.

    Records that are already TagGroup instances pass through. Records that
    fail validation are skipped with a warning so one bad entry never hides
    the rest of the taxonomy. Group ids must be unique once normalized to
    strings (``1`` and ``"1"`` collide); later duplicates are skipped.
    """
    if not raw_groups:
        return []

    groups: list[TagGroup] = []
    seen_ids: set[str] = set()
    for index, raw in enumerate(raw_groups):
        if isinstance(raw, TagGroup):
            group = raw
        else:
            try:
                group = TagGroup.model_validate(raw)
            except ValidationError as e:
                logger.warning(
                    f"Skipping malformed tag group at position {index}: {e.error_count()} errors"
                )
                continue

        if group.group_id in seen_ids:
            logger.warning(f"Skipping tag group at position {index}: duplicate id {group.group_id!r}")
            continue
        seen_ids.add(group.group_id)
        groups.append(group)
    return groups


class TagGroupStore:
    """Ordered, read-only collection of a user's tag groups.

    Definition order is preserved; it drives display grouping and the
    placement of tags shared by several vocabularies.
    """

    def __init__(self, groups: Iterable[Any] | None = None) -> None:
        self._groups: tuple[TagGroup, ...] = tuple(load_groups(groups))

    @classmethod
    def of(cls, groups: "TagGroupStore | Iterable[Any] | None") -> "TagGroupStore":
        """Return ``groups`` if already a store, otherwise wrap it."""
        if isinstance(groups, TagGroupStore):
            return groups
        return cls(groups)

    def __len__(self) -> int:
        return len(self._groups)

    def list_groups(self) -> list[TagGroup]:
        return list(self._groups)

    def required_groups(self) -> list[TagGroup]:
        return [group for group in self._groups if is_group_required(group)]

    def optional_groups(self) -> list[TagGroup]:
        return [group for group in self._groups if not is_group_required(group)]

    def get_group(self, group_id: str | int) -> TagGroup | None:
        key = str(group_id)
        for group in self._groups:
            if group.group_id == key:
                return group
        return None

    def all_vocabulary(self) -> TagSet:
        """Union of every group's vocabulary, in definition order."""
        return TagSet(tag for group in self._groups for tag in group.tags)

    def group_for_tag(self, tag: str) -> TagGroup | None:
        """First group (definition order) whose vocabulary holds ``tag``."""
        for group in self._groups:
            if tag in group.vocabulary:
                return group
        return None
