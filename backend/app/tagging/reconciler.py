"""Tag suggestion reconciler - splits tags into display buckets for editing.

Current tags, AI suggestions, system-wide tags and group vocabularies are
merged into disjoint buckets. A tag found in several group vocabularies is
placed under the first such group in definition order.
"""

from collections.abc import Iterable
from typing import Any

from backend.app.models.tags import TagBuckets, TagGroup, TagSet
from backend.app.taxonomy.store import TagGroupStore, is_group_required


def reconcile(
    current_tags: Any,
    ai_suggested: Any,
    groups: TagGroupStore | Iterable[Any] | None,
    system_tags: Any = (),
) -> TagBuckets:
    """Partition a document's tags and suggestions into display buckets.

    Args:
        current_tags: Tags currently on the document
        ai_suggested: Tags proposed by text analysis (advisory)
        groups: The user's tag groups
        system_tags: Tags in use anywhere in the user's documents

    Returns:
        TagBuckets where required, optional and free-form buckets together
        hold every current tag exactly once
    """
    store = TagGroupStore.of(groups)
    current = TagSet.of(current_tags)
    suggested = TagSet.of(ai_suggested)
    vocabulary = store.all_vocabulary()

    required_group_tags: dict[str, list[str]] = {}
    optional_group_tags: dict[str, list[str]] = {}
    group_suggestions: dict[str, list[str]] = {}
    missing: list[str] = []
    placed: set[str] = set()

    for group in store.list_groups():
        group_tags = [tag for tag in current.intersection(group.tags) if tag not in placed]
        placed.update(group_tags)

        if is_group_required(group):
            required_group_tags[group.group_id] = group_tags
            if not group.vocabulary.intersects(current):
                missing.append(group.group_id)
        else:
            optional_group_tags[group.group_id] = group_tags

        group_suggestions[group.group_id] = suggested.intersection(group.tags).difference(current).as_list()

    return TagBuckets(
        required_group_tags=required_group_tags,
        optional_group_tags=optional_group_tags,
        freeform_tags=current.difference(vocabulary).as_list(),
        available_suggestions=suggested.difference(current, vocabulary).as_list(),
        group_suggestions=group_suggestions,
        available_system_tags=TagSet.of(system_tags).difference(current, vocabulary).as_list(),
        missing_required_groups=missing,
    )


def select_group_tag(current_tags: Any, group: TagGroup, tag: str) -> list[str]:
    """Toggle a tag within a group, keeping at most one selection per group.

    Selecting an already-selected tag removes it. Otherwise any other tag from
    the group's vocabulary is replaced by ``tag``.
    """
    current = TagSet.of(current_tags)
    if tag in current:
        return remove_tag(current, tag)

    kept = current.difference(group.tags)
    return [*kept, tag]


def add_freeform_tag(current_tags: Any, tag: str) -> list[str]:
    """Append a free-form tag if it is non-blank and not already present."""
    current = TagSet.of(current_tags)
    tag = tag.strip() if isinstance(tag, str) else ""
    if not tag or tag in current:
        return current.as_list()
    return [*current, tag]


def remove_tag(current_tags: Any, tag: str) -> list[str]:
    """Remove a tag from the current set."""
    return [t for t in TagSet.of(current_tags) if t != tag]
