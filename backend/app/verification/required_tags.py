"""Required-tag validation - gates persistence of documents."""

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from backend.app.models.documents import Document
from backend.app.models.tags import TagGroup, TagSet
from backend.app.models.violations import Violation, ViolationKind, ViolationSeverity
from backend.app.taxonomy.store import TagGroupStore

logger = logging.getLogger(__name__)

GroupsInput = TagGroupStore | Iterable[Any] | None


def _document_tags(document: Document | Any) -> TagSet:
    """Tags of a Document, a raw document record, or a raw tag collection."""
    if isinstance(document, Document):
        return TagSet(document.tags)
    if isinstance(document, dict):
        return TagSet.of(document.get("tags"))
    return TagSet.of(document)


def missing_required_groups(document: Document | Any, groups: GroupsInput) -> list[TagGroup]:
    """Return the required groups the document does not satisfy.

    A required group is satisfied when at least one of the document's tags is
    in its vocabulary. Groups with an empty vocabulary are never satisfied.

    Args:
        document: Document, or any collection of tag values
        groups: Tag groups (store, models or raw records)

    Returns:
        Unsatisfied required groups, in definition order
    """
    tags = _document_tags(document)
    store = TagGroupStore.of(groups)

    return [group for group in store.required_groups() if not group.vocabulary.intersects(tags)]


def can_persist(document: Document | Any, groups: GroupsInput) -> bool:
    """Whether the document satisfies every required group."""
    return not missing_required_groups(document, groups)


def can_persist_batch(documents: Iterable[Document | Any], groups: GroupsInput) -> bool:
    """Whether every document in a batch may be persisted.

    An empty batch is trivially persistable.
    """
    store = TagGroupStore.of(groups)
    return all(can_persist(document, store) for document in documents)


def count_missing_required(documents: Iterable[Document | Any], groups: GroupsInput) -> int:
    """Total unmet required groups across a batch."""
    store = TagGroupStore.of(groups)
    return sum(len(missing_required_groups(document, store)) for document in documents)


def verify_required_tags(documents: Sequence[Document], groups: GroupsInput) -> list[Violation]:
    """Verify a batch of documents against the required tag groups.

    Emits one BLOCKING violation per (document, unmet group). A required
    group with an empty vocabulary is reported as EMPTY_REQUIRED_GROUP so the
    misconfiguration is visible rather than silently skipped.

    Args:
        documents: Documents about to be persisted
        groups: Tag groups of the owning user

    Returns:
        List of violations (empty if the batch can be persisted)
    """
    store = TagGroupStore.of(groups)
    violations: list[Violation] = []

    for document in documents:
        for group in missing_required_groups(document, store):
            if group.tags:
                code = "MISSING_REQUIRED_TAG"
                message = f"Document needs at least one tag from required group '{group.name}'."
            else:
                code = "EMPTY_REQUIRED_GROUP"
                message = f"Required group '{group.name}' has no tags, so it cannot be satisfied."

            violations.append(
                Violation(
                    kind=ViolationKind.REQUIRED_TAGS,
                    code=code,
                    message=message,
                    severity=ViolationSeverity.BLOCKING,
                    document_id=str(document.id),
                    group_id=group.group_id,
                    details={
                        "group_name": group.name,
                        "allowed_tags": list(group.tags),
                        "document_tags": list(document.tags),
                    },
                )
            )

    if violations:
        logger.debug(f"{len(violations)} required tag violations across {len(documents)} documents")

    return violations
