"""Models package - re-exports for convenience."""

from backend.app.models.documents import Document
from backend.app.models.search import (
    RankedDocument,
    SearchQuery,
    SearchResult,
    SearchStats,
    SortKey,
    SortOrder,
)
from backend.app.models.tags import TagBuckets, TagGroup, TagList, TagSet, coerce_tags
from backend.app.models.violations import Violation, ViolationKind, ViolationSeverity

__all__ = [
    # Tags
    "TagSet",
    "TagList",
    "TagGroup",
    "TagBuckets",
    "coerce_tags",
    # Documents
    "Document",
    # Search
    "SearchQuery",
    "SortKey",
    "SortOrder",
    "RankedDocument",
    "SearchStats",
    "SearchResult",
    # Violations
    "Violation",
    "ViolationKind",
    "ViolationSeverity",
]
