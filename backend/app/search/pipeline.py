"""Search filter pipeline - filter, score and order a document collection.

Stages run in a fixed order over an in-memory collection:
1. Text filter (title, organization, extracted text, document number, tags)
2. Required-tag filter (every active selection must be present - AND)
3. Optional-tag filter (any selected optional tag suffices - OR)
4. Sort by relevance, date or title (stable: ties keep input order)

Inputs are never mutated. Relevance scores live only on the derived
RankedDocument results.
"""

import logging
import time
from collections.abc import Iterable, Sequence
from datetime import timezone
from typing import Any

from backend.app.models.documents import Document
from backend.app.models.search import (
    RankedDocument,
    SearchQuery,
    SearchResult,
    SearchStats,
    SortKey,
    SortOrder,
)
from backend.app.models.tags import TagSet
from backend.app.search.ranker import score
from backend.app.taxonomy.store import TagGroupStore
from backend.app.utils.logging import StructuredTaggingLogger
from backend.app.utils.metrics import PrometheusSearchMetrics

logger = logging.getLogger(__name__)

_search_logger = StructuredTaggingLogger()
_metrics = PrometheusSearchMetrics()


def stale_selections(query: SearchQuery, groups: TagGroupStore | Iterable[Any] | None) -> list[str]:
    """Group ids of active required selections that are not in the taxonomy.

    Such selections still filter results; they are only reported so callers
    can clear them. With no taxonomy configured nothing is reported.
    """
    store = TagGroupStore.of(groups)
    if not len(store):
        return []

    known = {group.group_id for group in store.list_groups()}
    stale = sorted(set(query.active_required_selections) - known)
    if stale:
        logger.debug(f"Selections for unknown tag groups: {stale}")
    return stale


def matches_text(document: Document, text: str) -> bool:
    """Case-insensitive substring match over the searchable fields and tags."""
    term = text.lower()
    if any(term in field for field in document.searchable_fields()):
        return True
    return any(term in tag.lower() for tag in document.tags)


def _date_key(document: Document) -> float:
    created = document.created_at
    if created is None:
        return float("-inf")
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    return created.timestamp()


def _title_key(document: Document) -> str:
    return document.title or ""


def _filter(documents: Iterable[Document], query: SearchQuery) -> list[Document]:
    filtered = list(documents)

    # Stage 1: text
    if query.has_text:
        filtered = [doc for doc in filtered if matches_text(doc, query.text)]

    # Stage 2: required selections, AND across groups
    for selected_tag in query.active_required_selections.values():
        filtered = [doc for doc in filtered if selected_tag in TagSet(doc.tags)]

    # Stage 3: optional selections, OR within the selected set
    if query.optional_selections:
        wanted = TagSet(query.optional_selections)
        filtered = [doc for doc in filtered if wanted.intersects(doc.tags)]

    return filtered


def _rank(documents: Iterable[Document], query: SearchQuery) -> list[RankedDocument]:
    ranked = [RankedDocument(document=doc, score=score(doc, query)) for doc in _filter(documents, query)]
    descending = query.sort_order == SortOrder.desc

    # list.sort is stable in both directions, so ties keep input order
    if query.sort_key == SortKey.relevance:
        ranked.sort(key=lambda r: r.score, reverse=descending)
    elif query.sort_key == SortKey.date:
        ranked.sort(key=lambda r: _date_key(r.document), reverse=descending)
    else:
        ranked.sort(key=lambda r: _title_key(r.document), reverse=descending)

    return ranked


def rank_documents(
    documents: Iterable[Document],
    query: SearchQuery,
    groups: TagGroupStore | Iterable[Any] | None = None,
) -> list[RankedDocument]:
    """Filter and order documents, attaching each result's relevance score.

    Args:
        documents: Already-fetched documents visible to the user
        query: Search query
        groups: The user's tag groups

    Returns:
        Ranked results in final order
    """
    stale_selections(query, groups)
    return _rank(documents, query)


def filter_and_sort(
    documents: Iterable[Document],
    query: SearchQuery,
    groups: TagGroupStore | Iterable[Any] | None = None,
) -> list[Document]:
    """Filter and order documents for a query.

    Returns the original document objects, unmodified, in result order.
    """
    return [ranked.document for ranked in rank_documents(documents, query, groups)]


def search_documents(
    documents: Sequence[Document],
    query: SearchQuery,
    groups: TagGroupStore | Iterable[Any] | None = None,
    limit: int | None = None,
) -> SearchResult:
    """Run a full search pass and report result counters.

    ``stats.filtered`` counts every match, before ``limit`` truncation.
    """
    started = time.perf_counter()

    stale_selections(query, groups)
    ranked = _rank(documents, query)
    filtered_count = len(ranked)
    if limit is not None:
        ranked = ranked[:limit]

    latency_ms = (time.perf_counter() - started) * 1000

    _metrics.record_latency(query.sort_key.value, latency_ms)
    _metrics.inc_results(len(ranked))
    _search_logger.log_search(
        sort_key=query.sort_key.value,
        total=len(documents),
        filtered=filtered_count,
        latency_ms=latency_ms,
        has_text=query.has_text,
        required_selections=len(query.active_required_selections),
        optional_selections=len(query.optional_selections),
    )

    return SearchResult(
        query=query,
        matches=ranked,
        stats=SearchStats(
            total=len(documents),
            filtered=filtered_count,
            search_time_ms=round(latency_ms, 3),
        ),
    )


def collect_all_tags(documents: Iterable[Document]) -> list[str]:
    """Unique tags across a collection, in first-seen order."""
    return TagSet(tag for doc in documents for tag in doc.tags).as_list()


def filter_available_tags(
    all_tags: Iterable[str],
    exclude: Iterable[str] = (),
    term: str = "",
) -> list[str]:
    """Tags offered by the all-tags filter.

    Drops excluded tags (e.g. those already picked as required selections)
    and, when ``term`` is given, keeps tags containing it case-insensitively.
    """
    available = TagSet.of(all_tags).difference(exclude)
    if not term.strip():
        return available.as_list()

    needle = term.lower()
    return [tag for tag in available if needle in tag.lower()]
