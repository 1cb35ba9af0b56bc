"""Relevance ranker - scores a document against a search query.

Scoring strategy:
- +10 per required-group selection present in the document's tags
- +5 per optional selection present in the document's tags
- +8 query text in title
- +6 query text in organization
- +7 query text inside any tag
- +3 query text in extracted text

Text matches are case-insensitive substrings. An empty (or whitespace-only)
query text contributes nothing.
"""

from backend.app.models.documents import Document
from backend.app.models.search import SearchQuery
from backend.app.models.tags import TagSet

REQUIRED_SELECTION_WEIGHT = 10
OPTIONAL_SELECTION_WEIGHT = 5
TITLE_WEIGHT = 8
ORGANIZATION_WEIGHT = 6
TAG_TEXT_WEIGHT = 7
EXTRACTED_TEXT_WEIGHT = 3


def _contains(field: str | None, term: str) -> bool:
    return bool(field) and term in field.lower()


def text_score(document: Document, text: str) -> int:
    """Score contributed by free-text matches only."""
    if not text.strip():
        return 0

    term = text.lower()
    score = 0

    if _contains(document.title, term):
        score += TITLE_WEIGHT
    if _contains(document.organization, term):
        score += ORGANIZATION_WEIGHT
    if any(term in tag.lower() for tag in document.tags):
        score += TAG_TEXT_WEIGHT
    if _contains(document.extracted_text, term):
        score += EXTRACTED_TEXT_WEIGHT

    return score


def score(document: Document, query: SearchQuery) -> int:
    """Compute the relevance score of a document for a query.

    Args:
        document: Document to score
        query: Search query with text and tag selections

    Returns:
        Non-negative integer score
    """
    tags = TagSet(document.tags)
    total = 0

    for selected_tag in query.active_required_selections.values():
        if selected_tag in tags:
            total += REQUIRED_SELECTION_WEIGHT

    for selected_tag in query.optional_selections:
        if selected_tag in tags:
            total += OPTIONAL_SELECTION_WEIGHT

    total += text_score(document, query.text)

    return total
