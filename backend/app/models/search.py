"""Search query and result models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, field_validator

from backend.app.models.documents import Document
from backend.app.models.tags import TagList


class SortKey(str, Enum):
    """Result ordering key."""

    relevance = "relevance"
    date = "date"
    title = "title"


class SortOrder(str, Enum):
    """Result ordering direction."""

    asc = "asc"
    desc = "desc"


class SearchQuery(BaseModel):
    """Transient search query - free text plus tag selections."""

    text: str = ""
    required_selections: dict[str, str] = Field(default_factory=dict)
    optional_selections: TagList = Field(default_factory=list)
    sort_key: SortKey = SortKey.relevance
    sort_order: SortOrder = SortOrder.desc

    @field_validator("text", mode="before")
    @classmethod
    def validate_text(cls, v: Any) -> str:
        """Treat a missing text as empty."""
        return "" if v is None else v

    @field_validator("required_selections", mode="before")
    @classmethod
    def validate_required_selections(cls, v: Any) -> dict[str, str]:
        """Normalize group ids to str keys and missing selections to ''."""
        if not isinstance(v, dict):
            return {}
        return {
            str(group_id): tag if isinstance(tag, str) else ""
            for group_id, tag in v.items()
        }

    @property
    def has_text(self) -> bool:
        return bool(self.text.strip())

    @property
    def active_required_selections(self) -> dict[str, str]:
        """Required selections that actually constrain results."""
        return {group_id: tag for group_id, tag in self.required_selections.items() if tag}


class RankedDocument(BaseModel):
    """Document with its relevance score for the current query.

    The score is derived per query and never written back to the document.
    """

    document: Document
    score: int


class SearchStats(BaseModel):
    """Result counters for a search pass."""

    total: int
    filtered: int
    search_time_ms: float


class SearchResult(BaseModel):
    """Ranked results of a search pass."""

    query: SearchQuery
    matches: list[RankedDocument]
    stats: SearchStats
