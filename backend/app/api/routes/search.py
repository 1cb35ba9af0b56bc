"""Search endpoints - POST /search, POST /tags/available."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from backend.app.config import Settings, get_settings
from backend.app.models.documents import Document
from backend.app.models.search import SearchQuery, SearchResult
from backend.app.models.tags import TagList
from backend.app.search.pipeline import collect_all_tags, filter_available_tags, search_documents
from backend.app.taxonomy.store import TagGroupStore

router = APIRouter(tags=["search"])


class SearchRequest(BaseModel):
    """Request body for POST /search.

    Documents and taxonomy are supplied by the caller, already scoped to
    what the current user may see. Tag groups are stored records; malformed
    ones are skipped rather than failing the request.
    """

    documents: list[Document] = Field(default_factory=list)
    groups: list[Any] = Field(default_factory=list)
    query: SearchQuery | None = None


class AvailableTagsRequest(BaseModel):
    """Request body for POST /tags/available."""

    documents: list[Document] = Field(default_factory=list)
    exclude: TagList = Field(default_factory=list)
    term: str = ""


class AvailableTagsResponse(BaseModel):
    """Response for POST /tags/available."""

    tags: list[str]


@router.post("/search", response_model=SearchResult)
async def search(
    request: SearchRequest,
    settings: Annotated[Settings, Depends(get_settings)],
) -> SearchResult:
    """Filter and rank the supplied documents for a query.

    Args:
        request: Documents, taxonomy and query
        settings: Application settings (defaults and result cap)

    Returns:
        Ranked matches with result counters
    """
    query = request.query or SearchQuery(
        sort_key=settings.default_sort_key,
        sort_order=settings.default_sort_order,
    )

    return search_documents(
        request.documents,
        query,
        TagGroupStore(request.groups),
        limit=settings.max_search_results,
    )


@router.post("/tags/available", response_model=AvailableTagsResponse)
async def available_tags(request: AvailableTagsRequest) -> AvailableTagsResponse:
    """List tags in use across the documents, minus excluded ones."""
    all_tags = collect_all_tags(request.documents)
    return AvailableTagsResponse(
        tags=filter_available_tags(all_tags, exclude=request.exclude, term=request.term)
    )
