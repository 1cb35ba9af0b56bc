"""Tag editing endpoints - POST /tags/reconcile."""

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, Field

from backend.app.models.tags import TagBuckets, TagList
from backend.app.tagging.reconciler import reconcile
from backend.app.taxonomy.store import TagGroupStore

router = APIRouter(prefix="/tags", tags=["tags"])


class ReconcileRequest(BaseModel):
    """Request body for POST /tags/reconcile."""

    current_tags: TagList = Field(default_factory=list)
    ai_suggested: TagList = Field(default_factory=list)
    groups: list[Any] = Field(default_factory=list)
    system_tags: TagList = Field(default_factory=list)


@router.post("/reconcile", response_model=TagBuckets)
async def reconcile_tags(request: ReconcileRequest) -> TagBuckets:
    """Split a document's tags and suggestions into display buckets."""
    return reconcile(
        request.current_tags,
        request.ai_suggested,
        TagGroupStore(request.groups),
        system_tags=request.system_tags,
    )
