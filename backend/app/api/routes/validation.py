"""Validation endpoints - POST /validate, POST /validate/gate."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, Field

from backend.app.config import Settings, get_settings
from backend.app.models.documents import Document
from backend.app.models.violations import Violation
from backend.app.taxonomy.editor import taxonomy_warnings
from backend.app.taxonomy.store import TagGroupStore
from backend.app.utils.logging import StructuredTaggingLogger
from backend.app.utils.metrics import PrometheusSearchMetrics
from backend.app.verification.required_tags import verify_required_tags

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/validate", tags=["validation"])

_validation_logger = StructuredTaggingLogger()
_metrics = PrometheusSearchMetrics()


class ValidateRequest(BaseModel):
    """Request body for the validation endpoints."""

    documents: list[Document] = Field(default_factory=list)
    groups: list[Any] = Field(default_factory=list)


class ValidateResponse(BaseModel):
    """Validation outcome for a batch of documents."""

    can_persist: bool
    missing_count: int
    violations: list[Violation]
    warnings: list[str] = Field(default_factory=list)


def _validate(request: ValidateRequest) -> ValidateResponse:
    store = TagGroupStore(request.groups)
    violations = verify_required_tags(request.documents, store)

    for violation in violations:
        _metrics.inc_validation_failure(violation.code)
    _validation_logger.log_validation(
        documents=len(request.documents),
        missing=len(violations),
        codes=[v.code for v in violations],
    )

    return ValidateResponse(
        can_persist=not violations,
        missing_count=len(violations),
        violations=violations,
        warnings=taxonomy_warnings(store.list_groups()),
    )


@router.post("", response_model=ValidateResponse)
async def validate(request: ValidateRequest) -> ValidateResponse:
    """Report which required tag groups each document is missing.

    Always 200: an unmet requirement is a result, not an error.
    """
    return _validate(request)


@router.post("/gate", response_model=None)
async def validate_gate(
    request: ValidateRequest,
    settings: Annotated[Settings, Depends(get_settings)],
) -> dict[str, Any] | Response:
    """Persistence gate for a batch about to be saved.

    Returns:
        200 when every document satisfies every required group
        422 with the violations otherwise
    """
    if not settings.enforce_required_tags:
        logger.info("Required tag enforcement disabled; gate open")
        return {"can_persist": True, "missing_count": 0, "violations": [], "warnings": []}

    result = _validate(request)
    if not result.can_persist:
        return Response(
            content=result.model_dump_json(),
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            media_type="application/json",
        )

    return result.model_dump(mode="json")
