"""Violation models - tagging constraints found unmet during validation."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

# JSON-serializable value types for violation details
JsonValue = str | int | float | bool | None | dict[str, Any] | list[Any]


class ViolationSeverity(str, Enum):
    """Severity levels for tagging violations."""

    ADVISORY = "advisory"
    BLOCKING = "blocking"


class ViolationKind(str, Enum):
    """Categories of tagging constraints."""

    REQUIRED_TAGS = "required_tags"
    TAXONOMY = "taxonomy"


class Violation(BaseModel):
    """A tagging constraint violation detected during validation.

    Blocking violations prevent a document batch from being persisted.
    """

    kind: ViolationKind
    code: str  # Machine-usable short code, e.g., "MISSING_REQUIRED_TAG"
    message: str  # Human-readable description (1-2 sentences)
    severity: ViolationSeverity
    document_id: str | None = None
    group_id: str | None = None
    details: dict[str, JsonValue] = Field(default_factory=dict)
