"""Document models as consumed by the tagging and search engine."""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from backend.app.models.tags import TagList


class Document(BaseModel):
    """User document metadata.

    Persisted fields are owned by the document store; only the fields the
    engine consults are modelled here. Unknown fields are ignored.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str | int
    title: str | None = None
    organization: str | None = None
    extracted_text: str | None = None
    document_number: str | None = None
    tags: TagList = Field(default_factory=list)
    ai_suggested_tags: TagList = Field(default_factory=list)
    created_at: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("created_at", "created_date"),
    )

    def searchable_fields(self) -> list[str]:
        """Text fields consulted by the text filter, lowercased."""
        fields = [self.title, self.organization, self.extracted_text, self.document_number]
        return [field.lower() for field in fields if field]
