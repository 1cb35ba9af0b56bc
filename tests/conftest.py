"""Shared pytest fixtures for all test suites."""

from datetime import datetime

import pytest

from backend.app.models.documents import Document
from backend.app.models.tags import TagGroup


def make_document(
    doc_id: str,
    tags: list[str] | None = None,
    title: str | None = None,
    organization: str | None = None,
    extracted_text: str | None = None,
    document_number: str | None = None,
    created_at: datetime | None = None,
) -> Document:
    """Helper to create a test document."""
    return Document(
        id=doc_id,
        title=title,
        organization=organization,
        extracted_text=extracted_text,
        document_number=document_number,
        tags=tags or [],
        created_at=created_at,
    )


@pytest.fixture
def family_group() -> TagGroup:
    """Required group with default (unset) required flag."""
    return TagGroup(id="g1", name="Family", tags=["Alice", "Bob"])


@pytest.fixture
def year_group() -> TagGroup:
    """Explicitly required group."""
    return TagGroup(id="g2", name="Year", tags=["2023", "2024"], is_required=True)


@pytest.fixture
def topic_group() -> TagGroup:
    """Optional group."""
    return TagGroup(id="g3", name="Topic", tags=["Tax", "Health", "Bob"], is_required=False)


@pytest.fixture
def groups(family_group: TagGroup, year_group: TagGroup, topic_group: TagGroup) -> list[TagGroup]:
    """Taxonomy with two required groups and one optional group."""
    return [family_group, year_group, topic_group]


@pytest.fixture
def documents() -> list[Document]:
    """Small document collection spanning the taxonomy."""
    return [
        make_document(
            "d1",
            tags=["Alice", "2023", "Tax"],
            title="Invoice #1",
            organization="City Power",
            extracted_text="Electricity invoice for March",
            document_number="INV-001",
            created_at=datetime(2023, 3, 1),
        ),
        make_document(
            "d2",
            tags=["Bob", "2024", "Health"],
            title="Contract A",
            organization="Clinic Invoice Services",
            extracted_text="Service agreement",
            document_number="C-77",
            created_at=datetime(2024, 1, 15),
        ),
        make_document(
            "d3",
            tags=["Alice", "2024", "Urgent"],
            title="Bank statement",
            organization="First Bank",
            extracted_text="Monthly statement, see attached invoice",
            document_number="BS-2024-01",
            created_at=datetime(2024, 2, 1),
        ),
        make_document(
            "d4",
            tags=[],
            title="Untitled scan",
            created_at=None,
        ),
    ]
