"""Tests for required-tag validation."""

import random

from backend.app.models.documents import Document
from backend.app.models.tags import TagGroup
from backend.app.models.violations import ViolationKind, ViolationSeverity
from backend.app.verification.required_tags import (
    can_persist,
    can_persist_batch,
    count_missing_required,
    missing_required_groups,
    verify_required_tags,
)


def make_doc(doc_id: str, tags: list[str] | None) -> Document:
    """Helper to create a test document."""
    return Document(id=doc_id, tags=tags)


# Example scenario


def test_family_group_blocks_until_tagged() -> None:
    """Untagged document misses the group; adding a member tag fixes it."""
    groups = [TagGroup(id="g1", name="Family", tags=["Alice", "Bob"], is_required=True)]

    doc = make_doc("d1", [])
    assert [g.group_id for g in missing_required_groups(doc, groups)] == ["g1"]
    assert can_persist(doc, groups) is False

    doc = make_doc("d1", ["Alice"])
    assert missing_required_groups(doc, groups) == []
    assert can_persist(doc, groups) is True


def test_missing_groups_in_required_order(groups: list[TagGroup]) -> None:
    """Result order follows required_groups() order."""
    missing = missing_required_groups(make_doc("d", ["Tax"]), groups)

    assert [g.group_id for g in missing] == ["g1", "g2"]


def test_optional_groups_never_reported(groups: list[TagGroup]) -> None:
    """Only required groups can be missing."""
    missing = missing_required_groups(make_doc("d", ["Alice", "2023"]), groups)

    assert missing == []


def test_empty_vocabulary_required_group_always_missing() -> None:
    """A required group with no tags can never be satisfied."""
    groups = [TagGroup(id="e", name="Empty")]

    assert [g.group_id for g in missing_required_groups(make_doc("d", ["anything"]), groups)] == ["e"]
    assert not can_persist(make_doc("d", ["anything"]), groups)


def test_no_taxonomy_requires_nothing() -> None:
    assert can_persist(make_doc("d", []), [])
    assert can_persist(make_doc("d", []), None)


def test_accepts_raw_tag_collections_and_records(groups: list[TagGroup]) -> None:
    """Validation is total over partially populated input."""
    assert len(missing_required_groups(None, groups)) == 2
    assert len(missing_required_groups({"id": "x"}, groups)) == 2
    assert missing_required_groups(["Bob", "2024"], groups) == []
    assert missing_required_groups({"tags": ["Bob", "2024"]}, groups) == []


def test_matching_is_exact(groups: list[TagGroup]) -> None:
    """Tag membership is case-sensitive."""
    assert not can_persist(make_doc("d", ["alice", "2023"]), groups)


# Batch gate


def test_batch_requires_every_document(groups: list[TagGroup]) -> None:
    good = make_doc("a", ["Alice", "2023"])
    bad = make_doc("b", ["Alice"])

    assert can_persist_batch([good, good], groups)
    assert not can_persist_batch([good, bad], groups)
    assert can_persist_batch([], groups)


def test_count_missing_required_sums_batch(groups: list[TagGroup]) -> None:
    docs = [make_doc("a", []), make_doc("b", ["Alice"]), make_doc("c", ["Bob", "2024"])]

    assert count_missing_required(docs, groups) == 3


def test_verify_required_tags_emits_blocking_violations(groups: list[TagGroup]) -> None:
    violations = verify_required_tags([make_doc("a", ["Alice"])], groups)

    assert len(violations) == 1
    violation = violations[0]
    assert violation.kind == ViolationKind.REQUIRED_TAGS
    assert violation.code == "MISSING_REQUIRED_TAG"
    assert violation.severity == ViolationSeverity.BLOCKING
    assert violation.document_id == "a"
    assert violation.group_id == "g2"
    assert violation.details["allowed_tags"] == ["2023", "2024"]
    assert "Year" in violation.message


def test_verify_required_tags_reports_empty_group() -> None:
    violations = verify_required_tags([make_doc("a", ["x"])], [TagGroup(id="e", name="Empty")])

    assert [v.code for v in violations] == ["EMPTY_REQUIRED_GROUP"]


def test_verify_required_tags_empty_when_satisfied(groups: list[TagGroup]) -> None:
    assert verify_required_tags([make_doc("a", ["Bob", "2023"])], groups) == []


# Properties


VOCAB = ["a", "b", "c", "d", "e", "f"]


def random_groups(rng: random.Random) -> list[TagGroup]:
    groups = []
    for index in range(rng.randint(0, 4)):
        flag = rng.choice([True, False, None])
        tags = rng.sample(VOCAB, rng.randint(0, 3))
        groups.append(TagGroup(id=f"g{index}", name=f"Group {index}", tags=tags, is_required=flag))
    return groups


def test_property_missing_is_exactly_unsatisfied_required_groups() -> None:
    """Missing groups are exactly the required, non-intersecting ones."""
    rng = random.Random(42)

    for _ in range(200):
        groups = random_groups(rng)
        tags = rng.sample(VOCAB, rng.randint(0, 4))
        doc = make_doc("d", tags)

        expected = [
            g.group_id for g in groups if g.is_required is not False and not set(g.tags) & set(tags)
        ]
        missing = missing_required_groups(doc, groups)

        assert [g.group_id for g in missing] == expected
        assert can_persist(doc, groups) == (len(missing) == 0)


def test_property_unset_flag_behaves_like_true() -> None:
    """is_required=None and is_required=True validate identically."""
    rng = random.Random(7)

    for _ in range(100):
        tags = rng.sample(VOCAB, rng.randint(0, 3))
        vocab = rng.sample(VOCAB, rng.randint(0, 3))
        doc = make_doc("d", tags)

        unset = [TagGroup(id="g", name="G", tags=vocab)]
        explicit = [TagGroup(id="g", name="G", tags=vocab, is_required=True)]

        assert can_persist(doc, unset) == can_persist(doc, explicit)
