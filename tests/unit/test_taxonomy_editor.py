"""Tests for taxonomy editing operations."""

import pytest

from backend.app.models.tags import TagGroup
from backend.app.taxonomy.editor import (
    TaxonomyError,
    add_group,
    add_group_tag,
    remove_group,
    remove_group_tag,
    set_group_required,
    taxonomy_warnings,
    update_group,
)


def test_add_group_is_required_by_default() -> None:
    """New groups start out required with a fresh id."""
    groups = add_group([], "Family", tags=["Alice", " Bob "])

    assert len(groups) == 1
    group = groups[0]
    assert group.name == "Family"
    assert group.tags == ["Alice", "Bob"]
    assert group.is_required is True
    assert group.group_id


def test_add_group_generates_distinct_ids() -> None:
    groups = add_group(add_group([], "A"), "B")

    assert groups[0].group_id != groups[1].group_id


def test_add_group_rejects_blank_name() -> None:
    with pytest.raises(TaxonomyError):
        add_group([], "   ")


def test_edits_do_not_mutate_input(groups: list[TagGroup]) -> None:
    """Every edit returns a new list and leaves the original untouched."""
    before = [g.model_dump() for g in groups]

    add_group_tag(groups, "g1", "Carol")
    remove_group_tag(groups, "g1", "Alice")
    set_group_required(groups, "g3", True)
    remove_group(groups, "g2")

    assert [g.model_dump() for g in groups] == before


def test_add_group_tag_appends_new_tag(groups: list[TagGroup]) -> None:
    updated = add_group_tag(groups, "g1", " Carol ")

    assert updated[0].tags == ["Alice", "Bob", "Carol"]


def test_add_group_tag_ignores_duplicates_and_blanks(groups: list[TagGroup]) -> None:
    assert add_group_tag(groups, "g1", "Alice")[0].tags == ["Alice", "Bob"]
    assert add_group_tag(groups, "g1", "  ")[0].tags == ["Alice", "Bob"]


def test_remove_group_tag(groups: list[TagGroup]) -> None:
    updated = remove_group_tag(groups, "g1", "Alice")

    assert updated[0].tags == ["Bob"]


def test_set_group_required(groups: list[TagGroup]) -> None:
    updated = set_group_required(groups, "g3", True)

    assert updated[2].is_required is True
    assert set_group_required(updated, "g3", False)[2].is_required is False


def test_update_group_keeps_id_and_validates_name(groups: list[TagGroup]) -> None:
    updated = update_group(groups, "g1", name="Relatives", id="ignored")

    assert updated[0].group_id == "g1"
    assert updated[0].name == "Relatives"

    with pytest.raises(TaxonomyError):
        update_group(groups, "g1", name="")


def test_unknown_group_raises(groups: list[TagGroup]) -> None:
    with pytest.raises(TaxonomyError):
        update_group(groups, "missing", name="X")
    with pytest.raises(TaxonomyError):
        add_group_tag(groups, "missing", "X")


def test_remove_unknown_group_is_noop(groups: list[TagGroup]) -> None:
    assert remove_group(groups, "missing") == groups
    assert [g.group_id for g in remove_group(groups, "g2")] == ["g1", "g3"]


def test_taxonomy_warnings_flag_empty_required_groups() -> None:
    """Required groups without tags can never be satisfied."""
    groups = [
        TagGroup(id="a", name="Empty required"),
        TagGroup(id="b", name="Empty optional", is_required=False),
        TagGroup(id="c", name="Fine", tags=["x"]),
    ]

    warnings = taxonomy_warnings(groups)

    assert len(warnings) == 1
    assert "Empty required" in warnings[0]


def test_taxonomy_warnings_flag_duplicate_ids() -> None:
    groups = [
        TagGroup(id=1, name="Family", tags=["Alice"]),
        TagGroup(id="1", name="Year", tags=["2024"]),
    ]

    warnings = taxonomy_warnings(groups)

    assert len(warnings) == 1
    assert "Year" in warnings[0]
