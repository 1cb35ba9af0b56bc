"""Tag models - tag sets, tag groups and reconciled tag buckets."""

from collections.abc import Iterable, Iterator
from typing import Annotated, Any

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field


def coerce_tags(raw: Any) -> list[str]:
    """Coerce an arbitrary value into an ordered, de-duplicated list of tags.

    Never raises. ``None`` becomes an empty list, a bare string becomes a
    single tag, and any other iterable contributes its non-empty string
    members. Anything else is treated as empty.
    """
    if raw is None:
        return []
    if isinstance(raw, str):
        return [raw] if raw else []
    if isinstance(raw, TagSet):
        return raw.as_list()
    if isinstance(raw, dict) or not isinstance(raw, Iterable):
        return []

    seen: set[str] = set()
    tags: list[str] = []
    for item in raw:
        if not isinstance(item, str) or not item:
            continue
        if item in seen:
            continue
        seen.add(item)
        tags.append(item)
    return tags


# Tag list field type for pydantic models: permissive on input
TagList = Annotated[list[str], BeforeValidator(coerce_tags)]


def coerce_required_flag(raw: Any) -> bool | None:
    """Only a literal ``False`` marks a group optional; anything else set means required."""
    if raw is None or raw is False:
        return raw
    return True


RequiredFlag = Annotated[bool | None, BeforeValidator(coerce_required_flag)]


class TagSet:
    """Immutable, insertion-ordered set of tag values.

    Membership is exact (case-sensitive). Build with ``TagSet.of(raw)``,
    which accepts anything ``coerce_tags`` does.
    """

    __slots__ = ("_order", "_members")

    def __init__(self, tags: Iterable[str] = ()) -> None:
        self._order: tuple[str, ...] = tuple(coerce_tags(tags))
        self._members: frozenset[str] = frozenset(self._order)

    @classmethod
    def of(cls, raw: Any) -> "TagSet":
        """Total constructor from arbitrary or partial input."""
        if isinstance(raw, TagSet):
            return raw
        return cls(coerce_tags(raw))

    def __contains__(self, tag: object) -> bool:
        return tag in self._members

    def __iter__(self) -> Iterator[str]:
        return iter(self._order)

    def __len__(self) -> int:
        return len(self._order)

    def __bool__(self) -> bool:
        return bool(self._order)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TagSet):
            return self._members == other._members
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._members)

    def __repr__(self) -> str:
        return f"TagSet({list(self._order)!r})"

    def intersects(self, other: Iterable[str]) -> bool:
        return any(tag in self._members for tag in TagSet.of(other))

    def intersection(self, other: Iterable[str]) -> "TagSet":
        other_set = TagSet.of(other)
        return TagSet(tag for tag in self._order if tag in other_set)

    def difference(self, *others: Iterable[str]) -> "TagSet":
        excluded = [TagSet.of(other) for other in others]
        return TagSet(tag for tag in self._order if not any(tag in ex for ex in excluded))

    def union(self, other: Iterable[str]) -> "TagSet":
        return TagSet([*self._order, *TagSet.of(other)])

    def as_list(self) -> list[str]:
        return list(self._order)


class TagGroup(BaseModel):
    """A named, user-defined vocabulary of tag values.

    ``is_required`` is tri-state: only an explicit ``False`` marks a group
    optional. Accepts the stored ``tagging_preferences`` record shape, where
    the display name lives under ``group_name``.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str | int
    name: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("name", "group_name"),
    )
    tags: TagList = Field(default_factory=list)
    is_required: RequiredFlag = None

    @property
    def group_id(self) -> str:
        """Group id normalized to the string form used as a mapping key."""
        return str(self.id)

    @property
    def vocabulary(self) -> TagSet:
        return TagSet(self.tags)


class TagBuckets(BaseModel):
    """Disjoint display buckets for a document's tags while editing."""

    required_group_tags: dict[str, list[str]] = Field(default_factory=dict)
    optional_group_tags: dict[str, list[str]] = Field(default_factory=dict)
    freeform_tags: list[str] = Field(default_factory=list)
    available_suggestions: list[str] = Field(default_factory=list)
    group_suggestions: dict[str, list[str]] = Field(default_factory=dict)
    available_system_tags: list[str] = Field(default_factory=list)
    missing_required_groups: list[str] = Field(default_factory=list)
