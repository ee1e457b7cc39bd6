"""
Core data structures for the draw engine.

- Entry: one weighted row of a random table
- TableList: a named, ordered collection of entries
- TableBook: a snapshot of every list available to a draw
- MatchMode / TagSelection: the active tag filter
- PoolTarget: where a pool directive redirects a draw
- DrawResult: the rendered outcome of a draw

The engine only ever reads these models; the surrounding application owns
their lifecycle.
"""

import re
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

WEIGHT_MIN = 0
WEIGHT_MAX = 100
WEIGHT_DEFAULT = 50

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def clamp_weight(value: int) -> int:
    """Clamp an integer weight into the [0, 100] range."""
    return max(WEIGHT_MIN, min(WEIGHT_MAX, value))


def sanitize_weight(value: Any, default: int = WEIGHT_DEFAULT) -> int:
    """
    Turn any user-supplied weight into an integer in [0, 100].

    Strings are read up to the first non-digit, so "12.5" gives 12 and
    " 50 " gives 50. Floats are truncated. Anything that does not start with
    an integer (None, "", "abc", booleans) falls back to ``default``.

    Args:
        value: Raw weight value
        default: Weight used when value is missing or not numeric

    Returns:
        Weight clamped to [0, 100]
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return clamp_weight(value)
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return default
        return clamp_weight(int(value))
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match is None:
            return default
        return clamp_weight(int(match.group(1)))
    return default


class Entry(BaseModel):
    """
    One row of a random table.

    Example:
        >>> entry = Entry(name="Gold coins: 3d6x10", tags="treasure, common", weight=40)
        >>> entry.display_text
        'Gold coins: 3d6x10'
    """

    name: str = Field(description="Display text; may contain dice notation")
    tags: str = Field(default="", description="Comma-separated tags, may hold a pool directive")
    reference: str = Field(default="", description="Citation appended to the display text")
    weight: int = Field(
        default=WEIGHT_DEFAULT,
        ge=WEIGHT_MIN,
        le=WEIGHT_MAX,
        description="Relative draw weight; 0 means never drawn",
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("tags", "reference", mode="before")
    @classmethod
    def none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("weight", mode="before")
    @classmethod
    def coerce_weight(cls, value: Any) -> int:
        return sanitize_weight(value)

    @property
    def display_text(self) -> str:
        """Name with the reference appended in parentheses, when there is one."""
        if self.reference:
            return f"{self.name} ({self.reference})"
        return self.name

    @property
    def tag_set(self) -> set[str]:
        """Lower-cased, trimmed, non-empty tag tokens."""
        return {tag.strip().lower() for tag in self.tags.split(",") if tag.strip()}


class TableList(BaseModel):
    """A named, ordered list of entries (one tab of tables)."""

    name: str = Field(description="Display name, matched case-insensitively")
    entries: list[Entry] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def matches_name(self, name: str) -> bool:
        """Case- and surrounding-whitespace-insensitive name comparison."""
        return self.name.strip().lower() == name.strip().lower()


class TableBook(BaseModel):
    """Snapshot of all lists available to a draw."""

    lists: list[TableList] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def get(self, name: str) -> TableList | None:
        """Look up a list by case-insensitive name."""
        for table in self.lists:
            if table.matches_name(name):
                return table
        return None

    @property
    def names(self) -> list[str]:
        return [table.name for table in self.lists]


class MatchMode(str, Enum):
    """How several selected tags combine."""

    OR = "OR"
    AND = "AND"


class TagSelection(BaseModel):
    """The tags currently selected for filtering, plus how they combine."""

    tags: frozenset[str] = Field(default_factory=frozenset)
    mode: MatchMode = MatchMode.OR

    model_config = ConfigDict(frozen=True)


class PoolTarget(BaseModel):
    """Lists and filter tag a pool directive redirects a draw to."""

    target_lists: list[TableList] = Field(description="Matched lists, in directive order")
    filter_tag: str = Field(description='Synthetic tag, e.g. "pool=loot-rare"')


class DrawResult(BaseModel):
    """Outcome of a single draw."""

    text: str = Field(description="Display text with dice notation evaluated")
    entry: Entry = Field(description="The entry that won the draw")
    list_name: str = Field(description="Name of the list the winning entry came from")
    redirects: list[str] = Field(
        default_factory=list,
        description="Names of the pool entries the draw passed through, in order",
    )
