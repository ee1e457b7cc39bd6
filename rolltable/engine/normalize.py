"""
Input normalisation for table entries.

Raw rows arrive from hand-edited JSON or earlier exports, so every field is
trimmed and length-limited, weights are coerced into range and duplicate
names are collapsed before the rows become Entry models.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from rolltable.config.logging import get_logger
from rolltable.engine.base import WEIGHT_DEFAULT, Entry, sanitize_weight

logger = get_logger(__name__)

MAX_FIELD_LENGTH = 500


def sanitize_string(value: Any, max_length: int = MAX_FIELD_LENGTH) -> str:
    """Trim and truncate a string field. Non-strings become ''."""
    if not isinstance(value, str):
        return ""
    return value.strip()[:max_length]


def _name_key(name: str) -> str:
    return name.strip().lower()


def normalize_entries(
    raw_entries: Iterable[Mapping[str, Any] | Entry],
    default_weight: int = WEIGHT_DEFAULT,
) -> list[Entry]:
    """
    Build clean Entry models from raw rows.

    Rows without a name are dropped, and when two rows share a name
    (case-insensitive) the first one wins. Input order is preserved.

    Args:
        raw_entries: Mappings with name/tags/reference/weight keys, or Entry objects
        default_weight: Weight for rows whose weight is missing or not numeric

    Returns:
        List of validated entries
    """
    seen: set[str] = set()
    entries: list[Entry] = []
    skipped = 0

    for raw in raw_entries:
        if isinstance(raw, Entry):
            raw = raw.model_dump()
        elif not isinstance(raw, Mapping):
            skipped += 1
            continue

        name = sanitize_string(raw.get("name"))
        if not name:
            skipped += 1
            continue
        key = _name_key(name)
        if key in seen:
            skipped += 1
            continue
        seen.add(key)

        entries.append(
            Entry(
                name=name,
                tags=sanitize_string(raw.get("tags")),
                reference=sanitize_string(raw.get("reference")),
                weight=sanitize_weight(raw.get("weight"), default=default_weight),
            )
        )

    if skipped:
        logger.debug(f"Skipped {skipped} unnamed or duplicate entries")
    return entries


def merge_unique_by_name(first: Iterable[Entry], second: Iterable[Entry]) -> list[Entry]:
    """
    Append ``second`` to ``first``, keeping only the first entry for each name.

    Names compare case-insensitively with surrounding whitespace ignored;
    blank names are dropped.
    """
    seen: set[str] = set()
    merged: list[Entry] = []
    for entry in [*first, *second]:
        key = _name_key(entry.name)
        if not key or key in seen:
            continue
        seen.add(key)
        merged.append(entry)
    return merged
