"""
Tag filtering and search over table entries.

Tags are comma-separated, compared case-insensitively with surrounding
whitespace ignored. Pool directives ("pool=...") are ordinary tokens here;
only the tag cloud leaves them out.
"""

from collections.abc import Iterable, Sequence

from rolltable.engine.base import Entry, MatchMode

POOL_PREFIX = "pool="


def split_tags(tags_field: str | None) -> list[str]:
    """Split a tags field into lower-cased, trimmed, non-empty tokens."""
    if not tags_field:
        return []
    return [tag.strip().lower() for tag in tags_field.split(",") if tag.strip()]


def filter_entries(
    entries: Sequence[Entry],
    selected_tags: Iterable[str] | None,
    mode: MatchMode | str = MatchMode.OR,
) -> Sequence[Entry]:
    """
    Keep the entries that match the selected tags.

    OR keeps an entry carrying any selected tag, AND only one carrying all
    of them. With no selected tags the input is returned unchanged; entries
    without tags never survive a non-empty selection. Order is preserved.

    Args:
        entries: Candidate entries
        selected_tags: Active filter tags (any case)
        mode: MatchMode.OR or MatchMode.AND (or the strings "OR"/"AND")

    Returns:
        The surviving entries
    """
    wanted = {tag.strip().lower() for tag in (selected_tags or ()) if tag.strip()}
    if not wanted:
        return entries

    match_all = MatchMode(mode.upper()) is MatchMode.AND

    kept = []
    for entry in entries:
        entry_tags = entry.tag_set
        if match_all:
            matched = wanted <= entry_tags
        else:
            matched = not wanted.isdisjoint(entry_tags)
        if matched:
            kept.append(entry)
    return kept


def collect_tags(entries: Iterable[Entry]) -> list[str]:
    """
    Distinct lower-cased tags across ``entries``, sorted, for a tag cloud.

    Pool directives and pool filter tags are reserved syntax and left out.
    """
    tags = {
        tag
        for entry in entries
        for tag in split_tags(entry.tags)
        if not tag.startswith(POOL_PREFIX)
    }
    return sorted(tags)


def search_entries(entries: Sequence[Entry], term: str | None) -> Sequence[Entry]:
    """Case-insensitive substring search over name, tags and reference."""
    if not term:
        return entries
    needle = term.lower()
    return [
        entry
        for entry in entries
        if needle in entry.name.lower()
        or needle in entry.tags.lower()
        or needle in entry.reference.lower()
    ]
