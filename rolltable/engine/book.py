"""
Table book loading.

A table book is a JSON snapshot of every list, in the shape::

    {
      "lists": [
        {"name": "Items", "entries": [
          {"name": "Rope (50 ft)", "tags": "gear, common", "reference": "PHB 153", "weight": 60},
          ...
        ]},
        ...
      ]
    }

Entries are normalised on the way in (see rolltable.engine.normalize), and
lists that share a name are merged into one.
"""

import json
from pathlib import Path

from pydantic import ValidationError

from rolltable.config.logging import get_logger
from rolltable.engine.base import WEIGHT_DEFAULT, TableBook, TableList
from rolltable.engine.normalize import merge_unique_by_name, normalize_entries, sanitize_string

logger = get_logger(__name__)


class BookLoadError(Exception):
    """Raised when a table book cannot be loaded."""
    pass


def load_book(path: Path, default_weight: int = WEIGHT_DEFAULT) -> TableBook:
    """
    Load a table book from a JSON file.

    Args:
        path: Path to the JSON file
        default_weight: Weight for entries whose weight is missing or not numeric

    Returns:
        TableBook with normalised entries

    Raises:
        BookLoadError: If the file is missing, unreadable, not JSON, or not
            shaped like a table book
    """
    path = Path(path)
    if not path.is_file():
        raise BookLoadError(f"Table book not found: {path}")

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise BookLoadError(f"Table book is not valid JSON ({path}): {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise BookLoadError(f"Could not read table book '{path}': {e}") from e

    if not isinstance(raw, dict) or not isinstance(raw.get("lists"), list):
        raise BookLoadError(f"Table book must be an object with a 'lists' array: {path}")

    # Lists sharing a name (case-insensitive) are merged, first entry per name wins
    merged: dict[str, TableList] = {}
    try:
        for item in raw["lists"]:
            if not isinstance(item, dict):
                continue
            name = sanitize_string(item.get("name"))
            entries = normalize_entries(item.get("entries") or [], default_weight)
            key = name.lower()
            if key in merged:
                logger.debug(f"Merging duplicate list {name!r}")
                existing = merged[key]
                entries = merge_unique_by_name(existing.entries, entries)
                name = existing.name
            merged[key] = TableList(name=name, entries=entries)
        book = TableBook(lists=list(merged.values()))
    except (ValidationError, AttributeError, TypeError) as e:
        raise BookLoadError(f"Invalid table book '{path}': {e}") from e

    logger.debug(
        f"Loaded table book {path.name}: "
        + ", ".join(f"{table.name} ({len(table.entries)})" for table in book.lists)
    )
    return book
