"""
Pool directive resolution.

An entry can hand its draw over to entries on other lists with a reserved
tag token::

    pool=<List1>::<List2>::...::<FilterName>

Drawing that entry instead draws from the named lists, restricted to the
entries tagged ``pool=<FilterName>``. List names match case-insensitively;
lists that do not exist are skipped.
"""

from collections.abc import Sequence

from rolltable.config.logging import get_logger
from rolltable.engine.base import PoolTarget, TableList
from rolltable.engine.filters import POOL_PREFIX

logger = get_logger(__name__)

POOL_SEPARATOR = "::"


def find_pool_spec(tags_field: str | None) -> str | None:
    """Text after ``pool=`` in the first pool token, or None if there is none."""
    if not tags_field:
        return None
    for segment in tags_field.split(","):
        segment = segment.strip()
        if segment.startswith(POOL_PREFIX):
            return segment[len(POOL_PREFIX):]
    return None


def resolve_pool(tags_field: str | None, available_lists: Sequence[TableList]) -> PoolTarget | None:
    """
    Resolve the pool directive in a tags field against the available lists.

    Only the first ``pool=`` token is considered. A token without a ``::``
    separator (such as the ``pool=loot-rare`` filter tag itself) is not a
    directive.

    Args:
        tags_field: Raw comma-separated tags of the drawn entry
        available_lists: Every list the draw may be redirected to

    Returns:
        PoolTarget with the matched lists in directive order and the
        lower-cased filter tag, or None when the entry is not a pool entry
    """
    spec = find_pool_spec(tags_field)
    if spec is None:
        return None

    parts = spec.split(POOL_SEPARATOR)
    if len(parts) < 2:
        return None

    *list_names, filter_name = parts
    targets: list[TableList] = []
    for name in list_names:
        wanted = name.strip().lower()
        match = next((table for table in available_lists if table.matches_name(wanted)), None)
        if match is None:
            logger.debug(f"Pool list {name.strip()!r} not found")
            continue
        if any(table is match for table in targets):
            continue
        targets.append(match)

    filter_tag = f"{POOL_PREFIX}{filter_name.strip()}".lower()
    return PoolTarget(target_lists=targets, filter_tag=filter_tag)
