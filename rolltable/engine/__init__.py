"""
Draw engine.

The algorithmic core behind a draw, leaves first:

    DiceNotationEvaluator  - rolls dice notation embedded in result text
    WeightedSelector       - picks one entry by weight
    filter_entries         - AND/OR tag filtering
    resolve_pool           - pool directives that redirect a draw to other lists
    DrawEngine             - the full draw: filter -> pick -> pool -> dice

All of it is synchronous and side-effect free apart from consuming
randomness; inputs are read-only snapshots.
"""

from rolltable.engine.base import (
    DrawResult,
    Entry,
    MatchMode,
    PoolTarget,
    TableBook,
    TableList,
    TagSelection,
)
from rolltable.engine.dice import DiceNotationEvaluator, parse_dice
from rolltable.engine.draw import DrawEngine
from rolltable.engine.filters import collect_tags, filter_entries, search_entries
from rolltable.engine.pool import resolve_pool
from rolltable.engine.selector import WeightedSelector

__all__ = [
    "DiceNotationEvaluator",
    "DrawEngine",
    "DrawResult",
    "Entry",
    "MatchMode",
    "PoolTarget",
    "TableBook",
    "TableList",
    "TagSelection",
    "WeightedSelector",
    "collect_tags",
    "filter_entries",
    "parse_dice",
    "resolve_pool",
    "search_entries",
]
