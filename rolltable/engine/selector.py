"""
Weighted random selection over table entries.

Each entry's chance of being drawn is its weight divided by the sum of all
weights in the candidate set. Weight 0 entries stay in the list but are
never drawn while any other entry has positive weight.
"""

import random
from bisect import bisect_left, bisect_right
from collections.abc import Sequence
from itertools import accumulate

from rolltable.config.logging import get_logger
from rolltable.engine.base import WEIGHT_DEFAULT, Entry, clamp_weight

logger = get_logger(__name__)


def effective_weight(entry: Entry) -> int:
    """Entry weight clamped to [0, 100], defaulting when unset."""
    weight = getattr(entry, "weight", None)
    if weight is None:
        return WEIGHT_DEFAULT
    return clamp_weight(int(weight))


class WeightedSelector:
    """
    Picks one entry from a candidate sequence according to entry weights.

    A single uniform draw r in [0, total) is located in the running sum of
    weights; the first entry whose cumulative weight exceeds r wins.
    """

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng if rng is not None else random.Random()

    def pick_index(self, entries: Sequence[Entry] | None) -> int | None:
        """
        Index of the drawn entry, or None for an empty or missing sequence.

        When every weight is 0 the first entry (index 0) is returned.
        """
        if not entries:
            return None

        cumulative = list(accumulate(effective_weight(entry) for entry in entries))
        total = cumulative[-1]
        if total <= 0:
            logger.debug(f"All {len(entries)} candidates have weight 0; using the first")
            return 0

        r = self._rng.random() * total
        index = bisect_right(cumulative, r)
        if index >= len(entries):
            # r rounded up to total; fall back to the last entry with weight
            index = bisect_left(cumulative, total)
        return index

    def pick(self, entries: Sequence[Entry] | None) -> Entry | None:
        """Draw one entry, or None when there is nothing to draw."""
        index = self.pick_index(entries)
        if index is None:
            return None
        entry = entries[index]
        logger.debug(f"Picked {entry.name!r} from {len(entries)} candidates")
        return entry
