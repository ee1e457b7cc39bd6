"""
Draw engine.

Runs one draw on a table:

1. Narrow the table's entries by the selected tags
2. Pick one entry by weight
3. If that entry carries a pool directive, re-draw from the pool's target
   lists (filtered by the pool tag), repeating for chained pools
4. Roll any dice notation in the winner's display text

The engine keeps no state between draws; the table snapshot, the lists
available for pool redirects and the tag selection are passed in per call.
"""

from collections.abc import Sequence

from rolltable.config.logging import get_logger
from rolltable.engine.base import DrawResult, Entry, MatchMode, TableList, TagSelection
from rolltable.engine.dice import DiceNotationEvaluator
from rolltable.engine.filters import filter_entries
from rolltable.engine.pool import resolve_pool
from rolltable.engine.selector import WeightedSelector

logger = get_logger(__name__)


class DrawEngine:
    """
    Weighted draws with tag filtering, pool redirects and dice evaluation.

    Example:
        >>> rng = random.Random(42)
        >>> engine = DrawEngine(DiceNotationEvaluator(rng), WeightedSelector(rng))
        >>> result = engine.draw(book.get("Items"), book.lists)
        >>> result.text if result else "nothing to draw"
    """

    def __init__(
        self,
        evaluator: DiceNotationEvaluator,
        selector: WeightedSelector,
        max_pool_depth: int = 8,
        clean_results: bool = False,
    ):
        """
        Initialize the draw engine.

        Args:
            evaluator: Dice evaluator applied to the winning entry's text
            selector: Weighted selector used for every pick
            max_pool_depth: Maximum pool redirects followed in one draw
            clean_results: Default rendering for dice results
        """
        self.evaluator = evaluator
        self.selector = selector
        self.max_pool_depth = max_pool_depth
        self.clean_results = clean_results

    def draw(
        self,
        table: TableList,
        lists: Sequence[TableList] = (),
        selection: TagSelection | None = None,
        clean_results: bool | None = None,
    ) -> DrawResult | None:
        """
        Draw one result from ``table``.

        Args:
            table: The list being drawn from
            lists: All lists that pool directives may point at
            selection: Active tag filter; None means no filtering
            clean_results: Override the engine's dice rendering for this draw

        Returns:
            DrawResult, or None if there was nothing to draw
        """
        selection = selection or TagSelection()
        candidates = filter_entries(table.entries, selection.tags, selection.mode)
        entry = self.selector.pick(candidates)
        if entry is None:
            logger.debug(f"Nothing to draw from {table.name!r}")
            return None

        source = table
        redirects: list[str] = []
        while True:
            target = resolve_pool(entry.tags, lists)
            if target is None:
                break
            if len(redirects) >= self.max_pool_depth:
                logger.warning(
                    f"Pool redirect limit ({self.max_pool_depth}) reached at "
                    f"{entry.name!r}; using it as a normal entry"
                )
                break

            redirects.append(entry.name)
            pool_candidates = self._pool_candidates(target.target_lists, target.filter_tag)
            index = self.selector.pick_index([candidate for _, candidate in pool_candidates])
            if index is None:
                logger.warning(
                    f"Pool {target.filter_tag!r} on {entry.name!r} has no candidates"
                )
                return None

            source, entry = pool_candidates[index]
            logger.debug(f"Pool {target.filter_tag!r} redirected to {entry.name!r} in {source.name!r}")

        clean = self.clean_results if clean_results is None else clean_results
        text = self.evaluator.evaluate(entry.display_text, clean)
        return DrawResult(text=text, entry=entry, list_name=source.name, redirects=redirects)

    def _pool_candidates(
        self, target_lists: Sequence[TableList], filter_tag: str
    ) -> list[tuple[TableList, Entry]]:
        """Entries of each target list carrying ``filter_tag``, in list order."""
        candidates = []
        for target in target_lists:
            for entry in filter_entries(target.entries, {filter_tag}, MatchMode.OR):
                candidates.append((target, entry))
        return candidates
