"""
Draw component factory.

Centralises the construction of the draw engine and its collaborators from
settings so the CLI and tests wire them the same way.
"""

from __future__ import annotations

import random

from rolltable.config.settings import DrawSettings
from rolltable.engine.dice import DiceNotationEvaluator
from rolltable.engine.draw import DrawEngine
from rolltable.engine.selector import WeightedSelector


class DrawComponents:
    """
    Factory for building draw components from settings.

    The evaluator and selector built by one factory share a single random
    source, so a configured seed makes a whole session reproducible.

    Example::

        factory = DrawComponents(settings.draw)
        engine = factory.create_engine()
        result = engine.draw(book.get("Items"), book.lists)
    """

    def __init__(self, settings: DrawSettings):
        self.settings = settings
        self._rng: random.Random | None = None

    @property
    def rng(self) -> random.Random:
        """The shared random source, created on first use."""
        if self._rng is None:
            self._rng = random.Random(self.settings.seed)
        return self._rng

    def create_evaluator(self) -> DiceNotationEvaluator:
        """Create a DiceNotationEvaluator on the shared random source."""
        return DiceNotationEvaluator(self.rng)

    def create_selector(self) -> WeightedSelector:
        """Create a WeightedSelector on the shared random source."""
        return WeightedSelector(self.rng)

    def create_engine(self) -> DrawEngine:
        """Create a fully wired DrawEngine from settings."""
        return DrawEngine(
            evaluator=self.create_evaluator(),
            selector=self.create_selector(),
            max_pool_depth=self.settings.max_pool_depth,
            clean_results=self.settings.clean_results,
        )
