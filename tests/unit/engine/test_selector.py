"""
Unit tests for WeightedSelector.

Distribution tests use a seeded random source and tolerances wide enough
that a correct implementation never fails them.
"""

import random
from collections import Counter
from unittest.mock import MagicMock

import pytest

from rolltable.engine.base import Entry
from rolltable.engine.selector import WeightedSelector, effective_weight


def _selector_returning(*values):
    """Selector whose random() yields the given values in order."""
    rng = MagicMock()
    rng.random.side_effect = list(values)
    return WeightedSelector(rng)


class TestEmptyInput:
    """Nothing to draw returns None instead of failing."""

    def test_empty_list(self):
        assert WeightedSelector(random.Random(1)).pick([]) is None

    def test_none(self):
        assert WeightedSelector(random.Random(1)).pick(None) is None

    def test_pick_index_empty(self):
        assert WeightedSelector(random.Random(1)).pick_index([]) is None


class TestSingleEntry:
    """A one-entry list always returns that entry."""

    @pytest.mark.parametrize("weight", [0, 1, 50, 100])
    def test_only_entry_always_returned(self, weight):
        entry = Entry(name="Epic Sword", weight=weight)
        selector = WeightedSelector(random.Random(5))
        for _ in range(20):
            assert selector.pick([entry]) is entry


class TestCumulativeScan:
    """The first entry whose cumulative weight exceeds r wins."""

    def test_r_at_zero_picks_first_positive(self):
        entries = [Entry(name="A", weight=10), Entry(name="B", weight=0), Entry(name="C", weight=30)]
        assert _selector_returning(0.0).pick(entries).name == "A"

    def test_r_on_boundary_skips_zero_weight(self):
        """r == 10 is past A (cumulative 10) and B adds nothing, so C wins."""
        entries = [Entry(name="A", weight=10), Entry(name="B", weight=0), Entry(name="C", weight=30)]
        assert _selector_returning(0.25).pick(entries).name == "C"

    def test_r_just_below_boundary(self):
        entries = [Entry(name="A", weight=10), Entry(name="B", weight=0), Entry(name="C", weight=30)]
        assert _selector_returning(0.2499).pick(entries).name == "A"

    def test_r_rounded_to_total_never_picks_trailing_zero_weight(self):
        entries = [Entry(name="A", weight=10), Entry(name="B", weight=30), Entry(name="C", weight=0)]
        assert _selector_returning(1.0).pick(entries).name == "B"

    def test_single_random_draw_per_pick(self):
        rng = MagicMock()
        rng.random.return_value = 0.5
        WeightedSelector(rng).pick([Entry(name="A"), Entry(name="B")])
        rng.random.assert_called_once()


class TestAllZeroWeights:
    """With total weight 0 the first entry is the fallback."""

    def test_returns_first_entry(self):
        entries = [Entry(name="First", weight=0), Entry(name="Second", weight=0)]
        assert WeightedSelector(random.Random(3)).pick(entries).name == "First"

    def test_index_is_zero(self):
        entries = [Entry(name="First", weight=0), Entry(name="Second", weight=0)]
        assert WeightedSelector(random.Random(3)).pick_index(entries) == 0


class TestDistribution:
    """Selection frequency follows weight / total."""

    def test_common_uncommon_rare(self):
        entries = [
            Entry(name="Common", weight=50),
            Entry(name="Uncommon", weight=30),
            Entry(name="Rare", weight=20),
        ]
        selector = WeightedSelector(random.Random(2024))
        counts = Counter(selector.pick(entries).name for _ in range(1000))

        assert 400 < counts["Common"] < 600
        assert 220 < counts["Uncommon"] < 380
        assert 120 < counts["Rare"] < 280

    def test_zero_weight_never_selected(self):
        entries = [
            Entry(name="Never", weight=0),
            Entry(name="Sometimes", weight=1),
            Entry(name="Often", weight=100),
        ]
        selector = WeightedSelector(random.Random(77))
        picks = [selector.pick(entries).name for _ in range(500)]
        assert "Never" not in picks

    def test_input_not_modified(self):
        entries = [Entry(name="A", weight=20), Entry(name="B", weight=80)]
        snapshot = list(entries)
        selector = WeightedSelector(random.Random(8))
        for _ in range(10):
            selector.pick(entries)
        assert entries == snapshot


class TestEffectiveWeight:
    """Weights are clamped to [0, 100] and default to 50 when unset."""

    def test_regular_weight(self):
        assert effective_weight(Entry(name="A", weight=30)) == 30

    def test_unset_weight_defaults(self):
        entry = Entry.model_construct(name="A", tags="", reference="", weight=None)
        assert effective_weight(entry) == 50

    def test_out_of_range_weight_clamped(self):
        high = Entry.model_construct(name="A", tags="", reference="", weight=250)
        low = Entry.model_construct(name="B", tags="", reference="", weight=-4)
        assert effective_weight(high) == 100
        assert effective_weight(low) == 0
