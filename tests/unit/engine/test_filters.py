"""
Unit tests for tag filtering, tag collection and search.
"""

import pytest

from rolltable.engine.base import Entry, MatchMode
from rolltable.engine.filters import collect_tags, filter_entries, search_entries, split_tags


@pytest.fixture
def items():
    return [
        Entry(name="Sword", tags="weapon, sharp", reference="DBR 10"),
        Entry(name="Flaming sword", tags="Weapon,  Rare , fire", reference="DBR 11"),
        Entry(name="Shield", tags="armor, weapon", reference="DBR 20"),
        Entry(name="Potion", tags="consumable, healing", reference="DBR 30"),
        Entry(name="Mystery box"),
    ]


def _names(entries):
    return [entry.name for entry in entries]


class TestSplitTags:
    def test_trims_and_lowercases(self):
        assert split_tags(" Weapon,  Rare ,fire ") == ["weapon", "rare", "fire"]

    def test_drops_empty_tokens(self):
        assert split_tags("a,, ,b,") == ["a", "b"]

    def test_empty_and_none(self):
        assert split_tags("") == []
        assert split_tags(None) == []


class TestFilterEntries:
    """AND/OR tag matching."""

    def test_no_selected_tags_returns_input_unchanged(self, items):
        """An empty selection is no filter at all, untagged entries included."""
        assert filter_entries(items, set(), "OR") is items
        assert filter_entries(items, None, MatchMode.AND) is items

    def test_or_keeps_any_match(self, items):
        result = filter_entries(items, {"sharp", "healing"}, MatchMode.OR)
        assert _names(result) == ["Sword", "Potion"]

    def test_and_keeps_superset_only(self, items):
        result = filter_entries(items, {"weapon", "rare"}, MatchMode.AND)
        assert _names(result) == ["Flaming sword"]

    def test_matching_is_case_and_whitespace_insensitive(self, items):
        result = filter_entries(items, {"  WEAPON "}, MatchMode.OR)
        assert _names(result) == ["Sword", "Flaming sword", "Shield"]

    def test_untagged_entries_excluded_when_filtering(self, items):
        result = filter_entries(items, {"weapon"}, MatchMode.OR)
        assert "Mystery box" not in _names(result)

    def test_order_preserved(self, items):
        result = filter_entries(items, {"armor", "sharp", "fire"}, MatchMode.OR)
        assert _names(result) == ["Sword", "Flaming sword", "Shield"]

    def test_mode_accepts_strings(self, items):
        assert _names(filter_entries(items, {"weapon", "armor"}, "and")) == ["Shield"]
        assert len(filter_entries(items, {"weapon", "armor"}, "OR")) == 3

    def test_no_match_returns_empty(self, items):
        assert filter_entries(items, {"cursed"}, MatchMode.OR) == []

    def test_substring_is_not_a_match(self, items):
        """'weap' is not the tag 'weapon'."""
        assert filter_entries(items, {"weap"}, MatchMode.OR) == []

    def test_pool_tag_filters_like_any_other_tag(self):
        entries = [
            Entry(name="Gold", tags="pool=loot-rare, treasure"),
            Entry(name="Copper", tags="treasure"),
            Entry(name="Goblins", tags="Pool=Loot-Rare"),
        ]
        result = filter_entries(entries, {"pool=loot-rare"}, MatchMode.OR)
        assert _names(result) == ["Gold", "Goblins"]


class TestCollectTags:
    """Tag cloud source."""

    def test_distinct_sorted_lowercase(self, items):
        assert collect_tags(items) == [
            "armor", "consumable", "fire", "healing", "rare", "sharp", "weapon",
        ]

    def test_pool_tokens_omitted(self):
        entries = [
            Entry(name="Bundle", tags="pool=Loot::Encounters::loot-rare, bundle"),
            Entry(name="Gold", tags="Pool=Loot-Rare, treasure"),
        ]
        assert collect_tags(entries) == ["bundle", "treasure"]

    def test_no_tags(self):
        assert collect_tags([Entry(name="Plain")]) == []


class TestSearchEntries:
    """Case-insensitive substring search across name, tags and reference."""

    def test_empty_term_returns_input(self, items):
        assert search_entries(items, "") is items
        assert search_entries(items, None) is items

    def test_matches_name(self, items):
        assert _names(search_entries(items, "SHIELD")) == ["Shield"]

    def test_matches_tags(self, items):
        assert _names(search_entries(items, "weapon")) == ["Sword", "Flaming sword", "Shield"]

    def test_matches_reference(self, items):
        assert _names(search_entries(items, "dbr 30")) == ["Potion"]

    def test_partial_text(self, items):
        assert _names(search_entries(items, "pot")) == ["Potion"]

    def test_no_matches(self, items):
        assert search_entries(items, "nonexistent") == []
