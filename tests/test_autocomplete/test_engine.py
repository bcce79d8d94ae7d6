"""Tests for the QuerySidekick guess/feedback engine."""

from __future__ import annotations

from pathlib import Path

import pytest

from sidekick.autocomplete.engine import CursorError, QuerySidekick
from sidekick.config.settings import AutocompleteSettings

from tests.conftest import make_sidekick, type_prefix

CACHE_MODES = pytest.mark.parametrize("use_prefix_cache", [True, False], ids=["cache", "trie"])

PROPERTY_LOG = [
    "apple", "apple", "apply", "application", "apt", "app store",
    "banana", "band", "bandana", "ban", "bank", "bank", "bank of america",
    "c", "can", "candy", "cane", "cancel", "canada", "canada", "cat",
    "new york", "new york times", "new jersey", "news",
]


class TestLoad:
    def test_process_old_queries_summary(self, query_log: Path):
        sidekick = QuerySidekick(ac_settings=AutocompleteSettings())
        summary = sidekick.process_old_queries(query_log)
        assert summary["queries"] == 5
        assert summary["distinct"] == 4
        assert summary["nodes"] == sidekick.trie.node_count
        assert summary["source"] == str(query_log)

    def test_frequencies_from_log(self, query_log: Path):
        sidekick = QuerySidekick(ac_settings=AutocompleteSettings())
        sidekick.process_old_queries(query_log)
        freq = sidekick.frequencies
        assert (freq.get("cat"), freq.get("car"), freq.get("care"), freq.get("dog")) == (2, 1, 1, 1)

    def test_missing_log_is_fatal_and_loads_nothing(self, tmp_path: Path):
        sidekick = QuerySidekick(ac_settings=AutocompleteSettings())
        with pytest.raises(FileNotFoundError):
            sidekick.process_old_queries(tmp_path / "missing.txt")
        assert sidekick.trie.size == 0
        assert len(sidekick.frequencies) == 0
        assert sidekick.global_top == []

    def test_global_top_is_most_frequent(self, sidekick):
        assert sidekick.global_top == ["cat", "car", "care", "dog"]

    def test_cache_can_be_disabled(self):
        assert make_sidekick(use_prefix_cache=False).prefix_cache is None
        assert make_sidekick().prefix_cache is not None


class TestGuess:
    @CACHE_MODES
    def test_round_trip_first_keystroke(self, use_prefix_cache):
        sidekick = make_sidekick(use_prefix_cache=use_prefix_cache)
        assert sidekick.guess("c", 0) == ["cat", "car", "care", "", ""]

    @CACHE_MODES
    def test_narrowing_prefix(self, use_prefix_cache):
        sidekick = make_sidekick(use_prefix_cache=use_prefix_cache)
        assert type_prefix(sidekick, "car") == ["car", "care", "", "", ""]
        assert sidekick.guess("e", 3) == ["care", "", "", "", ""]

    def test_uppercase_keystrokes_are_normalized(self, sidekick):
        assert sidekick.guess("C", 0)[0] == "cat"
        assert sidekick.current_prefix == "c"

    @CACHE_MODES
    def test_unknown_prefix_falls_back_to_global_top(self, use_prefix_cache):
        sidekick = make_sidekick(use_prefix_cache=use_prefix_cache)
        assert sidekick.guess("z", 0) == ["cat", "car", "dog", "care", ""]

    def test_diverging_prefix_uses_nearest_node(self):
        sidekick = make_sidekick(use_prefix_cache=False)
        assert type_prefix(sidekick, "cx") == ["cat", "car", "care", "", ""]

    def test_beyond_cache_depth_uses_trie(self):
        sidekick = make_sidekick(["new york", "new york times", "news"])
        assert type_prefix(sidekick, "new y") == ["new york", "new york times", "", "", ""]

    def test_always_five_entries(self):
        sidekick = make_sidekick([])
        assert sidekick.guess("a", 0) == [""] * 5

    @CACHE_MODES
    def test_only_matching_queries_for_known_prefixes(self, use_prefix_cache):
        sidekick = make_sidekick(PROPERTY_LOG, use_prefix_cache=use_prefix_cache)
        for query in set(PROPERTY_LOG):
            for end in range(1, len(query) + 1):
                prefix = query[:end]
                guesses = [g for g in type_prefix(sidekick, prefix) if g]
                assert guesses, prefix
                assert all(g.startswith(prefix) for g in guesses), (prefix, guesses)
                assert len(guesses) == len(set(guesses))

    @CACHE_MODES
    def test_exact_query_is_suggested(self, use_prefix_cache):
        sidekick = make_sidekick(PROPERTY_LOG, use_prefix_cache=use_prefix_cache)
        for query in set(PROPERTY_LOG):
            assert query in type_prefix(sidekick, query)

    def test_suggest_does_not_touch_session(self, sidekick):
        sidekick.guess("d", 0)
        assert sidekick.suggest("ca") == ["cat", "car", "care", "", ""]
        assert sidekick.current_prefix == "d"


class TestCursor:
    def test_index_zero_resets_prefix(self, sidekick):
        type_prefix(sidekick, "car")
        sidekick.guess("d", 0)
        assert sidekick.current_prefix == "d"

    def test_skipped_index_rejected_without_changing_state(self, sidekick):
        sidekick.guess("c", 0)
        with pytest.raises(CursorError):
            sidekick.guess("a", 2)
        assert sidekick.current_prefix == "c"
        sidekick.guess("a", 1)
        assert sidekick.current_prefix == "ca"

    def test_repeated_index_rejected(self, sidekick):
        type_prefix(sidekick, "ca")
        with pytest.raises(CursorError):
            sidekick.guess("r", 1)

    def test_session_must_start_at_zero(self, sidekick):
        with pytest.raises(CursorError):
            sidekick.guess("c", 1)

    def test_negative_index_rejected(self, sidekick):
        with pytest.raises(CursorError):
            sidekick.guess("c", -1)

    def test_multi_character_input_rejected(self, sidekick):
        with pytest.raises(ValueError):
            sidekick.guess("ca", 0)

    def test_reset(self, sidekick):
        type_prefix(sidekick, "ca")
        sidekick.reset()
        assert sidekick.current_prefix == ""
        with pytest.raises(CursorError):
            sidekick.guess("r", 2)


class TestFeedback:
    def test_correct_adds_five(self, sidekick):
        sidekick.feedback(True, "dog")
        assert sidekick.frequencies.get("dog") == 6

    def test_incorrect_adds_one(self, sidekick):
        sidekick.feedback(False, "dog")
        assert sidekick.frequencies.get("dog") == 2

    @pytest.mark.parametrize("query", [None, "", "   "])
    def test_empty_query_is_ignored(self, sidekick, query):
        nodes = sidekick.trie.node_count
        sidekick.feedback(True, query)
        assert len(sidekick.frequencies) == 4
        assert sidekick.trie.node_count == nodes

    def test_query_is_normalized(self, sidekick):
        sidekick.feedback(True, "  Hot   DOG ")
        assert sidekick.frequencies.get("hot dog") == 5
        assert "hot dog" in sidekick.trie

    @CACHE_MODES
    def test_new_query_becomes_guessable(self, use_prefix_cache):
        sidekick = make_sidekick(use_prefix_cache=use_prefix_cache)
        sidekick.feedback(False, "zebra")
        assert sidekick.guess("z", 0)[0] == "zebra"

    @CACHE_MODES
    def test_repeated_feedback_promotes_query(self, use_prefix_cache):
        sidekick = make_sidekick(use_prefix_cache=use_prefix_cache)
        for _ in range(6):
            sidekick.feedback(True, "dog")
        assert sidekick.frequencies.get("dog") == 31
        assert sidekick.guess("d", 0)[0] == "dog"

    @CACHE_MODES
    def test_feedback_overtakes_more_frequent_query(self, use_prefix_cache):
        sidekick = make_sidekick(["dart"] * 3 + ["dog"], use_prefix_cache=use_prefix_cache)
        assert sidekick.guess("d", 0)[:2] == ["dart", "dog"]
        sidekick.feedback(True, "dog")
        assert sidekick.guess("d", 0)[:2] == ["dog", "dart"]

    @CACHE_MODES
    def test_feedback_evicts_from_full_node(self, use_prefix_cache):
        log = ["pa"] * 5 + ["pb"] * 4 + ["pc"] * 3 + ["pd"] * 2 + ["pe"] * 2 + ["pz"]
        sidekick = make_sidekick(log, use_prefix_cache=use_prefix_cache)
        assert "pz" not in sidekick.guess("p", 0)
        sidekick.feedback(True, "pz")
        guesses = sidekick.guess("p", 0)
        assert guesses[0] == "pz"
        assert len([g for g in guesses if g]) == 5

    def test_global_top_refreshed(self, sidekick):
        sidekick.feedback(True, "dog")
        assert sidekick.global_top[0] == "dog"

    def test_global_top_refresh_can_be_disabled(self):
        sidekick = make_sidekick(refresh_fallbacks_on_feedback=False)
        sidekick.feedback(True, "dog")
        assert sidekick.global_top == ["cat", "car", "care", "dog"]
