"""
Shared test fixtures for the Query Sidekick test suite.

Engines are built in memory from plain lists of raw queries; only the
loader tests touch the filesystem, through pytest's tmp_path.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

import pytest

from sidekick.autocomplete.engine import QuerySidekick
from sidekick.autocomplete.frequency import FrequencyTable
from sidekick.autocomplete.trie import CompressedTrie
from sidekick.config.settings import AutocompleteSettings

ROUND_TRIP_LOG = ["cat", "cat", "car", "care", "dog"]


def make_sidekick(lines: Iterable[str] = ROUND_TRIP_LOG, **overrides) -> QuerySidekick:
    """Build an engine from raw *lines*. Override any AutocompleteSettings field via kwargs."""
    sidekick = QuerySidekick(ac_settings=AutocompleteSettings(**overrides))
    sidekick.add_queries(lines)
    return sidekick


def type_prefix(sidekick: QuerySidekick, text: str) -> list[str]:
    """Type *text* keystroke by keystroke from position 0 and return the last guesses."""
    guesses: list[str] = []
    for index, ch in enumerate(text):
        guesses = sidekick.guess(ch, index)
    return guesses


@pytest.fixture
def frequencies() -> FrequencyTable:
    return FrequencyTable()


@pytest.fixture
def trie(frequencies: FrequencyTable) -> CompressedTrie:
    return CompressedTrie(frequencies)


@pytest.fixture
def sidekick() -> QuerySidekick:
    """Engine over the cat/car/care/dog log with default settings."""
    return make_sidekick()


@pytest.fixture
def query_log(tmp_path: Path) -> Path:
    """A historical log with mixed case, stray whitespace and blank lines."""
    path = tmp_path / "old_queries.txt"
    path.write_text("Cat\ncat  \n\n  car\nCARE\n   \ndog\n", encoding="utf-8")
    return path
