"""
Direct lookup tables for the first one to three typed characters.

A pure shortcut over the trie's shallow nodes: every list is derived
from the same frequency table and ranked with the path-aware score at
the prefix's length, so it never becomes a second source of truth.
"""

from __future__ import annotations

from typing import Iterable, Optional

from sidekick.autocomplete.ranking import RankedList, Scorer


class PrefixCache:
    """prefix (1..max_length characters) -> ranked queries starting with it."""

    def __init__(self, scorer: Scorer, max_length: int = 3) -> None:
        self._scorer = scorer
        self._max_length = max_length
        self._tables: dict[str, RankedList] = {}

    @property
    def max_length(self) -> int:
        return self._max_length

    def add(self, query: str) -> None:
        """Offer *query* to the list of each of its leading prefixes."""
        for length in range(1, min(self._max_length, len(query)) + 1):
            ranked = self._tables.get(query[:length])
            if ranked is None:
                ranked = self._tables[query[:length]] = RankedList()
            ranked.consider(query, lambda q, n=length: self._scorer.path_aware(q, n))

    def rebuild(self, queries: Iterable[str]) -> None:
        """Drop every table and refill from *queries* (most frequent first)."""
        self._tables.clear()
        for query in queries:
            self.add(query)

    def lookup(self, prefix: str) -> Optional[RankedList]:
        """Ranked list for *prefix*, or None if the prefix is not cached."""
        if not 1 <= len(prefix) <= self._max_length:
            return None
        return self._tables.get(prefix)

    def __len__(self) -> int:
        return len(self._tables)
