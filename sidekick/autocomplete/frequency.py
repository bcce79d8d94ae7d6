"""
Frequency table: normalized query text -> occurrence count.

The table also owns the resident copy of every query string. Trie edge
labels point into these strings, so they stay alive for as long as the
table does.
"""

from __future__ import annotations

from typing import Iterable, Iterator


class FrequencyTable:
    """Monotone occurrence counter keyed by normalized query."""

    def __init__(self) -> None:
        self._counts: dict[str, int] = {}
        self._pool: dict[str, str] = {}

    def increment(self, query: str, amount: int = 1) -> int:
        """Add *amount* to the count of *query* and return the new count."""
        if amount < 0:
            raise ValueError(f"frequency increments must be non-negative, got {amount}")
        query = self.intern(query)
        count = self._counts.get(query, 0) + amount
        self._counts[query] = count
        return count

    def get(self, query: str) -> int:
        """Stored count for *query*, 0 if it was never seen."""
        return self._counts.get(query, 0)

    def intern(self, query: str) -> str:
        """Return the resident string equal to *query*, registering it if new."""
        return self._pool.setdefault(query, query)

    def update(self, other: "FrequencyTable") -> None:
        """Merge every count of *other* into this table."""
        for query, count in other.items():
            self.increment(query, count)

    def items(self) -> Iterable[tuple[str, int]]:
        return self._counts.items()

    def by_frequency(self) -> list[str]:
        """
        Counted queries, most frequent first.

        Equal counts keep the order in which the queries were first seen.
        """
        return sorted(self._counts, key=lambda q: -self._counts[q])

    def __contains__(self, query: object) -> bool:
        return query in self._counts

    def __iter__(self) -> Iterator[str]:
        return iter(self._counts)

    def __len__(self) -> int:
        return len(self._counts)
