"""
Scoring functions and the bounded top-K list kept at every trie node.

Two scores exist and are never mixed:

* path-aware (storage time): ``freq * 1000 + path_length * 1200 - len(q)``,
  where *path_length* is the depth of the node the query is registered at.
* live (guess time): ``freq * 1000 + lcp(typed_prefix, q) * 2000 - len(q)``,
  used only to re-rank the five candidates handed back by a traversal.
"""

from __future__ import annotations

from typing import Callable, Iterable, Iterator, Optional

from sidekick.autocomplete.frequency import FrequencyTable

# Hard capacity of every ranked list and length of every guess
TOP_K = 5

FREQUENCY_WEIGHT = 1000
PATH_DEPTH_WEIGHT = 1200
LIVE_DEPTH_WEIGHT = 2000

ScoreFn = Callable[[str], int]


def common_prefix_length(a: str, b: str) -> int:
    """Number of leading characters *a* and *b* share."""
    n = min(len(a), len(b))
    i = 0
    while i < n and a[i] == b[i]:
        i += 1
    return i


def path_aware_score(frequency: int, query: str, path_length: int) -> int:
    return frequency * FREQUENCY_WEIGHT + path_length * PATH_DEPTH_WEIGHT - len(query)


def live_score(frequency: int, query: str, live_prefix: str) -> int:
    return (
        frequency * FREQUENCY_WEIGHT
        + common_prefix_length(live_prefix, query) * LIVE_DEPTH_WEIGHT
        - len(query)
    )


class Scorer:
    """Binds the scoring formulas to a frequency table; scores are computed on demand."""

    def __init__(self, frequencies: FrequencyTable) -> None:
        self._frequencies = frequencies

    def path_aware(self, query: str, path_length: int) -> int:
        return path_aware_score(self._frequencies.get(query), query, path_length)

    def live(self, query: str, live_prefix: str) -> int:
        return live_score(self._frequencies.get(query), query, live_prefix)

    def frequency(self, query: str) -> int:
        return self._frequencies.get(query)

    def rank_live(self, candidates: Iterable[str], live_prefix: str) -> list[str]:
        """Order *candidates* by live score, best first; ties keep their order."""
        return sorted(candidates, key=lambda q: -self.live(q, live_prefix))


class RankedList:
    """
    At most ``TOP_K`` distinct queries, sorted by descending score.

    Scores are not stored: every update asks *score* for the current
    value, so frequency changes are picked up the next time the list
    is touched.
    """

    __slots__ = ("_items",)

    def __init__(self, items: Optional[Iterable[str]] = None) -> None:
        self._items: list[str] = list(items or ())[:TOP_K]

    def consider(self, query: str, score: ScoreFn) -> bool:
        """
        Offer *query* to the list. Returns True if the query was added.

        A query that is already listed only causes a stable re-sort. A new
        query is placed after every entry scoring at least as high; on a
        full list it must beat the worst entry, which it then evicts.
        """
        scored = [(score(q), q) for q in self._items]
        scored.sort(key=lambda pair: -pair[0])
        self._items = [q for _, q in scored]

        if query in self._items:
            return False

        new_score = score(query)
        if len(scored) >= TOP_K and new_score <= scored[-1][0]:
            return False

        pos = len(scored)
        for i, (existing, _) in enumerate(scored):
            if new_score > existing:
                pos = i
                break
        self._items.insert(pos, query)
        del self._items[TOP_K:]
        return True

    def as_list(self) -> list[str]:
        return list(self._items)

    def padded(self, width: int = TOP_K) -> list[str]:
        """The entries followed by empty strings up to *width* slots."""
        return self._items[:width] + [""] * (width - min(width, len(self._items)))

    def copy(self) -> "RankedList":
        return RankedList(self._items)

    def __contains__(self, query: object) -> bool:
        return query in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"RankedList({self._items!r})"
