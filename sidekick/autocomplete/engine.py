"""
Query Sidekick engine: bulk load, per-keystroke guessing, and feedback.

Typical use:

    sidekick = QuerySidekick()
    sidekick.process_old_queries(Path("old_queries.txt"))
    sidekick.guess("c", 0)        # ['cat', 'car', 'care', '', '']
    sidekick.guess("a", 1)
    sidekick.feedback(True, "cat")

The engine holds one typing session at a time. ``guess`` is not
re-entrant; callers sharing an engine across threads must serialize
access to it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from sidekick.autocomplete.frequency import FrequencyTable
from sidekick.autocomplete.loader import read_query_log
from sidekick.autocomplete.prefix_cache import PrefixCache
from sidekick.autocomplete.ranking import TOP_K, RankedList, Scorer
from sidekick.autocomplete.trie import CompressedTrie
from sidekick.config.settings import AutocompleteSettings, get_settings
from sidekick.preprocessing.normalizer import normalize_keystroke, normalize_query

logger = logging.getLogger(__name__)


class CursorError(ValueError):
    """A keystroke index that does not continue the current session."""


class GuessSession:
    """Prefix typed so far in the query currently being entered."""

    __slots__ = ("prefix", "keystrokes")

    def __init__(self) -> None:
        self.prefix = ""
        self.keystrokes = 0

    def advance(self, character: str, index: int) -> str:
        """
        Append *character* typed at position *index* and return the new prefix.

        Index 0 starts a new query. Any other index must equal the number
        of keystrokes accepted since then.
        """
        if index < 0:
            raise CursorError(f"keystroke index must be non-negative, got {index}")
        if index != 0 and index != self.keystrokes:
            raise CursorError(
                f"keystroke index {index} does not follow the current query "
                f"({self.keystrokes} characters typed)"
            )

        ch = normalize_keystroke(character)
        if index == 0:
            self.prefix = ch
            self.keystrokes = 1
        else:
            self.prefix += ch
            self.keystrokes += 1
        return self.prefix

    def reset(self) -> None:
        self.prefix = ""
        self.keystrokes = 0


class QuerySidekick:
    """Suggest five completions per keystroke and learn from final selections."""

    def __init__(self, ac_settings: Optional[AutocompleteSettings] = None) -> None:
        self._ac = ac_settings or get_settings().autocomplete
        self._frequencies = FrequencyTable()
        self._scorer = Scorer(self._frequencies)
        self._trie = CompressedTrie(self._frequencies, self._scorer)
        self._global_top = RankedList()
        self._cache: Optional[PrefixCache] = None
        if self._ac.use_prefix_cache:
            self._cache = PrefixCache(self._scorer, max_length=self._ac.prefix_cache_depth)
        self._session = GuessSession()

    @property
    def frequencies(self) -> FrequencyTable:
        return self._frequencies

    @property
    def trie(self) -> CompressedTrie:
        return self._trie

    @property
    def prefix_cache(self) -> Optional[PrefixCache]:
        return self._cache

    @property
    def global_top(self) -> list[str]:
        """The most frequent queries overall, best first."""
        return self._global_top.as_list()

    @property
    def current_prefix(self) -> str:
        return self._session.prefix

    # ---- bulk phase ----

    def process_old_queries(self, path: Path) -> dict:
        """
        Load the historical query log at *path* and index every query in it.

        A read failure propagates and leaves the engine untouched.
        Returns a summary dict.
        """
        counts, lines = read_query_log(path)
        self._frequencies.update(counts)
        self._index(self._frequencies.by_frequency())

        logger.info(
            "Indexed %s: %d queries, %d distinct, %d trie nodes",
            path, lines, self._trie.size, self._trie.node_count,
        )
        return {
            "source": str(path),
            "queries": lines,
            "distinct": self._trie.size,
            "nodes": self._trie.node_count,
        }

    def add_queries(self, queries: Iterable[str]) -> int:
        """
        Count and index raw *queries* as if they came from a log.

        Returns the number of non-blank queries counted.
        """
        counts = FrequencyTable()
        for raw in queries:
            query = normalize_query(raw)
            if query:
                counts.increment(query)
        self._frequencies.update(counts)
        self._index(self._frequencies.by_frequency())
        return sum(c for _, c in counts.items())

    def _index(self, ordered: list[str]) -> None:
        """Insert *ordered* (most frequent first) into the trie and fallbacks."""
        for query in ordered:
            self._trie.insert(query)

        self._global_top = RankedList()
        for query in ordered[:TOP_K]:
            self._global_top.consider(query, self._scorer.frequency)

        if self._cache is not None:
            self._cache.rebuild(ordered)

    # ---- guessing ----

    def guess(self, character: str, index: int) -> list[str]:
        """
        Five suggestions after *character* is typed at position *index*.

        Index 0 starts a new query. The result always has exactly five
        entries, best first, padded with empty strings.
        """
        prefix = self._session.advance(character, index)
        return self.suggest(prefix)

    def suggest(self, prefix: str) -> list[str]:
        """Five suggestions for a whole typed *prefix*, without touching the session."""
        prefix = prefix.lower()
        if not prefix:
            return self._global_top.padded()

        if self._cache is not None:
            cached = self._cache.lookup(prefix)
            if cached is not None:
                return cached.padded()

        reached = self._trie.locate(prefix)
        source = reached.top if len(reached.top) else self._global_top

        ranked = self._scorer.rank_live(source, prefix)
        return RankedList(ranked).padded()

    def reset(self) -> None:
        """Forget the prefix of the query being typed."""
        self._session.reset()

    # ---- feedback ----

    def feedback(self, is_correct: bool, query: Optional[str]) -> None:
        """
        Record the user's final *query*.

        Correct guesses add ``correct_feedback_boost`` to its frequency,
        anything else ``incorrect_feedback_boost``. The query is then
        re-inserted so every node on its path re-ranks it.
        """
        query = normalize_query(query)
        if not query:
            return

        boost = self._ac.correct_feedback_boost if is_correct else self._ac.incorrect_feedback_boost
        count = self._frequencies.increment(query, boost)
        self._trie.insert(query)

        if self._ac.refresh_fallbacks_on_feedback:
            self._global_top.consider(query, self._scorer.frequency)
            if self._cache is not None:
                self._cache.add(query)

        logger.debug("Feedback for %r (correct=%s): frequency now %d", query, is_correct, count)
