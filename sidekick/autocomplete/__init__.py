"""Autocomplete package: compressed trie, ranking, and the guess/feedback engine."""

from sidekick.autocomplete.engine import CursorError, GuessSession, QuerySidekick
from sidekick.autocomplete.frequency import FrequencyTable
from sidekick.autocomplete.prefix_cache import PrefixCache
from sidekick.autocomplete.ranking import TOP_K, RankedList, Scorer
from sidekick.autocomplete.trie import CompressedTrie, EdgeLabel, TrieInvariantError, TrieNode

__all__ = [
    "CompressedTrie",
    "CursorError",
    "EdgeLabel",
    "FrequencyTable",
    "GuessSession",
    "PrefixCache",
    "QuerySidekick",
    "RankedList",
    "Scorer",
    "TOP_K",
    "TrieInvariantError",
    "TrieNode",
]
