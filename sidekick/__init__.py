"""Query Sidekick: per-keystroke query autocomplete backed by a compressed trie."""

__version__ = "0.1.0"
