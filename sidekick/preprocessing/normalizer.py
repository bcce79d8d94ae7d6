"""
Query normalization shared by the log loader, feedback, and guessing.

Every character is kept as-is apart from case: digits, punctuation and
non-ASCII letters are ordinary trie characters.
"""

from __future__ import annotations

import re

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_query(text: str | None) -> str:
    """Lower-case *text*, collapse whitespace runs to one space, and strip it."""
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text.lower()).strip()


def normalize_keystroke(character: str) -> str:
    """Normalize a single typed character the same way query text is cased."""
    if not isinstance(character, str) or len(character) != 1:
        raise ValueError(f"expected a single character, got {character!r}")
    return character.lower()
