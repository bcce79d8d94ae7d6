from sidekick.preprocessing.normalizer import normalize_keystroke, normalize_query

__all__ = [
    "normalize_keystroke",
    "normalize_query",
]
