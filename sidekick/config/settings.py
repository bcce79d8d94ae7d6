"""
Central configuration for Query Sidekick.

All tunables live here. Ranking constants that define the scoring
formula are fixed in ``sidekick.autocomplete.ranking`` instead.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path


def _project_root() -> Path:
    """Walk up from this file to find the project root (where pyproject.toml lives)."""
    current = Path(__file__).resolve().parent
    while current != current.parent:
        if (current / "pyproject.toml").exists():
            return current
        current = current.parent
    # Fallback: two levels up from config/settings.py
    return Path(__file__).resolve().parent.parent.parent


@dataclass(frozen=True)
class AutocompleteSettings:
    """Settings for the guess engine and feedback loop."""

    # Serve 1..prefix_cache_depth character prefixes from direct lookup tables
    use_prefix_cache: bool = True

    # Longest prefix held by the prefix cache (1 to 3)
    prefix_cache_depth: int = 3

    # Frequency added when the user confirms a suggestion was correct
    correct_feedback_boost: int = 5

    # Frequency added for any other final selection
    incorrect_feedback_boost: int = 1

    # Also refresh the global top-5 and the prefix cache on feedback
    refresh_fallbacks_on_feedback: bool = True

    def __post_init__(self) -> None:
        if not 1 <= self.prefix_cache_depth <= 3:
            raise ValueError(
                f"prefix_cache_depth must be between 1 and 3, got {self.prefix_cache_depth}"
            )
        if self.correct_feedback_boost < 0 or self.incorrect_feedback_boost < 0:
            raise ValueError("feedback boosts must be non-negative")


@dataclass
class Settings:
    """
    Top-level settings container.

    Usage:
        settings = get_settings()
        print(settings.autocomplete.prefix_cache_depth)
        print(settings.query_log_path)
    """

    project_root: Path = field(default_factory=_project_root)
    autocomplete: AutocompleteSettings = field(default_factory=AutocompleteSettings)

    # File name of the historical query log inside data_dir
    query_log_name: str = "old_queries.txt"

    @property
    def data_dir(self) -> Path:
        """Root directory for runtime data (query logs, log files)."""
        return self.project_root / "data"

    @property
    def query_log_path(self) -> Path:
        """Historical query log loaded at startup, one raw query per line."""
        return self.data_dir / self.query_log_name

    @property
    def logs_dir(self) -> Path:
        """Root directory for log files."""
        return self.data_dir / "logs"

    def ensure_dirs(self) -> None:
        """Create all required data directories if they don't exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.logs_dir.mkdir(parents=True, exist_ok=True)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Returns the singleton Settings instance.

    Call this instead of constructing Settings() directly so the entire
    application shares one config object.
    """
    settings = Settings()
    settings.ensure_dirs()
    return settings
