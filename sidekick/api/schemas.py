"""Pydantic response/request models for the API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class GuessResponse(BaseModel):
    """Five suggestions for the prefix typed so far."""

    prefix: str
    index: int
    suggestions: list[str]


class SuggestResponse(BaseModel):
    """Five suggestions for a whole prefix."""

    prefix: str
    suggestions: list[str]


class FeedbackRequest(BaseModel):
    """The user's final selection for the query just typed."""

    query: str = Field(..., max_length=500)
    is_correct: bool = False


class FeedbackResponse(BaseModel):
    """Frequency of the query after feedback was applied."""

    query: str
    frequency: int


class StatsResponse(BaseModel):
    """Index statistics."""

    distinct_queries: int
    trie_nodes: int
    prefix_cache_entries: int
    global_top: list[str]
