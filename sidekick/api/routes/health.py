"""Health and stats routes."""

from __future__ import annotations

from fastapi import APIRouter, Request

from sidekick.api.schemas import StatsResponse

router = APIRouter(tags=["system"])


@router.get("/health")
def health() -> dict:
    """Simple liveness check."""
    return {"status": "ok"}


@router.get("/stats", response_model=StatsResponse)
def stats(request: Request) -> StatsResponse:
    """Return index statistics."""
    sidekick = request.app.state.sidekick
    with request.app.state.sidekick_lock:
        cache = sidekick.prefix_cache
        return StatsResponse(
            distinct_queries=sidekick.trie.size,
            trie_nodes=sidekick.trie.node_count,
            prefix_cache_entries=len(cache) if cache is not None else 0,
            global_top=sidekick.global_top,
        )
