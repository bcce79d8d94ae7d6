"""Guess and suggest routes."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, Request

from sidekick.api.schemas import GuessResponse, SuggestResponse

router = APIRouter(tags=["autocomplete"])


@router.get("/guess", response_model=GuessResponse)
def guess(
    request: Request,
    c: str = Query(..., min_length=1, max_length=1, description="Character just typed"),
    index: int = Query(..., ge=0, description="Position of the character in the query"),
) -> GuessResponse:
    """Advance the typing session by one keystroke and return five suggestions."""
    sidekick = request.app.state.sidekick
    with request.app.state.sidekick_lock:
        try:
            suggestions = sidekick.guess(c, index)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
        prefix = sidekick.current_prefix

    return GuessResponse(prefix=prefix, index=index, suggestions=suggestions)


@router.get("/suggest", response_model=SuggestResponse)
def suggest(
    request: Request,
    q: str = Query(..., min_length=1, max_length=200, description="Prefix to complete"),
) -> SuggestResponse:
    """Return five suggestions for a whole prefix without touching the session."""
    sidekick = request.app.state.sidekick
    with request.app.state.sidekick_lock:
        suggestions = sidekick.suggest(q)

    return SuggestResponse(prefix=q, suggestions=suggestions)
