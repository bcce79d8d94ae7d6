"""Feedback route."""

from __future__ import annotations

from fastapi import APIRouter, Request

from sidekick.api.schemas import FeedbackRequest, FeedbackResponse
from sidekick.preprocessing.normalizer import normalize_query

router = APIRouter(tags=["autocomplete"])


@router.post("/feedback", response_model=FeedbackResponse)
def feedback(request: Request, body: FeedbackRequest) -> FeedbackResponse:
    """Record the final query of a typing session."""
    sidekick = request.app.state.sidekick
    query = normalize_query(body.query)
    with request.app.state.sidekick_lock:
        sidekick.feedback(body.is_correct, query)
        sidekick.reset()
        frequency = sidekick.frequencies.get(query)

    return FeedbackResponse(query=query, frequency=frequency)
