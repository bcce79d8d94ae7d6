"""FastAPI application factory."""

from __future__ import annotations

import logging
import threading

from fastapi import FastAPI

from sidekick.api.routes.autocomplete import router as autocomplete_router
from sidekick.api.routes.feedback import router as feedback_router
from sidekick.api.routes.health import router as health_router
from sidekick.autocomplete.engine import QuerySidekick
from sidekick.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    sidekick: QuerySidekick | None = None,
) -> FastAPI:
    """
    Build and return a fully wired FastAPI application.

    Without an explicit *sidekick*, the historical query log at
    ``settings.query_log_path`` is loaded; a missing log is fatal.
    """
    settings = settings or get_settings()

    if sidekick is None:
        sidekick = QuerySidekick(ac_settings=settings.autocomplete)
        sidekick.process_old_queries(settings.query_log_path)

    app = FastAPI(
        title="Query Sidekick API",
        version="0.1.0",
        description="Per-keystroke query autocomplete",
    )

    # Shared state, read by routes through request.app.state.
    # The engine keeps one typing session; the lock serializes every call.
    app.state.settings = settings
    app.state.sidekick = sidekick
    app.state.sidekick_lock = threading.Lock()

    app.include_router(health_router)
    app.include_router(autocomplete_router)
    app.include_router(feedback_router)

    logger.info("API ready with %d distinct queries", sidekick.trie.size)
    return app
