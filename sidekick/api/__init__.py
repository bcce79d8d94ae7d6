"""FastAPI REST surface over a single shared Query Sidekick session."""

from sidekick.api.app import create_app

__all__ = ["create_app"]
