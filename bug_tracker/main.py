"""ASGI entry point: `uvicorn bug_tracker.main:app`."""

from .api.main import app

__all__ = ["app"]
