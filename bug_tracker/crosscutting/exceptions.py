"""
===============================================================================
MODULE: Typed internal exceptions
===============================================================================

Internal errors carry:
- a stable error_code
- an error_id for correlating the HTTP response with the log line
- a human message (never the raw driver error)

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Component:
  BugTrackerError + subclasses

Responsibilities:
  - Standardize infrastructure failures before they reach the use cases
  - Generate error_id for tracing

Collaborators:
  - infrastructure/* (raise)
  - application/usecases/bugs/* (convert to typed results)
  - api/exception_handlers.py (last-resort mapping)
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4


class BugTrackerError(Exception):
    """Base for internal errors with error_code + error_id + message."""

    error_code: str = "BUG_TRACKER_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)


class DatabaseError(BugTrackerError):
    """Record store failures (connection, query, timeout)."""

    error_code: str = "DATABASE_ERROR"
