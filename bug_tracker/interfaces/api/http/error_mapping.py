"""
===============================================================================
CRC CARD — error_mapping.py (use case error -> HTTP)
===============================================================================

Responsibilities:
  - Translate BugErrorCode into AppHTTPException.
  - Keep HTTP knowledge out of the application layer.

Collaborators:
  - application.usecases.bugs (BugError, BugErrorCode)
  - crosscutting.error_responses (factories)
===============================================================================
"""

from __future__ import annotations

from ....application.usecases.bugs import BugError, BugErrorCode
from ....crosscutting.error_responses import (
    AppHTTPException,
    invalid_id,
    not_found,
    store_unavailable,
    validation_failed,
)


def to_http_error(error: BugError) -> AppHTTPException:
    if error.code == BugErrorCode.VALIDATION_ERROR:
        return validation_failed(list(error.details))
    if error.code == BugErrorCode.INVALID_ID:
        return invalid_id("bug")
    if error.code == BugErrorCode.NOT_FOUND:
        return not_found("Bug")
    return store_unavailable()
