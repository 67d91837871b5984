"""
===============================================================================
BUG USE CASE RESULTS
===============================================================================

Typed outcomes shared by the bug use cases. Expected failures travel as a
BugError inside the result; the HTTP layer maps BugErrorCode to status codes.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Final

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....domain.entities import Bug

RESOURCE_BUG: Final[str] = "Bug"


class BugErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_ID = "INVALID_ID"
    NOT_FOUND = "NOT_FOUND"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"


@dataclass(frozen=True)
class BugError:
    code: BugErrorCode
    message: str
    details: tuple[str, ...] = ()
    error_id: str | None = None


@dataclass
class ListBugsResult:
    bugs: list[Bug] = field(default_factory=list)
    page: int = 1
    limit: int = 10
    total: int = 0
    pages: int = 0
    error: BugError | None = None


@dataclass
class GetBugResult:
    bug: Bug | None = None
    error: BugError | None = None


@dataclass
class CreateBugResult:
    bug: Bug | None = None
    error: BugError | None = None


@dataclass
class UpdateBugResult:
    bug: Bug | None = None
    error: BugError | None = None


@dataclass
class DeleteBugResult:
    deleted: bool = False
    error: BugError | None = None


def validation_error(errors: list[str]) -> BugError:
    return BugError(
        code=BugErrorCode.VALIDATION_ERROR,
        message="Validation failed",
        details=tuple(errors),
    )


def invalid_id() -> BugError:
    return BugError(code=BugErrorCode.INVALID_ID, message="Invalid bug ID format")


def not_found() -> BugError:
    return BugError(code=BugErrorCode.NOT_FOUND, message=f"{RESOURCE_BUG} not found")


def store_unavailable(exc: DatabaseError, *, operation: str) -> BugError:
    """Log the store failure with its error_id and turn it into a BugError."""
    logger.error(
        "record store failure",
        extra={
            "operation": operation,
            "error_id": exc.error_id,
            "error_code": exc.error_code,
            "error_message": exc.message,
            "original_error": repr(exc.original_error) if exc.original_error else None,
        },
    )
    return BugError(
        code=BugErrorCode.STORE_UNAVAILABLE,
        message="Internal server error",
        error_id=exc.error_id,
    )
