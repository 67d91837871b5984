"""
===============================================================================
MODULE: Standard HTTP error responses
===============================================================================

Goal
----
Every HTTP error leaves the API with the same body shape so that:
- clients can read the human "error" text (and "details" for validation)
- clients can branch on the stable "code"
- operators can correlate by request_id

Body:
  {"error": str, "code": str, "message"?: str, "details"?: [str],
   "request_id"?: str}

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Component:
  AppHTTPException + factories + handler

Responsibilities:
  - Define the error code catalogue (ErrorCode)
  - Build the body (ErrorBody)
  - Provide factories for the errors the API emits
  - Provide the FastAPI handler that renders AppHTTPException

Collaborators:
  - crosscutting/middleware.py (request_id, 413)
  - api/exception_handlers.py (maps framework and internal errors)
  - interfaces/api/http/error_mapping.py (maps use-case errors)
===============================================================================
"""

from __future__ import annotations

from enum import Enum

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ErrorCode(str, Enum):
    # 4xx
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_ID = "INVALID_ID"
    NOT_FOUND = "NOT_FOUND"
    ROUTE_NOT_FOUND = "ROUTE_NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"

    # 5xx
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"


class ErrorBody(BaseModel):
    """
    Error payload.

    - error: short human message (stable texts, e.g. "Bug not found")
    - message: longer explanation where one exists
    - details: validation messages in rule order
    """

    error: str
    code: ErrorCode
    message: str | None = None
    details: list[str] | None = None
    request_id: str | None = None


_OPENAPI_ERROR_CONTENT = {
    "application/json": {"schema": {"$ref": "#/components/schemas/ErrorBody"}}
}

OPENAPI_ERROR_RESPONSES = {
    "400": {
        "description": "Bad Request",
        "model": ErrorBody,
        "content": _OPENAPI_ERROR_CONTENT,
    },
    "404": {
        "description": "Not Found",
        "model": ErrorBody,
        "content": _OPENAPI_ERROR_CONTENT,
    },
    "413": {
        "description": "Payload Too Large",
        "model": ErrorBody,
        "content": _OPENAPI_ERROR_CONTENT,
    },
    "500": {
        "description": "Internal Server Error",
        "model": ErrorBody,
        "content": _OPENAPI_ERROR_CONTENT,
    },
}


class AppHTTPException(HTTPException):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Class:
      AppHTTPException

    Responsibilities:
      - Attach a stable ErrorCode
      - Carry validation details and an optional longer message

    Collaborators:
      - app_exception_handler()
    ----------------------------------------------------------------------------
    """

    def __init__(
        self,
        status_code: int,
        code: ErrorCode,
        error: str,
        details: list[str] | None = None,
        message: str | None = None,
    ):
        super().__init__(status_code=status_code, detail=error)
        self.code = code
        self.error = error
        self.details = details
        self.message = message


# ---------------------------------------------------------------------------
# Error factories
# ---------------------------------------------------------------------------
def validation_failed(details: list[str]) -> AppHTTPException:
    return AppHTTPException(
        400, ErrorCode.VALIDATION_ERROR, "Validation failed", details=list(details)
    )


def invalid_id(resource: str = "bug") -> AppHTTPException:
    return AppHTTPException(400, ErrorCode.INVALID_ID, f"Invalid {resource} ID format")


def not_found(resource: str = "Bug") -> AppHTTPException:
    return AppHTTPException(404, ErrorCode.NOT_FOUND, f"{resource} not found")


def route_not_found(method: str, path: str) -> AppHTTPException:
    return AppHTTPException(
        404,
        ErrorCode.ROUTE_NOT_FOUND,
        "Not Found",
        message=f"Route {method} {path} not found",
    )


def method_not_allowed(method: str, path: str) -> AppHTTPException:
    return AppHTTPException(
        405,
        ErrorCode.METHOD_NOT_ALLOWED,
        "Method Not Allowed",
        message=f"Method {method} not allowed on {path}",
    )


def payload_too_large(max_bytes: int) -> AppHTTPException:
    return AppHTTPException(
        413,
        ErrorCode.PAYLOAD_TOO_LARGE,
        "Payload Too Large",
        message=f"Request body exceeds the maximum of {max_bytes} bytes",
    )


def store_unavailable() -> AppHTTPException:
    return AppHTTPException(500, ErrorCode.DATABASE_ERROR, "Internal server error")


def internal_error(message: str = "Something went wrong") -> AppHTTPException:
    return AppHTTPException(
        500, ErrorCode.INTERNAL_ERROR, "Internal Server Error", message=message
    )


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------
def request_id_from(request: Request) -> str | None:
    return getattr(getattr(request, "state", None), "request_id", None)


def render_error(
    exc: AppHTTPException, *, request_id: str | None = None
) -> dict[str, object]:
    body = ErrorBody(
        error=exc.error,
        code=exc.code,
        message=exc.message,
        details=exc.details,
        request_id=request_id,
    )
    return body.model_dump(mode="json", exclude_none=True)


async def app_exception_handler(
    request: Request, exc: AppHTTPException
) -> JSONResponse:
    """Render AppHTTPException, propagating optional headers."""
    return JSONResponse(
        status_code=exc.status_code,
        content=render_error(exc, request_id=request_id_from(request)),
        headers=getattr(exc, "headers", None),
    )
