"""
===============================================================================
CRC CARD — bug_tracker/api/exception_handlers.py (centralized error handling)
===============================================================================

Responsibilities:
  - Translate framework and internal exceptions into the standard error body.
  - Log errors with request_id / error_id and the request that caused them.
  - Never leak internals outside development.

Mapping:
  - AppHTTPException          -> as raised
  - RequestValidationError    -> 400 "Validation failed" (details per problem)
  - Starlette 404 / 405       -> "Not Found" / "Method Not Allowed" with route
  - DatabaseError             -> 500 "Internal server error"
  - anything else             -> 500 "Internal Server Error"

Collaborators:
  - crosscutting.error_responses
  - crosscutting.exceptions
  - crosscutting.logger
===============================================================================
"""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..crosscutting.config import Settings, get_settings
from ..crosscutting.error_responses import (
    AppHTTPException,
    ErrorCode,
    app_exception_handler,
    internal_error,
    method_not_allowed,
    request_id_from,
    route_not_found,
    store_unavailable,
    validation_failed,
)
from ..crosscutting.exceptions import DatabaseError
from ..crosscutting.logger import logger


def _settings_from(request: Request) -> Settings:
    services = getattr(request.app.state, "services", None)
    return services.settings if services is not None else get_settings()


def _format_validation_error(error: dict) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()))
    message = error.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details = [_format_validation_error(error) for error in exc.errors()]
    logger.info("request validation failed", extra={"validation_errors": details})
    return await app_exception_handler(request, validation_failed(details))


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    if exc.status_code == 404:
        app_exc = route_not_found(request.method, request.url.path)
    elif exc.status_code == 405:
        app_exc = method_not_allowed(request.method, request.url.path)
    else:
        code = (
            ErrorCode.INTERNAL_ERROR
            if exc.status_code >= 500
            else ErrorCode.VALIDATION_ERROR
        )
        app_exc = AppHTTPException(exc.status_code, code, str(exc.detail))
    app_exc.headers = getattr(exc, "headers", None)
    return await app_exception_handler(request, app_exc)


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    logger.error(
        "record store error",
        extra={
            "code": ErrorCode.DATABASE_ERROR.value,
            "error_id": exc.error_id,
            "error_message": exc.message,
            "request_id": request_id_from(request),
        },
    )
    return await app_exception_handler(request, store_unavailable())


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Fallback for untyped exceptions.

    - Full log with stacktrace, url, method and timestamp.
    - Exception text in the body only in development.
    """
    settings = _settings_from(request)

    logger.error(
        "unhandled exception",
        exc_info=(type(exc), exc, exc.__traceback__),
        extra={
            "request_id": request_id_from(request),
            "error": str(exc),
            "url": str(request.url),
            "http_method": request.method,
            "occurred_at": datetime.now(timezone.utc).isoformat(),
        },
    )

    message = str(exc) if settings.is_development() else "Something went wrong"
    return await app_exception_handler(request, internal_error(message))


def register_exception_handlers(app) -> None:
    """
    Register handlers on a FastAPI app.

    Exception is registered last as the catch-all.
    """
    app.add_exception_handler(AppHTTPException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(DatabaseError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = ["register_exception_handlers"]
