"""
===============================================================================
MODULE: HTTP middlewares (request context + payload limit)
===============================================================================

1) RequestContextMiddleware:
   - Generate/propagate X-Request-Id
   - Set contextvars (method/path) for log correlation
   - Log every request on arrival and on completion with its latency

2) BodyLimitMiddleware:
   - Reject oversized bodies (Content-Length and chunked uploads)

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Components:
  - RequestContextMiddleware
  - BodyLimitMiddleware

Collaborators:
  - bug_tracker/context.py
  - crosscutting/error_responses.py
  - crosscutting/logger.py
===============================================================================
"""

from __future__ import annotations

import json
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ..context import clear_context, set_request_context
from .error_responses import payload_too_large, render_error
from .logger import logger
from .timing import Timer

_MAX_REQUEST_ID_LEN = 128


def _resolve_request_id(raw: str | None) -> str:
    incoming = (raw or "").strip()
    if incoming and len(incoming) <= _MAX_REQUEST_ID_LEN:
        return incoming
    return str(uuid.uuid4())


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Class:
      RequestContextMiddleware

    Responsibilities:
      - Accept or generate X-Request-Id and echo it on the response
      - Set contextvars for log correlation
      - Log "request started" / "request completed" (status + latency)
      - With verbose=True also log query params and headers (development)
      - Always clear_context() to avoid leaks between requests

    Collaborators:
      - crosscutting.logger
      - crosscutting.timing.Timer
    ----------------------------------------------------------------------------
    """

    _QUIET_PATHS = {"/health"}

    def __init__(self, app, verbose: bool = False):
        super().__init__(app)
        self._verbose = verbose

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = _resolve_request_id(request.headers.get("x-request-id"))
        request.state.request_id = request_id
        token = set_request_context(
            request_id=request_id, method=request.method, path=request.url.path
        )
        loud = request.url.path not in self._QUIET_PATHS

        if loud:
            logger.info("request started", extra=self._arrival_fields(request))

        status_code = 500
        with Timer() as timer:
            try:
                response = await call_next(request)
            except Exception:
                logger.exception("request failed", extra={"latency_ms": timer.elapsed_ms})
                raise
            else:
                status_code = response.status_code
                response.headers["x-request-id"] = request_id
                return response
            finally:
                if loud:
                    logger.info(
                        "request completed",
                        extra={"status_code": status_code, "latency_ms": timer.elapsed_ms},
                    )
                clear_context(token)

    def _arrival_fields(self, request: Request) -> dict[str, object]:
        if not self._verbose:
            return {}
        return {"query": dict(request.query_params), "headers": dict(request.headers)}


class _BodyTooLarge(Exception):
    pass


class BodyLimitMiddleware:
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Class:
      BodyLimitMiddleware

    Responsibilities:
      - Reject requests whose body exceeds max_bytes with a 413
      - Works with Content-Length and with chunked transfer

    Collaborators:
      - crosscutting.error_responses (body shape)
      - crosscutting.logger
    ----------------------------------------------------------------------------
    """

    def __init__(self, app, max_bytes: int):
        self.app = app
        self._max_bytes = max_bytes

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = {k.decode().lower(): v.decode() for k, v in scope.get("headers", [])}
        path = scope.get("path", "")
        request_id = _resolve_request_id(headers.get("x-request-id"))

        declared = headers.get("content-length")
        if declared and declared.isdigit() and int(declared) > self._max_bytes:
            logger.warning(
                "payload too large (content-length)",
                extra={
                    "content_length": declared,
                    "max_bytes": self._max_bytes,
                    "path": path,
                },
            )
            await self._send_413(send, request_id=request_id)
            return

        started = False
        received = 0

        async def send_wrapper(message):
            nonlocal started
            if message["type"] == "http.response.start":
                started = True
            await send(message)

        async def receive_limited():
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b"") or b"")
                if received > self._max_bytes:
                    raise _BodyTooLarge()
            return message

        try:
            await self.app(scope, receive_limited, send_wrapper)
        except _BodyTooLarge:
            if started:
                logger.error(
                    "payload exceeded limit after response start",
                    extra={"path": path},
                )
                raise
            logger.warning(
                "payload too large (streaming)",
                extra={
                    "received_bytes": received,
                    "max_bytes": self._max_bytes,
                    "path": path,
                },
            )
            await self._send_413(send, request_id=request_id)

    async def _send_413(self, send, *, request_id: str) -> None:
        content = render_error(
            payload_too_large(self._max_bytes), request_id=request_id
        )
        body = json.dumps(content, ensure_ascii=False).encode("utf-8")

        await send(
            {
                "type": "http.response.start",
                "status": 413,
                "headers": [
                    (b"content-type", b"application/json"),
                    (b"content-length", str(len(body)).encode()),
                    (b"x-request-id", request_id.encode()),
                ],
            }
        )
        await send({"type": "http.response.body", "body": body})
