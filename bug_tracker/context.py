"""
===============================================================================
CRC CARD — bug_tracker/context.py (request-scoped context)
===============================================================================

Responsibilities:
  - Hold the current request's identity (request id, method, path) in a
    ContextVar so every log line can carry it.
  - set_request_context() / get_context_dict() / clear_context().

Collaborators:
  - crosscutting.middleware: sets and clears it around each request.
  - crosscutting.logger: merges get_context_dict() into every record.

Constraints:
  - Empty string means "not available"; empty fields are left out of logs.
===============================================================================
"""

from __future__ import annotations

from contextvars import ContextVar, Token
from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class RequestContext:
    request_id: str = ""
    method: str = ""
    path: str = ""


_EMPTY = RequestContext()

_current: ContextVar[RequestContext] = ContextVar("request_context", default=_EMPTY)


def set_request_context(
    *, request_id: str = "", method: str = "", path: str = ""
) -> Token[RequestContext]:
    return _current.set(
        RequestContext(request_id=request_id or "", method=method or "", path=path or "")
    )


def get_context_dict() -> dict[str, str]:
    """Non-empty fields of the current context."""
    return {key: value for key, value in asdict(_current.get()).items() if value}


def clear_context(token: Token[RequestContext] | None = None) -> None:
    if token is not None:
        _current.reset(token)
    else:
        _current.set(_EMPTY)
