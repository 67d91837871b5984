"""
===============================================================================
MODULE: Structured (JSON) logger with request context
===============================================================================

One JSON object per line, enriched with the current request (request_id,
method, path) and scrubbed before it leaves the process.

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Component:
  JSONFormatter + setup_logger()

Responsibilities:
  - Format LogRecords as JSON (extra fields included)
  - Enrich with request context
  - Scrub: secret-looking keys, credentials embedded in MongoDB URIs,
    oversized strings and deep structures

Collaborators:
  - bug_tracker/context.py (ContextVars)
  - crosscutting/config.py (level and format)
===============================================================================
"""

from __future__ import annotations

import json
import logging
import re
import sys
from datetime import datetime, timezone
from typing import Any

from ..context import get_context_dict
from .config import Settings, get_settings

REDACTED = "***REDACTED***"

# Attributes every LogRecord carries; anything else arrived through `extra`.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}

# Matched as substrings of the lower-cased key.
_SENSITIVE_FRAGMENTS = (
    "password",
    "passwd",
    "secret",
    "token",
    "authorization",
    "cookie",
    "api_key",
    "apikey",
    "api-key",
    "credential",
    "mongodb_uri",
    "connection_string",
)

_URI_CREDENTIALS = re.compile(r"(mongodb(?:\+srv)?://)[^@/\s]+@")

_MAX_STR = 8_000
_MAX_DEPTH = 4


def _is_sensitive(key: str | None) -> bool:
    if not key:
        return False
    lowered = key.lower()
    return any(fragment in lowered for fragment in _SENSITIVE_FRAGMENTS)


def scrub(value: Any, *, key: str | None = None, depth: int = 0) -> Any:
    """JSON-safe copy of `value` with secrets masked and sizes capped."""
    if _is_sensitive(key):
        return REDACTED
    if depth > _MAX_DEPTH:
        return "***TRUNCATED***"

    if isinstance(value, str):
        value = _URI_CREDENTIALS.sub(r"\1***@", value)
        if len(value) > _MAX_STR:
            return value[:_MAX_STR] + "…(truncated)"
        return value
    if isinstance(value, (bytes, bytearray)):
        return f"<bytes {len(value)}B>"
    if isinstance(value, dict):
        return {str(k): scrub(v, key=str(k), depth=depth + 1) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [scrub(v, key=key, depth=depth + 1) for v in value]
    if value is None or isinstance(value, (bool, int, float)):
        return value
    return str(value)


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": scrub(record.getMessage()),
            "source": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        payload.update(get_context_dict())

        payload.update(
            {
                name: scrub(value, key=name)
                for name, value in vars(record).items()
                if name not in _RESERVED_ATTRS
            }
        )

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc, _ = record.exc_info
            payload["exception"] = {
                "type": exc_type.__name__,
                "message": scrub(str(exc)),
                "stacktrace": self.formatException(record.exc_info),
            }

        return json.dumps(payload, ensure_ascii=False, default=str)


def _text_formatter() -> logging.Formatter:
    return logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s")


def setup_logger(name: str = "bug-tracker", settings: Settings | None = None) -> logging.Logger:
    """
    Configure the application logger once.

    LOG_LEVEL sets the threshold; LOG_JSON=false switches to plain text for
    local reading.
    """
    settings = settings or get_settings()
    log = logging.getLogger(name)
    log.setLevel(settings.log_level)

    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter() if settings.log_json else _text_formatter())
        log.addHandler(handler)

    return log


logger = setup_logger()
