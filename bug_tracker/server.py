"""
Name: Server runner

Responsibilities:
  - Run the ASGI app with uvicorn on HOST:PORT
  - Treat unexpected failures as process-fatal:
      * uncaught exceptions (sys.excepthook)
      * errors escaping background asyncio tasks (loop exception handler)
    Both are logged at critical level and the process exits non-zero
  - Exit non-zero when startup fails (e.g. MongoDB unreachable)

Collaborators:
  - uvicorn (Config + Server)
  - api.main.app
  - crosscutting.config / crosscutting.logger
"""

from __future__ import annotations

import asyncio
import sys
from types import TracebackType
from typing import Any

import uvicorn

from .crosscutting.config import Settings, get_settings
from .crosscutting.logger import logger

EXIT_FATAL = 1
EXIT_STARTUP_FAILURE = 3


def _log_uncaught(
    exc_type: type[BaseException],
    exc: BaseException,
    tb: TracebackType | None,
) -> None:
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc, tb)
        return
    logger.critical("uncaught exception", exc_info=(exc_type, exc, tb))


class _FatalLoopErrors:
    """Loop exception handler that logs and asks the server to stop."""

    def __init__(self, server: uvicorn.Server) -> None:
        self._server = server
        self.triggered = False

    def __call__(self, loop: asyncio.AbstractEventLoop, context: dict[str, Any]) -> None:
        exc = context.get("exception")
        logger.critical(
            "unhandled error in background task",
            exc_info=(type(exc), exc, exc.__traceback__) if exc else None,
            extra={"loop_message": context.get("message")},
        )
        self.triggered = True
        self._server.should_exit = True


async def _serve(server: uvicorn.Server) -> _FatalLoopErrors:
    handler = _FatalLoopErrors(server)
    asyncio.get_running_loop().set_exception_handler(handler)
    await server.serve()
    return handler


def build_server(settings: Settings) -> uvicorn.Server:
    config = uvicorn.Config(
        "bug_tracker.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
    return uvicorn.Server(config)


def main() -> None:
    settings = get_settings()
    sys.excepthook = _log_uncaught

    server = build_server(settings)
    logger.info(
        "server starting",
        extra={"host": settings.host, "port": settings.port, "app_env": settings.app_env},
    )
    handler = asyncio.run(_serve(server))

    if not server.started:
        logger.critical("server failed to start")
        sys.exit(EXIT_STARTUP_FAILURE)
    if handler.triggered:
        sys.exit(EXIT_FATAL)


if __name__ == "__main__":
    main()
