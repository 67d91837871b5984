"""
Name: Latency stopwatch

Responsibilities:
  - Measure wall time with perf_counter for request and store-operation logs

Collaborators:
  - crosscutting/middleware.py (request latency)
  - infrastructure/repositories/mongo_bug_repository.py (operation latency)

Notes:
  - elapsed_ms keeps counting until stop(), so it can be read mid-flight
"""

from __future__ import annotations

import time


class Timer:
    __slots__ = ("_started", "_stopped")

    def __init__(self) -> None:
        self._started: float | None = None
        self._stopped: float | None = None

    def start(self) -> "Timer":
        self._started, self._stopped = time.perf_counter(), None
        return self

    def stop(self) -> "Timer":
        if self._started is None:
            raise RuntimeError("Timer not started")
        self._stopped = time.perf_counter()
        return self

    @property
    def elapsed_ms(self) -> float:
        if self._started is None:
            return 0.0
        end = self._stopped if self._stopped is not None else time.perf_counter()
        return round((end - self._started) * 1000, 2)

    def __enter__(self) -> "Timer":
        return self.start()

    def __exit__(self, *exc_info) -> None:
        self.stop()
