"""
===============================================================================
CRC CARD — bug_tracker/container.py (Composition Root / ServiceContext)
===============================================================================

Responsibilities:
  - Compose the runtime resources (settings, record store, repository).
  - Own their lifecycle: start() connects and starts the memory monitor,
    close() cancels the monitor and closes the connection.
  - Build the use cases on demand for the HTTP layer.
  - Choose the record store from Settings (memory in test environments).

Collaborators:
  - crosscutting.config.Settings
  - infrastructure.db.mongo.MongoStore
  - infrastructure.repositories.* (BugRepository adapters)
  - application.usecases.bugs.* (use cases)
  - api.main (lifespan drives start()/close(), app.state holds the context)

Notes:
  - No module-level connection: each app owns exactly one ServiceContext.
  - This file holds no business logic and does not import FastAPI.
===============================================================================
"""

from __future__ import annotations

import asyncio
import time

from .application.usecases.bugs import (
    CreateBugUseCase,
    DeleteBugUseCase,
    GetBugUseCase,
    ListBugsUseCase,
    UpdateBugUseCase,
)
from .crosscutting.config import Settings, get_settings
from .crosscutting.logger import logger
from .crosscutting.memory import memory_usage
from .domain.repositories import BugRepository
from .infrastructure.db.mongo import MongoStore
from .infrastructure.repositories import InMemoryBugRepository, MongoBugRepository


class ServiceContext:
    """Explicitly owned bundle of runtime resources for one application."""

    def __init__(
        self,
        settings: Settings,
        repository: BugRepository,
        store: MongoStore | None = None,
    ) -> None:
        self.settings = settings
        self.repository = repository
        self.store = store
        self._started_monotonic = time.monotonic()
        self._monitor: asyncio.Task | None = None

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------
    async def start(self) -> None:
        """Connect the record store; DatabaseError here is fatal for startup."""
        self._started_monotonic = time.monotonic()

        if self.store is not None:
            await self.store.connect()
            await self.store.ensure_indexes()

        if self.settings.is_development():
            self._monitor = asyncio.create_task(
                self._monitor_memory(self.settings.memory_log_interval_seconds),
                name="memory-monitor",
            )

    async def close(self) -> None:
        if self._monitor is not None:
            self._monitor.cancel()
            try:
                await self._monitor
            except asyncio.CancelledError:
                pass
            self._monitor = None

        if self.store is not None:
            self.store.close()

    @property
    def memory_monitor_running(self) -> bool:
        return self._monitor is not None and not self._monitor.done()

    def uptime_seconds(self) -> float:
        return round(time.monotonic() - self._started_monotonic, 3)

    @staticmethod
    async def _monitor_memory(interval: float) -> None:
        while True:
            logger.debug("memory usage", extra={"memory": memory_usage()})
            await asyncio.sleep(interval)

    # -------------------------------------------------------------------------
    # Use case factories
    # -------------------------------------------------------------------------
    def list_bugs_use_case(self) -> ListBugsUseCase:
        return ListBugsUseCase(self.repository, max_limit=self.settings.max_page_limit)

    def get_bug_use_case(self) -> GetBugUseCase:
        return GetBugUseCase(self.repository)

    def create_bug_use_case(self) -> CreateBugUseCase:
        return CreateBugUseCase(self.repository)

    def update_bug_use_case(self) -> UpdateBugUseCase:
        return UpdateBugUseCase(self.repository)

    def delete_bug_use_case(self) -> DeleteBugUseCase:
        return DeleteBugUseCase(self.repository)


def _use_memory_store(settings: Settings) -> bool:
    return settings.is_test() or settings.bug_store == "memory"


def build_service_context(
    settings: Settings | None = None,
    *,
    repository: BugRepository | None = None,
) -> ServiceContext:
    """
    Compose a ServiceContext.

    - repository given: use it as-is (tests)
    - test env or BUG_STORE=memory: in-memory repository
    - otherwise: MongoDB via motor
    """
    settings = settings or get_settings()

    if repository is not None:
        return ServiceContext(settings, repository)

    if _use_memory_store(settings):
        logger.info("using in-memory bug store")
        return ServiceContext(settings, InMemoryBugRepository())

    store = MongoStore(settings)
    return ServiceContext(settings, MongoBugRepository(store.bugs), store=store)
