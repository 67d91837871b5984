"""
Name: MongoDB connection (MongoStore)

Responsibilities:
  - Own one AsyncIOMotorClient for the lifetime of the service
  - Verify connectivity at startup (ping with retry + backoff)
  - Hand out the bugs collection
  - Close the client on shutdown

Collaborators:
  - motor: async MongoDB driver
  - tenacity: startup retry with exponential backoff + jitter
  - config.Settings: URI, database, collection, timeouts, retry bounds
  - container.ServiceContext: calls connect() / close()

Constraints:
  - No module-level client; the instance is owned by the service context
  - connect() raises DatabaseError after the last failed attempt
"""

from __future__ import annotations

from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
)
from pymongo.errors import PyMongoError
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    wait_random,
)

from ...crosscutting.config import Settings
from ...crosscutting.exceptions import DatabaseError
from ...crosscutting.logger import logger


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "mongodb ping failed, retrying",
        extra={
            "attempt": retry_state.attempt_number,
            "error_type": type(exc).__name__ if exc else None,
            "error": str(exc) if exc else None,
        },
    )


class MongoStore:
    """Owned MongoDB client plus the collection used by the bug repository."""

    def __init__(self, settings: Settings, client: AsyncIOMotorClient | None = None):
        self._settings = settings
        self._client = client or AsyncIOMotorClient(
            settings.mongodb_uri,
            serverSelectionTimeoutMS=settings.mongodb_timeout_ms,
            tz_aware=True,
        )

    @property
    def database(self) -> AsyncIOMotorDatabase:
        return self._client[self._settings.get_database_name()]

    @property
    def bugs(self) -> AsyncIOMotorCollection:
        return self.database[self._settings.mongodb_collection]

    async def ping(self) -> None:
        try:
            await self._client.admin.command("ping")
        except PyMongoError as exc:
            raise DatabaseError("MongoDB is unreachable", original_error=exc) from exc

    async def connect(self) -> None:
        """Ping until the server answers or attempts run out."""
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._settings.mongodb_connect_attempts),
            wait=wait_exponential(
                multiplier=self._settings.retry_base_delay_seconds,
                max=self._settings.retry_max_delay_seconds,
            )
            + wait_random(0, self._settings.retry_base_delay_seconds),
            retry=retry_if_exception_type(DatabaseError),
            before_sleep=_log_retry,
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                await self.ping()

        logger.info(
            "mongodb connected",
            extra={
                "database": self._settings.get_database_name(),
                "collection": self._settings.mongodb_collection,
            },
        )

    async def ensure_indexes(self) -> None:
        try:
            await self.bugs.create_index([("createdAt", -1)])
            await self.bugs.create_index([("status", 1), ("priority", 1)])
        except PyMongoError as exc:
            raise DatabaseError("Index creation failed", original_error=exc) from exc

    def close(self) -> None:
        self._client.close()
        logger.info("mongodb connection closed")
