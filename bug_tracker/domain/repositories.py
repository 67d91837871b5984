"""
===============================================================================
CRC CARD — domain/repositories.py
===============================================================================

Module:
    Record store port (BugRepository)

Responsibilities:
    - Define the persistence contract the use cases depend on.
    - Keep the domain independent of the database driver.

Collaborators:
    - infrastructure.repositories.mongo_bug_repository (MongoDB adapter)
    - infrastructure.repositories.in_memory_bug_repository (tests/local)

Constraints:
    - Implementations raise DatabaseError for store failures.
    - Ids are 24-hex strings generated by the store.
===============================================================================
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol

from .entities import Bug


class BugRepository(Protocol):
    """Async persistence contract for bug records."""

    async def insert(self, data: Mapping[str, Any]) -> Bug:
        """R: Assign id and timestamps, persist and return the stored record."""
        ...

    async def get(self, bug_id: str) -> Bug | None:
        ...

    async def list_bugs(
        self,
        *,
        status: str | None = None,
        priority: str | None = None,
        skip: int = 0,
        limit: int = 10,
    ) -> list[Bug]:
        """R: Filtered page ordered by created_at descending."""
        ...

    async def count(
        self, *, status: str | None = None, priority: str | None = None
    ) -> int:
        ...

    async def update(self, bug_id: str, changes: Mapping[str, Any]) -> Bug | None:
        """R: Apply changes, refresh updated_at; None when the id is unknown."""
        ...

    async def delete(self, bug_id: str) -> bool:
        """R: Hard delete; False when the id is unknown."""
        ...
