"""
============================================================
CRC CARD — infrastructure/repositories/in_memory_bug_repository.py
============================================================
Class: InMemoryBugRepository

Responsibilities:
  - Store bug records in memory (tests / local dev without MongoDB).
  - Generate ObjectId-shaped ids like the Mongo adapter.
  - Keep ordering deterministic and aligned with MongoDB:
      sort createdAt DESC, then _id DESC

Collaborators:
  - domain.entities.Bug
  - domain.repositories.BugRepository (contract)

Constraints / Notes:
  - Thread-safe: every read/write happens under a Lock.
  - Returns copies: callers never share the stored instances.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Dict, Iterable, List, Mapping, Optional

from bson import ObjectId

from ...domain.entities import Bug, BugPriority, BugStatus


class InMemoryBugRepository:
    """In-memory, thread-safe BugRepository."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._bugs: Dict[str, Bug] = {}

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    @staticmethod
    def _copy(bug: Bug) -> Bug:
        return replace(bug, tags=list(bug.tags))

    @classmethod
    def _sorted(cls, items: Iterable[Bug]) -> List[Bug]:
        # ObjectIds grow with insertion, so id DESC breaks created_at ties.
        return sorted(items, key=lambda b: (b.created_at, b.id), reverse=True)

    @staticmethod
    def _matches(bug: Bug, status: Optional[str], priority: Optional[str]) -> bool:
        if status and bug.status.value != status:
            return False
        if priority and bug.priority.value != priority:
            return False
        return True

    async def insert(self, data: Mapping[str, Any]) -> Bug:
        now = self._now()
        bug = Bug(
            id=str(ObjectId()),
            title=data["title"],
            description=data["description"],
            reporter=data["reporter"],
            status=BugStatus(data.get("status") or BugStatus.OPEN),
            priority=BugPriority(data.get("priority") or BugPriority.MEDIUM),
            assignee=data.get("assignee"),
            tags=list(data.get("tags") or []),
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            self._bugs[bug.id] = bug
        return self._copy(bug)

    async def get(self, bug_id: str) -> Bug | None:
        with self._lock:
            bug = self._bugs.get(bug_id.lower())
        return self._copy(bug) if bug else None

    async def list_bugs(
        self,
        *,
        status: str | None = None,
        priority: str | None = None,
        skip: int = 0,
        limit: int = 10,
    ) -> list[Bug]:
        with self._lock:
            values = list(self._bugs.values())
        ordered = self._sorted(b for b in values if self._matches(b, status, priority))
        return [self._copy(b) for b in ordered[skip : skip + limit]]

    async def count(
        self, *, status: str | None = None, priority: str | None = None
    ) -> int:
        with self._lock:
            return sum(1 for b in self._bugs.values() if self._matches(b, status, priority))

    async def update(self, bug_id: str, changes: Mapping[str, Any]) -> Bug | None:
        with self._lock:
            current = self._bugs.get(bug_id.lower())
            if current is None:
                return None
            fields = dict(changes)
            if "status" in fields:
                fields["status"] = BugStatus(fields["status"])
            if "priority" in fields:
                fields["priority"] = BugPriority(fields["priority"])
            if "tags" in fields:
                fields["tags"] = list(fields["tags"] or [])
            updated = replace(
                current, **fields, updated_at=max(self._now(), current.created_at)
            )
            self._bugs[updated.id] = updated
        return self._copy(updated)

    async def delete(self, bug_id: str) -> bool:
        with self._lock:
            return self._bugs.pop(bug_id.lower(), None) is not None
