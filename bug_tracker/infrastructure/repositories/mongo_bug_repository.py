"""
============================================================
CRC CARD — infrastructure/repositories/mongo_bug_repository.py
============================================================
Class: MongoBugRepository

Responsibilities:
  - Persist bug records in a MongoDB collection (motor, async).
  - Map documents <-> domain.entities.Bug.
  - Translate driver failures into DatabaseError.
  - Log every operation with its latency at debug level.

Collaborators:
  - infrastructure.db.mongo.MongoStore (owns the client)
  - domain.repositories.BugRepository (contract)
  - crosscutting.timing.Timer

Document shape:
  {_id: ObjectId, title, description, status, priority, reporter,
   assignee, tags, createdAt, updatedAt}
============================================================
"""

from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator, Mapping

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from ...crosscutting.exceptions import DatabaseError
from ...crosscutting.logger import logger
from ...crosscutting.timing import Timer
from ...domain.entities import Bug, BugPriority, BugStatus

_SORT = [("createdAt", DESCENDING), ("_id", DESCENDING)]


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _object_id(bug_id: str) -> ObjectId | None:
    try:
        return ObjectId(bug_id)
    except (InvalidId, TypeError):
        return None


def _build_filter(status: str | None, priority: str | None) -> dict[str, Any]:
    query: dict[str, Any] = {}
    if status:
        query["status"] = status
    if priority:
        query["priority"] = priority
    return query


def _plain(value: Any) -> Any:
    # Enum members are stored by value.
    return getattr(value, "value", value)


def _to_document_fields(data: Mapping[str, Any]) -> dict[str, Any]:
    return {key: _plain(value) for key, value in data.items()}


def _to_entity(doc: Mapping[str, Any]) -> Bug:
    return Bug(
        id=str(doc["_id"]),
        title=doc["title"],
        description=doc["description"],
        reporter=doc["reporter"],
        status=BugStatus(doc.get("status") or BugStatus.OPEN),
        priority=BugPriority(doc.get("priority") or BugPriority.MEDIUM),
        assignee=doc.get("assignee"),
        tags=list(doc.get("tags") or []),
        created_at=_as_utc(doc["createdAt"]),
        updated_at=_as_utc(doc["updatedAt"]),
    )


class MongoBugRepository:
    """BugRepository backed by a motor collection."""

    def __init__(self, collection: AsyncIOMotorCollection):
        self._collection = collection

    @contextmanager
    def _operation(self, name: str, **extra: Any) -> Iterator[None]:
        timer = Timer().start()
        try:
            yield
        except PyMongoError as exc:
            logger.error(
                "mongodb operation failed",
                extra={"operation": name, "error_type": type(exc).__name__, **extra},
            )
            raise DatabaseError(
                f"Record store operation '{name}' failed", original_error=exc
            ) from exc
        finally:
            logger.debug(
                "mongodb operation",
                extra={"operation": name, "latency_ms": timer.elapsed_ms, **extra},
            )

    async def insert(self, data: Mapping[str, Any]) -> Bug:
        now = _now()
        doc = {
            "title": data["title"],
            "description": data["description"],
            "status": _plain(data.get("status") or BugStatus.OPEN),
            "priority": _plain(data.get("priority") or BugPriority.MEDIUM),
            "reporter": data["reporter"],
            "assignee": data.get("assignee"),
            "tags": list(data.get("tags") or []),
            "createdAt": now,
            "updatedAt": now,
        }
        with self._operation("insert"):
            result = await self._collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return _to_entity(doc)

    async def get(self, bug_id: str) -> Bug | None:
        oid = _object_id(bug_id)
        if oid is None:
            return None
        with self._operation("find_one", bug_id=bug_id):
            doc = await self._collection.find_one({"_id": oid})
        return _to_entity(doc) if doc else None

    async def list_bugs(
        self,
        *,
        status: str | None = None,
        priority: str | None = None,
        skip: int = 0,
        limit: int = 10,
    ) -> list[Bug]:
        query = _build_filter(status, priority)
        with self._operation("find", skip=skip, limit=limit):
            cursor = self._collection.find(query).sort(_SORT).skip(skip).limit(limit)
            docs = await cursor.to_list(length=limit)
        return [_to_entity(doc) for doc in docs]

    async def count(
        self, *, status: str | None = None, priority: str | None = None
    ) -> int:
        with self._operation("count_documents"):
            return await self._collection.count_documents(
                _build_filter(status, priority)
            )

    async def update(self, bug_id: str, changes: Mapping[str, Any]) -> Bug | None:
        oid = _object_id(bug_id)
        if oid is None:
            return None
        fields = {**_to_document_fields(changes), "updatedAt": _now()}
        with self._operation("find_one_and_update", bug_id=bug_id):
            doc = await self._collection.find_one_and_update(
                {"_id": oid},
                {"$set": fields},
                return_document=ReturnDocument.AFTER,
            )
        return _to_entity(doc) if doc else None

    async def delete(self, bug_id: str) -> bool:
        oid = _object_id(bug_id)
        if oid is None:
            return False
        with self._operation("delete_one", bug_id=bug_id):
            result = await self._collection.delete_one({"_id": oid})
        return result.deleted_count > 0
