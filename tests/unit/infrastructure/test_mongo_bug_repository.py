"""
Name: MongoBugRepository Tests

Responsibilities:
  - Document <-> entity mapping
  - Query shape (filter, sort, skip, limit, $set with updatedAt)
  - PyMongoError -> DatabaseError translation
"""

from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import ServerSelectionTimeoutError

from bug_tracker.crosscutting.exceptions import DatabaseError
from bug_tracker.domain.entities import BugPriority, BugStatus
from bug_tracker.infrastructure.repositories import MongoBugRepository

pytestmark = [pytest.mark.unit, pytest.mark.asyncio]

OID = ObjectId("507f1f77bcf86cd799439011")
CREATED = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _doc(**overrides):
    doc = {
        "_id": OID,
        "title": "Crash",
        "description": "Editor crashes",
        "status": "open",
        "priority": "high",
        "reporter": "lee",
        "assignee": None,
        "tags": ["editor"],
        "createdAt": CREATED,
        "updatedAt": CREATED,
    }
    doc.update(overrides)
    return doc


@pytest.fixture
def collection():
    return MagicMock()


async def test_insert_writes_document_and_maps_entity(collection):
    collection.insert_one = AsyncMock(return_value=SimpleNamespace(inserted_id=OID))
    repo = MongoBugRepository(collection)

    bug = await repo.insert(
        {
            "title": "Crash",
            "description": "Editor crashes",
            "reporter": "lee",
            "status": BugStatus.OPEN,
            "priority": BugPriority.HIGH,
            "tags": ["editor"],
        }
    )

    written = collection.insert_one.await_args.args[0]
    assert written["status"] == "open"
    assert written["priority"] == "high"
    assert written["createdAt"] == written["updatedAt"]
    assert bug.id == str(OID)
    assert bug.priority is BugPriority.HIGH


async def test_get_maps_naive_timestamps_to_utc(collection):
    naive = CREATED.replace(tzinfo=None)
    collection.find_one = AsyncMock(return_value=_doc(createdAt=naive, updatedAt=naive))
    repo = MongoBugRepository(collection)

    bug = await repo.get(str(OID))

    collection.find_one.assert_awaited_once_with({"_id": OID})
    assert bug.created_at == CREATED


async def test_get_missing_returns_none(collection):
    collection.find_one = AsyncMock(return_value=None)

    assert await MongoBugRepository(collection).get(str(OID)) is None


async def test_list_builds_filter_sort_and_page(collection):
    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.skip.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.to_list = AsyncMock(return_value=[_doc()])
    collection.find.return_value = cursor
    repo = MongoBugRepository(collection)

    bugs = await repo.list_bugs(status="open", priority=None, skip=10, limit=5)

    collection.find.assert_called_once_with({"status": "open"})
    cursor.sort.assert_called_once_with([("createdAt", DESCENDING), ("_id", DESCENDING)])
    cursor.skip.assert_called_once_with(10)
    cursor.limit.assert_called_once_with(5)
    assert [b.title for b in bugs] == ["Crash"]


async def test_count_uses_same_filter(collection):
    collection.count_documents = AsyncMock(return_value=7)

    total = await MongoBugRepository(collection).count(priority="low")

    collection.count_documents.assert_awaited_once_with({"priority": "low"})
    assert total == 7


async def test_update_sets_fields_and_updated_at(collection):
    collection.find_one_and_update = AsyncMock(return_value=_doc(status="resolved"))
    repo = MongoBugRepository(collection)

    bug = await repo.update(str(OID), {"status": BugStatus.RESOLVED})

    args, kwargs = collection.find_one_and_update.await_args
    assert args[0] == {"_id": OID}
    assert args[1]["$set"]["status"] == "resolved"
    assert isinstance(args[1]["$set"]["updatedAt"], datetime)
    assert kwargs["return_document"] is ReturnDocument.AFTER
    assert bug.status is BugStatus.RESOLVED


async def test_delete_reports_deleted_count(collection):
    collection.delete_one = AsyncMock(return_value=SimpleNamespace(deleted_count=0))

    assert await MongoBugRepository(collection).delete(str(OID)) is False


async def test_driver_errors_become_database_error(collection):
    collection.find_one = AsyncMock(side_effect=ServerSelectionTimeoutError("down"))
    repo = MongoBugRepository(collection)

    with pytest.raises(DatabaseError) as exc_info:
        await repo.get(str(OID))

    assert isinstance(exc_info.value.original_error, ServerSelectionTimeoutError)
    assert exc_info.value.error_id
