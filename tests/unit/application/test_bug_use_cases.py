"""
Name: Bug Use Case Tests

Responsibilities:
  - Create: sanitize -> validate -> persist known fields with defaults
  - Update: full vs status-only validation, NOT_FOUND, INVALID_ID
  - List: pagination math and filters
  - Store failures surface as STORE_UNAVAILABLE
"""

from unittest.mock import AsyncMock

import pytest

from bug_tracker.application.usecases.bugs import (
    BugErrorCode,
    CreateBugUseCase,
    DeleteBugUseCase,
    GetBugUseCase,
    ListBugsUseCase,
    UpdateBugUseCase,
)
from bug_tracker.crosscutting.exceptions import DatabaseError
from bug_tracker.domain.entities import BugPriority, BugStatus
from bug_tracker.infrastructure.repositories import InMemoryBugRepository

pytestmark = [pytest.mark.unit, pytest.mark.asyncio]

UNKNOWN_ID = "507f1f77bcf86cd799439011"


@pytest.fixture
def repo():
    return InMemoryBugRepository()


async def _create(repo, make_bug_payload, **overrides):
    result = await CreateBugUseCase(repo).execute(make_bug_payload(**overrides))
    assert result.error is None
    return result.bug


class TestCreateBug:
    async def test_applies_defaults_and_sanitizes(self, repo, make_bug_payload):
        result = await CreateBugUseCase(repo).execute(
            make_bug_payload(title="  Crash  ", tags=[" ui ", "", 3])
        )

        bug = result.bug
        assert result.error is None
        assert bug.title == "Crash"
        assert bug.status is BugStatus.OPEN
        assert bug.priority is BugPriority.MEDIUM
        assert bug.tags == ["ui"]
        assert bug.assignee is None

    async def test_falsy_priority_gets_default(self, repo, make_bug_payload):
        bug = await _create(repo, make_bug_payload, priority="")

        assert bug.priority is BugPriority.MEDIUM

    async def test_unknown_keys_are_not_persisted(self, repo, make_bug_payload):
        bug = await _create(
            repo, make_bug_payload, id="deadbeef", createdAt="1999-01-01", votes=3
        )

        assert bug.id != "deadbeef"
        assert bug.created_at.year != 1999
        assert not hasattr(bug, "votes")

    async def test_validation_error_lists_every_violation(self, repo):
        result = await CreateBugUseCase(repo).execute({"status": "bogus"})

        assert result.bug is None
        assert result.error.code == BugErrorCode.VALIDATION_ERROR
        assert result.error.message == "Validation failed"
        assert list(result.error.details) == [
            "Title is required and must be a string",
            "Description is required and must be a string",
            "Status must be one of: open, in-progress, resolved, closed",
            "Reporter is required and must be a string",
        ]
        assert await repo.count() == 0

    async def test_store_failure(self, make_bug_payload):
        failing = AsyncMock()
        failing.insert.side_effect = DatabaseError("down")

        result = await CreateBugUseCase(failing).execute(make_bug_payload())

        assert result.error.code == BugErrorCode.STORE_UNAVAILABLE
        assert result.error.error_id


class TestGetAndDelete:
    async def test_get_rejects_malformed_id_without_store_access(self):
        store = AsyncMock()

        result = await GetBugUseCase(store).execute("not-an-id")

        assert result.error.code == BugErrorCode.INVALID_ID
        assert result.error.message == "Invalid bug ID format"
        store.get.assert_not_awaited()

    async def test_get_unknown(self, repo):
        result = await GetBugUseCase(repo).execute(UNKNOWN_ID)

        assert result.error.code == BugErrorCode.NOT_FOUND
        assert result.error.message == "Bug not found"

    async def test_delete_then_get(self, repo, make_bug_payload):
        bug = await _create(repo, make_bug_payload)

        deleted = await DeleteBugUseCase(repo).execute(bug.id)
        again = await DeleteBugUseCase(repo).execute(bug.id)
        fetched = await GetBugUseCase(repo).execute(bug.id)

        assert deleted.deleted is True
        assert again.error.code == BugErrorCode.NOT_FOUND
        assert fetched.error.code == BugErrorCode.NOT_FOUND

    async def test_delete_malformed_id(self, repo):
        result = await DeleteBugUseCase(repo).execute("123")

        assert result.error.code == BugErrorCode.INVALID_ID


class TestUpdateBug:
    async def test_status_only_update_skips_full_validation(self, repo, make_bug_payload):
        bug = await _create(repo, make_bug_payload)

        result = await UpdateBugUseCase(repo).execute(bug.id, {"status": "resolved"})

        assert result.error is None
        assert result.bug.status is BugStatus.RESOLVED
        assert result.bug.title == bug.title
        assert result.bug.updated_at >= bug.updated_at

    async def test_status_only_update_still_checks_enum(self, repo, make_bug_payload):
        bug = await _create(repo, make_bug_payload)

        result = await UpdateBugUseCase(repo).execute(bug.id, {"status": "archived"})

        assert result.error.code == BugErrorCode.VALIDATION_ERROR
        assert list(result.error.details) == [
            "Status must be one of: open, in-progress, resolved, closed"
        ]
        assert (await repo.get(bug.id)).status is BugStatus.OPEN

    async def test_partial_update_runs_full_validation(self, repo, make_bug_payload):
        bug = await _create(repo, make_bug_payload)

        result = await UpdateBugUseCase(repo).execute(
            bug.id, {"status": "closed", "assignee": "kim"}
        )

        assert result.error.code == BugErrorCode.VALIDATION_ERROR
        assert "Title is required and must be a string" in result.error.details

    async def test_empty_body_runs_full_validation(self, repo, make_bug_payload):
        bug = await _create(repo, make_bug_payload)

        result = await UpdateBugUseCase(repo).execute(bug.id, {})

        assert result.error.code == BugErrorCode.VALIDATION_ERROR

    async def test_full_update(self, repo, make_bug_payload):
        bug = await _create(repo, make_bug_payload, priority="low")

        result = await UpdateBugUseCase(repo).execute(
            bug.id,
            make_bug_payload(title=" Renamed ", priority="critical", assignee="kim"),
        )

        assert result.bug.title == "Renamed"
        assert result.bug.priority is BugPriority.CRITICAL
        assert result.bug.assignee == "kim"
        assert result.bug.created_at == bug.created_at

    async def test_update_unknown_and_malformed(self, repo, make_bug_payload):
        unknown = await UpdateBugUseCase(repo).execute(UNKNOWN_ID, make_bug_payload())
        malformed = await UpdateBugUseCase(repo).execute("xyz", make_bug_payload())

        assert unknown.error.code == BugErrorCode.NOT_FOUND
        assert malformed.error.code == BugErrorCode.INVALID_ID


class TestListBugs:
    async def test_pagination_math(self, repo, make_bug_payload):
        for i in range(23):
            await _create(repo, make_bug_payload, title=f"bug {i}")

        result = await ListBugsUseCase(repo).execute(page=3, limit=10)

        assert result.total == 23
        assert result.pages == 3
        assert len(result.bugs) == 3
        assert result.bugs[-1].title == "bug 0"

    async def test_empty_store(self, repo):
        result = await ListBugsUseCase(repo).execute()

        assert result.bugs == []
        assert result.total == 0
        assert result.pages == 0

    async def test_filters(self, repo, make_bug_payload):
        await _create(repo, make_bug_payload, priority="high")
        await _create(repo, make_bug_payload, priority="low", status="closed")

        result = await ListBugsUseCase(repo).execute(priority="low", status="closed")

        assert result.total == 1
        assert result.bugs[0].priority is BugPriority.LOW

    async def test_limit_is_capped(self, repo):
        result = await ListBugsUseCase(repo, max_limit=50).execute(limit=500)

        assert result.limit == 50

    async def test_store_failure(self):
        failing = AsyncMock()
        failing.list_bugs.side_effect = DatabaseError("down")

        result = await ListBugsUseCase(failing).execute()

        assert result.error.code == BugErrorCode.STORE_UNAVAILABLE
