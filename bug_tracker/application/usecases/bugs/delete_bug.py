"""
===============================================================================
USE CASE: Delete Bug (hard delete)
===============================================================================
"""

from __future__ import annotations

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....domain.repositories import BugRepository
from ....domain.validation import is_valid_object_id
from .bug_results import DeleteBugResult, invalid_id, not_found, store_unavailable


class DeleteBugUseCase:
    def __init__(self, repository: BugRepository) -> None:
        self._bugs = repository

    async def execute(self, bug_id: str) -> DeleteBugResult:
        if not is_valid_object_id(bug_id):
            return DeleteBugResult(error=invalid_id())

        try:
            deleted = await self._bugs.delete(bug_id)
        except DatabaseError as exc:
            return DeleteBugResult(error=store_unavailable(exc, operation="delete"))

        if not deleted:
            return DeleteBugResult(error=not_found())

        logger.info("bug deleted", extra={"bug_id": bug_id})
        return DeleteBugResult(deleted=True)
