"""
===============================================================================
USE CASE: Get Bug
===============================================================================

Class:
    GetBugUseCase

Responsibilities:
    - Reject malformed ids before touching the store.
    - Return the bug or NOT_FOUND.
===============================================================================
"""

from __future__ import annotations

from ....crosscutting.exceptions import DatabaseError
from ....domain.repositories import BugRepository
from ....domain.validation import is_valid_object_id
from .bug_results import GetBugResult, invalid_id, not_found, store_unavailable


class GetBugUseCase:
    def __init__(self, repository: BugRepository) -> None:
        self._bugs = repository

    async def execute(self, bug_id: str) -> GetBugResult:
        if not is_valid_object_id(bug_id):
            return GetBugResult(error=invalid_id())

        try:
            bug = await self._bugs.get(bug_id)
        except DatabaseError as exc:
            return GetBugResult(error=store_unavailable(exc, operation="get"))

        if bug is None:
            return GetBugResult(error=not_found())
        return GetBugResult(bug=bug)
