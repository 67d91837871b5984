"""
===============================================================================
USE CASE: List Bugs (filtered, paginated)
===============================================================================

CRC CARD
-------------------------------------------------------------------------------
Class:
    ListBugsUseCase

Responsibilities:
    - Normalize page/limit (limit capped at max_limit).
    - Fetch one page ordered by creation time, newest first.
    - Count the matching records and derive the page count.

Collaborators:
    - BugRepository: list_bugs(...), count(...)

Inputs:
    - status / priority: optional exact-match filters ("" = no filter)
    - page: 1-based page number
    - limit: page size

Outputs:
    - ListBugsResult(bugs, page, limit, total, pages, error)
===============================================================================
"""

from __future__ import annotations

import math

from ....crosscutting.exceptions import DatabaseError
from ....domain.repositories import BugRepository
from .bug_results import ListBugsResult, store_unavailable


class ListBugsUseCase:
    def __init__(self, repository: BugRepository, *, max_limit: int = 100) -> None:
        self._bugs = repository
        self._max_limit = max_limit

    async def execute(
        self,
        *,
        status: str | None = None,
        priority: str | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> ListBugsResult:
        page = max(1, page)
        limit = self._sanitize_limit(limit)

        try:
            bugs = await self._bugs.list_bugs(
                status=status or None,
                priority=priority or None,
                skip=(page - 1) * limit,
                limit=limit,
            )
            total = await self._bugs.count(
                status=status or None, priority=priority or None
            )
        except DatabaseError as exc:
            return ListBugsResult(error=store_unavailable(exc, operation="list"))

        return ListBugsResult(
            bugs=bugs,
            page=page,
            limit=limit,
            total=total,
            pages=math.ceil(total / limit),
        )

    def _sanitize_limit(self, limit: int) -> int:
        return max(1, min(limit, self._max_limit))
