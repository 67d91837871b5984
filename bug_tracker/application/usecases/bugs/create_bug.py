"""
===============================================================================
USE CASE: Create Bug
===============================================================================

CRC CARD
-------------------------------------------------------------------------------
Class:
    CreateBugUseCase

Responsibilities:
    - Sanitize the submission (trim text, clean tags).
    - Validate it against the bug rules; report every violation.
    - Persist only the known fields, with status/priority defaults.

Collaborators:
    - domain.validation: sanitize_bug_data, validate_bug_data
    - BugRepository: insert(...)

Error Mapping:
    - VALIDATION_ERROR: rule violations (details in rule order)
    - STORE_UNAVAILABLE: record store failure
===============================================================================
"""

from __future__ import annotations

from typing import Any, Mapping

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....domain.repositories import BugRepository
from ....domain.validation import sanitize_bug_data, validate_bug_data
from .bug_results import CreateBugResult, store_unavailable, validation_error
from .record_fields import to_record_fields


class CreateBugUseCase:
    def __init__(self, repository: BugRepository) -> None:
        self._bugs = repository

    async def execute(self, data: Mapping[str, Any]) -> CreateBugResult:
        # ---------------------------------------------------------------------
        # 1) Sanitize, then validate the sanitized copy.
        # ---------------------------------------------------------------------
        sanitized = sanitize_bug_data(data)
        validation = validate_bug_data(sanitized)
        if not validation.is_valid:
            logger.info(
                "bug validation failed", extra={"validation_errors": validation.errors}
            )
            return CreateBugResult(error=validation_error(validation.errors))

        # ---------------------------------------------------------------------
        # 2) Persist the known fields.
        # ---------------------------------------------------------------------
        try:
            bug = await self._bugs.insert(to_record_fields(sanitized, creating=True))
        except DatabaseError as exc:
            return CreateBugResult(error=store_unavailable(exc, operation="create"))

        logger.info("bug created", extra={"bug_id": bug.id})
        return CreateBugResult(bug=bug)
