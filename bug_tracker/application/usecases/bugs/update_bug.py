"""
===============================================================================
USE CASE: Update Bug
===============================================================================

CRC CARD
-------------------------------------------------------------------------------
Class:
    UpdateBugUseCase

Responsibilities:
    - Reject malformed ids before touching the store.
    - Sanitize the submission.
    - Validate:
        * full rule set when the body has more than one key, or when its
          only key is not a truthy status;
        * status enum alone for status-only bodies (quick status change).
    - Apply the known fields and refresh updated_at.

Collaborators:
    - domain.validation: sanitize_bug_data, validate_bug_data, validate_status
    - BugRepository: update(...)

Error Mapping:
    - INVALID_ID, VALIDATION_ERROR, NOT_FOUND, STORE_UNAVAILABLE

Notes:
    - Last write wins; there is no version check between concurrent updates.
===============================================================================
"""

from __future__ import annotations

from typing import Any, Mapping

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger
from ....domain.repositories import BugRepository
from ....domain.validation import (
    ValidationResult,
    is_valid_object_id,
    sanitize_bug_data,
    validate_bug_data,
    validate_status,
)
from .bug_results import (
    UpdateBugResult,
    invalid_id,
    not_found,
    store_unavailable,
    validation_error,
)
from .record_fields import to_record_fields


def is_status_only(data: Mapping[str, Any]) -> bool:
    return len(data) == 1 and bool(data.get("status"))


class UpdateBugUseCase:
    def __init__(self, repository: BugRepository) -> None:
        self._bugs = repository

    async def execute(self, bug_id: str, data: Mapping[str, Any]) -> UpdateBugResult:
        # ---------------------------------------------------------------------
        # 1) Id shape.
        # ---------------------------------------------------------------------
        if not is_valid_object_id(bug_id):
            return UpdateBugResult(error=invalid_id())

        # ---------------------------------------------------------------------
        # 2) Sanitize + validate (reduced check for status-only bodies).
        # ---------------------------------------------------------------------
        sanitized = sanitize_bug_data(data)
        validation = self._validate(sanitized)
        if not validation.is_valid:
            logger.info(
                "bug validation failed",
                extra={"bug_id": bug_id, "validation_errors": validation.errors},
            )
            return UpdateBugResult(error=validation_error(validation.errors))

        # ---------------------------------------------------------------------
        # 3) Persist.
        # ---------------------------------------------------------------------
        try:
            bug = await self._bugs.update(
                bug_id, to_record_fields(sanitized, creating=False)
            )
        except DatabaseError as exc:
            return UpdateBugResult(error=store_unavailable(exc, operation="update"))

        if bug is None:
            return UpdateBugResult(error=not_found())

        logger.info("bug updated", extra={"bug_id": bug.id})
        return UpdateBugResult(bug=bug)

    @staticmethod
    def _validate(sanitized: Mapping[str, Any]) -> ValidationResult:
        if is_status_only(sanitized):
            return validate_status(sanitized)
        return validate_bug_data(sanitized)
