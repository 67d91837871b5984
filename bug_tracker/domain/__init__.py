"""
Domain layer exports: entities, the record store port and the pure
sanitize/validate functions. No infrastructure imports here.
"""

from .entities import Bug, BugPriority, BugStatus
from .repositories import BugRepository
from .validation import (
    ValidationResult,
    is_valid_object_id,
    sanitize_bug_data,
    validate_bug_data,
    validate_status,
)

__all__ = [
    "Bug",
    "BugPriority",
    "BugRepository",
    "BugStatus",
    "ValidationResult",
    "is_valid_object_id",
    "sanitize_bug_data",
    "validate_bug_data",
    "validate_status",
]
