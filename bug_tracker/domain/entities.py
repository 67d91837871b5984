"""
===============================================================================
CRC CARD — domain/entities.py
===============================================================================

Module:
    Domain entities (Bug) and enumerations (BugStatus, BugPriority)

Responsibilities:
    - Represent a bug record with its lifecycle timestamps.
    - Expose the enumerated status/priority values in declaration order.

Collaborators:
    - domain.validation: checks incoming data against the enumerations.
    - infrastructure.repositories: build/persist Bug instances.
    - interfaces.api.http.schemas: map Bug to its JSON representation.

Constraints:
    - No I/O, no framework imports.
    - id is assigned by the record store and never changes.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BugStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"
    CLOSED = "closed"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


class BugPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


DEFAULT_STATUS = BugStatus.OPEN
DEFAULT_PRIORITY = BugPriority.MEDIUM

# Fields a client may set; anything else submitted is dropped.
WRITABLE_FIELDS: tuple[str, ...] = (
    "title",
    "description",
    "status",
    "priority",
    "reporter",
    "assignee",
    "tags",
)


@dataclass
class Bug:
    """
    A tracked defect report.

    Invariants:
      - status/priority always hold enumerated values
      - created_at <= updated_at
    """

    id: str
    title: str
    description: str
    reporter: str
    status: BugStatus = DEFAULT_STATUS
    priority: BugPriority = DEFAULT_PRIORITY
    assignee: str | None = None
    tags: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)
