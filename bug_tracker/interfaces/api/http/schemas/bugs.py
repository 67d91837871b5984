"""
===============================================================================
CRC CARD — schemas/bugs.py (HTTP contracts for /bugs)
===============================================================================

Responsibilities:
  - Describe the JSON representation of a bug and of the list page.
  - Keep timestamp keys in camelCase on the wire (createdAt / updatedAt).

Notes:
  - Request bodies are accepted as raw JSON objects: field types and rules
    are checked by domain.validation so every violation is reported with
    its business message, not a framework one.
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .....domain.entities import BugPriority, BugStatus

BUG_BODY_EXAMPLES: dict[str, dict[str, Any]] = {
    "create": {
        "summary": "New bug",
        "value": {
            "title": "Login button unresponsive",
            "description": "Clicking login on Safari does nothing.",
            "reporter": "dana",
            "priority": "high",
            "tags": ["auth", "safari"],
        },
    },
    "status": {
        "summary": "Status-only update",
        "value": {"status": "resolved"},
    },
}


class BugRes(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    description: str
    status: BugStatus
    priority: BugPriority
    reporter: str
    assignee: str | None = None
    tags: list[str] = Field(default_factory=list)
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")


class PaginationRes(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class BugListRes(BaseModel):
    bugs: list[BugRes]
    pagination: PaginationRes


class MessageRes(BaseModel):
    message: str


class HealthRes(BaseModel):
    status: str
    timestamp: datetime
    uptime: float
