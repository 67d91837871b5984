"""
Name: Record field builder

Responsibilities:
  - Reduce a sanitized, validated submission to the persisted bug fields
  - Apply creation defaults (status open, priority medium)

Notes:
  - Unknown keys are dropped; id and timestamps are never client-writable
  - A falsy priority means "not provided": default on create, untouched on update
"""

from __future__ import annotations

from typing import Any, Mapping

from ....domain.entities import (
    DEFAULT_PRIORITY,
    DEFAULT_STATUS,
    WRITABLE_FIELDS,
    BugPriority,
    BugStatus,
)


def to_record_fields(data: Mapping[str, Any], *, creating: bool) -> dict[str, Any]:
    fields = {name: data[name] for name in WRITABLE_FIELDS if name in data}

    if fields.get("status"):
        fields["status"] = BugStatus(fields["status"])
    elif creating:
        fields["status"] = DEFAULT_STATUS
    else:
        fields.pop("status", None)

    if fields.get("priority"):
        fields["priority"] = BugPriority(fields["priority"])
    elif creating:
        fields["priority"] = DEFAULT_PRIORITY
    else:
        fields.pop("priority", None)

    if "assignee" in fields and not fields["assignee"]:
        fields["assignee"] = None

    if "tags" in fields and not fields["tags"]:
        fields["tags"] = []

    return fields
