"""
Bug form draft: the editable fields of the report/edit form.

Defaults match a new report (status open, priority medium). Tags are added
trimmed and without duplicates. check() performs the quick client-side
checks before submitting; the server remains the authority.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Mapping

from ..domain.validation import DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH


@dataclass
class BugDraft:
    title: str = ""
    description: str = ""
    status: str = "open"
    priority: str = "medium"
    reporter: str = ""
    assignee: str = ""
    tags: list[str] = field(default_factory=list)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "BugDraft":
        """Prefill for editing; missing or empty values fall back to defaults."""
        return cls(
            title=record.get("title") or "",
            description=record.get("description") or "",
            status=record.get("status") or "open",
            priority=record.get("priority") or "medium",
            reporter=record.get("reporter") or "",
            assignee=record.get("assignee") or "",
            tags=list(record.get("tags") or []),
        )

    def add_tag(self, raw: str) -> bool:
        tag = raw.strip()
        if not tag or tag in self.tags:
            return False
        self.tags.append(tag)
        return True

    def remove_tag(self, tag: str) -> None:
        self.tags = [t for t in self.tags if t != tag]

    def check(self) -> dict[str, str]:
        """Field -> message for the quick pre-submit checks."""
        errors: dict[str, str] = {}

        if not self.title.strip():
            errors["title"] = "Title is required"
        elif len(self.title) > TITLE_MAX_LENGTH:
            errors["title"] = f"Title cannot exceed {TITLE_MAX_LENGTH} characters"

        if not self.description.strip():
            errors["description"] = "Description is required"
        elif len(self.description) > DESCRIPTION_MAX_LENGTH:
            errors["description"] = (
                f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters"
            )

        if not self.reporter.strip():
            errors["reporter"] = "Reporter is required"

        return errors

    def to_payload(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["tags"] = list(self.tags)
        return payload
