"""
===============================================================================
CRC CARD — domain/validation.py
===============================================================================

Module:
    Sanitizer, Validator and identifier check for bug submissions

Responsibilities:
    - sanitize_bug_data(): trim text fields and clean the tag list.
    - validate_bug_data(): check a submission against a declared rule table
      and report every violation, in rule order.
    - is_valid_object_id(): 24-hex identifier shape check.

Collaborators:
    - domain.entities: enumerated status/priority values.
    - application.usecases.bugs: run sanitize -> validate before storing.

Notes:
    - Submissions are plain JSON objects, so "truthy" follows JSON rules:
      null, false, 0 and "" are falsy; arrays and objects are truthy.
    - Length limits apply to the untrimmed value.
    - Pure functions; inputs are never mutated and nothing raises.
===============================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol, Sequence

from .entities import BugPriority, BugStatus

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 1000

_OBJECT_ID_RE = re.compile(r"[0-9a-fA-F]{24}")

# Text fields trimmed by the sanitizer.
_TRIMMED_FIELDS: tuple[str, ...] = ("title", "description", "reporter", "assignee")


def _truthy(value: Any) -> bool:
    if value is None or value is False:
        return False
    if isinstance(value, (list, dict)):
        return True
    if isinstance(value, (int, float, str)):
        return bool(value)
    return True


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    errors: list[str] = field(default_factory=list)


class FieldRule(Protocol):
    field: str

    def check(self, data: Mapping[str, Any]) -> list[str]:
        ...


@dataclass(frozen=True)
class RequiredTextRule:
    """Required, non-blank text with an optional length ceiling."""

    field: str
    label: str
    max_length: int | None = None

    def check(self, data: Mapping[str, Any]) -> list[str]:
        value = data.get(self.field)
        if not _truthy(value) or not isinstance(value, str):
            return [f"{self.label} is required and must be a string"]
        if not value.strip():
            return [f"{self.label} cannot be empty"]
        if self.max_length is not None and len(value) > self.max_length:
            return [f"{self.label} cannot exceed {self.max_length} characters"]
        return []


@dataclass(frozen=True)
class EnumRule:
    """
    Value must be one of `allowed`.

    only_if_truthy=False checks whenever the key is present (null included);
    only_if_truthy=True skips falsy values so the default applies.
    """

    field: str
    label: str
    allowed: tuple[str, ...]
    only_if_truthy: bool = False

    def check(self, data: Mapping[str, Any]) -> list[str]:
        if self.field not in data:
            return []
        value = data[self.field]
        if self.only_if_truthy and not _truthy(value):
            return []
        if isinstance(value, str) and value in self.allowed:
            return []
        return [f"{self.label} must be one of: {', '.join(self.allowed)}"]


@dataclass(frozen=True)
class OptionalTextRule:
    field: str
    label: str

    def check(self, data: Mapping[str, Any]) -> list[str]:
        value = data.get(self.field)
        if _truthy(value) and not isinstance(value, str):
            return [f"{self.label} must be a string"]
        return []


@dataclass(frozen=True)
class TextListRule:
    """Optional list whose every element must be text."""

    field: str
    label: str
    item_label: str

    def check(self, data: Mapping[str, Any]) -> list[str]:
        value = data.get(self.field)
        if not _truthy(value):
            return []
        if not isinstance(value, list):
            return [f"{self.label} must be an array"]
        return [
            f"{self.item_label} at index {index} must be a string"
            for index, item in enumerate(value)
            if not isinstance(item, str)
        ]


STATUS_RULE = EnumRule("status", "Status", tuple(BugStatus.values()))

BUG_RULES: tuple[FieldRule, ...] = (
    RequiredTextRule("title", "Title", TITLE_MAX_LENGTH),
    RequiredTextRule("description", "Description", DESCRIPTION_MAX_LENGTH),
    STATUS_RULE,
    EnumRule("priority", "Priority", tuple(BugPriority.values()), only_if_truthy=True),
    RequiredTextRule("reporter", "Reporter"),
    OptionalTextRule("assignee", "Assignee"),
    TextListRule("tags", "Tags", "Tag"),
)


def validate_bug_data(
    data: Mapping[str, Any], rules: Sequence[FieldRule] = BUG_RULES
) -> ValidationResult:
    errors: list[str] = []
    for rule in rules:
        errors.extend(rule.check(data))
    return ValidationResult(is_valid=not errors, errors=errors)


def validate_status(data: Mapping[str, Any]) -> ValidationResult:
    """Enum check alone, for status-only updates."""
    return validate_bug_data(data, rules=(STATUS_RULE,))


def sanitize_bug_data(data: Mapping[str, Any]) -> dict[str, Any]:
    """Copy of `data` with text fields trimmed and tags cleaned."""
    sanitized = dict(data)

    for name in _TRIMMED_FIELDS:
        value = sanitized.get(name)
        if _truthy(value) and isinstance(value, str):
            sanitized[name] = value.strip()

    tags = sanitized.get("tags")
    if _truthy(tags) and isinstance(tags, list):
        sanitized["tags"] = [
            tag.strip() for tag in tags if isinstance(tag, str) and tag.strip()
        ]

    return sanitized


def is_valid_object_id(value: Any) -> bool:
    return isinstance(value, str) and _OBJECT_ID_RE.fullmatch(value) is not None
