"""
Client-side list filtering.

filter_bugs() narrows an already-loaded list of bug records (JSON dicts)
by exact status, exact priority and a case-insensitive search term matched
against title, description, reporter, assignee and tags. Criteria combine
with AND; empty criteria match everything. The input is never modified and
relative order is kept.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Iterable, Mapping

FILTER_FIELDS = ("status", "priority", "search")


@dataclass(frozen=True)
class BugFilter:
    status: str = ""
    priority: str = ""
    search: str = ""

    @property
    def is_active(self) -> bool:
        return bool(self.status or self.priority or self.search)

    def with_value(self, field: str, value: str) -> "BugFilter":
        if field not in FILTER_FIELDS:
            raise ValueError(f"Unknown filter field: {field}")
        return replace(self, **{field: value})


def _matches_search(bug: Mapping[str, Any], term: str) -> bool:
    texts = [bug.get("title"), bug.get("description"), bug.get("reporter")]
    if bug.get("assignee"):
        texts.append(bug["assignee"])
    texts.extend(bug.get("tags") or [])
    return any(isinstance(text, str) and term in text.lower() for text in texts)


def filter_bugs(
    bugs: Iterable[Mapping[str, Any]], criteria: BugFilter
) -> list[Mapping[str, Any]]:
    filtered = list(bugs)

    if criteria.status:
        filtered = [b for b in filtered if b.get("status") == criteria.status]

    if criteria.priority:
        filtered = [b for b in filtered if b.get("priority") == criteria.priority]

    if criteria.search:
        term = criteria.search.lower()
        filtered = [b for b in filtered if _matches_search(b, term)]

    return filtered
