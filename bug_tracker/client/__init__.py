"""Python client for the Bug Tracker API: HTTP client, filters and view state."""

from .api_client import ApiError, BugTrackerClient
from .filters import BugFilter, filter_bugs
from .form import BugDraft
from .state import (
    BugBoard,
    BugListState,
    BugStore,
    ListView,
    empty_message,
    list_view,
    reduce,
    visible_bugs,
)

__all__ = [
    "ApiError",
    "BugBoard",
    "BugDraft",
    "BugFilter",
    "BugListState",
    "BugStore",
    "BugTrackerClient",
    "ListView",
    "empty_message",
    "filter_bugs",
    "list_view",
    "reduce",
    "visible_bugs",
]
