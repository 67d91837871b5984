"""
===============================================================================
CRC CARD — client/state.py (bug list state container)
===============================================================================

Responsibilities:
  - Hold the client view state (loaded bugs, filters, loading flag, error)
    as an immutable BugListState.
  - reduce(state, action): pure transition for every client event.
  - Derived views: visible_bugs(), list_view(), empty_message().
  - BugStore: dispatch + subscribers around reduce().
  - BugBoard: controller that calls the API and dispatches the outcome.

Collaborators:
  - client.filters (BugFilter, filter_bugs)
  - client.api_client (BugTrackerClient, ApiError)

Notes:
  - Records are the JSON dicts returned by the API, keyed by "id".
  - Newly created records are shown first.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Mapping, Union

from ..crosscutting.logger import logger
from .api_client import ApiError, BugTrackerClient
from .filters import FILTER_FIELDS, BugFilter, filter_bugs

Record = Mapping[str, Any]

LOAD_FAILED_MESSAGE = "Failed to load bugs. Please try again."
DELETE_FAILED_MESSAGE = "Failed to delete bug. Please try again."
STATUS_FAILED_MESSAGE = "Failed to update bug status. Please try again."


@dataclass(frozen=True)
class BugListState:
    bugs: tuple[Record, ...] = ()
    filters: BugFilter = field(default_factory=BugFilter)
    loading: bool = True
    error: str | None = None


# -----------------------------------------------------------------------------
# Actions
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class LoadStarted:
    pass


@dataclass(frozen=True)
class LoadSucceeded:
    bugs: tuple[Record, ...]


@dataclass(frozen=True)
class LoadFailed:
    message: str = LOAD_FAILED_MESSAGE


@dataclass(frozen=True)
class FilterChanged:
    field: str
    value: str


@dataclass(frozen=True)
class FiltersCleared:
    pass


@dataclass(frozen=True)
class BugCreated:
    bug: Record


@dataclass(frozen=True)
class BugUpdated:
    bug: Record


@dataclass(frozen=True)
class BugDeleted:
    bug_id: str


Action = Union[
    LoadStarted,
    LoadSucceeded,
    LoadFailed,
    FilterChanged,
    FiltersCleared,
    BugCreated,
    BugUpdated,
    BugDeleted,
]


def reduce(state: BugListState, action: Action) -> BugListState:
    """Next state for `action`; a filter change on an unknown field is a no-op."""
    if isinstance(action, LoadStarted):
        return replace(state, loading=True, error=None)
    if isinstance(action, LoadSucceeded):
        return replace(state, bugs=tuple(action.bugs), loading=False, error=None)
    if isinstance(action, LoadFailed):
        return replace(state, loading=False, error=action.message)
    if isinstance(action, FilterChanged):
        if action.field not in FILTER_FIELDS:
            return state
        return replace(state, filters=state.filters.with_value(action.field, action.value))
    if isinstance(action, FiltersCleared):
        return replace(state, filters=BugFilter())
    if isinstance(action, BugCreated):
        return replace(state, bugs=(action.bug, *state.bugs))
    if isinstance(action, BugUpdated):
        bug_id = action.bug.get("id")
        return replace(
            state,
            bugs=tuple(action.bug if b.get("id") == bug_id else b for b in state.bugs),
        )
    if isinstance(action, BugDeleted):
        return replace(
            state, bugs=tuple(b for b in state.bugs if b.get("id") != action.bug_id)
        )
    raise TypeError(f"Unknown action: {type(action).__name__}")


# -----------------------------------------------------------------------------
# Derived views
# -----------------------------------------------------------------------------
class ListView(str, Enum):
    LOADING = "loading"
    ERROR = "error"
    EMPTY = "empty"
    POPULATED = "populated"


def visible_bugs(state: BugListState) -> list[Record]:
    return filter_bugs(state.bugs, state.filters)


def list_view(state: BugListState) -> ListView:
    if state.error:
        return ListView.ERROR
    if state.loading:
        return ListView.LOADING
    if not visible_bugs(state):
        return ListView.EMPTY
    return ListView.POPULATED


def empty_message(state: BugListState) -> tuple[str, str]:
    """Heading and hint for the empty list: nothing stored vs. nothing matching."""
    if not state.bugs:
        return "No bugs reported yet", "Be the first to report a bug!"
    return "No bugs match your filters", "Try adjusting your search criteria."


# -----------------------------------------------------------------------------
# Store + controller
# -----------------------------------------------------------------------------
Listener = Callable[[BugListState], None]


class BugStore:
    def __init__(self, initial: BugListState | None = None) -> None:
        self._state = initial or BugListState()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> BugListState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def dispatch(self, action: Action) -> BugListState:
        self._state = reduce(self._state, action)
        for listener in list(self._listeners):
            listener(self._state)
        return self._state


class BugBoard:
    """
    Wires API calls to store actions.

    - load(): failures become the list error message.
    - create()/update(): ApiError propagates so the form can show it.
    - delete()/change_status(): failures are logged and kept in last_notice.
    """

    def __init__(self, api: BugTrackerClient, store: BugStore | None = None) -> None:
        self._api = api
        self.store = store or BugStore()
        self.last_notice: str | None = None

    @property
    def state(self) -> BugListState:
        return self.store.state

    def load(self) -> None:
        self.store.dispatch(LoadStarted())
        try:
            response = self._api.get_bugs()
        except ApiError as exc:
            logger.error("loading bugs failed", extra={"error": exc.message})
            self.store.dispatch(LoadFailed())
            return
        self.store.dispatch(LoadSucceeded(tuple(response.get("bugs") or ())))

    def create(self, data: dict[str, Any]) -> Record:
        bug = self._api.create_bug(data)
        self.store.dispatch(BugCreated(bug))
        return bug

    def update(self, bug_id: str, data: dict[str, Any]) -> Record:
        bug = self._api.update_bug(bug_id, data)
        self.store.dispatch(BugUpdated(bug))
        return bug

    def delete(self, bug_id: str) -> bool:
        try:
            self._api.delete_bug(bug_id)
        except ApiError as exc:
            logger.error("deleting bug failed", extra={"bug_id": bug_id, "error": exc.message})
            self.last_notice = DELETE_FAILED_MESSAGE
            return False
        self.store.dispatch(BugDeleted(bug_id))
        return True

    def change_status(self, bug_id: str, status: str) -> bool:
        try:
            bug = self._api.update_bug_status(bug_id, status)
        except ApiError as exc:
            logger.error(
                "status change failed", extra={"bug_id": bug_id, "error": exc.message}
            )
            self.last_notice = STATUS_FAILED_MESSAGE
            return False
        self.store.dispatch(BugUpdated(bug))
        return True

    def set_filter(self, field_name: str, value: str) -> None:
        self.store.dispatch(FilterChanged(field_name, value))

    def clear_filters(self) -> None:
        self.store.dispatch(FiltersCleared())
