from .bug_results import (
    BugError,
    BugErrorCode,
    CreateBugResult,
    DeleteBugResult,
    GetBugResult,
    ListBugsResult,
    UpdateBugResult,
)
from .create_bug import CreateBugUseCase
from .delete_bug import DeleteBugUseCase
from .get_bug import GetBugUseCase
from .list_bugs import ListBugsUseCase
from .update_bug import UpdateBugUseCase

__all__ = [
    "BugError",
    "BugErrorCode",
    "CreateBugResult",
    "CreateBugUseCase",
    "DeleteBugResult",
    "DeleteBugUseCase",
    "GetBugResult",
    "GetBugUseCase",
    "ListBugsResult",
    "ListBugsUseCase",
    "UpdateBugResult",
    "UpdateBugUseCase",
]
