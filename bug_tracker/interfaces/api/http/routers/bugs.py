"""
===============================================================================
CRC CARD — routers/bugs.py (HTTP endpoints for bug records)
===============================================================================

Responsibilities:
  - Expose CRUD over bug records:
      GET    /bugs           list (status/priority filters, page/limit)
      GET    /bugs/{bug_id}  read one
      POST   /bugs           create (201)
      PUT    /bugs/{bug_id}  update (full or status-only)
      DELETE /bugs/{bug_id}  hard delete
  - Map entities to response schemas.
  - Map use case errors to HTTP via error_mapping.

Collaborators:
  - dependencies (use case providers)
  - schemas.bugs
  - error_mapping.to_http_error
===============================================================================
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status

from .....application.usecases.bugs import (
    CreateBugUseCase,
    DeleteBugUseCase,
    GetBugUseCase,
    ListBugsUseCase,
    UpdateBugUseCase,
)
from .....container import ServiceContext
from .....domain.entities import Bug
from ..dependencies import (
    get_create_bug_use_case,
    get_delete_bug_use_case,
    get_get_bug_use_case,
    get_list_bugs_use_case,
    get_services,
    get_update_bug_use_case,
)
from ..error_mapping import to_http_error
from ..schemas.bugs import (
    BUG_BODY_EXAMPLES,
    BugListRes,
    BugRes,
    MessageRes,
    PaginationRes,
)

router = APIRouter(prefix="/bugs", tags=["bugs"])


def _to_bug_res(bug: Bug) -> BugRes:
    return BugRes(
        id=bug.id,
        title=bug.title,
        description=bug.description,
        status=bug.status,
        priority=bug.priority,
        reporter=bug.reporter,
        assignee=bug.assignee,
        tags=list(bug.tags),
        created_at=bug.created_at,
        updated_at=bug.updated_at,
    )


@router.get("", response_model=BugListRes)
async def list_bugs(
    status_filter: str | None = Query(None, alias="status"),
    priority: str | None = Query(None),
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
    use_case: ListBugsUseCase = Depends(get_list_bugs_use_case),
    services: ServiceContext = Depends(get_services),
):
    result = await use_case.execute(
        status=status_filter,
        priority=priority,
        page=page,
        limit=limit or services.settings.default_page_limit,
    )
    if result.error is not None:
        raise to_http_error(result.error)

    return BugListRes(
        bugs=[_to_bug_res(bug) for bug in result.bugs],
        pagination=PaginationRes(
            page=result.page,
            limit=result.limit,
            total=result.total,
            pages=result.pages,
        ),
    )


@router.get("/{bug_id}", response_model=BugRes)
async def get_bug(
    bug_id: str,
    use_case: GetBugUseCase = Depends(get_get_bug_use_case),
):
    result = await use_case.execute(bug_id)
    if result.error is not None:
        raise to_http_error(result.error)
    return _to_bug_res(result.bug)


@router.post("", response_model=BugRes, status_code=status.HTTP_201_CREATED)
async def create_bug(
    payload: dict[str, Any] = Body(..., openapi_examples=BUG_BODY_EXAMPLES),
    use_case: CreateBugUseCase = Depends(get_create_bug_use_case),
):
    result = await use_case.execute(payload)
    if result.error is not None:
        raise to_http_error(result.error)
    return _to_bug_res(result.bug)


@router.put("/{bug_id}", response_model=BugRes)
async def update_bug(
    bug_id: str,
    payload: dict[str, Any] = Body(..., openapi_examples=BUG_BODY_EXAMPLES),
    use_case: UpdateBugUseCase = Depends(get_update_bug_use_case),
):
    result = await use_case.execute(bug_id, payload)
    if result.error is not None:
        raise to_http_error(result.error)
    return _to_bug_res(result.bug)


@router.delete("/{bug_id}", response_model=MessageRes)
async def delete_bug(
    bug_id: str,
    use_case: DeleteBugUseCase = Depends(get_delete_bug_use_case),
):
    result = await use_case.execute(bug_id)
    if result.error is not None:
        raise to_http_error(result.error)
    return MessageRes(message="Bug deleted successfully")
