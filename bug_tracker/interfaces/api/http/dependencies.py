"""
===============================================================================
CRC CARD — dependencies.py (FastAPI Depends providers)
===============================================================================

Responsibilities:
  - Resolve the application's ServiceContext from app.state.
  - Provide one use case instance per request.

Notes:
  - Tests inject their own ServiceContext through create_app(services).
===============================================================================
"""

from __future__ import annotations

from fastapi import Depends, Request

from ....application.usecases.bugs import (
    CreateBugUseCase,
    DeleteBugUseCase,
    GetBugUseCase,
    ListBugsUseCase,
    UpdateBugUseCase,
)
from ....container import ServiceContext


def get_services(request: Request) -> ServiceContext:
    return request.app.state.services


def get_list_bugs_use_case(
    services: ServiceContext = Depends(get_services),
) -> ListBugsUseCase:
    return services.list_bugs_use_case()


def get_get_bug_use_case(
    services: ServiceContext = Depends(get_services),
) -> GetBugUseCase:
    return services.get_bug_use_case()


def get_create_bug_use_case(
    services: ServiceContext = Depends(get_services),
) -> CreateBugUseCase:
    return services.create_bug_use_case()


def get_update_bug_use_case(
    services: ServiceContext = Depends(get_services),
) -> UpdateBugUseCase:
    return services.update_bug_use_case()


def get_delete_bug_use_case(
    services: ServiceContext = Depends(get_services),
) -> DeleteBugUseCase:
    return services.delete_bug_use_case()
