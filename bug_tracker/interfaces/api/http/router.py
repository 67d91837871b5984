"""
===============================================================================
CRC CARD — router.py (root API router)
===============================================================================

Responsibilities:
  - Build the APIRouter included by api/main.py under API_PREFIX.
  - Attach the standard error responses to OpenAPI.
  - Compose feature routers.
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter

from ....crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from .routers.bugs import router as bugs_router


def build_router() -> APIRouter:
    api_router = APIRouter(responses=OPENAPI_ERROR_RESPONSES)
    api_router.include_router(bugs_router)
    return api_router


__all__ = ["build_router"]
