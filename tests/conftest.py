"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure the test environment (APP_ENV=test, no .env file)
  - Provide an in-memory ServiceContext and a FastAPI TestClient
  - Provide bug payload factories

Notes:
  - APP_ENV must be set before bug_tracker is imported: the logger reads
    the cached settings at import time
"""

import os

os.environ.setdefault("APP_ENV", "test")

from typing import Any, Callable  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from bug_tracker.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

from bug_tracker.api.main import create_app  # noqa: E402
from bug_tracker.container import ServiceContext, build_service_context  # noqa: E402
from bug_tracker.crosscutting.config import Settings  # noqa: E402
from bug_tracker.infrastructure.repositories import InMemoryBugRepository  # noqa: E402


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Client + API tests over the in-process app"
    )


@pytest.fixture
def test_settings() -> Settings:
    return Settings(app_env="test", bug_store="memory")


@pytest.fixture
def repository() -> InMemoryBugRepository:
    return InMemoryBugRepository()


@pytest.fixture
def services(test_settings: Settings, repository: InMemoryBugRepository) -> ServiceContext:
    return build_service_context(test_settings, repository=repository)


@pytest.fixture
def client(services: ServiceContext):
    """TestClient running the lifespan (start/close of the ServiceContext)."""
    with TestClient(create_app(services)) as test_client:
        yield test_client


@pytest.fixture
def make_bug_payload() -> Callable[..., dict[str, Any]]:
    def _make(**overrides: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "title": "Login button unresponsive",
            "description": "Clicking the login button does nothing on Safari.",
            "reporter": "dana",
        }
        payload.update(overrides)
        return payload

    return _make
