"""
Name: Settings Tests
"""

import pytest
from pydantic import ValidationError

from bug_tracker.crosscutting.config import Settings

pytestmark = pytest.mark.unit


def test_defaults():
    settings = Settings(app_env="development")

    assert settings.port == 5000
    assert settings.api_prefix == "/api"
    assert settings.default_page_limit == 10
    assert settings.get_database_name() == "bug-tracker"
    assert settings.is_development()


@pytest.mark.parametrize(
    "uri, database, expected",
    [
        ("mongodb://db:27017/tracker", "", "tracker"),
        ("mongodb://db:27017", "", "bug-tracker"),
        ("mongodb://db:27017/tracker", " explicit ", "explicit"),
    ],
)
def test_database_name_resolution(uri, database, expected):
    settings = Settings(mongodb_uri=uri, mongodb_database=database)

    assert settings.get_database_name() == expected


def test_environment_variables_are_read(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("BUG_STORE", "Memory")
    monkeypatch.setenv("ALLOWED_ORIGINS", "http://a.test, http://b.test ,")

    settings = Settings()

    assert settings.port == 8080
    assert settings.bug_store == "memory"
    assert settings.get_allowed_origins_list() == ["http://a.test", "http://b.test"]


@pytest.mark.parametrize("raw, expected", [("api/v1/", "/api/v1"), ("", "")])
def test_api_prefix_is_normalized(raw, expected):
    assert Settings(api_prefix=raw).api_prefix == expected


@pytest.mark.parametrize(
    "overrides",
    [
        {"bug_store": "sqlite"},
        {"log_level": "LOUD"},
        {"port": 0},
        {"memory_log_interval_seconds": 0},
        {"default_page_limit": 200, "max_page_limit": 100},
    ],
)
def test_invalid_values_are_rejected(overrides):
    with pytest.raises(ValidationError):
        Settings(**overrides)


@pytest.mark.parametrize("env", ["test", "Testing", "ci"])
def test_test_environments(env):
    settings = Settings(app_env=env)

    assert settings.is_test()
    assert not settings.is_development()
