"""
Name: Application Configuration (Settings)

Responsibilities:
  - Centralized, typed configuration using pydantic-settings
  - Validate environment variables at startup
  - Provide defaults that match the bug tracker's historical behavior

Collaborators:
  - api/main.py: reads settings for CORS, prefix and lifespan
  - container.py: picks the record store and memory monitor
  - crosscutting/middleware.py: body size limit
  - crosscutting/logger.py: level and format

Constraints:
  - No business logic, pure configuration

Notes:
  - Singleton via lru_cache
  - MONGODB_DATABASE overrides the database named in MONGODB_URI
"""

from functools import lru_cache
from urllib.parse import urlsplit

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_DEFAULT_DATABASE = "bug-tracker"
_STORES = {"mongo", "memory"}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_env: development | production | test
        host / port: bind address for the server runner (default port 5000)
        mongodb_uri: MongoDB connection string
        mongodb_database: database name (empty = taken from the URI)
        mongodb_collection: collection holding bug records
        mongodb_timeout_ms: server selection timeout
        mongodb_connect_attempts: startup ping attempts before giving up
        bug_store: mongo | memory
        api_prefix: mount point for the bugs router
        allowed_origins: comma-separated CORS origins ("*" = any)
        max_body_bytes: request body ceiling (default: 10MB)
        log_level / log_json: logging output
        memory_log_interval_seconds: memory monitor period (development only)
        default_page_limit / max_page_limit: list pagination bounds
    """

    # Environment
    app_env: str = "development"
    host: str = "0.0.0.0"
    port: int = 5000

    # Database
    mongodb_uri: str = "mongodb://localhost:27017/bug-tracker"
    mongodb_database: str = ""
    mongodb_collection: str = "bugs"
    mongodb_timeout_ms: int = 5000
    mongodb_connect_attempts: int = 3
    retry_base_delay_seconds: float = 0.5
    retry_max_delay_seconds: float = 5.0
    bug_store: str = "mongo"

    # HTTP
    api_prefix: str = "/api"
    allowed_origins: str = "*"
    max_body_bytes: int = 10 * 1024 * 1024  # 10MB

    # Observability
    log_level: str = "INFO"
    log_json: bool = True
    memory_log_interval_seconds: float = 30.0

    # Pagination
    default_page_limit: int = 10
    max_page_limit: int = 100

    @field_validator("bug_store")
    @classmethod
    def bug_store_valid(cls, v: str) -> str:
        store = (v or "mongo").strip().lower()
        if store not in _STORES:
            raise ValueError("bug_store must be mongo or memory")
        return store

    @field_validator("log_level")
    @classmethod
    def log_level_valid(cls, v: str) -> str:
        level = (v or "INFO").strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}")
        return level

    @field_validator(
        "port",
        "mongodb_timeout_ms",
        "mongodb_connect_attempts",
        "max_body_bytes",
        "default_page_limit",
        "max_page_limit",
    )
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("value must be greater than 0")
        return v

    @field_validator("memory_log_interval_seconds")
    @classmethod
    def interval_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("memory_log_interval_seconds must be greater than 0")
        return v

    @field_validator("api_prefix")
    @classmethod
    def normalize_prefix(cls, v: str) -> str:
        prefix = (v or "").strip().rstrip("/")
        if prefix and not prefix.startswith("/"):
            prefix = "/" + prefix
        return prefix

    @model_validator(mode="after")
    def validate_page_limits(self):
        if self.default_page_limit > self.max_page_limit:
            raise ValueError(
                f"default_page_limit ({self.default_page_limit}) must not exceed "
                f"max_page_limit ({self.max_page_limit})"
            )
        return self

    def is_development(self) -> bool:
        return self.app_env.strip().lower() == "development"

    def is_test(self) -> bool:
        return self.app_env.strip().lower() in {"test", "testing", "ci"}

    def get_allowed_origins_list(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [
            origin.strip()
            for origin in self.allowed_origins.split(",")
            if origin.strip()
        ]

    def get_database_name(self) -> str:
        """Explicit database name, else the URI path, else the default."""
        if self.mongodb_database.strip():
            return self.mongodb_database.strip()
        path = urlsplit(self.mongodb_uri).path.lstrip("/")
        return path or _DEFAULT_DATABASE

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Raises:
        ValidationError: If an environment variable is malformed
    """
    return Settings()
