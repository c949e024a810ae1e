"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts with no configuration at all; in a production
deployment set ``ENVIRONMENT=production`` and point ``DATABASE_URL``
at a persistent location.
"""

import os
from dataclasses import dataclass, field
from typing import List


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Contact Management API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")

    # ``development`` or ``production``.  Only affects the default log
    # level when ``LOG_LEVEL`` is not set explicitly.
    environment: str = os.getenv("ENVIRONMENT", "development")
    log_level: str = os.getenv("LOG_LEVEL", "")

    # Directory for the JSON log files (``all.log`` and ``error.log``).
    # An empty value disables file logging.
    log_dir: str = os.getenv("LOG_DIR", "logs")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    # Path to the SQLite database file.  Relative paths are resolved by
    # the ``db`` module against the project root.  ``:memory:`` is
    # accepted for throwaway instances.
    database_url: str = os.getenv("DATABASE_URL", "database.db")

    api_prefix: str = os.getenv("API_PREFIX", "/api")
    docs_url: str = os.getenv("DOCS_URL", "/api-docs")
    cors_origins: List[str] = field(
        default_factory=lambda: [
            origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
        ]
    )

    # When enabled a unique index is created on ``contacts.email``.  NULL
    # emails never collide.
    unique_email: bool = _env_flag("CONTACTS_UNIQUE_EMAIL")

    def __post_init__(self) -> None:
        if not self.log_level:
            self.log_level = "WARNING" if self.is_production else "DEBUG"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables must
# be set before importing this module.
settings = Settings()
