"""
tasks_api/config.py
-------------------
Loads the service settings from the environment (and a `.env` file, if any)
once at startup and exposes them as a typed `Settings` object.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Mapping

from dotenv import load_dotenv
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError

from tasks_api.errors import ConfigurationError

DEFAULT_POOL_SIZE = 5
DEFAULT_MAX_OVERFLOW = 0
DEFAULT_POOL_TIMEOUT = 30.0


def _int(env: Mapping[str, str], key: str, default: int, minimum: int) -> int:
    raw = env.get(key, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ConfigurationError(f"{key} must be >= {minimum}, got {value}")
    return value


def _float(env: Mapping[str, str], key: str, default: float) -> float:
    raw = env.get(key, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ConfigurationError(f"{key} must be positive, got {value}")
    return value


@dataclass(frozen=True)
class Settings:
    """
    Service settings.

    Attributes:
        database_url: SQLAlchemy database URL (``DATABASE_URL``).
        pool_size: Connections kept open by the pool (``DB_POOL_SIZE``).
        max_overflow: Extra connections allowed beyond ``pool_size``
            (``DB_MAX_OVERFLOW``).
        pool_timeout: Seconds to wait for a free connection before giving up
            (``DB_POOL_TIMEOUT``).
        cors_allowed_origins: Exact origins allowed cross-origin access
            (``CORS_ALLOWED_ORIGINS``, comma separated).
        log_level: Root log level (``LOG_LEVEL``).
    """
    database_url: str
    pool_size: int = DEFAULT_POOL_SIZE
    max_overflow: int = DEFAULT_MAX_OVERFLOW
    pool_timeout: float = DEFAULT_POOL_TIMEOUT
    cors_allowed_origins: tuple[str, ...] = field(default_factory=tuple)
    log_level: str = "INFO"

    def __post_init__(self):
        try:
            url = make_url(self.database_url)
        except ArgumentError as e:
            raise ConfigurationError(f"Invalid DATABASE_URL: {e}") from e
        if url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:"):
            # a static pool would share one connection between requests
            raise ConfigurationError("DATABASE_URL must not be an in-memory SQLite database")

    @classmethod
    def from_mapping(cls, env: Mapping[str, str]) -> "Settings":
        """
        Build settings from an environment-like mapping.

        Raises:
            ConfigurationError: If ``DATABASE_URL`` is missing or any value
                is malformed.
        """
        database_url = env.get("DATABASE_URL", "").strip()
        if not database_url:
            raise ConfigurationError("DATABASE_URL must be set")

        log_level = env.get("LOG_LEVEL", "").strip().upper() or "INFO"
        if not isinstance(logging.getLevelName(log_level), int):
            raise ConfigurationError(f"Unknown LOG_LEVEL {log_level!r}")

        origins = tuple(
            origin.strip()
            for origin in env.get("CORS_ALLOWED_ORIGINS", "").split(",")
            if origin.strip()
        )

        return cls(
            database_url=database_url,
            pool_size=_int(env, "DB_POOL_SIZE", DEFAULT_POOL_SIZE, minimum=1),
            max_overflow=_int(env, "DB_MAX_OVERFLOW", DEFAULT_MAX_OVERFLOW, minimum=0),
            pool_timeout=_float(env, "DB_POOL_TIMEOUT", DEFAULT_POOL_TIMEOUT),
            cors_allowed_origins=origins,
            log_level=log_level,
        )

    def engine_options(self) -> dict[str, Any]:
        """Keyword options for `sqlalchemy.create_engine`."""
        return {
            "pool_size": self.pool_size,
            "max_overflow": self.max_overflow,
            "pool_timeout": self.pool_timeout,
            "pool_pre_ping": True,
        }


def load_settings() -> Settings:
    """Load `.env` into the process environment, then read the settings."""
    load_dotenv()
    return Settings.from_mapping(os.environ)
