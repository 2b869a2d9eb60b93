"""Application configuration with environment-specific profiles.

Supports dev, staging, and production environments via APP_ENV.
All values can be overridden by environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    """Immutable application settings resolved from environment."""

    database_url: str
    app_env: str = "dev"
    log_level: str = "INFO"

    # Single shared secret gating every admin and workout route
    admin_password: Optional[str] = None

    # Bounded wait on store connections (seconds)
    store_timeout_seconds: float = 10.0

    # Serve fixed mock locations instead of reading the store
    mock_data: bool = False

    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    request_id_header_name: str = "X-Request-ID"

    rate_limit_enabled: bool = True
    rate_limit_storage_uri: str = "memory://"
    admin_rate_limit: str = "30/minute"

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


# -- Environment profiles --

_ENV_PROFILES: dict[str, dict] = {
    "dev": {
        "log_level": "DEBUG",
        "rate_limit_enabled": False,
    },
    "staging": {
        "log_level": "INFO",
        "rate_limit_enabled": True,
    },
    "production": {
        "log_level": "WARNING",
        "rate_limit_enabled": True,
        "admin_rate_limit": "10/minute",
    },
}


def get_database_url() -> str:
    """Resolve database URL from env var or local default."""
    env_url = os.getenv("DATABASE_URL")
    if env_url:
        return env_url
    return "postgresql+psycopg2://localhost:5432/regionsite"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build Settings by merging environment profile with env-var overrides.

    A local `.env` file fills in variables that are not already set.
    """
    load_dotenv(override=False)
    app_env = os.getenv("APP_ENV", "dev")
    profile = _ENV_PROFILES.get(app_env, _ENV_PROFILES["dev"])

    admin_password = os.getenv("ADMIN_PASSWORD")
    if admin_password is not None and admin_password.strip() == "":
        admin_password = None

    return Settings(
        database_url=get_database_url(),
        app_env=app_env,
        log_level=os.getenv("LOG_LEVEL", profile.get("log_level", "INFO")),
        admin_password=admin_password,
        store_timeout_seconds=float(os.getenv("STORE_TIMEOUT_SECONDS", "10")),
        mock_data=_env_bool("MOCK_DATA", False),
        cors_origins=_env_list("CORS_ORIGINS", ["*"]),
        request_id_header_name=os.getenv("REQUEST_ID_HEADER", "X-Request-ID"),
        rate_limit_enabled=_env_bool("RATE_LIMIT_ENABLED", profile.get("rate_limit_enabled", True)),
        rate_limit_storage_uri=os.getenv("RATE_LIMIT_STORAGE_URI", "memory://"),
        admin_rate_limit=os.getenv("ADMIN_RATE_LIMIT", profile.get("admin_rate_limit", "30/minute")),
    )
