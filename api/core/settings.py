"""
Process settings read from the environment.

Values are read on each call so tests can override them with monkeypatch.
"""

from __future__ import annotations

import os
from urllib.parse import quote

DEFAULT_CORS_ORIGINS = (
    "http://localhost:5173",
    "http://127.0.0.1:5173",
)


def _env_str(name: str, default: str) -> str:
    return os.environ.get(name, "").strip() or default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def app_env() -> str:
    return _env_str("APP_ENV", "development")


def log_level() -> str:
    return _env_str("LOG_LEVEL", "error").lower()


def postgres_dsn() -> str:
    """
    Build a DSN from the discrete POSTGRES_* variables.
    """
    user = quote(_env_str("POSTGRES_USER", "postgres"), safe="")
    password = quote(os.environ.get("POSTGRES_PASSWORD", "").strip(), safe="")
    host = _env_str("POSTGRES_HOST", "localhost")
    port = _env_int("POSTGRES_PORT", 5432)
    name = _env_str("POSTGRES_DB", "postgres")
    credentials = f"{user}:{password}" if password else user
    return f"postgresql://{credentials}@{host}:{port}/{name}"


def database_url() -> str:
    return os.environ.get("DATABASE_URL", "").strip() or postgres_dsn()


def db_pool_min_size() -> int:
    return max(1, _env_int("DB_POOL_MIN_SIZE", 1))


def db_pool_max_size() -> int:
    return max(db_pool_min_size(), _env_int("DB_POOL_MAX_SIZE", 5))


def cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", "").strip()
    if not raw:
        return list(DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
