"""
Async database access helpers (raw SQL) using asyncpg.

This module owns the connection pool. FastAPI initializes it on startup and
closes it on shutdown (see `api/main.py`).

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from pageable.builder import QueryPlan

from . import settings

T = TypeVar("T")

logger = logging.getLogger(__name__)

# Raised by asyncpg/Postgres when a filter value does not fit the column
# (e.g. `?year=abc` or `?id=like(1)`). Services map these to HTTP 400.
FILTER_VALUE_ERRORS = (asyncpg.DataError, asyncpg.UndefinedFunctionError)

# Largest id a bigint primary key can hold.
MAX_BIGINT = 2**63 - 1

_pool: asyncpg.Pool | None = None


def column_converter(column_types: dict[str, Callable[[str], Any]]) -> Callable[[str, str], Any]:
    """
    Build a filter value converter for `pageable.builder.build_list_query`.

    asyncpg binds strictly by column type, so `"42"` must become `42` for an
    integer column. Values that fail conversion are bound as-is and the
    database rejects them.
    """

    def convert(column: str, raw: str) -> Any:
        to_python = column_types.get(column)
        if to_python is None:
            return raw
        try:
            return to_python(raw.strip())
        except ValueError:
            return raw

    return convert


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url() -> str:
    return _sanitize_database_url(settings.database_url())


async def init_pool() -> None:
    global _pool
    if _pool is not None:
        return None
    _pool = await asyncpg.create_pool(
        dsn=database_url(),
        min_size=settings.db_pool_min_size(),
        max_size=settings.db_pool_max_size(),
        command_timeout=30,
    )
    logger.info("db_pool_ready min_size=%s max_size=%s", settings.db_pool_min_size(), settings.db_pool_max_size())


async def close_pool() -> None:
    global _pool
    if _pool is None:
        return None
    await _pool.close()
    _pool = None


def pool() -> asyncpg.Pool:
    if _pool is None:
        raise RuntimeError("DB pool is not initialized. Call init_pool() on startup.")
    return _pool


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


async def fetch_one(sql: str, *args: Any) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    row = await pool().fetchrow(sql, *args)
    return _record_to_dict(row) if row is not None else None


async def fetch_all(sql: str, *args: Any) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    rows = await pool().fetch(sql, *args)
    return [_record_to_dict(r) for r in rows]


async def fetch_val(sql: str, *args: Any) -> Any:
    """
    Run a query and return the first column of the first row.
    """
    return await pool().fetchval(sql, *args)


async def execute(sql: str, *args: Any) -> str:
    """
    Run a statement (INSERT/UPDATE/DELETE/DDL). Returns the status tag,
    e.g. "DELETE 1".
    """
    return await pool().execute(sql, *args)


def affected_rows(status: str) -> int:
    # "DELETE 3" / "UPDATE 0" / "INSERT 0 1": the row count is the last token.
    try:
        return int((status or "").rsplit(" ", 1)[-1])
    except ValueError:
        return 0


async def fetch_page(plan: QueryPlan, row_to_item: Callable[[dict[str, Any]], T]) -> tuple[int, list[T]]:
    """
    Run the count and select statements of a list query plan.

    Returns (total, items).
    """
    logger.debug("list_query sql=%s params=%s", plan.select_sql, plan.select_params)
    total = await fetch_val(plan.count_sql, *plan.count_params)
    rows = await fetch_all(plan.select_sql, *plan.select_params)
    return int(total or 0), [row_to_item(row) for row in rows]
