"""
Async database access helpers (raw SQL) using asyncpg.

The pool is created once per process by the FastAPI lifespan (see
`api/main.py`) and stored on `app.state.db_pool`. Handlers receive it through
the `get_pool` dependency and pass it down explicitly; nothing here keeps a
module-level pool.

Every helper goes through `pool.fetchrow/fetch/execute`, which acquire a
connection for the duration of one statement and release it on every exit
path.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Any
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

import asyncpg
from fastapi import Request

logger = logging.getLogger(__name__)

# Failures raised by the driver or the connection path.
STORAGE_ERRORS: tuple[type[BaseException], ...] = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    asyncio.TimeoutError,
)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def _compose_database_url() -> str | None:
    user = os.environ.get("DB_USER", "").strip()
    password = os.environ.get("DB_PASSWORD", "").strip()
    name = os.environ.get("DB_NAME", "").strip()
    if not (user and password and name):
        return None
    host = os.environ.get("DB_HOST", "").strip() or "localhost"
    port = _env_int("DB_PORT", 5432)
    return f"postgresql://{quote(user, safe='')}:{quote(password, safe='')}@{host}:{port}/{name}"


def database_url() -> str:
    url = os.environ.get("DATABASE_URL", "").strip() or _compose_database_url()
    if not url:
        raise RuntimeError("DATABASE_URL is not set (or DB_USER, DB_PASSWORD and DB_NAME).")
    return _sanitize_database_url(url)


def pool_settings() -> dict[str, Any]:
    min_size = max(_env_int("DB_POOL_MIN_SIZE", 1), 0)
    max_size = max(_env_int("DB_POOL_MAX_SIZE", 5), 1)
    return {
        "min_size": min(min_size, max_size),
        "max_size": max_size,
        "command_timeout": _env_float("DB_COMMAND_TIMEOUT", 30.0),
    }


async def create_pool() -> asyncpg.Pool:
    settings = pool_settings()
    pool = await asyncpg.create_pool(dsn=database_url(), **settings)
    logger.info(
        "db_pool_ready min_size=%s max_size=%s",
        settings["min_size"],
        settings["max_size"],
    )
    return pool


async def close_pool(pool: asyncpg.Pool | None) -> None:
    if pool is None:
        return None
    await pool.close()
    logger.info("db_pool_closed")


def get_pool(request: Request) -> asyncpg.Pool:
    """
    FastAPI dependency: the pool owned by the running application.
    """
    pool = getattr(request.app.state, "db_pool", None)
    if pool is None:
        raise RuntimeError("DB pool is not initialized. It is created in the app lifespan.")
    return pool


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


def _affected_rows(status: str) -> int:
    # asyncpg returns the command tag, e.g. "DELETE 1" or "UPDATE 0".
    try:
        return int(status.rsplit(" ", 1)[-1])
    except (AttributeError, ValueError):
        return 0


async def fetch_one(pool: asyncpg.Pool, sql: str, *args: Any) -> dict[str, Any] | None:
    """
    Run a query and return a single row as a dict (or None).
    """
    row = await pool.fetchrow(sql, *args)
    return _record_to_dict(row) if row is not None else None


async def fetch_all(pool: asyncpg.Pool, sql: str, *args: Any) -> list[dict[str, Any]]:
    """
    Run a query and return all rows as a list of dicts.
    """
    rows = await pool.fetch(sql, *args)
    return [_record_to_dict(r) for r in rows]


async def execute(pool: asyncpg.Pool, sql: str, *args: Any) -> int:
    """
    Run a statement (INSERT/UPDATE/DELETE/DDL) and return the affected row count.
    """
    status = await pool.execute(sql, *args)
    return _affected_rows(status)


async def ping(pool: asyncpg.Pool) -> bool:
    try:
        row = await fetch_one(pool, "SELECT 1 AS ok")
    except STORAGE_ERRORS:
        logger.warning("db_ping_failed", exc_info=True)
        return False
    return row is not None
