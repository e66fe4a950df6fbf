"""
Async database access helpers (raw SQL) using asyncpg.

This module owns the connection pool for the SQL-proxy service. The app
lifespan opens it on startup and closes it on shutdown (see `api/sql_main.py`).
A pool that cannot connect raises, which aborts startup before the server
listens.

The pool size is explicit: DB_POOL_MAX_SIZE=1 (the default) means a single
connection, and concurrent requests queue on it.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from .config import Settings

logger = logging.getLogger(__name__)

_pool: asyncpg.Pool | None = None


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def database_url(settings: Settings) -> str:
    url = settings.dsn().strip()
    if not url:
        raise RuntimeError("Database connection settings are empty.")
    return _sanitize_database_url(url)


async def init_pool(settings: Settings) -> None:
    global _pool
    if _pool is not None:
        return None
    _pool = await asyncpg.create_pool(
        dsn=database_url(settings),
        min_size=1,
        max_size=settings.db_pool_max_size,
        command_timeout=settings.db_command_timeout,
    )
    logger.info(
        "db_pool_ready host=%s db=%s max_size=%s",
        settings.db_host,
        settings.db_name,
        settings.db_pool_max_size,
    )


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


async def run_prepared(sql: str, *, readonly: bool = False) -> tuple[list[dict[str, Any]], str]:
    """
    Run one statement as a prepared statement and return (rows, status tag).

    Prepared statements reject multi-statement strings at the driver level.
    With `readonly=True` the statement runs inside a READ ONLY transaction.
    """
    async with pool().acquire() as conn:
        async with conn.transaction(readonly=readonly):
            stmt = await conn.prepare(sql)
            rows = await stmt.fetch()
            status = stmt.get_statusmsg() or ""
    return [_record_to_dict(r) for r in rows], status
