"""
SQL-proxy business logic.

Flow per request:
1) require the query text
2) run the statement guard (403 on rejection)
3) execute through the repository
4) driver errors -> 400 with the driver message, timeouts -> 504
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import asyncpg
from fastapi import HTTPException, status

from . import guard, repository

logger = logging.getLogger(__name__)


def _require_text(value: Any, *, detail: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)
    return value.strip()


def _check(sql: str, *, allowed: frozenset[str]) -> None:
    try:
        guard.check_statement(sql, allowed=allowed)
    except guard.ForbiddenQuery as exc:
        logger.warning("sql_rejected reason=%s", exc)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc


async def _execute(
    runner: Callable[[str], Awaitable[repository.ExecutionResult]],
    sql: str,
) -> repository.ExecutionResult:
    try:
        return await runner(sql)
    except asyncio.TimeoutError as exc:
        logger.warning("sql_timeout")
        raise HTTPException(status_code=status.HTTP_504_GATEWAY_TIMEOUT, detail="Query timed out") from exc
    except (asyncpg.PostgresError, asyncpg.InterfaceError) as exc:
        # The driver message goes back to the client verbatim.
        logger.info("sql_failed error=%s", exc)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


async def read_query(q: str | None) -> dict:
    sql = _require_text(q, detail="Query parameter 'q' is required")
    _check(sql, allowed=guard.READ_STATEMENTS)
    result = await _execute(repository.run_query, sql)
    return {"data": result.rows}


async def write_query(payload: Any) -> dict:
    fields = payload if isinstance(payload, dict) else {}
    sql = _require_text(fields.get("query"), detail="Field 'query' is required")
    _check(sql, allowed=guard.WRITE_STATEMENTS)
    result = await _execute(repository.run_statement, sql)
    logger.info("sql_executed status=%s affected_rows=%s", result.status, result.affected_rows)
    return {
        "message": "Query executed successfully",
        "affectedRows": result.affected_rows,
        "insertId": result.insert_id,
    }


async def health() -> tuple[int, dict]:
    try:
        ok = await repository.ping()
    except (OSError, RuntimeError, asyncio.TimeoutError, asyncpg.PostgresError, asyncpg.InterfaceError):
        logger.exception("db_ping_failed")
        ok = False
    if ok:
        return 200, {"status": "ok", "database": "ok"}
    return 503, {"status": "degraded", "database": "unavailable"}
