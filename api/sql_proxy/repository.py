"""
Pass-through SQL execution (no schema of our own).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from core import db


@dataclass(frozen=True)
class ExecutionResult:
    rows: list[dict[str, Any]]
    affected_rows: int
    insert_id: int | None
    status: str


def _affected_rows(status: str) -> int:
    """
    Row count from a Postgres command tag: "INSERT 0 3" -> 3, "SELECT 2" -> 2.
    """
    parts = status.split()
    if parts and parts[-1].isdigit():
        return int(parts[-1])
    return 0


def _insert_id(rows: list[dict[str, Any]]) -> int | None:
    # Postgres has no last-insert id; use `RETURNING id` when it was asked for.
    if not rows:
        return None
    value = rows[0].get("id")
    return value if isinstance(value, int) and not isinstance(value, bool) else None


async def run_query(sql: str) -> ExecutionResult:
    """
    Read path: runs inside a READ ONLY transaction.
    """
    rows, status = await db.run_prepared(sql, readonly=True)
    return ExecutionResult(rows=rows, affected_rows=_affected_rows(status), insert_id=None, status=status)


async def run_statement(sql: str) -> ExecutionResult:
    rows, status = await db.run_prepared(sql)
    return ExecutionResult(
        rows=rows,
        affected_rows=_affected_rows(status),
        insert_id=_insert_id(rows),
        status=status,
    )


async def ping() -> bool:
    row = await db.fetch_one("SELECT 1 AS ok")
    return row is not None
