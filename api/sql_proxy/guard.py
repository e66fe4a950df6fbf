"""
Statement guard for client-supplied SQL.

Three checks, in order:
- keyword blocklist: DROP, UPDATE or DELETE anywhere in the text
  (case-insensitive substring, so "updated_at" is rejected as well)
- one statement only: nothing but whitespace may follow a `;`
- leading keyword must be in the caller's allow-list

The blocklist alone is easy to get around; the allow-list plus the
driver-side prepared statement and read-only transaction are what actually
restrict execution.
"""

from __future__ import annotations

import re


FORBIDDEN_KEYWORDS = re.compile(r"DROP|UPDATE|DELETE", re.IGNORECASE)

READ_STATEMENTS = frozenset({"SELECT", "WITH", "SHOW", "EXPLAIN", "VALUES", "TABLE"})
WRITE_STATEMENTS = READ_STATEMENTS | {"INSERT"}

_LEADING_NOISE = re.compile(r"\A(?:\s+|\(|--[^\n]*(?:\n|\Z)|/\*.*?\*/)*", re.DOTALL)
_KEYWORD = re.compile(r"[A-Za-z]+")
# Quoted strings, quoted identifiers, dollar-quoted bodies and comments.
_NON_CODE = re.compile(
    r"'(?:[^']|'')*'"
    r"|\"(?:[^\"]|\"\")*\""
    r"|\$([A-Za-z_]\w*|)\$.*?\$\1\$"
    r"|--[^\n]*"
    r"|/\*.*?\*/",
    re.DOTALL,
)


class ForbiddenQuery(ValueError):
    pass


def contains_forbidden_keyword(sql: str) -> bool:
    return FORBIDDEN_KEYWORDS.search(sql) is not None


def leading_keyword(sql: str) -> str:
    """
    First keyword after leading whitespace, comments and opening
    parentheses, uppercased ("" if none).
    """
    rest = sql[_LEADING_NOISE.match(sql).end():]
    match = _KEYWORD.match(rest)
    return match.group(0).upper() if match else ""


def is_single_statement(sql: str) -> bool:
    """
    No `;` outside literals and comments, except one trailing terminator.
    """
    code = _NON_CODE.sub(" ", sql)
    _, sep, tail = code.partition(";")
    return not sep or not tail.strip()


def check_statement(sql: str, *, allowed: frozenset[str]) -> None:
    if contains_forbidden_keyword(sql):
        raise ForbiddenQuery("Query contains a forbidden keyword (DROP, UPDATE, DELETE)")
    if not is_single_statement(sql):
        raise ForbiddenQuery("Only a single SQL statement is allowed")
    keyword = leading_keyword(sql)
    if keyword not in allowed:
        raise ForbiddenQuery(f"Statement type not allowed: {keyword or 'unknown'}")
