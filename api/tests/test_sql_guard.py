from __future__ import annotations

import pytest

from sql_proxy import guard


@pytest.mark.parametrize(
    "sql",
    [
        "DROP TABLE users",
        "drop table users",
        "   DrOp TABLE users   ",
        "SELECT 1; DELETE FROM users",
        "SELECT * FROM users WHERE updated_at > now()",
        "/* harmless */ update users set name = 'x'",
    ],
)
def test_blocklisted_keywords_are_found_anywhere(sql: str) -> None:
    assert guard.contains_forbidden_keyword(sql) is True


def test_plain_select_has_no_forbidden_keyword() -> None:
    assert guard.contains_forbidden_keyword("SELECT id, name FROM users") is False


@pytest.mark.parametrize(
    ("sql", "keyword"),
    [
        ("SELECT 1", "SELECT"),
        ("  \n\tselect 1", "SELECT"),
        ("-- comment\nINSERT INTO t VALUES (1)", "INSERT"),
        ("/* multi\nline */ WITH x AS (SELECT 1) SELECT * FROM x", "WITH"),
        ("/* a */ -- b\n  explain select 1", "EXPLAIN"),
        ("(SELECT 1)", "SELECT"),
        ("((SELECT 1) UNION (SELECT 2))", "SELECT"),
        (" ( /* x */ with t AS (SELECT 1) SELECT * FROM t)", "WITH"),
        ("1 + 1", ""),
        ("", ""),
    ],
)
def test_leading_keyword_skips_whitespace_and_comments(sql: str, keyword: str) -> None:
    assert guard.leading_keyword(sql) == keyword


def test_single_statement_allows_trailing_semicolon() -> None:
    assert guard.is_single_statement("SELECT 1") is True
    assert guard.is_single_statement("SELECT 1;  \n") is True
    assert guard.is_single_statement("SELECT 1; SELECT 2") is False


@pytest.mark.parametrize(
    "sql",
    [
        "SELECT ';' AS sep",
        "SELECT 'it''s; fine'",
        "SELECT 1 -- a; b",
        "SELECT 1; -- done",
        "SELECT 1 /* a; b */",
        "SELECT \"odd;name\" FROM t",
        "SELECT $$x; y$$",
        "SELECT $tag$x; y$tag$;",
    ],
)
def test_semicolons_in_literals_and_comments_do_not_count(sql: str) -> None:
    assert guard.is_single_statement(sql) is True


def test_statement_after_a_literal_still_counts() -> None:
    assert guard.is_single_statement("SELECT ';'; SELECT 2") is False
    assert guard.is_single_statement("SELECT 1 /* c */; SELECT 2") is False


def test_check_statement_rejects_writes_on_read_path() -> None:
    with pytest.raises(guard.ForbiddenQuery, match="not allowed: INSERT"):
        guard.check_statement("INSERT INTO t VALUES (1)", allowed=guard.READ_STATEMENTS)

    guard.check_statement("INSERT INTO t VALUES (1)", allowed=guard.WRITE_STATEMENTS)


def test_check_statement_rejects_ddl_not_covered_by_blocklist() -> None:
    with pytest.raises(guard.ForbiddenQuery):
        guard.check_statement("TRUNCATE users", allowed=guard.WRITE_STATEMENTS)
    with pytest.raises(guard.ForbiddenQuery):
        guard.check_statement("ALTER TABLE users ADD COLUMN x int", allowed=guard.WRITE_STATEMENTS)


def test_check_statement_rejects_stacked_queries() -> None:
    with pytest.raises(guard.ForbiddenQuery, match="single SQL statement"):
        guard.check_statement("SELECT 1; SELECT 2", allowed=guard.READ_STATEMENTS)


def test_forbidden_keyword_is_reported_first() -> None:
    with pytest.raises(guard.ForbiddenQuery, match="forbidden keyword"):
        guard.check_statement("SELECT 1; DROP TABLE users", allowed=guard.READ_STATEMENTS)
