"""Read-only allow-list for generated SQL."""

import pytest

from ai_mode.errors import QueryRejectedError
from ai_mode.sql_guard import apply_row_limit, check_sql, is_allowed


@pytest.mark.parametrize("sql", [
    "SELECT * FROM media_entries",
    "   select title from media_entries where status = 'Finished'",
    "SELECT medium, COUNT(*) AS n FROM media_entries GROUP BY medium",
    "SELECT created_at, updated_at FROM media_entries",
])
def test_allowed(sql):
    check_sql(sql)
    assert is_allowed(sql)


def test_stacked_drop_is_rejected_despite_leading_select():
    with pytest.raises(QueryRejectedError, match="DROP"):
        check_sql("SELECT * FROM x; DROP TABLE x;")


@pytest.mark.parametrize("sql", [
    "DELETE FROM media_entries",
    "WITH t AS (SELECT 1) SELECT * FROM t",
    "PRAGMA table_info(media_entries)",
    "",
])
def test_must_start_with_select(sql):
    with pytest.raises(QueryRejectedError, match="Only SELECT"):
        check_sql(sql)


@pytest.mark.parametrize("keyword", ["insert", "Update", "DELETE", "drop", "alter", "create", "truncate", "grant", "revoke"])
def test_forbidden_keywords_anywhere(keyword):
    assert not is_allowed(f"SELECT 1 FROM t WHERE 1 = 1 {keyword} x")


def test_apply_row_limit():
    assert apply_row_limit("SELECT * FROM t;", 1000) == "SELECT * FROM t LIMIT 1000"
    assert apply_row_limit("SELECT * FROM t LIMIT 5", 1000) == "SELECT * FROM t LIMIT 5"
    assert apply_row_limit("SELECT * FROM t limit 10 offset 20", 1000) == "SELECT * FROM t limit 10 offset 20"
    assert apply_row_limit("SELECT * FROM t LIMIT 20, 10;", 1000) == "SELECT * FROM t LIMIT 20, 10"


@pytest.mark.parametrize("sql", [
    "SELECT * FROM (SELECT title FROM media_entries LIMIT 5)",
    "SELECT title FROM (SELECT title FROM media_entries LIMIT 5) UNION SELECT title FROM food_entries",
    "SELECT title FROM media_entries WHERE id IN (SELECT id FROM media_entries LIMIT 3)",
])
def test_row_limit_ignores_subquery_limit(sql):
    assert apply_row_limit(sql, 1000) == f"{sql} LIMIT 1000"
