"""
AI Mode: read-only allow-list for generated SQL.

A statement may run only if it starts with SELECT (leading whitespace and case
ignored) and contains none of the write/DDL/permission keywords as whole words
anywhere in its text, including after a semicolon.
"""

import re

from ai_mode.errors import QueryRejectedError

FORBIDDEN_KEYWORDS = (
    "INSERT",
    "UPDATE",
    "DELETE",
    "DROP",
    "ALTER",
    "CREATE",
    "TRUNCATE",
    "GRANT",
    "REVOKE",
)

_SELECT_PREFIX = re.compile(r"^\s*SELECT\b", re.IGNORECASE)
_FORBIDDEN = re.compile(r"\b(" + "|".join(FORBIDDEN_KEYWORDS) + r")\b", re.IGNORECASE)
# only an outermost LIMIT at the end of the statement caps the result
_TRAILING_LIMIT = re.compile(r"\bLIMIT\s+\d+(?:\s*(?:,|\bOFFSET\b)\s*\d+)?\s*$", re.IGNORECASE)


def check_sql(sql: str) -> None:
    """Raise QueryRejectedError unless sql passes the allow-list."""
    if not sql or not _SELECT_PREFIX.match(sql):
        raise QueryRejectedError("Only SELECT statements are allowed")
    found = _FORBIDDEN.search(sql)
    if found:
        raise QueryRejectedError(f"Forbidden keyword in generated SQL: {found.group(1).upper()}")


def is_allowed(sql: str) -> bool:
    try:
        check_sql(sql)
    except QueryRejectedError:
        return False
    return True


def apply_row_limit(sql: str, row_limit: int) -> str:
    """
    Append LIMIT row_limit unless the statement already ends in a LIMIT clause.
    A LIMIT inside a subquery does not count. Trailing semicolons are dropped.
    """
    stripped = sql.strip().rstrip(";").strip()
    if _TRAILING_LIMIT.search(stripped):
        return stripped
    return f"{stripped} LIMIT {int(row_limit)}"
