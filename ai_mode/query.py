"""
AI Mode: query mode - natural language to a read-only SQL result with
visualization metadata.

The generated statement passes the allow-list before it reaches the store;
:user_id is bound so the model can scope its query to the current user.
"""

import logging

import pandas as pd

from ai_mode.chart import build_metadata
from ai_mode.errors import GenerationError, QueryExecutionError
from ai_mode.schema import QueryResult
from ai_mode.sql_guard import apply_row_limit, check_sql
from src.api.utils import df_to_json

logger = logging.getLogger(__name__)


def run_query(oracle, conn, text: str, workspace: str, user_id: str, row_limit: int = 1000) -> QueryResult:
    """
    Generate, guard and run one SELECT.
    Raises GenerationError (oracle failure / no SQL), QueryRejectedError (allow-list)
    or QueryExecutionError (store failure).
    """
    raw = oracle.generate_sql(text, workspace)
    if not isinstance(raw, dict):
        raise GenerationError("SQL output is not a JSON object")
    sql = raw.get("sql")
    explanation = raw.get("explanation") or ""
    if not isinstance(sql, str) or not sql.strip():
        raise GenerationError(explanation or "We don't have data to answer that question.")

    check_sql(sql)
    sql = apply_row_limit(sql, row_limit)

    try:
        df = pd.read_sql_query(sql, conn, params={"user_id": user_id})
    except Exception as e:
        raise QueryExecutionError(f"I couldn't run that query: {e}") from e

    metadata = build_metadata(df, raw.get("visualization"))
    logger.info("Query returned %d row(s), visualization=%s", metadata.row_count, metadata.visualization_type)
    return QueryResult(sql=sql, explanation=explanation, data=df_to_json(df), metadata=metadata)
