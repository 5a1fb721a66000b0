"""
AI Mode: logging requests to ai_logs (pipeline metadata only, no result data).
"""

import logging
import uuid
from typing import Optional

logger = logging.getLogger(__name__)

MAX_QUERY_CHARS = 2000


def log_interaction(
    conn,
    query: str,
    workspace: str,
    mode: str,
    *,
    intent: Optional[str] = None,
    sql: Optional[str] = None,
    action_count: Optional[int] = None,
    response_type: Optional[str] = None,
    error: Optional[str] = None,
) -> Optional[str]:
    """
    Record one AI request. Returns the query_id, or None if the insert failed;
    a logging failure never fails the request.
    """
    try:
        query_id = str(uuid.uuid4())
        conn.execute(
            """
            INSERT INTO ai_logs
            (query_id, user_query, workspace, mode, intent, sql_generated, action_count,
             response_type, error_message, created_at)
            VALUES (:query_id, :query, :workspace, :mode, :intent, :sql, :action_count,
                    :response_type, :error, datetime('now'))
            """,
            {
                "query_id": query_id,
                "query": (query or "")[:MAX_QUERY_CHARS],
                "workspace": workspace,
                "mode": mode,
                "intent": intent,
                "sql": sql,
                "action_count": action_count,
                "response_type": response_type,
                "error": error,
            },
        )
        conn.commit()
        return query_id
    except Exception:
        try:
            from src.core.error_log import get_error_logger
            get_error_logger().exception("Error logging AI interaction")
        except Exception:
            logger.exception("Error logging AI interaction")
        return None
