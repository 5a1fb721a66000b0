"""
AI Mode: main orchestrator - classify → (query | generate → validate → open confirmation).

Nothing here mutates the catalog. Action mode ends with a ConfirmationController
registered in ConfirmationSessions; execution happens only when the user confirms.
"""

import logging

from ai_mode.actions import ACTION, QUERY
from ai_mode.confirmation import ConfirmationController
from ai_mode.errors import AIModeError, GenerationError
from ai_mode.generator import generate_actions
from ai_mode.intent import classify_intent
from ai_mode.logging import log_interaction
from ai_mode.query import run_query
from ai_mode.sessions import ConfirmationSessions
from ai_mode.validator import summarize_validation, validate_actions
from src.api.models import AIQueryResponse
from src.core.queries.catalog_queries import fetch_catalog_snapshot

logger = logging.getLogger(__name__)


def _log_failure(text: str, workspace: str, mode: str, exc: AIModeError) -> None:
    try:
        from src.core.error_log import log_error
        log_error(
            f"AI {mode} request failed: {exc}",
            context={"workspace": workspace, "mode": mode, "user_query": text},
            error_kind="generation_failure" if isinstance(exc, GenerationError) else "query_failure",
        )
    except Exception:
        logger.exception("Could not write AI failure to the error log")


def process_query(text: str, workspace: str, conn, oracle, user_id: str, row_limit: int = 1000) -> AIQueryResponse:
    try:
        result = run_query(oracle, conn, text, workspace, user_id, row_limit)
    except AIModeError as e:
        _log_failure(text, workspace, QUERY, e)
        log_interaction(conn, text, workspace, QUERY, response_type="error", error=str(e))
        raise

    response = AIQueryResponse(
        type=QUERY,
        sql=result.sql,
        explanation=result.explanation,
        data=result.data,
        metadata=result.metadata,
    )
    response.query_id = log_interaction(
        conn, text, workspace, QUERY,
        sql=result.sql, response_type=result.metadata.visualization_type,
    )
    return response


def process_action(text: str, workspace: str, conn, oracle, user_id: str, snapshot_limit: int = 500) -> AIQueryResponse:
    try:
        output = generate_actions(oracle, text, workspace)
    except GenerationError as e:
        _log_failure(text, workspace, ACTION, e)
        log_interaction(conn, text, workspace, ACTION, response_type="error", error=str(e))
        raise

    catalog = fetch_catalog_snapshot(conn, user_id, workspace, snapshot_limit)
    validated = validate_actions(output.actions, catalog, workspace)
    controller = ConfirmationController(validated, catalog, workspace)
    session_id = ConfirmationSessions.open(controller)

    response = AIQueryResponse(
        type=ACTION,
        intent=output.intent,
        actions=output.actions,
        validated_actions=validated,
        validation_summary=summarize_validation(validated),
        selected=controller.selected,
        session_id=session_id,
    )
    response.query_id = log_interaction(
        conn, text, workspace, ACTION,
        intent=output.intent, action_count=len(output.actions), response_type="confirmation",
    )
    return response


def process_request(
    text: str,
    workspace: str,
    conn,
    oracle,
    user_id: str,
    snapshot_limit: int = 500,
    row_limit: int = 1000,
) -> AIQueryResponse:
    """
    Route text by intent and run the matching pipeline.
    Raises GenerationError, QueryRejectedError or QueryExecutionError; the router
    turns them into user-facing errors.
    """
    mode = classify_intent(text)
    logger.info("Routing %s request in %s workspace", mode, workspace)
    if mode == ACTION:
        return process_action(text, workspace, conn, oracle, user_id, snapshot_limit)
    return process_query(text, workspace, conn, oracle, user_id, row_limit)
