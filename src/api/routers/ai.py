from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from ai_mode.confirmation import NOTHING_SELECTED, OPEN, ConfirmationController
from ai_mode.errors import GenerationError, QueryExecutionError, QueryRejectedError, UserInputError
from ai_mode.executor import BatchExecutor
from ai_mode.orchestrator import process_request
from ai_mode.schema import Action, ExecutionReport
from ai_mode.sessions import ConfirmationSessions
from ai_mode.validator import summarize_validation, validate_actions
from src.api.dependencies import get_db, get_oracle, get_user_id
from src.api.models import (
    AIQueryRequest,
    AIQueryResponse,
    ConfirmationStateResponse,
    ConfirmResponse,
    EditActionRequest,
    ExecuteActionsRequest,
    ValidateActionsRequest,
    ValidateActionsResponse,
)
from src.core.config.app_config import CATALOG_SNAPSHOT_LIMIT, QUERY_ROW_LIMIT
from src.core.queries.catalog_queries import CatalogStore, fetch_catalog_snapshot

router = APIRouter()


def _session(session_id: str) -> ConfirmationController:
    controller = ConfirmationSessions.get(session_id)
    if controller is None:
        raise HTTPException(status_code=404, detail=f"No pending confirmation: {session_id}")
    return controller


def _state(session_id: str, controller: ConfirmationController) -> ConfirmationStateResponse:
    return ConfirmationStateResponse(
        session_id=session_id,
        state=controller.state,
        validated_actions=controller.items,
        selected=controller.selected,
    )


@router.post("/query", response_model=AIQueryResponse)
def query(request: AIQueryRequest, conn=Depends(get_db), oracle=Depends(get_oracle), user_id: str = Depends(get_user_id)):
    """
    Main endpoint for AI interaction.
    Handles Intent Classification -> (SQL query | action generation -> validation -> pending confirmation).
    """
    text = request.text.strip()
    if not text:
        raise HTTPException(status_code=400, detail="Query text is required")
    try:
        return process_request(
            text,
            request.workspace,
            conn,
            oracle,
            user_id,
            snapshot_limit=CATALOG_SNAPSHOT_LIMIT,
            row_limit=QUERY_ROW_LIMIT,
        )
    except GenerationError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except (QueryRejectedError, QueryExecutionError, UserInputError) as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/validate", response_model=ValidateActionsResponse)
def validate(request: ValidateActionsRequest, conn=Depends(get_db), user_id: str = Depends(get_user_id)):
    """Re-validate client-held actions against the current catalog snapshot"""
    catalog = fetch_catalog_snapshot(conn, user_id, request.workspace, CATALOG_SNAPSHOT_LIMIT)
    validated = validate_actions(request.actions, catalog, request.workspace)
    return ValidateActionsResponse(validated_actions=validated, summary=summarize_validation(validated))


@router.post("/execute-actions", response_model=ExecutionReport)
def execute_actions(request: ExecuteActionsRequest, conn=Depends(get_db), user_id: str = Depends(get_user_id)):
    """
    Apply a batch of confirmed actions.
    Items run independently; the response carries per-item results and a summary.
    """
    if not isinstance(request.actions, list):
        raise HTTPException(status_code=400, detail="Invalid request: actions array required")
    if not request.actions:
        raise HTTPException(status_code=400, detail="No actions provided")

    actions = []
    for index, item in enumerate(request.actions):
        try:
            actions.append(Action.model_validate(item))
        except ValidationError as e:
            raise HTTPException(status_code=400, detail=f"Invalid action at index {index}: {e.errors()[0]['msg']}")

    store = CatalogStore(conn, user_id, request.workspace)
    return BatchExecutor(store).execute(actions)


# --- Confirmation sessions ---

@router.get("/sessions/{session_id}", response_model=ConfirmationStateResponse)
def get_session(session_id: str):
    return _state(session_id, _session(session_id))


@router.post("/sessions/{session_id}/toggle/{index}", response_model=ConfirmationStateResponse)
def toggle_action(session_id: str, index: int):
    controller = _session(session_id)
    try:
        controller.toggle(index)
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except RuntimeError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _state(session_id, controller)


@router.post("/sessions/{session_id}/select-all", response_model=ConfirmationStateResponse)
def select_all(session_id: str):
    controller = _session(session_id)
    try:
        controller.select_all()
    except RuntimeError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _state(session_id, controller)


@router.post("/sessions/{session_id}/deselect-all", response_model=ConfirmationStateResponse)
def deselect_all(session_id: str):
    controller = _session(session_id)
    try:
        controller.deselect_all()
    except RuntimeError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _state(session_id, controller)


@router.post("/sessions/{session_id}/actions/{index}", response_model=ConfirmationStateResponse)
def edit_action(session_id: str, index: int, request: EditActionRequest):
    """Edit a pending create action; the edited action is re-validated."""
    controller = _session(session_id)
    try:
        controller.edit(index, request.patch)
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except UserInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RuntimeError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return _state(session_id, controller)


@router.post("/sessions/{session_id}/confirm", response_model=ConfirmResponse)
def confirm(session_id: str, conn=Depends(get_db), user_id: str = Depends(get_user_id)):
    """Execute the selected valid actions of a pending confirmation."""
    controller = _session(session_id)
    store = CatalogStore(conn, user_id, controller.workspace)
    try:
        outcome = controller.confirm(BatchExecutor(store).execute)
    except RuntimeError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if outcome.error == UserInputError.__name__:
        raise HTTPException(status_code=400, detail=NOTHING_SELECTED)
    if controller.state != OPEN:
        ConfirmationSessions.close(session_id)
    return ConfirmResponse(
        ok=outcome.ok,
        message=outcome.message,
        error=outcome.error,
        notifications=outcome.notifications,
        report=outcome.report,
    )


@router.delete("/sessions/{session_id}")
def cancel(session_id: str):
    """Discard a pending confirmation; nothing is applied."""
    controller = _session(session_id)
    try:
        controller.cancel()
    except RuntimeError as e:
        raise HTTPException(status_code=409, detail=str(e))
    ConfirmationSessions.close(session_id)
    return {"status": "cancelled"}

