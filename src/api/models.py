"""
Pydantic Models for API Request/Response Schemas

This module consolidates the request/response models used across routers.
Pipeline types (Action, ValidatedAction, ExecutionReport, ...) live in ai_mode.schema.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from ai_mode.schema import (
    Action,
    ExecutionReport,
    QueryMetadata,
    ValidatedAction,
    ValidationSummary,
)

WorkspaceType = Literal["media", "food"]


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# --- AI Mode Models ---

class AIQueryRequest(BaseModel):
    """Natural-language request routed to query or action mode"""
    text: str = Field(min_length=1)
    workspace: WorkspaceType = "media"


class AIQueryResponse(_WireModel):
    """Unified response for both modes. Query fields or action fields are set, never both."""
    success: bool = True
    type: Literal["query", "action"]
    query_id: Optional[str] = Field(default=None, alias="queryId")

    # query mode
    sql: Optional[str] = None
    explanation: Optional[str] = None
    data: Optional[List[Dict[str, Any]]] = None
    metadata: Optional[QueryMetadata] = None

    # action mode
    intent: Optional[str] = None
    actions: Optional[List[Action]] = None
    validated_actions: Optional[List[ValidatedAction]] = Field(default=None, alias="validatedActions")
    validation_summary: Optional[ValidationSummary] = Field(default=None, alias="validationSummary")
    selected: Optional[List[int]] = None
    session_id: Optional[str] = Field(default=None, alias="sessionId")


class ValidateActionsRequest(BaseModel):
    """Validate client-held actions against the current catalog"""
    actions: List[Action]
    workspace: WorkspaceType = "media"


class ValidateActionsResponse(_WireModel):
    validated_actions: List[ValidatedAction] = Field(alias="validatedActions")
    summary: ValidationSummary


class ExecuteActionsRequest(BaseModel):
    """Batch of confirmed actions; shape is checked in the router before anything runs"""
    actions: Any = None
    workspace: WorkspaceType = "media"


# --- Confirmation Session Models ---

class EditActionRequest(BaseModel):
    """Fields to merge into a create action's payload"""
    patch: Dict[str, Any]


class ConfirmationStateResponse(_WireModel):
    session_id: str = Field(alias="sessionId")
    state: str
    validated_actions: List[ValidatedAction] = Field(alias="validatedActions")
    selected: List[int]


class ConfirmResponse(_WireModel):
    ok: bool
    message: str
    error: Optional[str] = None
    notifications: List[str] = Field(default_factory=list)
    report: Optional[ExecutionReport] = None


# --- Configuration Models ---

class ConfigUpdate(BaseModel):
    settings: Dict[str, str]
