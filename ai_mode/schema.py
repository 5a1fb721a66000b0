"""
AI Mode: typed shapes for the action pipeline.

Field names are snake_case in Python; aliases carry the JSON names used on the
wire ("type", "id", "data", "matchedEntry", ...). Models accept either form.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class Action(_WireModel):
    """A candidate create/update/delete, as generated and before execution."""

    kind: str = Field(alias="type")
    target_id: Optional[str] = Field(default=None, alias="id")
    payload: Dict[str, Any] = Field(default_factory=dict, alias="data")

    @field_validator("kind", mode="before")
    @classmethod
    def _normalize_kind(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("payload", mode="before")
    @classmethod
    def _none_payload(cls, value):
        return {} if value is None else value

    @property
    def title(self) -> str:
        value = self.payload.get("title")
        return value.strip() if isinstance(value, str) else ""


class MatchedEntry(_WireModel):
    """Read-only projection of a catalog row used for resolution and display."""

    id: str
    title: str
    status: Optional[str] = None


class ValidationVerdict(_WireModel):
    is_valid: bool = Field(alias="valid")
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


class ValidatedAction(_WireModel):
    """The unit of selection on the confirmation surface."""

    action: Action
    matched_entry: Optional[MatchedEntry] = Field(default=None, alias="matchedEntry")
    verdict: ValidationVerdict = Field(alias="validation")


class ExecutionResult(_WireModel):
    action: Action
    success: bool
    error: Optional[str] = None
    entry_id: Optional[str] = Field(default=None, alias="entryId")


class ExecutionSummary(_WireModel):
    total: int
    succeeded: int
    failed: int

    @classmethod
    def from_results(cls, results: List[ExecutionResult]) -> "ExecutionSummary":
        total = len(results)
        succeeded = sum(1 for r in results if r.success)
        return cls(total=total, succeeded=succeeded, failed=total - succeeded)


class ExecutionReport(_WireModel):
    """Batch execution response: overall flag, per-item results, derived summary."""

    success: bool
    results: List[ExecutionResult]
    summary: ExecutionSummary

    @classmethod
    def from_results(cls, results: List[ExecutionResult]) -> "ExecutionReport":
        summary = ExecutionSummary.from_results(results)
        return cls(success=summary.failed == 0, results=results, summary=summary)


class GenerationOutput(_WireModel):
    """What the text-to-JSON oracle returns in action mode."""

    intent: str = ""
    actions: List[Action] = Field(default_factory=list)


class QueryMetadata(_WireModel):
    visualization_type: str = Field(alias="visualizationType")
    columns: List[str]
    column_types: Dict[str, str] = Field(alias="columnTypes")
    row_count: int = Field(alias="rowCount")
    column_count: int = Field(alias="columnCount")


class QueryResult(_WireModel):
    sql: str
    explanation: str = ""
    data: List[Dict[str, Any]]
    metadata: QueryMetadata


class ValidationSummary(_WireModel):
    total_actions: int = Field(alias="totalActions")
    valid_actions: int = Field(alias="validActions")
    invalid_actions: int = Field(alias="invalidActions")
    has_warnings: bool = Field(alias="hasWarnings")
