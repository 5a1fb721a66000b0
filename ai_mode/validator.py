"""
AI Mode: action validation - hard errors and advisory warnings per candidate action.

Every rule runs (nothing short-circuits) so the user sees all problems at once.
Errors and warnings are appended in rule order; the confirmation surface relies
on that order for display.

Rules:
  1. payload.title present and non-empty                      -> error
  2. update/delete: a catalog match must exist                -> error
     create: an existing match                                -> warning
  3. rating fields numeric and within [0, 10]                 -> error
  4. status outside the standard enumeration                  -> warning
  5. kind outside create/update/delete                        -> error
  6. date fields formatted YYYY-MM-DD (and a real date)       -> error
  7. count/price fields numeric                               -> error
  8. medium / platform outside the standard lists (media)     -> warning
"""

import math
import re
from datetime import datetime
from typing import Any, Iterable, List, Mapping, Sequence

from ai_mode.actions import (
    ALL_KINDS,
    CREATE,
    MEDIA,
    MEDIUM_OPTIONS,
    PLATFORM_OPTIONS,
    RATING_MAX,
    RATING_MIN,
    STATUS_OPTIONS,
    TARGETED_KINDS,
    get_workspace,
)
from ai_mode.resolver import find_matching_entry
from ai_mode.schema import Action, ValidatedAction, ValidationSummary, ValidationVerdict

MISSING_TITLE = "Missing title"
NO_MATCH = "No matching diary entry found"

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_finite_number(value: Any) -> bool:
    return _is_number(value) and math.isfinite(value)


def _is_iso_date(value: Any) -> bool:
    if not isinstance(value, str) or not _DATE_RE.match(value):
        return False
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        return False
    return True


def validate_action(
    action: Action,
    catalog: Sequence[Mapping[str, Any]],
    workspace: str = MEDIA,
) -> ValidatedAction:
    """
    Validate one action against domain rules and the catalog snapshot.

    The input action is not modified. For update/delete, the returned action carries
    target_id from the resolved entry when the generator did not supply one.
    """
    fields = get_workspace(workspace)
    payload = action.payload
    errors: List[str] = []
    warnings: List[str] = []

    title = action.title
    if not title:
        errors.append(MISSING_TITLE)

    matched = find_matching_entry(title, catalog)
    if action.kind in TARGETED_KINDS and matched is None:
        errors.append(NO_MATCH)
    if action.kind == CREATE and matched is not None:
        warnings.append(f"Similar title already exists: {matched.title}")

    for field in fields["rating_fields"]:
        if field not in payload or payload[field] is None:
            continue
        value = payload[field]
        if not _is_number(value):
            errors.append(f"{field} must be a number between {RATING_MIN} and {RATING_MAX}, got: {value}")
        elif not (RATING_MIN <= value <= RATING_MAX):
            errors.append(f"{field} must be between {RATING_MIN} and {RATING_MAX}")

    status = payload.get("status")
    if status and status not in STATUS_OPTIONS:
        warnings.append(f"Non-standard status: {status}")

    if action.kind not in ALL_KINDS:
        errors.append(f"Invalid action type: {action.kind}")

    for field in fields["date_fields"]:
        value = payload.get(field)
        if value and not _is_iso_date(value):
            errors.append(f"Invalid {field} format: {value}. Use YYYY-MM-DD")

    for field in fields["numeric_fields"]:
        if field in payload and payload[field] is not None and not _is_finite_number(payload[field]):
            errors.append(f"{field} must be a number, got: {payload[field]}")

    if workspace == MEDIA:
        medium = payload.get("medium")
        if medium and medium not in MEDIUM_OPTIONS:
            warnings.append(f"Non-standard medium: {medium}")
        platform = payload.get("platform")
        if platform and platform not in PLATFORM_OPTIONS:
            warnings.append(f"Platform '{platform}' is not in the standard list")

    resolved = action
    if action.kind in TARGETED_KINDS and matched is not None and not action.target_id:
        resolved = action.model_copy(update={"target_id": matched.id})

    return ValidatedAction(
        action=resolved,
        matched_entry=matched,
        verdict=ValidationVerdict(is_valid=not errors, errors=errors, warnings=warnings),
    )


def validate_actions(
    actions: Iterable[Action],
    catalog: Sequence[Mapping[str, Any]],
    workspace: str = MEDIA,
) -> List[ValidatedAction]:
    """Validate a batch in order; the result list is index-aligned with the input."""
    return [validate_action(action, catalog, workspace) for action in actions]


def summarize_validation(validated: Sequence[ValidatedAction]) -> ValidationSummary:
    """Counts for the confirmation header."""
    valid = sum(1 for va in validated if va.verdict.is_valid)
    return ValidationSummary(
        total_actions=len(validated),
        valid_actions=valid,
        invalid_actions=len(validated) - valid,
        has_warnings=any(va.verdict.warnings for va in validated),
    )
