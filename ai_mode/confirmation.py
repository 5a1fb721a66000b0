"""
AI Mode: confirmation state - selection, edits and dispatch of validated actions.

Pure state, no rendering. The controller owns an ordered list of ValidatedAction
and a set of selected indices into it. Invariant: the selection never contains
an index whose verdict is invalid.
"""

import logging
import threading
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Set

from pydantic import BaseModel, Field

from ai_mode.actions import CREATE, MEDIA
from ai_mode.errors import UserInputError
from ai_mode.schema import Action, ExecutionReport, ExecutionSummary, ValidatedAction
from ai_mode.validator import validate_action

logger = logging.getLogger(__name__)

OPEN = "open"
DISPATCHING = "dispatching"
CONFIRMED = "confirmed"
CANCELLED = "cancelled"

NOTHING_SELECTED = "Select at least one valid action"


def _plural(n: int) -> str:
    return "action" if n == 1 else "actions"


def build_notifications(summary: ExecutionSummary) -> List[str]:
    """Separate success and failure messages; a partial success yields both."""
    messages = []
    if summary.succeeded > 0:
        messages.append(f"Successfully executed {summary.succeeded} {_plural(summary.succeeded)}")
    if summary.failed > 0:
        messages.append(f"{summary.failed} {_plural(summary.failed)} failed")
    return messages


class ConfirmationOutcome(BaseModel):
    """Result of confirm(): either a user-facing refusal or a dispatched batch."""

    ok: bool
    message: str
    error: Optional[str] = None  # error class name when ok is False
    report: Optional[ExecutionReport] = None
    notifications: List[str] = Field(default_factory=list)


class ConfirmationController:
    def __init__(
        self,
        validated: Sequence[ValidatedAction],
        catalog: Sequence[Mapping[str, Any]] = (),
        workspace: str = MEDIA,
    ):
        self.items: List[ValidatedAction] = list(validated)
        self.catalog = list(catalog)
        self.workspace = workspace
        self.state = OPEN
        self._lock = threading.Lock()
        self._selected: Set[int] = {i for i, item in enumerate(self.items) if item.verdict.is_valid}

    # --- queries ---

    @property
    def selected(self) -> List[int]:
        return sorted(self._selected)

    def is_selected(self, index: int) -> bool:
        return index in self._selected

    def is_valid(self, index: int) -> bool:
        return self._item(index).verdict.is_valid

    def selected_actions(self) -> List[Action]:
        """Actions at selected and valid indices, in original order."""
        return [
            self.items[i].action
            for i in sorted(self._selected)
            if self.items[i].verdict.is_valid
        ]

    # --- transitions ---

    def toggle(self, index: int) -> bool:
        """Flip selection of index; invalid actions stay unselected. Returns the new membership."""
        self._require_open()
        item = self._item(index)
        if not item.verdict.is_valid:
            return False
        if index in self._selected:
            self._selected.discard(index)
            return False
        self._selected.add(index)
        return True

    def select_all(self) -> None:
        self._require_open()
        self._selected = {i for i, item in enumerate(self.items) if item.verdict.is_valid}

    def deselect_all(self) -> None:
        self._require_open()
        self._selected = set()

    def edit(self, index: int, patch: Dict[str, Any]) -> ValidatedAction:
        """
        Merge patch into a create action's payload and re-validate it.
        An edit that invalidates the action drops it from the selection; an edit
        that makes it valid leaves selection to the user.
        """
        self._require_open()
        item = self._item(index)
        if item.action.kind != CREATE:
            raise UserInputError("Only create actions can be edited before execution")

        edited = item.action.model_copy(update={"payload": {**item.action.payload, **patch}})
        revalidated = validate_action(edited, self.catalog, self.workspace)
        self.items[index] = revalidated
        if not revalidated.verdict.is_valid:
            self._selected.discard(index)
        return revalidated

    def cancel(self) -> None:
        """Discard the pending batch; nothing has been applied."""
        with self._lock:
            if self.state == DISPATCHING:
                raise RuntimeError(f"Confirmation is {self.state}")
            self.state = CANCELLED

    def confirm(self, execute: Callable[[List[Action]], ExecutionReport]) -> ConfirmationOutcome:
        """
        Dispatch the selected valid actions to execute (e.g. BatchExecutor.execute).
        An empty selection is reported back and nothing runs. A dispatch failure
        keeps the controller open so the user can retry. A second confirm while
        one is running raises RuntimeError; the batch is dispatched once.
        """
        with self._lock:
            self._require_open()
            actions = self.selected_actions()
            if not actions:
                return ConfirmationOutcome(ok=False, message=NOTHING_SELECTED, error=UserInputError.__name__)
            self.state = DISPATCHING

        try:
            report = execute(actions)
        except Exception as e:
            logger.warning("Batch dispatch failed: %s", e)
            try:
                from src.core.error_log import log_error
                log_error(
                    f"Batch dispatch failed: {e}",
                    exception=e,
                    context={"workspace": self.workspace, "action_count": len(actions)},
                    error_kind="batch_dispatch_failure",
                )
            except Exception:
                logger.exception("Could not write dispatch failure to the error log")
            with self._lock:
                self.state = OPEN
            return ConfirmationOutcome(
                ok=False, message=f"Failed to execute actions: {e}", error=type(e).__name__
            )

        with self._lock:
            self.state = CONFIRMED
        summary = report.summary
        return ConfirmationOutcome(
            ok=summary.succeeded > 0,
            message=f"Executed {summary.succeeded}/{summary.total} actions",
            report=report,
            notifications=build_notifications(summary),
        )

    # --- helpers ---

    def _item(self, index: int) -> ValidatedAction:
        if not 0 <= index < len(self.items):
            raise IndexError(f"No action at index {index}")
        return self.items[index]

    def _require_open(self) -> None:
        if self.state != OPEN:
            raise RuntimeError(f"Confirmation is {self.state}")
