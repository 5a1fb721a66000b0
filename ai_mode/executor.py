"""
AI Mode: batch execution of confirmed actions.

Actions run sequentially and independently: a failure on one item is recorded
and execution moves on to the next. There is no enclosing transaction, so a
batch can be partially applied; the summary reports both counts.
"""

import logging
from typing import List, Sequence

from ai_mode.actions import CREATE, DELETE, UPDATE
from ai_mode.errors import ExecutionError
from ai_mode.schema import Action, ExecutionReport, ExecutionResult

logger = logging.getLogger(__name__)


class BatchExecutor:
    """
    Applies actions against a store exposing create(payload), update(id, payload),
    delete(id) and find_by_title(title). Write methods return (entry_id, error).
    """

    def __init__(self, store):
        self.store = store

    def execute(self, actions: Sequence[Action]) -> ExecutionReport:
        results: List[ExecutionResult] = []
        for index, action in enumerate(actions):
            try:
                entry_id = self._apply(action)
                results.append(ExecutionResult(action=action, success=True, entry_id=entry_id))
            except Exception as e:
                results.append(ExecutionResult(action=action, success=False, error=str(e) or type(e).__name__))
                self._log_failure(index, action, e)

        report = ExecutionReport.from_results(results)
        logger.info(
            "Executed %d action(s): %d succeeded, %d failed",
            report.summary.total, report.summary.succeeded, report.summary.failed,
        )
        return report

    def _apply(self, action: Action) -> str:
        """Run one action; returns the affected entry id or raises ExecutionError."""
        if action.kind == CREATE:
            entry_id, err = self.store.create(action.payload)
        elif action.kind == UPDATE:
            entry_id, err = self.store.update(self._target_id(action), action.payload)
        elif action.kind == DELETE:
            entry_id, err = self.store.delete(self._target_id(action))
        else:
            raise ExecutionError(f"Unknown action type: {action.kind}")

        if err:
            raise ExecutionError(err)
        return entry_id

    def _target_id(self, action: Action) -> str:
        if action.target_id:
            return action.target_id
        if action.title:
            matched = self.store.find_by_title(action.title)
            if matched:
                return matched["id"]
        raise ExecutionError(f"Entry ID or title match is required for {action.kind} action")

    def _log_failure(self, index: int, action: Action, exc: Exception) -> None:
        try:
            from src.core.error_log import log_error
            log_error(
                f"Action {index} ({action.kind}) failed: {exc}",
                exception=None if isinstance(exc, ExecutionError) else exc,
                context={
                    "index": index,
                    "kind": action.kind,
                    "target_id": action.target_id,
                    "title": action.title,
                    "workspace": getattr(self.store, "workspace", None),
                },
                error_kind="action_execution_failure",
            )
        except Exception:
            logger.exception("Could not write action failure to the error log")
