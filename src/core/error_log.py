"""
Structured error logging to a JSON Lines file.

Pipeline failures (oracle errors, rejected SQL, per-action execution errors) are
written to logs/errors.jsonl, one JSON object per line, with the request context
attached under "context". The file rotates by size.
"""

import json
import logging
import os
import traceback
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional

DEFAULT_LOG_DIR = "logs"
DEFAULT_ERROR_FILE = "errors.jsonl"
MAX_BYTES = 5 * 1024 * 1024  # 5 MB
BACKUP_COUNT = 3

LOGGER_NAME = "diary.errors"

_error_logger: Optional[logging.Logger] = None


def _record_to_dict(record: logging.LogRecord) -> Dict[str, Any]:
    """One JSONL line for a LogRecord."""
    out = {
        "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
        "level": record.levelname,
        "logger": record.name,
        "message": record.getMessage(),
    }
    if record.exc_info and record.exc_info[0] is not None:
        exc_type, exc_val, _ = record.exc_info
        out["exception"] = f"{exc_type.__name__}: {exc_val}"
        out["traceback"] = "".join(traceback.format_exception(*record.exc_info))
    context = getattr(record, "context", None)
    if isinstance(context, dict):
        out["context"] = context
    return out


class JsonlRotatingFileHandler(RotatingFileHandler):
    """Writes one JSON object per line (JSONL). Rotates by size."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            if self.shouldRollover(record):
                self.doRollover()
            if self.stream is None:
                self.stream = self._open()
            self.stream.write(json.dumps(_record_to_dict(record), default=str) + "\n")
            self.flush()
        except Exception:
            self.handleError(record)


def get_error_logger(
    log_dir: Optional[str] = None,
    filename: Optional[str] = None,
    max_bytes: int = MAX_BYTES,
    backup_count: int = BACKUP_COUNT,
) -> logging.Logger:
    """Return the app-wide error logger, attaching the JSONL file handler on first use."""
    global _error_logger
    if _error_logger is not None:
        return _error_logger

    log_dir = log_dir or os.environ.get("ERROR_LOG_DIR") or DEFAULT_LOG_DIR
    filename = filename or os.environ.get("ERROR_LOG_FILE") or DEFAULT_ERROR_FILE
    os.makedirs(log_dir, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.ERROR)
    logger.propagate = False
    logger.addHandler(
        JsonlRotatingFileHandler(
            os.path.join(log_dir, filename),
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
    )
    _error_logger = logger
    return logger


def reset_error_logger() -> None:
    """Detach and close the file handler so the next call re-reads ERROR_LOG_DIR."""
    global _error_logger
    if _error_logger is None:
        return
    for handler in list(_error_logger.handlers):
        _error_logger.removeHandler(handler)
        handler.close()
    _error_logger = None


def log_error(
    message: str,
    exception: Optional[BaseException] = None,
    context: Optional[Dict[str, Any]] = None,
    error_kind: Optional[str] = None,
) -> None:
    """
    Log an error with optional context (e.g. workspace, user_query, action kind).
    error_kind tags the failure class, e.g. "generation_failure", "action_execution_failure".
    """
    ctx: Dict[str, Any] = dict(context or {})
    if error_kind is not None:
        ctx["error_kind"] = error_kind
    logger = get_error_logger()
    if exception is not None:
        logger.error(
            message,
            exc_info=(type(exception), exception, exception.__traceback__),
            extra={"context": ctx},
        )
    else:
        logger.error(message, extra={"context": ctx})
