"""
AI Mode: in-memory registry of open confirmation sessions.

One session per action-mode request; it lives until confirmed, cancelled or
abandoned for longer than CONFIRMATION_TTL_SECONDS. Nothing is persisted, so a
restart simply drops pending confirmations.
"""

import logging
import threading
import time
import uuid
from typing import Dict, Optional, Tuple

from ai_mode.confirmation import DISPATCHING, ConfirmationController
from src.core.config.app_config import CONFIRMATION_TTL_SECONDS

logger = logging.getLogger(__name__)


class ConfirmationSessions:
    _sessions: Dict[str, Tuple[ConfirmationController, float]] = {}
    _lock = threading.Lock()
    ttl_seconds: float = CONFIRMATION_TTL_SECONDS

    @classmethod
    def open(cls, controller: ConfirmationController) -> str:
        session_id = str(uuid.uuid4())
        with cls._lock:
            cls._expire()
            cls._sessions[session_id] = (controller, time.monotonic())
        return session_id

    @classmethod
    def get(cls, session_id: str) -> Optional[ConfirmationController]:
        with cls._lock:
            cls._expire()
            entry = cls._sessions.get(session_id)
        return entry[0] if entry else None

    @classmethod
    def close(cls, session_id: str) -> Optional[ConfirmationController]:
        with cls._lock:
            entry = cls._sessions.pop(session_id, None)
        return entry[0] if entry else None

    @classmethod
    def clear(cls) -> None:
        with cls._lock:
            cls._sessions.clear()

    @classmethod
    def _expire(cls) -> None:
        # caller holds _lock; a batch still being dispatched is never dropped
        now = time.monotonic()
        expired = [
            session_id
            for session_id, (controller, opened_at) in cls._sessions.items()
            if now - opened_at > cls.ttl_seconds and controller.state != DISPATCHING
        ]
        for session_id in expired:
            del cls._sessions[session_id]
        if expired:
            logger.info("Dropped %d abandoned confirmation session(s)", len(expired))
