"""
Shared fixtures: a throwaway SQLite catalog per test and an isolated JSONL error log.
"""

import pytest

from ai_mode.sessions import ConfirmationSessions
from src.core.db.connection import get_db_connection
from src.core.db.schema import apply_schema
from src.core.error_log import reset_error_logger
from src.core.queries.catalog_queries import CatalogStore

USER_ID = "test-user"


@pytest.fixture(autouse=True)
def error_log_dir(tmp_path, monkeypatch):
    """Point the error logger at a per-test directory."""
    log_dir = tmp_path / "logs"
    monkeypatch.setenv("ERROR_LOG_DIR", str(log_dir))
    reset_error_logger()
    yield log_dir
    reset_error_logger()


@pytest.fixture(autouse=True)
def clear_sessions():
    ConfirmationSessions.clear()
    yield
    ConfirmationSessions.clear()


@pytest.fixture
def db_conn(tmp_path):
    conn, err = get_db_connection(str(tmp_path / "diary.db"))
    assert conn is not None, err
    apply_schema(conn)
    yield conn
    conn.close()


@pytest.fixture
def media_store(db_conn):
    return CatalogStore(db_conn, USER_ID, "media")


@pytest.fixture
def food_store(db_conn):
    return CatalogStore(db_conn, USER_ID, "food")


@pytest.fixture
def catalog():
    """Synthetic newest-first snapshot."""
    return [
        {"id": "m3", "title": "The Batman 2", "status": "Planned"},
        {"id": "m2", "title": "Batman", "status": "Finished"},
        {"id": "m1", "title": "The Room", "status": "Finished"},
    ]
