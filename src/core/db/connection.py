import os
import sqlite3

from src.core.config.app_config import DB_PATH


def get_db_connection(db_path=None):
    """
    Open the SQLite catalog database.
    Prioritizes the explicit path, then the DB_URL env var, then the configured default.
    Returns (connection, status_message) tuple; connection is None on failure.
    """
    try:
        target = db_path or os.environ.get("DB_URL") or DB_PATH
        conn = sqlite3.connect(target, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn, f"Connected to {target}"
    except Exception as e:
        return None, str(e)
