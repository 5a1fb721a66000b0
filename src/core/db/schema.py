import os

from src.core.utils.path_helper import get_resource_path

SCHEMA_FILE = os.path.join("database", "schema_sqlite.sql")

CATALOG_TABLES = ("media_entries", "food_entries")


def get_schema_sql():
    """Read the catalog schema DDL from database/schema_sqlite.sql."""
    schema_path = get_resource_path(SCHEMA_FILE)
    if not os.path.exists(schema_path):
        raise FileNotFoundError(f"Schema file not found at {schema_path}")
    with open(schema_path, "r") as f:
        return f.read()


def check_schema_exists(conn):
    """Check if both catalog tables exist."""
    try:
        placeholders = ", ".join("?" for _ in CATALOG_TABLES)
        cursor = conn.execute(
            f"SELECT COUNT(*) FROM sqlite_master WHERE type = 'table' AND name IN ({placeholders})",
            CATALOG_TABLES,
        )
        return cursor.fetchone()[0] == len(CATALOG_TABLES)
    except Exception:
        return False


def apply_schema(conn):
    """Create all tables and indexes (idempotent: every statement is IF NOT EXISTS)."""
    conn.executescript(get_schema_sql())
    conn.commit()
