"""
AI Mode: database schema context for SQL/action generation.
Only the diary tables are described to the model; system_config and ai_logs are left out.
"""

from functools import lru_cache

from src.core.db.schema import CATALOG_TABLES, get_schema_sql


def _catalog_statements(schema_sql: str) -> str:
    statements = [s.strip() for s in schema_sql.split(";")]
    keep = [s for s in statements if s and any(table in s for table in CATALOG_TABLES)]
    return ";\n\n".join(keep) + ";"


@lru_cache(maxsize=1)
def get_schema_context():
    """Catalog DDL from database/schema_sqlite.sql. Cached for performance."""
    try:
        return _catalog_statements(get_schema_sql())
    except Exception as e:
        return f"Error reading schema: {str(e)}"


def clear_schema_cache():
    """Clear the cached schema. Call this during development after schema changes."""
    get_schema_context.cache_clear()
