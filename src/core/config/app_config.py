"""
Application configuration.

All settings are read from environment variables (a local .env file is loaded
first). The OpenAI key and model may also be stored in the system_config table;
see ai_mode.llm.client for the lookup order.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# --- Storage ---
# SQLite file holding the media/food catalogs, system_config and ai_logs.
DB_PATH = os.environ.get("DB_URL") or os.path.join(os.getcwd(), "diary.db")

# --- Single-user deployment ---
# Every catalog row is scoped by user_id; this is the user the API acts for.
DEFAULT_USER_ID = os.environ.get("DEFAULT_USER_ID", "local-user").strip() or "local-user"

# --- AI Mode ---
OPENAI_API_KEY = os.environ.get("OPENAI_API_KEY", "").strip()
OPENAI_MODEL = os.environ.get("OPENAI_MODEL", "gpt-4o").strip() or "gpt-4o"

# Newest-first catalog window passed to the entity resolver.
CATALOG_SNAPSHOT_LIMIT = int(os.environ.get("CATALOG_SNAPSHOT_LIMIT", "500").replace("_", ""))

# Appended as LIMIT to generated SELECT statements that have none.
QUERY_ROW_LIMIT = int(os.environ.get("QUERY_ROW_LIMIT", "1000").replace("_", ""))

# Pending confirmations not confirmed or cancelled within this window are dropped.
CONFIRMATION_TTL_SECONDS = int(os.environ.get("CONFIRMATION_TTL_SECONDS", "1800").replace("_", ""))
