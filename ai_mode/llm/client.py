"""
AI Mode: OpenAI client and model configuration.
The system_config table wins over the environment so the key can be set from the app.
"""

import logging

import openai

from src.core.config import app_config

logger = logging.getLogger(__name__)


def _config_value(conn, key: str):
    if conn is None:
        return None
    try:
        row = conn.execute("SELECT value FROM system_config WHERE key = ?", (key,)).fetchone()
        if row and row[0]:
            return row[0]
    except Exception as e:
        logger.warning("Error reading %s from system_config: %s", key, e)
    return None


def get_ai_client(conn):
    """OpenAI client from the DB key, else OPENAI_API_KEY; None when neither is set."""
    api_key = _config_value(conn, "openai_api_key") or app_config.OPENAI_API_KEY
    if not api_key:
        return None
    return openai.OpenAI(api_key=api_key)


def get_ai_model(conn):
    """Model name from the DB, else OPENAI_MODEL (default gpt-4o)."""
    return _config_value(conn, "openai_model") or app_config.OPENAI_MODEL
