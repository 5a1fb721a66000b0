"""
Shared Dependencies for FastAPI Routers

This module contains common dependencies used across multiple routers to avoid duplication.
"""

from fastapi import Depends, HTTPException

from ai_mode.llm.oracle import OpenAIOracle
from src.core.config.app_config import DEFAULT_USER_ID
from src.core.db.connection import get_db_connection


def get_db():
    """
    Database connection dependency for FastAPI routes.
    
    Yields a database connection and ensures it's properly closed after use.
    Raises HTTPException 500 if connection fails.
    
    Usage:
        @router.get("/endpoint")
        def my_endpoint(conn = Depends(get_db)):
            # use conn here
    """
    conn, err = get_db_connection()
    if conn is None:
        raise HTTPException(status_code=500, detail=f"Database connection failed: {err}")
    try:
        yield conn
    finally:
        conn.close()


def get_user_id() -> str:
    """Single-user deployment: every request acts for the configured user."""
    return DEFAULT_USER_ID


def get_oracle(conn=Depends(get_db)):
    """Text-to-JSON oracle for AI mode; the API key is resolved per request."""
    return OpenAIOracle(conn)
