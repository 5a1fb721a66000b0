from fastapi import APIRouter, Depends, HTTPException

from src.api.dependencies import get_db
from src.api.models import ConfigUpdate

router = APIRouter()

SECRET_KEYS = {"openai_api_key"}


def _mask(value: str) -> str:
    if not value:
        return value
    if len(value) <= 8:
        return "*" * len(value)
    return value[:3] + "*" * (len(value) - 7) + value[-4:]


@router.get("/")
def get_config(conn=Depends(get_db)):
    """Get all configuration settings (secrets masked)"""
    try:
        cursor = conn.execute("SELECT key, value FROM system_config")
        return {
            row["key"]: _mask(row["value"]) if row["key"] in SECRET_KEYS else row["value"]
            for row in cursor.fetchall()
        }
    except Exception as e:
        try:
            from src.core.error_log import get_error_logger
            get_error_logger().exception("Error fetching config", extra={"context": {"endpoint": "/api/config/"}})
        except Exception:
            pass
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/")
def update_config(data: ConfigUpdate, conn=Depends(get_db)):
    """Update configuration settings (Upsert)"""
    try:
        for key, value in data.settings.items():
            conn.execute("""
                INSERT INTO system_config (key, value, updated_at) 
                VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(key) DO UPDATE SET 
                    value=excluded.value,
                    updated_at=CURRENT_TIMESTAMP
            """, (key, value))
        conn.commit()
        return {"status": "success", "message": "Configuration updated"}
    except Exception as e:
        conn.rollback()
        try:
            from src.core.error_log import get_error_logger
            get_error_logger().exception("Error updating config", extra={"context": {"endpoint": "/api/config/"}})
        except Exception:
            pass
        raise HTTPException(status_code=500, detail=str(e))
