from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from src.api.routers import ai, config, entries

app = FastAPI(title="Diary Backend")

@app.on_event("startup")
def startup_db_check():
    # Ensure error log file handler is attached (logs/errors.jsonl)
    from src.core.error_log import get_error_logger
    get_error_logger()
    try:
        from src.core.db.connection import get_db_connection
        from src.core.db.schema import apply_schema, check_schema_exists
        conn, _ = get_db_connection()
        if conn:
            # Idempotent: every statement is CREATE ... IF NOT EXISTS
            if not check_schema_exists(conn):
                print("Startup: Creating diary schema.")
            apply_schema(conn)
            conn.close()
            print("Startup: Verified media_entries, food_entries, system_config and ai_logs schema.")
    except Exception as e:
        print(f"Startup DB Check Failed: {e}")
        try:
            get_error_logger().exception("Startup DB check failed")
        except Exception:
            pass

@app.exception_handler(Exception)
def global_exception_handler(request, exc):
    """Log uncaught exceptions to the error log file, then return 500."""
    try:
        from src.core.error_log import get_error_logger
        path = getattr(getattr(request, "url", None), "path", None)
        get_error_logger().exception(
            f"Uncaught exception: {exc}",
            extra={"context": {"path": path}},
        )
    except Exception:
        pass
    from fastapi.responses import JSONResponse
    return JSONResponse(status_code=500, content={"detail": str(exc)})


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"], # Electron local connection
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(ai.router, prefix="/api/ai", tags=["AI"])
app.include_router(entries.router, prefix="/api/entries", tags=["Entries"])
app.include_router(config.router, prefix="/api/config", tags=["Config"])

@app.get("/api/health")
def health():
    return {"status": "ok"}
