from fastapi import APIRouter, Depends, HTTPException, Query

from ai_mode.actions import ALL_WORKSPACES
from src.api.dependencies import get_db, get_user_id
from src.core.queries import catalog_queries

router = APIRouter()


@router.get("/{workspace}")
def list_entries(
    workspace: str,
    page: int = Query(1, ge=1),
    page_size: int = Query(50, ge=1, le=500),
    conn=Depends(get_db),
    user_id: str = Depends(get_user_id),
):
    """Paginated newest-first diary entries for the current user."""
    if workspace not in ALL_WORKSPACES:
        raise HTTPException(status_code=404, detail=f"Unknown workspace: {workspace}")

    rows, total, err = catalog_queries.fetch_entries(conn, user_id, workspace, page, page_size)
    if err:
        try:
            from src.core.error_log import get_error_logger
            get_error_logger().error(f"Error fetching entries: {err}", extra={"context": {"endpoint": f"/api/entries/{workspace}"}})
        except Exception:
            pass
        raise HTTPException(status_code=500, detail=err)
    return {"data": rows, "total": total, "page": page, "page_size": page_size}
