"""
Catalog queries for the media and food diaries.

Every read and write is scoped by user_id. Write helpers return (value, error)
tuples: value is the affected entry id on success, error a message on failure.
"""

import json
import sqlite3
import uuid
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from ai_mode.actions import get_workspace


def _encode(field: str, value: Any, list_fields) -> Any:
    if field in list_fields and isinstance(value, (list, tuple)):
        return json.dumps(list(value))
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return value


def _decode_row(row: Dict[str, Any], list_fields) -> Dict[str, Any]:
    for field in list_fields:
        raw = row.get(field)
        if isinstance(raw, str) and raw.startswith("["):
            try:
                row[field] = json.loads(raw)
            except json.JSONDecodeError:
                pass
    return row


def _payload_to_columns(workspace: str, payload: Dict[str, Any]) -> Tuple[Optional[Dict[str, Any]], Optional[str]]:
    """Map an action payload onto store columns. payload["title"] goes to the workspace title column."""
    fields = get_workspace(workspace)
    columns = set(fields["columns"])
    out: Dict[str, Any] = {}
    unknown: List[str] = []
    for key, value in payload.items():
        column = fields["title_column"] if key == "title" else key
        if column not in columns:
            unknown.append(key)
            continue
        out[column] = _encode(column, value, fields["list_fields"])
    if unknown:
        return None, f"Unknown field(s) for {workspace}: {', '.join(sorted(unknown))}"
    return out, None


def fetch_catalog_snapshot(conn, user_id: str, workspace: str, limit: int = 500) -> List[Dict[str, Any]]:
    """
    Newest-first projection (id, title, status) of the user's most recent entries.
    Food entries have no status; their name is returned as title.
    """
    fields = get_workspace(workspace)
    status_expr = "status" if fields["has_status"] else "NULL"
    cursor = conn.execute(
        f"""
        SELECT id, {fields['title_column']} AS title, {status_expr} AS status
        FROM {fields['table']}
        WHERE user_id = ?
        ORDER BY created_at DESC, rowid DESC
        LIMIT ?
        """,
        (user_id, limit),
    )
    return [{"id": row[0], "title": row[1], "status": row[2]} for row in cursor.fetchall()]


def fetch_entries(conn, user_id: str, workspace: str, page: int = 1, page_size: int = 50):
    """
    Paginated newest-first entries for a user.
    Returns (list_of_rows, total_count, error_message).
    """
    fields = get_workspace(workspace)
    try:
        total = conn.execute(
            f"SELECT COUNT(*) FROM {fields['table']} WHERE user_id = ?", (user_id,)
        ).fetchone()[0]
        offset = (page - 1) * page_size
        df = pd.read_sql_query(
            f"""
            SELECT * FROM {fields['table']}
            WHERE user_id = ?
            ORDER BY created_at DESC, rowid DESC
            LIMIT ? OFFSET ?
            """,
            conn,
            params=(user_id, page_size, offset),
        )
        df = df.astype(object).where(pd.notnull(df), None)
        rows = [_decode_row(r, fields["list_fields"]) for r in df.to_dict(orient="records")]
        return rows, total, None
    except Exception as e:
        return [], 0, str(e)


def find_entry_by_title(conn, user_id: str, workspace: str, title: str) -> Optional[Dict[str, Any]]:
    """Exact (case-insensitive) title match first, then substring match; newest entry wins."""
    normalized = (title or "").strip()
    if not normalized:
        return None
    fields = get_workspace(workspace)
    col = fields["title_column"]
    base = f"SELECT id, {col} AS title FROM {fields['table']} WHERE user_id = ? AND "
    order = " ORDER BY created_at DESC, rowid DESC LIMIT 1"

    row = conn.execute(base + f"LOWER({col}) = LOWER(?)" + order, (user_id, normalized)).fetchone()
    if row is None:
        like = "%" + normalized.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_") + "%"
        row = conn.execute(base + f"LOWER({col}) LIKE ? ESCAPE '\\'" + order, (user_id, like)).fetchone()
    if row is None:
        return None
    return {"id": row[0], "title": row[1]}


def create_entry(conn, user_id: str, workspace: str, payload: Dict[str, Any]) -> Tuple[Optional[str], Optional[str]]:
    """Insert a catalog row from an action payload. Returns (new_id, error)."""
    title = payload.get("title")
    if not isinstance(title, str) or not title.strip():
        return None, "Title is required for create action"

    columns, err = _payload_to_columns(workspace, {**payload, "title": title.strip()})
    if err:
        return None, err

    fields = get_workspace(workspace)
    entry_id = str(uuid.uuid4())
    columns = {"id": entry_id, "user_id": user_id, **columns}
    names = ", ".join(columns)
    placeholders = ", ".join(f":{name}" for name in columns)
    try:
        conn.execute(f"INSERT INTO {fields['table']} ({names}) VALUES ({placeholders})", columns)
        conn.commit()
    except sqlite3.Error as e:
        conn.rollback()
        return None, str(e)
    return entry_id, None


def update_entry(conn, user_id: str, workspace: str, entry_id: str, payload: Dict[str, Any]) -> Tuple[Optional[str], Optional[str]]:
    """
    Apply payload as a partial patch to one entry. Returns (entry_id, error).
    payload["title"] identifies the target and is not written.
    """
    patch = {k: v for k, v in payload.items() if k != "title"}
    if not patch:
        return None, "No fields to update"

    columns, err = _payload_to_columns(workspace, patch)
    if err:
        return None, err

    fields = get_workspace(workspace)
    assignments = ", ".join(f"{name} = :{name}" for name in columns)
    params = {**columns, "_id": entry_id, "_user_id": user_id}
    try:
        cursor = conn.execute(
            f"""
            UPDATE {fields['table']}
            SET {assignments}, updated_at = CURRENT_TIMESTAMP
            WHERE id = :_id AND user_id = :_user_id
            """,
            params,
        )
        if cursor.rowcount == 0:
            conn.rollback()
            return None, f"Entry not found: {entry_id}"
        conn.commit()
    except sqlite3.Error as e:
        conn.rollback()
        return None, str(e)
    return entry_id, None


def delete_entry(conn, user_id: str, workspace: str, entry_id: str) -> Tuple[Optional[str], Optional[str]]:
    """Remove one entry. Returns (entry_id, error)."""
    fields = get_workspace(workspace)
    try:
        cursor = conn.execute(
            f"DELETE FROM {fields['table']} WHERE id = ? AND user_id = ?",
            (entry_id, user_id),
        )
        if cursor.rowcount == 0:
            conn.rollback()
            return None, f"Entry not found: {entry_id}"
        conn.commit()
    except sqlite3.Error as e:
        conn.rollback()
        return None, str(e)
    return entry_id, None


class CatalogStore:
    """One user's catalog in one workspace; the write target of the batch executor."""

    def __init__(self, conn, user_id: str, workspace: str):
        get_workspace(workspace)
        self.conn = conn
        self.user_id = user_id
        self.workspace = workspace

    def snapshot(self, limit: int = 500) -> List[Dict[str, Any]]:
        return fetch_catalog_snapshot(self.conn, self.user_id, self.workspace, limit)

    def find_by_title(self, title: str) -> Optional[Dict[str, Any]]:
        return find_entry_by_title(self.conn, self.user_id, self.workspace, title)

    def create(self, payload: Dict[str, Any]) -> Tuple[Optional[str], Optional[str]]:
        return create_entry(self.conn, self.user_id, self.workspace, payload)

    def update(self, entry_id: str, payload: Dict[str, Any]) -> Tuple[Optional[str], Optional[str]]:
        return update_entry(self.conn, self.user_id, self.workspace, entry_id, payload)

    def delete(self, entry_id: str) -> Tuple[Optional[str], Optional[str]]:
        return delete_entry(self.conn, self.user_id, self.workspace, entry_id)
