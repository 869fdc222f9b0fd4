"""
Prompt data access.

Field values never carry a status: create always stores pending, update
stores the status the caller passes in. `set_status` is the moderation path.
"""
from __future__ import annotations

from sqlite3 import Connection
from typing import Any, Dict, List, Mapping, Optional

from ..domain.moderation import status_on_create
from ..domain.taxonomy import PromptStatus

EDITABLE_COLUMNS = ("title", "description", "department", "category", "prompt")


def _plain(v):
    return v.value if hasattr(v, "value") else v


def create(conn: Connection, fields: Mapping[str, Any], creator_id: str) -> int:
    cur = conn.execute(
        "INSERT INTO prompts(title, description, department, category, prompt, creator_id, status) "
        "VALUES(?, ?, ?, ?, ?, ?, ?)",
        (
            fields["title"],
            fields["description"],
            _plain(fields["department"]),
            _plain(fields["category"]),
            fields["prompt"],
            creator_id,
            status_on_create().value,
        ),
    )
    return cur.lastrowid


def find_all(conn: Connection, department: Optional[str] = None, category: Optional[str] = None,
             status: Optional[str] = None) -> List[Dict[str, Any]]:
    sql = "SELECT * FROM prompts WHERE 1=1"
    params: list = []
    if department:
        sql += " AND department = ?"
        params.append(_plain(department))
    if category:
        sql += " AND category = ?"
        params.append(_plain(category))
    if status:
        sql += " AND status = ?"
        params.append(_plain(status))
    sql += " ORDER BY created_at DESC, id DESC"
    return [dict(r) for r in conn.execute(sql, params).fetchall()]


def find_by_id(conn: Connection, prompt_id: int) -> Optional[Dict[str, Any]]:
    row = conn.execute("SELECT * FROM prompts WHERE id=?", (prompt_id,)).fetchone()
    return dict(row) if row else None


def find_by_creator(conn: Connection, creator_id: str) -> List[Dict[str, Any]]:
    rows = conn.execute(
        "SELECT * FROM prompts WHERE creator_id=? ORDER BY created_at DESC, id DESC",
        (creator_id,),
    ).fetchall()
    return [dict(r) for r in rows]


def update(conn: Connection, prompt_id: int, updates: Mapping[str, Any], status: PromptStatus) -> int:
    """
    Apply a partial update and store `status` in the same statement.
    Column names come from EDITABLE_COLUMNS only.
    Returns the number of rows touched (0 when the prompt does not exist).
    """
    unknown = set(updates) - set(EDITABLE_COLUMNS)
    if unknown:
        raise ValueError(f"non-editable fields: {', '.join(sorted(unknown))}")
    cols = [c for c in EDITABLE_COLUMNS if c in updates]
    if not cols:
        raise ValueError("no fields to update")

    assignments = ", ".join(f"{c} = ?" for c in cols)
    params = [_plain(updates[c]) for c in cols]
    cur = conn.execute(
        f"UPDATE prompts SET {assignments}, status = ?, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
        (*params, PromptStatus(status).value, prompt_id),
    )
    return cur.rowcount


def delete(conn: Connection, prompt_id: int) -> int:
    # saved_prompts rows follow via ON DELETE CASCADE
    cur = conn.execute("DELETE FROM prompts WHERE id=?", (prompt_id,))
    return cur.rowcount


def set_status(conn: Connection, prompt_id: int, status: PromptStatus) -> int:
    cur = conn.execute(
        "UPDATE prompts SET status=?, updated_at=CURRENT_TIMESTAMP WHERE id=?",
        (PromptStatus(status).value, prompt_id),
    )
    return cur.rowcount


def count_approved_by_department(conn: Connection) -> Dict[str, int]:
    rows = conn.execute(
        "SELECT department, COUNT(*) AS cnt FROM prompts WHERE status=? GROUP BY department",
        (PromptStatus.APPROVED.value,),
    ).fetchall()
    return {r["department"]: int(r["cnt"]) for r in rows}
