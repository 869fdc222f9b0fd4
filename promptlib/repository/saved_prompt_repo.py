from __future__ import annotations

from sqlite3 import Connection
from typing import Any, Dict, List


def save(conn: Connection, user_id: str, prompt_id: int) -> int:
    """Plain insert; UNIQUE(user_id, prompt_id) rejects duplicates with IntegrityError."""
    cur = conn.execute(
        "INSERT INTO saved_prompts(user_id, prompt_id) VALUES(?, ?)",
        (user_id, prompt_id),
    )
    return cur.lastrowid


def unsave(conn: Connection, user_id: str, prompt_id: int) -> int:
    cur = conn.execute(
        "DELETE FROM saved_prompts WHERE user_id=? AND prompt_id=?",
        (user_id, prompt_id),
    )
    return cur.rowcount


def find_by_user(conn: Connection, user_id: str) -> List[Dict[str, Any]]:
    sql = (
        "SELECT p.*, sp.created_at AS saved_at "
        "FROM prompts p JOIN saved_prompts sp ON p.id = sp.prompt_id "
        "WHERE sp.user_id = ? "
        "ORDER BY sp.created_at DESC, sp.id DESC"
    )
    return [dict(r) for r in conn.execute(sql, (user_id,)).fetchall()]


def is_saved(conn: Connection, user_id: str, prompt_id: int) -> bool:
    row = conn.execute(
        "SELECT 1 FROM saved_prompts WHERE user_id=? AND prompt_id=?",
        (user_id, prompt_id),
    ).fetchone()
    return row is not None
