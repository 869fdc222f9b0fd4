from __future__ import annotations

from sqlite3 import Connection
from typing import Optional


def upsert(conn: Connection, user_id: str, email: str, name: str, image: Optional[str] = None):
    conn.execute(
        "INSERT INTO users(id, email, name, image) VALUES(?, ?, ?, ?) "
        "ON CONFLICT(email) DO UPDATE SET "
        "name=excluded.name, image=excluded.image, updated_at=CURRENT_TIMESTAMP",
        (user_id, email, name, image),
    )


def find_by_email(conn: Connection, email: str) -> Optional[dict]:
    row = conn.execute("SELECT * FROM users WHERE email=?", (email,)).fetchone()
    return dict(row) if row else None
