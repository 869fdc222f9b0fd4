"""Repository layer: DB access helpers (SQLite).

Keep functions thin and focused, so services/domains avoid SQL strings.
Every function takes an open connection and lets sqlite3 errors propagate;
services run them through `db.safe_execute`.
"""
from __future__ import annotations
