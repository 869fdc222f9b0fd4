import sqlite3

import pytest

from promptlib.db import Outcome, Store, StoreResult, constraint_kind, safe_execute


def test_result_of_classifies_values():
    assert StoreResult.of([1]).outcome is Outcome.OK
    assert StoreResult.of([]).outcome is Outcome.EMPTY
    assert StoreResult.of(None).outcome is Outcome.EMPTY
    assert StoreResult.of(0).outcome is Outcome.OK
    assert StoreResult.of(False).outcome is Outcome.OK


def test_safe_execute_ok_and_empty(store):
    res = safe_execute(store, lambda conn: conn.execute("SELECT 1 AS v").fetchone()["v"])
    assert res.ok and res.value == 1

    res = safe_execute(store, lambda conn: [dict(r) for r in conn.execute("SELECT * FROM prompts").fetchall()])
    assert res.empty and res.value == []


def test_safe_execute_reports_persistence_errors(store):
    res = safe_execute(store, lambda conn: conn.execute("SELECT * FROM no_such_table").fetchall())
    assert res.failed
    assert isinstance(res.error, sqlite3.OperationalError)


def test_closed_store_fails_instead_of_returning_empty(store):
    store.close()
    assert store.closed
    res = safe_execute(store, lambda conn: conn.execute("SELECT * FROM prompts").fetchall())
    assert res.failed
    assert not res.empty


def test_non_persistence_errors_propagate(store):
    def boom(conn):
        raise KeyError("programming error")

    with pytest.raises(KeyError):
        safe_execute(store, boom)


def test_connection_released_after_use(store):
    with store.connect() as conn:
        pass
    with pytest.raises(sqlite3.ProgrammingError):
        conn.execute("SELECT 1")


def test_init_schema_is_idempotent(tmp_path):
    s = Store(str(tmp_path / "nested" / "x.db"))
    s.init_schema()
    s.init_schema()
    with s.connect() as conn:
        names = {r["name"] for r in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
    assert {"users", "prompts", "saved_prompts", "operation_log"} <= names
    assert s.ping()


def test_constraint_kind():
    assert constraint_kind(sqlite3.IntegrityError("UNIQUE constraint failed: saved_prompts.user_id")) == "unique"
    assert constraint_kind(sqlite3.IntegrityError("FOREIGN KEY constraint failed")) == "foreign_key"
    assert constraint_kind(sqlite3.IntegrityError("CHECK constraint failed: status")) == "check"
    assert constraint_kind(sqlite3.OperationalError("locked")) is None
    assert constraint_kind(None) is None
