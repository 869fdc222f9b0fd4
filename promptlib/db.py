from __future__ import annotations

# promptlib/db.py
import enum
import logging
import os
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Generic, Iterator, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

SCHEMA_PATH = os.path.join(os.path.dirname(__file__), "schema.sql")


class Store:
    """
    数据库句柄：由应用工厂显式创建并注入，不做模块级单例。
    每次 connect() 打开一个连接，退出上下文时保证关闭。
    close() 之后任何获取连接的尝试都会抛出 sqlite3.ProgrammingError。
    """

    def __init__(self, db_path: str):
        self.db_path = db_path
        self._closed = False
        dirn = os.path.dirname(db_path) or "."
        os.makedirs(dirn, exist_ok=True)

    @property
    def closed(self) -> bool:
        return self._closed

    @contextmanager
    def connect(self) -> Iterator[sqlite3.Connection]:
        if self._closed:
            raise sqlite3.ProgrammingError("store is closed")
        conn = sqlite3.connect(
            self.db_path,
            detect_types=sqlite3.PARSE_DECLTYPES | sqlite3.PARSE_COLNAMES,
            check_same_thread=False,
            isolation_level=None,
        )
        try:
            conn.execute("PRAGMA foreign_keys = ON;")
            conn.row_factory = sqlite3.Row
            yield conn
        finally:
            conn.close()

    def init_schema(self, schema_path: str | None = None):
        with open(schema_path or SCHEMA_PATH, "r", encoding="utf-8") as f:
            ddl = f.read()
        with self.connect() as conn:
            conn.executescript(ddl)
            conn.commit()

    def ping(self) -> bool:
        with self.connect() as conn:
            return conn.execute("SELECT 1").fetchone()[0] == 1

    def close(self):
        self._closed = True

    def __repr__(self):
        state = "closed" if self._closed else "open"
        return f"<Store {self.db_path} ({state})>"


class Outcome(str, enum.Enum):
    OK = "ok"
    EMPTY = "empty"
    ERROR = "error"


@dataclass(frozen=True)
class StoreResult(Generic[T]):
    """Result of one store operation: a value, no rows, or a persistence failure."""

    outcome: Outcome
    value: T | None = None
    error: Exception | None = None

    @classmethod
    def of(cls, value: T) -> "StoreResult[T]":
        if value is None or (isinstance(value, (list, dict)) and not value):
            return cls(Outcome.EMPTY, value)
        return cls(Outcome.OK, value)

    @classmethod
    def from_error(cls, error: Exception) -> "StoreResult[T]":
        return cls(Outcome.ERROR, None, error)

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.OK

    @property
    def empty(self) -> bool:
        return self.outcome is Outcome.EMPTY

    @property
    def failed(self) -> bool:
        return self.outcome is Outcome.ERROR


def safe_execute(store: Store, operation: Callable[[sqlite3.Connection], T], *, write: bool = False,
                 name: str | None = None) -> StoreResult[T]:
    """
    Run one access-layer call on a scoped connection.

    Persistence errors (sqlite3.Error, including a closed store) come back as
    StoreResult.from_error and are logged here; anything else propagates.
    """
    op_name = name or getattr(operation, "__name__", "operation")
    try:
        with store.connect() as conn:
            value = operation(conn)
            if write:
                conn.commit()
    except sqlite3.Error as e:
        logger.error("store operation %s failed: %s", op_name, e)
        return StoreResult.from_error(e)
    return StoreResult.of(value)


def constraint_kind(err: Exception | None) -> str | None:
    """Classify an sqlite3.IntegrityError as 'unique', 'foreign_key', 'check' or None."""
    if not isinstance(err, sqlite3.IntegrityError):
        return None
    msg = str(err).upper()
    if "UNIQUE" in msg:
        return "unique"
    if "FOREIGN KEY" in msg:
        return "foreign_key"
    if "CHECK" in msg:
        return "check"
    return None
