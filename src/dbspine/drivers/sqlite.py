"""SQLite driver.

Uses the built-in sqlite3 module, so it is always available. Suitable for:
- Development and testing
- Single-process applications
- Demonstrating the driver contract end to end

Exported as ``SQLite``. Import ``dbspine.drivers.sqlite`` (or bind
``SQLite`` in your own namespace) before ``db_driver("SQLite")``; the
resolver does not import driver modules for you.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from dbspine.core.connection import DBConnection
from dbspine.core.datatype import (
    BLOB,
    DATE,
    DOUBLE,
    INTEGER,
    SMALLINT,
    TEXT,
    TIME,
    TIMESTAMP,
    column_type,
    map_record,
)
from dbspine.core.dispatch import dispatch_table
from dbspine.core.driver import DBDriver, DriverDescriptor
from dbspine.core.errors import DriverConnectionError
from dbspine.core.logging import get_logger
from dbspine.core.settings import get_settings

logger = get_logger(__name__)

# SQL-92 type -> SQLite storage class
_STORAGE_CLASSES = {
    SMALLINT: "INTEGER",
    INTEGER: "INTEGER",
    DOUBLE: "REAL",
    DATE: "TEXT",
    TIMESTAMP: "TEXT",
    TIME: "TEXT",
    TEXT: "TEXT",
    BLOB: "BLOB",
}


class SQLiteConnection(DBConnection):
    """
    Live connection to a SQLite database.

    Wraps ``sqlite3.Connection``; rows come back as ``sqlite3.Row``.
    """

    def __init__(self, conn: sqlite3.Connection, dbname: str):
        self._conn: sqlite3.Connection | None = conn
        self._dbname = dbname

    @property
    def dbname(self) -> str:
        return self._dbname

    @property
    def is_valid(self) -> bool:
        return self._conn is not None

    @property
    def raw(self) -> sqlite3.Connection:
        """Underlying ``sqlite3.Connection``."""
        if self._conn is None:
            raise DriverConnectionError(
                "SQLite connection is closed",
                retryable=False,
            ).with_context(driver="SQLite", dbname=self._dbname)
        return self._conn

    def execute(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        return self.raw.execute(sql, params)

    def executemany(self, sql: str, params: list[tuple]) -> sqlite3.Cursor:
        return self.raw.executemany(sql, params)

    def query(self, sql: str, params: tuple = ()) -> list[dict[str, Any]]:
        """Execute query and return results as dicts."""
        cursor = self.execute(sql, params)
        return [dict(row) for row in cursor.fetchall()]

    def commit(self) -> None:
        self.raw.commit()

    def rollback(self) -> None:
        self.raw.rollback()

    @contextmanager
    def transaction(self) -> Iterator[SQLiteConnection]:
        """Transaction context manager."""
        try:
            yield self
            self.commit()
        except Exception:
            self.rollback()
            raise

    def disconnect(self) -> bool:
        """Close the connection; ``False`` if it was already closed."""
        if self._conn is None:
            return False
        self._conn.close()
        self._conn = None
        logger.debug("sqlite_disconnected", dbname=self._dbname)
        return True

    def close(self) -> None:
        self.disconnect()


class SQLiteDriver(DBDriver):
    """
    SQLite driver.

    Keeps track of the connections it opened; ``list_connections()``
    returns the ones still open and ``unload()`` closes them all.
    """

    def __init__(self, *, timeout: float | None = None, **options: Any):
        self._timeout = get_settings().sqlite_timeout if timeout is None else timeout
        self._options = options
        self._connections: list[SQLiteConnection] = []

    def connect(
        self,
        dbname: str = ":memory:",
        *,
        readonly: bool = False,
        **params: Any,
    ) -> SQLiteConnection:
        """Connect to a SQLite database file (default: in-memory).

        ``params`` go to :func:`sqlite3.connect` and override the driver's
        defaults, ``timeout`` included.
        """
        options = {
            "timeout": self._timeout,
            "check_same_thread": False,
            "uri": dbname.startswith("file:") or "?" in dbname,
            **self._options,
            **params,
        }

        raw: sqlite3.Connection | None = None
        try:
            raw = sqlite3.connect(dbname, **options)
            raw.row_factory = sqlite3.Row
            raw.execute("PRAGMA foreign_keys = ON")
            if readonly:
                raw.execute("PRAGMA query_only = ON")
        except sqlite3.Error as e:
            if raw is not None:
                raw.close()
            raise DriverConnectionError(
                f"Failed to connect to SQLite: {e}",
                cause=e,
            ).with_context(driver="SQLite", dbname=dbname) from e

        conn = SQLiteConnection(raw, dbname)
        self._connections.append(conn)
        logger.debug("sqlite_connected", dbname=dbname, readonly=readonly)
        return conn

    def list_connections(self) -> list[SQLiteConnection]:
        self._connections = [c for c in self._connections if c.is_valid]
        return list(self._connections)

    def unload(self) -> bool:
        """Close every open connection; ``True`` if all closed cleanly."""
        ok = True
        for conn in self.list_connections():
            try:
                conn.disconnect()
            except sqlite3.Error as e:
                logger.warning("sqlite_unload_failed", dbname=conn.dbname, error=str(e))
                ok = False
        self._connections = []
        return ok


def sqlite_column_type(value: Any, *, column: str | None = None) -> str:
    """SQLite storage class for one column."""
    return _STORAGE_CLASSES[column_type(value, column=column)]


def sqlite_data_type(db_obj: Any, value: Any) -> str | list[str]:
    """``data_type`` for SQLite drivers and connections."""
    if isinstance(value, Mapping):
        return map_record(value, sqlite_column_type)
    return sqlite_column_type(value)


dispatch_table.register("data_type", SQLiteDriver, sqlite_data_type)
dispatch_table.register("data_type", SQLiteConnection, sqlite_data_type)


@dispatch_table.implementation("format", SQLiteDriver)
def _format_driver(drv: SQLiteDriver) -> str:
    return f"<SQLiteDriver connections={len(drv.list_connections())}>"


@dispatch_table.implementation("format", SQLiteConnection)
def _format_connection(conn: SQLiteConnection) -> str:
    state = conn.dbname if conn.is_valid else "DISCONNECTED"
    return f"<SQLiteConnection {state}>"


SQLite = DriverDescriptor("SQLite", SQLiteDriver, description="stdlib sqlite3")


__all__ = [
    "SQLiteDriver",
    "SQLiteConnection",
    "SQLite",
    "sqlite_data_type",
]
