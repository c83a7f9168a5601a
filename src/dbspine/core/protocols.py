"""
Structural protocols at the connection boundary.

The core never executes SQL; that belongs to each driver's connection
class. ``Connection`` records the DB-API shape those classes expose so
tooling can check it with ``isinstance`` without importing any driver.

Guardrails:
    ❌ DON'T: Add implementation logic to protocol classes
    ✅ DO: Keep protocols pure contracts, implementations go in drivers

Tags:
    protocol, connection, database, dbspine, contracts
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Connection(Protocol):
    """
    Minimal synchronous DB-API style connection.

    ``sqlite3.Connection`` satisfies it natively, as does
    :class:`dbspine.drivers.sqlite.SQLiteConnection`.
    """

    def execute(self, sql: str, params: tuple = ()) -> Any:
        """Execute SQL statement with optional parameters."""
        ...

    def executemany(self, sql: str, params: list[tuple]) -> Any:
        """Execute SQL statement for multiple parameter sets."""
        ...

    def commit(self) -> None:
        """Commit current transaction."""
        ...

    def rollback(self) -> None:
        """Rollback current transaction."""
        ...

    def close(self) -> None:
        """Release the underlying connection."""
        ...


__all__ = [
    "Connection",
]
