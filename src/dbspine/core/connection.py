"""Connection capability.

The core does not open, track or close connections; a driver's
``connect()`` hands a ``DBConnection`` to the caller, who owns it until
``disconnect()``. What the core requires is that connections share the
``DBObject`` ancestry, so generic operations such as ``data_type`` work on
a live connection as well as on its driver.

Tags:
    dbspine, connection, abstract-base, capability
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any

from dbspine.core.capability import DBObject
from dbspine.core.dispatch import dispatch_table


class DBConnection(DBObject):
    """
    Abstract base class for live DBMS connections.

    Concrete connections implement :meth:`disconnect` and
    :attr:`is_valid`; everything else (statement execution, result
    iteration, transactions) is driver-specific.
    """

    @property
    @abstractmethod
    def is_valid(self) -> bool:
        """Whether the connection is still open and usable."""
        ...

    @abstractmethod
    def disconnect(self) -> bool:
        """Close the connection; returns whether it closed cleanly."""
        ...

    def data_type(self, value: Any) -> str | list[str]:
        """SQL type(s) this connection's DBMS would use for ``value``."""
        return dispatch_table.dispatch("data_type", self, value)

    def __enter__(self) -> DBConnection:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.disconnect()


__all__ = [
    "DBConnection",
]
