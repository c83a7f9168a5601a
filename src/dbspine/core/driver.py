"""Driver capability and driver descriptors.

Manifesto:
    Callers should depend on the driver *contract*, never on a vendor
    class. ``DBDriver`` is that contract: build connections, report the
    ones it tracks, release driver-level resources, and answer which SQL
    type a Python value maps to.

Architecture::

    DBObject (capability.py)
        ├── DBDriver                 connect / list_connections / unload / data_type
        │     ├── ANSIDriver         drivers/ansi.py
        │     └── SQLiteDriver       drivers/sqlite.py
        └── DBConnection             connection.py

    DriverDescriptor(name, factory)  what a driver module exports under the
                                     DBMS name; calling it builds a DBDriver

Features:
    - Abstract ``connect()``; safe defaults for ``list_connections()`` and
      ``unload()``
    - ``data_type()`` routed through the dispatch table so overrides can be
      registered per driver class
    - ``db_*`` module-level functions for callers that prefer a functional
      surface

Examples:
    >>> from dbspine.drivers.sqlite import SQLite
    >>> drv = SQLite()
    >>> con = db_connect(drv, dbname=":memory:")
    >>> db_list_connections(drv) == [con]
    True

Tags:
    dbspine, driver, abstract-base, capability, factory

Doc-Types:
    api-reference
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from dbspine.core.capability import DBObject
from dbspine.core.connection import DBConnection
from dbspine.core.dispatch import dispatch_table
from dbspine.core.errors import DriverError


class DBDriver(DBObject):
    """
    Abstract base class for database drivers.

    A driver is a factory for connections to one DBMS family. Only
    :meth:`connect` is mandatory; drivers that keep track of their
    connections or hold native resources override
    :meth:`list_connections` and :meth:`unload`.
    """

    @abstractmethod
    def connect(self, **params: Any) -> DBConnection:
        """Open a connection.

        ``params`` are driver-specific (``dbname``, ``user``, ``password``,
        ``host``, ``port``...). The number of connections that may be open
        at once is up to the driver.

        Raises:
            DriverConnectionError: authentication or network setup failed.
        """
        ...

    def list_connections(self) -> list[DBConnection]:
        """Connections this driver currently has open.

        Drivers that do not track connections return an empty list.
        Single-connection drivers return a one-element list while connected.
        """
        return []

    def unload(self) -> bool:
        """Release driver-level resources; returns whether it succeeded.

        Calling it more than once must not raise.
        """
        return True

    def data_type(self, value: Any) -> str | list[str]:
        """SQL type(s) for ``value``: a string, or one per column for a record."""
        return dispatch_table.dispatch("data_type", self, value)


@dataclass(frozen=True)
class DriverDescriptor:
    """
    Named driver factory, exported by a driver module under its DBMS name.

    Usage:
        SQLite = DriverDescriptor("SQLite", SQLiteDriver)
        drv = SQLite(timeout=2.0)
    """

    name: str
    factory: Callable[..., DBDriver]
    description: str = ""

    def __call__(self, *args: Any, **kwargs: Any) -> DBDriver:
        driver = self.factory(*args, **kwargs)
        if not isinstance(driver, DBDriver):
            raise DriverError(
                f"Driver factory {self.name} returned {type(driver).__qualname__}, not a DBDriver"
            ).with_context(driver=self.name)
        return driver

    def __repr__(self) -> str:
        return f"DriverDescriptor({self.name!r})"


def db_connect(drv: DBDriver, **params: Any) -> DBConnection:
    """Open a connection through ``drv``."""
    return drv.connect(**params)


def db_list_connections(drv: DBDriver) -> list[DBConnection]:
    """Connections ``drv`` currently has open."""
    return list(drv.list_connections())


def db_unload_driver(drv: DBDriver) -> bool:
    """Release ``drv``'s driver-level resources."""
    return drv.unload()


def db_data_type(db_obj: DBObject, value: Any) -> str | list[str]:
    """SQL type(s) for ``value`` as seen by a driver or connection."""
    return dispatch_table.dispatch("data_type", db_obj, value)


__all__ = [
    "DBDriver",
    "DriverDescriptor",
    "db_connect",
    "db_list_connections",
    "db_unload_driver",
    "db_data_type",
]
