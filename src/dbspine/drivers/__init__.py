"""Built-in reference drivers.

Architecture::

    ANSIDriver   (ansi.py)     default SQL-92 mapping, cannot connect
    SQLiteDriver (sqlite.py)   stdlib sqlite3, tracks its connections,
                               overrides ``data_type`` and ``format``

Each module exports a :class:`~dbspine.core.driver.DriverDescriptor` under
the DBMS name (``ANSI``, ``SQLite``). Third-party drivers follow the same
convention from a module named after the DBMS (``Postgres``) or the
prefixed name (``RPostgres``) so ``db_driver("Postgres")`` finds them once
imported.
"""

from .ansi import ANSI, ANSIDriver
from .sqlite import SQLite, SQLiteConnection, SQLiteDriver

BUILTIN_DRIVERS = {
    ANSI.name: ANSI,
    SQLite.name: SQLite,
}

__all__ = [
    "ANSI",
    "ANSIDriver",
    "SQLite",
    "SQLiteDriver",
    "SQLiteConnection",
    "BUILTIN_DRIVERS",
]
