"""
dbspine - a uniform driver interface for database clients.

- dbspine.core: capability model, name resolution, generic dispatch
- dbspine.drivers: built-in reference drivers (ANSI, SQLite)
- dbspine.cli: ``dbspine`` command line
"""

__version__ = "0.1.0"

from dbspine.core import *  # noqa
