"""ANSI driver: the default type mapping with no database behind it.

``ANSI().data_type(value)`` answers "what would SQL-92 call this" without
loading any real driver. It cannot connect.
"""

from __future__ import annotations

from typing import Any

from dbspine.core.driver import DBDriver, DriverDescriptor
from dbspine.core.errors import DriverConnectionError


class ANSIDriver(DBDriver):
    """Driver with only the default ``data_type`` behavior."""

    def connect(self, **params: Any):
        raise DriverConnectionError(
            "The ANSI driver has no backing database",
            retryable=False,
        ).with_context(driver="ANSI")


ANSI = DriverDescriptor("ANSI", ANSIDriver, description="SQL-92 type mapping, no connections")


__all__ = [
    "ANSIDriver",
    "ANSI",
]
