"""Best-effort textual display of driver-layer objects.

Inspection tooling (REPLs, the CLI, debug dumps) calls :func:`show` on
objects from drivers it knows nothing about. A driver that fails to
implement its ``format`` override correctly must not break that tooling,
so this is the one code path in dbspine that discards errors.
"""

from __future__ import annotations

import sys
from typing import Any, TextIO

from dbspine.core.capability import DBObject
from dbspine.core.dispatch import dispatch_table
from dbspine.core.logging import get_logger

logger = get_logger(__name__)


@dispatch_table.default("format")
def default_format(obj: DBObject) -> str:
    """``<ClassName>``."""
    return f"<{type(obj).__name__}>"


def format_object(obj: Any) -> str:
    """Summary string for ``obj`` from the most specific ``format`` implementation.

    Errors propagate; use :func:`show` when they must not.
    """
    return dispatch_table.dispatch("format", obj)


def show(obj: Any, file: TextIO | None = None) -> None:
    """Write a one-line summary of ``obj``; never raises."""
    try:
        text = format_object(obj)
        (file or sys.stdout).write(f"{text}\n")
    except Exception as e:  # noqa: BLE001
        logger.debug("show_failed", obj_type=type(obj).__qualname__, error=str(e))
    return None


__all__ = [
    "default_format",
    "format_object",
    "show",
]
