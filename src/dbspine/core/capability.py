"""Capability marker shared by every driver-layer object.

``DBObject`` carries no behavior. It exists so the dispatch engine has one
type every driver and connection is guaranteed to inherit from, and so a
default implementation of a generic operation has somewhere to live.

Tags:
    dbspine, capability, abstract-base, dispatch-anchor
"""

from __future__ import annotations

from abc import ABC


class DBObject(ABC):  # noqa: B024
    """Root of the driver capability hierarchy.

    Driver and connection classes are ``DBObject`` subclasses plus their
    own operation set; see :class:`dbspine.core.driver.DBDriver` and
    :class:`dbspine.core.connection.DBConnection`.
    """

    __slots__ = ()


__all__ = [
    "DBObject",
]
