"""Single-dispatch engine for generic driver operations.

Manifesto:
    Drivers are developed independently and loaded whenever their modules
    are imported. Cross-cutting operations (type mapping, display) must
    let each driver plug in its own behavior for its own classes while a
    universal default keeps working for everyone else, with no central
    list of drivers.

    The table is an explicit map-of-maps instead of ``functools.
    singledispatch`` so it can be listed, snapshotted and restored, and so
    the default is tied to ``DBObject`` rather than to ``object``.

Architecture::

    _implementations                      _defaults
    ┌───────────────┬──────────────────┐  ┌─────────────┬────────────────┐
    │ "data_type"   │ SQLiteDriver → f │  │ "data_type" │ ansi_data_type │
    │               │ SQLiteConn   → g │  │ "format"    │ default_format │
    │ "format"      │ SQLiteDriver → h │  └─────────────┴────────────────┘
    └───────────────┴──────────────────┘

    resolve(op, T):
        for cls in T.__mro__:
            cls is DBObject         → default(op)
            (op, cls) registered    → implementation
        DBObject not in T.__mro__   → UnsupportedOperationError

Features:
    - ``register()`` / ``implementation()`` decorator for per-type overrides
    - ``register_default()`` / ``default()`` decorator for the DBObject anchor
    - ``resolve()`` is read-only; ``dispatch()`` = resolve + call
    - ``snapshot()`` / ``restore()`` for test isolation

Examples:
    >>> table = DispatchTable()
    >>> table.register_default("describe", lambda obj: "generic")
    >>> @table.implementation("describe", MyDriver)
    ... def _describe(drv):
    ...     return "mine"
    >>> table.dispatch("describe", MyDriver())
    'mine'

Guardrails:
    ❌ DON'T: Register overrides lazily during dispatch
    ✅ DO: Register at import time of the driver module

Tags:
    dbspine, dispatch, single-dispatch, registry, generic-operations

Doc-Types:
    api-reference
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

from dbspine.core.capability import DBObject
from dbspine.core.errors import UnsupportedOperationError

Implementation = Callable[..., Any]


class DispatchTable:
    """
    Registry of generic-operation implementations keyed by receiver type.

    ``anchor`` is the type whose level holds the default implementations;
    receivers that do not inherit from it have no default.
    """

    def __init__(self, anchor: type = DBObject):
        self._anchor = anchor
        self._implementations: dict[str, dict[type, Implementation]] = {}
        self._defaults: dict[str, Implementation] = {}
        self._lock = threading.Lock()

    @property
    def anchor(self) -> type:
        """Type the default implementations are bound to."""
        return self._anchor

    # -- Registration -------------------------------------------------------

    def register(self, operation: str, cls: type, impl: Implementation) -> None:
        """Register ``impl`` as the implementation of ``operation`` for ``cls``.

        Registering at the anchor type is the same as ``register_default``.
        """
        if cls is self._anchor:
            self.register_default(operation, impl)
            return
        with self._lock:
            self._implementations.setdefault(operation, {})[cls] = impl

    def register_default(self, operation: str, impl: Implementation) -> None:
        """Register the default implementation of ``operation``, replacing any previous one."""
        with self._lock:
            self._defaults[operation] = impl

    def implementation(self, operation: str, cls: type) -> Callable[[Implementation], Implementation]:
        """Decorator form of :meth:`register`."""

        def decorator(impl: Implementation) -> Implementation:
            self.register(operation, cls, impl)
            return impl

        return decorator

    def default(self, operation: str) -> Callable[[Implementation], Implementation]:
        """Decorator form of :meth:`register_default`."""

        def decorator(impl: Implementation) -> Implementation:
            self.register_default(operation, impl)
            return impl

        return decorator

    def unregister(self, operation: str, cls: type) -> bool:
        """Remove the implementation for ``cls``; returns whether one existed."""
        with self._lock:
            impls = self._implementations.get(operation, {})
            removed = impls.pop(cls, None) is not None
            if not impls:
                self._implementations.pop(operation, None)
        return removed

    # -- Lookup ---------------------------------------------------------------

    def resolve(self, operation: str, receiver_type: type) -> Implementation:
        """Find the most specific implementation of ``operation`` for ``receiver_type``.

        Walks the MRO: the concrete type first, then ancestors in
        declaration order. Reaching the anchor selects the default.

        Raises:
            UnsupportedOperationError: no implementation applies and no
                default is registered (or the type is not an anchor subclass).
        """
        impls = self._implementations.get(operation, {})
        for cls in receiver_type.__mro__:
            if cls is self._anchor:
                default = self._defaults.get(operation)
                if default is None:
                    break
                return default
            impl = impls.get(cls)
            if impl is not None:
                return impl
        raise UnsupportedOperationError(operation, receiver_type)

    def dispatch(self, operation: str, receiver: Any, *args: Any, **kwargs: Any) -> Any:
        """Call the implementation of ``operation`` selected by ``type(receiver)``."""
        impl = self.resolve(operation, type(receiver))
        return impl(receiver, *args, **kwargs)

    # -- Introspection ------------------------------------------------------

    def operations(self) -> list[str]:
        """List every operation with a default or at least one override."""
        return sorted(set(self._implementations) | set(self._defaults))

    def registered_types(self, operation: str) -> list[type]:
        """Types with an override of ``operation``, in registration order."""
        return list(self._implementations.get(operation, {}))

    def has_default(self, operation: str) -> bool:
        return operation in self._defaults

    def snapshot(self) -> tuple[dict[str, dict[type, Implementation]], dict[str, Implementation]]:
        """Copy of the table state, for :meth:`restore`."""
        with self._lock:
            return (
                {op: dict(impls) for op, impls in self._implementations.items()},
                dict(self._defaults),
            )

    def restore(
        self,
        state: tuple[dict[str, dict[type, Implementation]], dict[str, Implementation]],
    ) -> None:
        """Replace the table state with one taken by :meth:`snapshot`."""
        implementations, defaults = state
        with self._lock:
            self._implementations = {op: dict(impls) for op, impls in implementations.items()}
            self._defaults = dict(defaults)

    def clear(self) -> None:
        """Remove every registration (for testing)."""
        with self._lock:
            self._implementations = {}
            self._defaults = {}


# Global table
dispatch_table = DispatchTable()


def dispatch(operation: str, receiver: Any, *args: Any, **kwargs: Any) -> Any:
    """Dispatch ``operation`` on the global table."""
    return dispatch_table.dispatch(operation, receiver, *args, **kwargs)


__all__ = [
    "DispatchTable",
    "dispatch",
    "dispatch_table",
]
