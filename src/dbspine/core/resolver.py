"""Driver name resolution.

Manifesto:
    Consumers should be able to say ``db_driver("SQLite")`` without
    importing a vendor module, and driver authors should not need to
    register anywhere. Resolution is pure naming convention plus a look
    at what is already imported: every driver module exports a callable
    named after its DBMS, in a module named after the DBMS or after the
    prefixed DBMS name (``RSQLite`` exports ``SQLite``).

    Resolution never imports anything. Importing the driver module is the
    caller's job; the resolver only looks.

Architecture::

    find_driver("SQLite")
        │
        ├─ 1. ambient["SQLite"]                    (__main__ namespace)
        ├─ 2. loaded["SQLite"].SQLite              (module named SQLite)
        ├─ 3. loaded["RSQLite"].SQLite             (module named prefix + name)
        └─ 4. DriverNotFoundError(searched_locations=[...all three...])

    First callable binding wins. Explicit bindings in the caller's own
    namespace beat driver modules.

Features:
    - ``find_driver()``: pure lookup over (name, ambient, loaded, prefix)
    - ``resolve_driver()`` / ``db_driver()``: lookup + call with driver args
    - ``DriverResolver``: the same with ambient/loaded/prefix bound once

Examples:
    >>> import types
    >>> fake = types.SimpleNamespace(SQLite=SQLite)
    >>> drv = resolve_driver("SQLite", ambient={}, loaded={"RSQLite": fake})
    >>> type(drv).__name__
    'SQLiteDriver'

Guardrails:
    ❌ DON'T: ``importlib.import_module(name)`` inside resolution
    ✅ DO: Import the driver module yourself, then resolve

Tags:
    dbspine, resolver, plugin-discovery, naming-convention, drivers

Doc-Types:
    api-reference
"""

from __future__ import annotations

import sys
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from dbspine.core.driver import DBDriver
from dbspine.core.errors import DriverError, DriverNotFoundError
from dbspine.core.logging import get_logger
from dbspine.core.settings import get_settings

logger = get_logger(__name__)

AMBIENT = "ambient"
MODULE = "module"
PREFIXED_MODULE = "prefixed_module"


@dataclass(frozen=True)
class DriverMatch:
    """Where a driver binding was found."""

    name: str
    stage: str
    location: str
    binding: Callable[..., Any]


def _ambient_namespace() -> Mapping[str, Any]:
    main = sys.modules.get("__main__")
    return vars(main) if main is not None else {}


def _lookup(namespace: Any, name: str) -> Any:
    if isinstance(namespace, Mapping):
        return namespace.get(name)
    return getattr(namespace, name, None)


def search_locations(name: str, prefix: str) -> tuple[str, str, str]:
    """Human-readable locations searched for ``name``, in search order."""
    return (
        "global namespace",
        f"module named {name}",
        f"module named {prefix}{name}",
    )


def match_driver(
    name: str,
    *,
    ambient: Mapping[str, Any],
    loaded: Mapping[str, Any],
    prefix: str,
) -> DriverMatch | None:
    """First callable binding for ``name``, or ``None``. Pure: reads only."""
    locations = search_locations(name, prefix)
    candidates = [
        (AMBIENT, locations[0], ambient),
        (MODULE, locations[1], loaded.get(name)),
        (PREFIXED_MODULE, locations[2], loaded.get(f"{prefix}{name}")),
    ]
    for stage, location, namespace in candidates:
        if namespace is None:
            continue
        binding = _lookup(namespace, name)
        if binding is not None and callable(binding):
            return DriverMatch(name=name, stage=stage, location=location, binding=binding)
    return None


def find_driver(
    name: str,
    *,
    ambient: Mapping[str, Any] | None = None,
    loaded: Mapping[str, Any] | None = None,
    prefix: str | None = None,
) -> Callable[..., Any]:
    """Find the driver factory bound to ``name``.

    Args:
        name: DBMS name, e.g. ``"SQLite"``.
        ambient: bindings searched first; defaults to the ``__main__`` namespace.
        loaded: module identity → module; defaults to ``sys.modules``.
        prefix: driver module prefix; defaults to ``settings.driver_prefix``.

    Raises:
        DriverNotFoundError: no callable binding in any of the three locations.
    """
    prefix = get_settings().driver_prefix if prefix is None else prefix
    ambient = _ambient_namespace() if ambient is None else ambient
    loaded = sys.modules if loaded is None else loaded

    match = match_driver(name, ambient=ambient, loaded=loaded, prefix=prefix)
    if match is None:
        raise DriverNotFoundError(name, search_locations(name, prefix))
    logger.debug("driver_found", name=name, stage=match.stage, location=match.location)
    return match.binding


def resolve_driver(
    name: str,
    args: Sequence[Any] = (),
    kwargs: Mapping[str, Any] | None = None,
    *,
    ambient: Mapping[str, Any] | None = None,
    loaded: Mapping[str, Any] | None = None,
    prefix: str | None = None,
) -> DBDriver:
    """Find the driver factory for ``name`` and call it with ``args``/``kwargs``.

    Driver arguments travel as a tuple and a dict so any keyword, including
    ``ambient``, ``loaded`` or ``prefix``, reaches the factory untouched.

    Raises:
        DriverNotFoundError: see :func:`find_driver`.
        DriverError: the binding returned something that is not a ``DBDriver``.
    """
    factory = find_driver(name, ambient=ambient, loaded=loaded, prefix=prefix)
    driver = factory(*args, **(kwargs or {}))
    if not isinstance(driver, DBDriver):
        raise DriverError(
            f"Binding {name} returned {type(driver).__qualname__}, not a DBDriver"
        ).with_context(driver=name)
    logger.debug("driver_resolved", name=name, driver=type(driver).__qualname__)
    return driver


def db_driver(name: str, *args: Any, **kwargs: Any) -> DBDriver:
    """Create a driver by DBMS name; every extra argument goes to the driver."""
    return resolve_driver(name, args, kwargs)


class DriverResolver:
    """
    Resolver with its search namespaces bound once.

    Handy when resolving many names against the same (possibly fake)
    environment, e.g. in tests or in a host that keeps its own plugin table.
    """

    def __init__(
        self,
        *,
        ambient: Mapping[str, Any] | None = None,
        loaded: Mapping[str, Any] | None = None,
        prefix: str | None = None,
    ):
        self._ambient = ambient
        self._loaded = loaded
        self._prefix = prefix

    @property
    def prefix(self) -> str:
        return get_settings().driver_prefix if self._prefix is None else self._prefix

    def search_locations(self, name: str) -> tuple[str, str, str]:
        return search_locations(name, self.prefix)

    def find(self, name: str) -> Callable[..., Any]:
        return find_driver(name, ambient=self._ambient, loaded=self._loaded, prefix=self._prefix)

    def resolve(self, name: str, *args: Any, **kwargs: Any) -> DBDriver:
        return resolve_driver(
            name,
            args,
            kwargs,
            ambient=self._ambient,
            loaded=self._loaded,
            prefix=self._prefix,
        )


__all__ = [
    "DriverMatch",
    "DriverResolver",
    "search_locations",
    "match_driver",
    "find_driver",
    "resolve_driver",
    "db_driver",
]
