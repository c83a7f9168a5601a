"""Default mapping from Python values to SQL-92 column types.

The mapping is deliberately plain: it is the starting point drivers
override, and the answer for any driver that does not.

==============================================  ==============
Python values                                   SQL type
==============================================  ==============
``int``                                         ``INTEGER``
``bool``                                        ``SMALLINT``
``float``, ``Decimal``, ``Fraction``, mixed     ``DOUBLE``
``datetime.date``                               ``DATE``
``datetime.datetime``                           ``TIMESTAMP``
``datetime.timedelta``, ``datetime.time``       ``TIME``
``str``, ``Enum`` members                       ``TEXT``
``bytes``, ``bytearray``, ``memoryview``        ``BLOB``
==============================================  ==============

A scalar is a one-element column. ``None`` entries are missing values and
do not take part in inference; a column with no non-missing values is
``INTEGER``. A mapping of column name to values is a record and yields one
type per column, in column order.

Many DBMS engines use fixed-precision arithmetic, so values mapped to
``DOUBLE`` here may lose precision or overflow on the server. The policy
does not try to detect that.
"""

from __future__ import annotations

import array
import datetime
import enum
from collections.abc import Callable, Iterable, Mapping
from decimal import Decimal
from fractions import Fraction
from typing import Any

from dbspine.core.dispatch import dispatch_table
from dbspine.core.errors import UnsupportedTypeError

INTEGER = "INTEGER"
SMALLINT = "SMALLINT"
DOUBLE = "DOUBLE"
DATE = "DATE"
TIMESTAMP = "TIMESTAMP"
TIME = "TIME"
TEXT = "TEXT"
BLOB = "BLOB"

_SCALAR_ITERABLES = (str, bytes, bytearray, memoryview, Mapping)
_BINARY_TYPES = (bytes, bytearray, memoryview)
_FLOAT_TYPECODES = frozenset("fd")
_TEXT_TYPECODES = frozenset("uw")


def value_kind(value: Any) -> str:
    """SQL-92 type of a single non-missing value.

    Order matters: ``bool`` is an ``int`` and ``datetime`` is a ``date``.
    """
    if isinstance(value, bool):
        return SMALLINT
    if isinstance(value, int):
        return INTEGER
    if isinstance(value, (float, Decimal, Fraction)):
        return DOUBLE
    if isinstance(value, datetime.datetime):
        return TIMESTAMP
    if isinstance(value, datetime.date):
        return DATE
    if isinstance(value, (datetime.timedelta, datetime.time)):
        return TIME
    if isinstance(value, (str, enum.Enum)):
        return TEXT
    if isinstance(value, _BINARY_TYPES):
        return BLOB
    raise UnsupportedTypeError(
        f"Unsupported type: {type(value).__qualname__}",
        value=value,
    )


def column_values(value: Any) -> list[Any] | None:
    """Non-missing values of a column, or ``None`` for a typed ``array.array``.

    Any iterable is a column (``range``, ``deque``, generators...) except
    strings, byte strings and mappings, which are single values here.
    """
    if isinstance(value, array.array):
        return None
    if value is None:
        return []
    if isinstance(value, Iterable) and not isinstance(value, _SCALAR_ITERABLES):
        return [v for v in value if v is not None]
    return [value]


def combine_kinds(kinds: Iterable[str], *, column: str | None = None) -> str:
    """Collapse per-value kinds into one column type.

    ``INTEGER`` and ``DOUBLE`` combine to ``DOUBLE``; any other mix is an
    error since a column has exactly one type.
    """
    distinct = set(kinds)
    if not distinct:
        return INTEGER
    if len(distinct) == 1:
        return distinct.pop()
    if distinct == {INTEGER, DOUBLE}:
        return DOUBLE
    raise UnsupportedTypeError(
        f"Cannot map mixed value types {sorted(distinct)} to one column type",
        field=column,
    )


def _array_type(values: array.array) -> str:
    if values.typecode in _FLOAT_TYPECODES:
        return DOUBLE
    if values.typecode in _TEXT_TYPECODES:
        return TEXT
    return INTEGER


def column_type(
    value: Any,
    *,
    kind: Callable[[Any], str] = value_kind,
    column: str | None = None,
) -> str:
    """Type of one column (a scalar or a sequence of values)."""
    if isinstance(value, array.array):
        return _array_type(value)
    values = column_values(value)
    return combine_kinds((kind(v) for v in values), column=column)


def map_record(
    record: Mapping[Any, Any],
    column_mapper: Callable[..., str],
) -> list[str]:
    """Apply ``column_mapper`` to every column of a record, keeping column order."""
    return [column_mapper(values, column=str(name)) for name, values in record.items()]


def ansi_data_type(db_obj: Any, value: Any) -> str | list[str]:
    """Default ``data_type`` implementation for every :class:`DBObject`.

    ``db_obj`` is the dispatch receiver and does not influence the result.
    """
    if isinstance(value, Mapping):
        return map_record(value, column_type)
    return column_type(value)


dispatch_table.register_default("data_type", ansi_data_type)


__all__ = [
    "INTEGER",
    "SMALLINT",
    "DOUBLE",
    "DATE",
    "TIMESTAMP",
    "TIME",
    "TEXT",
    "BLOB",
    "value_kind",
    "column_values",
    "combine_kinds",
    "column_type",
    "map_record",
    "ansi_data_type",
]
