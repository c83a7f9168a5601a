"""Tests for ``dbspine.core.datatype`` — default SQL-92 type mapping."""

from __future__ import annotations

import array
import datetime
import enum
from collections import deque
from decimal import Decimal
from fractions import Fraction

import pytest

from dbspine.core.datatype import ansi_data_type, column_type, combine_kinds, value_kind
from dbspine.core.driver import db_data_type
from dbspine.core.errors import UnsupportedTypeError, ValidationError
from dbspine.drivers.ansi import ANSI


class Color(enum.Enum):
    RED = "red"


def data_type(value):
    return ansi_data_type(None, value)


class TestScalarColumns:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ([1, 2, 3], "INTEGER"),
            ([], "INTEGER"),
            ([True, False], "SMALLINT"),
            ([1.5, 2.0], "DOUBLE"),
            ([1, 2.5], "DOUBLE"),
            ([float("nan"), float("inf")], "DOUBLE"),
            ([Decimal("1.10")], "DOUBLE"),
            ([Fraction(1, 3)], "DOUBLE"),
            ([datetime.date(2024, 1, 2)], "DATE"),
            ([datetime.datetime(2024, 1, 2, 3, 4)], "TIMESTAMP"),
            ([datetime.timedelta(seconds=5)], "TIME"),
            ([datetime.time(12, 30)], "TIME"),
            (["x", "abc"], "TEXT"),
            ([Color.RED], "TEXT"),
            ([b"\x00\x01", bytearray(b"\x02")], "BLOB"),
            ([memoryview(b"raw")], "BLOB"),
        ],
    )
    def test_sequences(self, value, expected) -> None:
        assert data_type(value) == expected

    @pytest.mark.parametrize(
        "value,expected",
        [
            (3, "INTEGER"),
            (True, "SMALLINT"),
            (3.0, "DOUBLE"),
            ("abc", "TEXT"),
            (b"abc", "BLOB"),
            (datetime.date(2024, 1, 1), "DATE"),
        ],
    )
    def test_scalar_is_one_element_column(self, value, expected) -> None:
        assert data_type(value) == expected

    def test_tuples_and_sets(self) -> None:
        assert data_type((1, 2)) == "INTEGER"
        assert data_type({"a", "b"}) == "TEXT"
        assert data_type(frozenset({1.5})) == "DOUBLE"

    def test_other_iterables_are_columns(self) -> None:
        assert data_type(range(3)) == "INTEGER"
        assert data_type(deque([1.5])) == "DOUBLE"
        assert data_type(x for x in ["a", None]) == "TEXT"
        assert data_type({"a": range(2), "b": deque(["x"])}) == ["INTEGER", "TEXT"]

    def test_missing_values_ignored(self) -> None:
        assert data_type([None, 1, None]) == "INTEGER"
        assert data_type(["a", None]) == "TEXT"
        assert data_type([None]) == "INTEGER"
        assert data_type(None) == "INTEGER"


class TestTypedArrays:
    def test_integer_array(self) -> None:
        assert data_type(array.array("i", [1, 2])) == "INTEGER"

    def test_empty_integer_array(self) -> None:
        assert data_type(array.array("l")) == "INTEGER"

    def test_float_array(self) -> None:
        assert data_type(array.array("d")) == "DOUBLE"

    def test_byte_array_is_integer(self) -> None:
        assert data_type(array.array("B", b"ab")) == "INTEGER"


class TestRecords:
    def test_one_type_per_column_in_order(self) -> None:
        record = {"id": [1, 2], "name": ["a", "b"]}
        assert data_type(record) == ["INTEGER", "TEXT"]

    def test_column_order_preserved(self) -> None:
        record = {"name": ["a"], "flag": [True], "when": [datetime.datetime(2024, 1, 1)], "id": [1]}
        assert data_type(record) == ["TEXT", "SMALLINT", "TIMESTAMP", "INTEGER"]

    def test_empty_record(self) -> None:
        assert data_type({}) == []

    def test_blob_column(self) -> None:
        assert data_type({"payload": [b"a", b"b"]}) == ["BLOB"]

    def test_bad_column_names_field(self) -> None:
        with pytest.raises(UnsupportedTypeError) as exc:
            data_type({"ok": [1], "bad": [1, "x"]})
        assert exc.value.field == "bad"


class TestUnsupported:
    def test_mixed_kinds(self) -> None:
        with pytest.raises(UnsupportedTypeError, match="mixed"):
            data_type([1, "x"])

    def test_unknown_type(self) -> None:
        with pytest.raises(UnsupportedTypeError, match="Unsupported type: object"):
            data_type([object()])

    def test_nested_list(self) -> None:
        with pytest.raises(UnsupportedTypeError):
            data_type([[1, 2]])

    def test_is_validation_error(self) -> None:
        with pytest.raises(ValidationError):
            value_kind(object())


class TestHelpers:
    def test_combine_empty(self) -> None:
        assert combine_kinds([]) == "INTEGER"

    def test_combine_numeric(self) -> None:
        assert combine_kinds(["INTEGER", "DOUBLE", "INTEGER"]) == "DOUBLE"

    def test_column_type_custom_kind(self) -> None:
        assert column_type([1, 2], kind=lambda v: "NUMBER") == "NUMBER"


class TestThroughDispatch:
    def test_ansi_driver(self) -> None:
        assert ANSI().data_type([1, 2, 3]) == "INTEGER"

    def test_generic_function(self) -> None:
        assert db_data_type(ANSI(), {"a": [1], "b": ["x"]}) == ["INTEGER", "TEXT"]
