"""Tests for ``dbspine.drivers.ansi`` — ANSI driver."""

from __future__ import annotations

import pytest

from dbspine.core.display import format_object
from dbspine.core.errors import DriverConnectionError
from dbspine.drivers import BUILTIN_DRIVERS
from dbspine.drivers.ansi import ANSI, ANSIDriver


class TestANSIDriver:
    def test_descriptor(self) -> None:
        assert isinstance(ANSI(), ANSIDriver)
        assert ANSI.name == "ANSI"

    def test_cannot_connect(self) -> None:
        with pytest.raises(DriverConnectionError) as exc:
            ANSI().connect(dbname="x")
        assert exc.value.retryable is False

    def test_no_connections(self) -> None:
        assert ANSI().list_connections() == []

    def test_unload(self) -> None:
        assert ANSI().unload() is True

    def test_default_mapping(self) -> None:
        drv = ANSI()
        assert drv.data_type([1, 2, 3]) == "INTEGER"
        assert drv.data_type([True, False]) == "SMALLINT"
        assert drv.data_type(["x", "abc"]) == "TEXT"
        assert drv.data_type({"a": [1], "b": ["x"]}) == ["INTEGER", "TEXT"]

    def test_default_format(self) -> None:
        assert format_object(ANSI()) == "<ANSIDriver>"


class TestBuiltinDrivers:
    def test_names(self) -> None:
        assert sorted(BUILTIN_DRIVERS) == ["ANSI", "SQLite"]
