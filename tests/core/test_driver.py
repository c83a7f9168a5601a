"""Tests for ``dbspine.core.driver`` and ``dbspine.core.connection``."""

from __future__ import annotations

import pytest

from dbspine.core.capability import DBObject
from dbspine.core.connection import DBConnection
from dbspine.core.dispatch import dispatch_table
from dbspine.core.driver import (
    DBDriver,
    DriverDescriptor,
    db_connect,
    db_data_type,
    db_list_connections,
    db_unload_driver,
)
from dbspine.core.errors import DriverError


class MemoryConnection(DBConnection):
    def __init__(self, dbname: str):
        self.dbname = dbname
        self._open = True

    @property
    def is_valid(self) -> bool:
        return self._open

    def disconnect(self) -> bool:
        was_open = self._open
        self._open = False
        return was_open


class UntrackedDriver(DBDriver):
    def connect(self, **params):
        return MemoryConnection(params.get("dbname", "default"))


class SingleConnectionDriver(DBDriver):
    def __init__(self):
        self._conn: MemoryConnection | None = None

    def connect(self, **params):
        self._conn = MemoryConnection(params.get("dbname", "default"))
        return self._conn

    def list_connections(self):
        if self._conn is not None and self._conn.is_valid:
            return [self._conn]
        return []


class TestCapabilityHierarchy:
    def test_driver_and_connection_are_dbobjects(self) -> None:
        assert issubclass(DBDriver, DBObject)
        assert issubclass(DBConnection, DBObject)

    def test_driver_is_abstract(self) -> None:
        with pytest.raises(TypeError):
            DBDriver()

    def test_connection_is_abstract(self) -> None:
        with pytest.raises(TypeError):
            DBConnection()


class TestDriverDefaults:
    def test_list_connections_fresh_driver_is_empty(self) -> None:
        assert UntrackedDriver().list_connections() == []

    def test_list_connections_untracked_after_connect(self) -> None:
        drv = UntrackedDriver()
        drv.connect(dbname="x")
        assert db_list_connections(drv) == []

    def test_single_connection_driver(self) -> None:
        drv = SingleConnectionDriver()
        assert db_list_connections(drv) == []
        conn = db_connect(drv, dbname="one")
        assert db_list_connections(drv) == [conn]
        conn.disconnect()
        assert db_list_connections(drv) == []

    def test_unload_twice(self) -> None:
        drv = UntrackedDriver()
        assert db_unload_driver(drv) is True
        assert db_unload_driver(drv) is True

    def test_connect_passes_params(self) -> None:
        conn = db_connect(UntrackedDriver(), dbname="sales")
        assert conn.dbname == "sales"


class TestDataType:
    def test_default_on_driver_and_connection(self) -> None:
        drv = UntrackedDriver()
        conn = drv.connect()
        assert drv.data_type([1, 2]) == "INTEGER"
        assert conn.data_type(["a"]) == "TEXT"
        assert db_data_type(conn, {"a": [1.5]}) == ["DOUBLE"]

    def test_override_only_for_registered_type(self) -> None:
        dispatch_table.register("data_type", SingleConnectionDriver, lambda drv, value: "VARCHAR2")
        assert SingleConnectionDriver().data_type(["a"]) == "VARCHAR2"
        assert UntrackedDriver().data_type(["a"]) == "TEXT"


class TestConnectionContextManager:
    def test_disconnects_on_exit(self) -> None:
        with UntrackedDriver().connect() as conn:
            assert conn.is_valid
        assert not conn.is_valid


class TestDriverDescriptor:
    def test_call_builds_driver(self) -> None:
        descriptor = DriverDescriptor("Untracked", UntrackedDriver)
        assert isinstance(descriptor(), UntrackedDriver)

    def test_arguments_forwarded(self) -> None:
        seen = {}

        def factory(*args, **kwargs):
            seen.update(args=args, kwargs=kwargs)
            return UntrackedDriver()

        DriverDescriptor("Untracked", factory)(1, mode="fast")
        assert seen == {"args": (1,), "kwargs": {"mode": "fast"}}

    def test_non_driver_rejected(self) -> None:
        with pytest.raises(DriverError, match="not a DBDriver") as exc:
            DriverDescriptor("Bad", dict)()
        assert exc.value.context.driver == "Bad"

    def test_immutable(self) -> None:
        descriptor = DriverDescriptor("Untracked", UntrackedDriver)
        with pytest.raises(AttributeError):
            descriptor.name = "Other"

    def test_repr(self) -> None:
        assert repr(DriverDescriptor("Untracked", UntrackedDriver)) == "DriverDescriptor('Untracked')"
