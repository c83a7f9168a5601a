"""Tests for ``dbspine.core.display`` — best-effort object display."""

from __future__ import annotations

import io

import pytest

from dbspine.core.dispatch import dispatch_table
from dbspine.core.display import format_object, show
from dbspine.core.driver import DBDriver
from dbspine.core.errors import UnsupportedOperationError


class PlainDriver(DBDriver):
    def connect(self, **params):
        raise NotImplementedError


class BrokenDriver(PlainDriver):
    pass


class TestFormat:
    def test_default_is_class_name(self) -> None:
        assert format_object(PlainDriver()) == "<PlainDriver>"

    def test_override(self) -> None:
        dispatch_table.register("format", PlainDriver, lambda obj: "<custom>")
        assert format_object(BrokenDriver()) == "<custom>"

    def test_non_capability_raises(self) -> None:
        with pytest.raises(UnsupportedOperationError):
            format_object(object())


class TestShow:
    def test_writes_summary(self) -> None:
        out = io.StringIO()
        assert show(PlainDriver(), file=out) is None
        assert out.getvalue() == "<PlainDriver>\n"

    def test_defaults_to_stdout(self, capsys) -> None:
        show(PlainDriver())
        assert capsys.readouterr().out == "<PlainDriver>\n"

    def test_failing_override_is_swallowed(self, capsys) -> None:
        def boom(obj):
            raise RuntimeError("driver forgot to implement something")

        dispatch_table.register("format", BrokenDriver, boom)
        assert show(BrokenDriver()) is None
        assert capsys.readouterr().out == ""

    def test_unsupported_receiver_is_swallowed(self, capsys) -> None:
        assert show(object()) is None
        assert capsys.readouterr().out == ""

    def test_failing_stream_is_swallowed(self) -> None:
        out = io.StringIO()
        out.close()
        assert show(PlainDriver(), file=out) is None
