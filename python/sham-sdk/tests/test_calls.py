"""Tests for sham.calls -- Call builder and BadCall records."""

from __future__ import annotations

import dataclasses

import pytest

from sham.calls import BadCall, Call, new_call
from sham.errors import MismatchKind


class TestCall:
    """Tests for Call and new_call()."""

    def test_new_call_no_args(self) -> None:
        c = new_call("Bar")
        assert c.name == "Bar"
        assert c.args == ()
        assert c.result == ()
        assert c.result_count == 0

    def test_new_call_with_args(self) -> None:
        c = new_call("Baz", "two", 3)
        assert c.args == ("two", 3)

    def test_returning(self) -> None:
        c = new_call("Baz", "two").returning(2, None)
        assert c.name == "Baz"
        assert c.args == ("two",)
        assert c.result == (2, None)
        assert c.result_count == 2

    def test_returning_leaves_original_untouched(self) -> None:
        base = new_call("Baz", "two")
        with_result = base.returning(1)
        assert base.result == ()
        assert with_result is not base

    def test_frozen(self) -> None:
        c = new_call("Bar")
        with pytest.raises(dataclasses.FrozenInstanceError):
            c.name = "Other"  # type: ignore[misc]

    def test_direct_construction(self) -> None:
        c = Call(name="Baz", args=("two",), result=(2, None))
        assert c == new_call("Baz", "two").returning(2, None)

    def test_describe(self) -> None:
        assert new_call("Bar").describe() == "Bar()"
        assert new_call("Baz", "two", [1]).returning(2, None).describe() == "Baz(two, [1]) -> (2, nil)"

    def test_to_dict(self) -> None:
        d = new_call("Baz", "two").returning(2, None).to_dict()
        assert d == {"name": "Baz", "args": ["'two'"], "result": ["2", "None"]}


class TestBadCall:
    """Tests for BadCall."""

    def test_default_kind(self) -> None:
        b = BadCall(name="X", args=(), index=3, message="unexpected call")
        assert b.kind == MismatchKind.UNEXPECTED_CALL

    def test_to_dict(self) -> None:
        b = BadCall(
            name="Baz",
            args=("two",),
            index=1,
            message="wrong name. expected: 'WrongCallName'. got: 'Baz'",
            kind=MismatchKind.NAME_MISMATCH,
        )
        assert b.to_dict() == {
            "name": "Baz",
            "args": ["'two'"],
            "index": 1,
            "message": "wrong name. expected: 'WrongCallName'. got: 'Baz'",
            "kind": "name_mismatch",
        }
