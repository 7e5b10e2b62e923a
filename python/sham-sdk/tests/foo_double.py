"""A small dependency, its double and the code that uses it.

``Foo`` stands in for a real dependency. ``MockFoo`` implements the same
surface and routes every method through a :class:`CannedResponseMock`.
``use_foo`` is the code under test.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from sham import Call, CannedResponseMock, to_error
from sham.mock import BadCallHandler


class Foo(Protocol):
    def bar(self) -> None: ...

    def baz(self, s: str) -> tuple[int, BaseException | None]: ...


class MockFoo:
    """Double for :class:`Foo` backed by an ordered canned-response mock."""

    def __init__(
        self,
        calls: Sequence[Call | None] | None = None,
        *,
        on_bad_call: BadCallHandler | None = None,
    ) -> None:
        self.mock = CannedResponseMock(calls, on_bad_call=on_bad_call)

    def bar(self) -> None:
        self.mock.verify_call_no_args("Bar", 0)

    def baz(self, s: str) -> tuple[int, BaseException | None]:
        call, err = self.mock.verify_call("Baz", 2, s)
        if err is not None:
            return 0, err
        assert call is not None
        return int(call.result[0]), to_error(call.result[1])  # type: ignore[call-overload]


def new_mock_foo(calls: Sequence[Call | None] | None) -> MockFoo:
    """Build a :class:`MockFoo`, raising if ``calls`` is unusable."""
    foo = MockFoo(calls)
    err = foo.mock.invariant()
    if err is not None:
        raise err
    return foo


def use_foo(foo: Foo, s: str) -> tuple[int, BaseException | None]:
    """Call ``bar()`` then ``baz(s)``; add 5 to the result unless baz failed."""
    foo.bar()
    value, err = foo.baz(s)
    if err is not None:
        return -1, err
    return value + 5, None
