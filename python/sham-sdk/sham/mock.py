"""Ordered canned-response mock.

:class:`CannedResponseMock` holds an ordered list of expected calls and a
cursor pointing at the next one. A test double forwards each of its typed
methods to :meth:`~CannedResponseMock.verify_call`, which checks the
invocation against the expectation under the cursor, in this order:

1. a call is still expected at all,
2. the operation name,
3. the argument count,
4. each argument, structurally (first mismatch only),
5. the result arity the double asks for.

A match advances the cursor and hands the :class:`~sham.calls.Call` back
so the double can unpack its canned result. A mismatch leaves the cursor
where it is, records a :class:`~sham.calls.BadCall`, notifies the
``on_bad_call`` observer and returns a
:class:`~sham.errors.VerificationError` value. Nothing is raised, so the
code under test sees an ordinary error result.

Usage::

    class MockFoo:
        def __init__(self, calls: list[Call]) -> None:
            self.mock = CannedResponseMock(calls)

        def baz(self, s: str) -> tuple[int, BaseException | None]:
            call, err = self.mock.verify_call("Baz", 2, s)
            if err is not None:
                return 0, err
            return call.result[0], to_error(call.result[1])

    foo = MockFoo([new_call("Baz", "two").returning(2, None)])
    run_code_under_test(foo)
    foo.mock.assert_valid()
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Sequence

from sham.calls import BadCall, Call
from sham.equality import deep_equal, format_value
from sham.errors import InvariantError, MismatchKind, VerificationError

logger = logging.getLogger(__name__)

BadCallHandler = Callable[[BadCall], None]


class CannedResponseMock:
    """Verifies calls against an ordered list of expectations.

    Attributes:
        expected_calls: The ordered expectations. May be reassigned after
            :meth:`reset` to start a new verification phase.
        on_bad_call: Optional observer invoked synchronously with every
            recorded :class:`~sham.calls.BadCall`. While it runs the mock
            is read-only: :meth:`reset`, :meth:`verify_call`,
            :meth:`verify_call_no_args` and assigning ``expected_calls``
            raise ``RuntimeError``.
    """

    def __init__(
        self,
        expected_calls: Sequence[Call | None] | None = None,
        *,
        on_bad_call: BadCallHandler | None = None,
    ) -> None:
        self._expected_calls: list[Call | None] = list(expected_calls or [])
        self.on_bad_call = on_bad_call
        self._index = 0
        self._bad_calls: list[BadCall] = []
        self._notifying = False

    # -- State ---------------------------------------------------------------

    @property
    def expected_calls(self) -> list[Call | None]:
        """A copy of the ordered expectations. Assign a new list to replace them."""
        return list(self._expected_calls)

    @expected_calls.setter
    def expected_calls(self, calls: Sequence[Call | None]) -> None:
        self._check_not_notifying("assign expected_calls")
        self._expected_calls = list(calls)

    @property
    def index(self) -> int:
        """Position of the next expected call."""
        return self._index

    @property
    def bad_calls(self) -> tuple[BadCall, ...]:
        """Bad calls recorded since construction or the last reset, oldest first."""
        return tuple(self._bad_calls)

    @property
    def remaining(self) -> list[Call | None]:
        """Expected calls that have not been made yet."""
        return self._expected_calls[self._index:]

    def invariant(self) -> InvariantError | None:
        """Check that the expected call list is usable.

        Returns:
            ``None`` when the list is non-empty and holds no ``None``
            entries, otherwise an :class:`~sham.errors.InvariantError`
            describing the problem. State is not modified.
        """
        if not self._expected_calls:
            return InvariantError("calls can't be empty")
        for call in self._expected_calls:
            if call is None:
                return InvariantError("call must not be nil")
        return None

    def is_valid(self) -> bool:
        """True if every expected call was made and none went wrong."""
        return self._index == len(self._expected_calls) and not self._bad_calls

    def reset(self) -> None:
        """Drop expectations, cursor and bad calls. The observer is kept."""
        self._check_not_notifying("reset()")
        logger.debug(
            "Resetting mock at %d/%d with %d bad call(s)",
            self._index, len(self._expected_calls), len(self._bad_calls),
        )
        self._expected_calls = []
        self._index = 0
        self._bad_calls = []

    def _check_not_notifying(self, action: str) -> None:
        if self._notifying:
            msg = f"cannot {action} from inside on_bad_call"
            raise RuntimeError(msg)

    # -- Verification --------------------------------------------------------

    def verify_call(
        self,
        name: str,
        result_count: int,
        *args: object,
    ) -> tuple[Call | None, VerificationError | None]:
        """Check a call to ``name`` with ``args`` against the next expectation.

        Args:
            name: Name of the operation being invoked.
            result_count: Number of values the caller will unpack from
                the canned result.
            *args: The arguments the operation received.

        Returns:
            ``(call, None)`` on a match, with the cursor advanced.
            ``(None, error)`` on a mismatch, with a bad call recorded.
        """
        return self._verify(name, result_count, args, check_args=True)

    def verify_call_no_args(
        self,
        name: str,
        result_count: int,
    ) -> tuple[Call | None, VerificationError | None]:
        """Like :meth:`verify_call`, but the arguments are never inspected."""
        return self._verify(name, result_count, (), check_args=False)

    def _verify(
        self,
        name: str,
        result_count: int,
        args: tuple[object, ...],
        *,
        check_args: bool,
    ) -> tuple[Call | None, VerificationError | None]:
        self._check_not_notifying(f"verify {name!r}")
        if isinstance(result_count, bool) or not isinstance(result_count, int) or result_count < 0:
            msg = f"result_count must be a non-negative int, got {result_count!r}"
            raise TypeError(msg)

        def fail(kind: MismatchKind, message: str) -> tuple[None, VerificationError]:
            return None, self._record_bad_call(name, args, kind, message)

        if self._index >= len(self._expected_calls):
            return fail(MismatchKind.UNEXPECTED_CALL, "unexpected call")

        call = self._expected_calls[self._index]
        if call is None:
            msg = f"expected call {self._index} is None; check invariant() before use"
            raise TypeError(msg)

        if call.name != name:
            return fail(
                MismatchKind.NAME_MISMATCH,
                f"wrong name. expected: '{call.name}'. got: '{name}'",
            )

        if check_args:
            if len(call.args) != len(args):
                return fail(
                    MismatchKind.ARGUMENT_COUNT_MISMATCH,
                    f"incorrect argument count. expected: {len(call.args)}. got {len(args)}",
                )
            for i, (expected, actual) in enumerate(zip(call.args, args)):
                if not deep_equal(expected, actual):
                    return fail(
                        MismatchKind.ARGUMENT_VALUE_MISMATCH,
                        f"argument {i} mismatch. "
                        f"expected: '{format_value(expected)}'. got '{format_value(actual)}'",
                    )

        if len(call.result) != result_count:
            return fail(
                MismatchKind.RESULT_ARITY_MISMATCH,
                f"incorrect result count. expected: {len(call.result)}. got {result_count}",
            )

        logger.debug("Matched call %d/%d: %s", self._index + 1, len(self._expected_calls), name)
        self._index += 1
        return call, None

    def _record_bad_call(
        self,
        name: str,
        args: tuple[object, ...],
        kind: MismatchKind,
        message: str,
    ) -> VerificationError:
        bad_call = BadCall(
            name=name,
            args=args,
            index=self._index,
            message=message,
            kind=kind,
        )
        self._bad_calls.append(bad_call)
        logger.warning("Bad call to %s at index %d: %s", name, self._index, message)
        if self.on_bad_call is not None:
            self._notifying = True
            try:
                self.on_bad_call(bad_call)
            finally:
                self._notifying = False
        return VerificationError(bad_call)

    # -- Reporting -----------------------------------------------------------

    def summary(self) -> str:
        """Generate a human-readable summary of the mock's state.

        Returns a multi-line string suitable for logging or an assertion
        message.
        """
        total = len(self._expected_calls)
        lines: list[str] = []
        lines.append(f"Canned response mock: {self._index}/{total} expected call(s) made")
        lines.append(f"  Bad calls: {len(self._bad_calls)}")

        for bad in self._bad_calls:
            args = ", ".join(format_value(a) for a in bad.args)
            lines.append(f"  [BAD] #{bad.index} {bad.name}({args}): {bad.message}")

        pending = self.remaining
        if pending:
            lines.append(f"  Not called ({len(pending)}):")
            for offset, call in enumerate(pending):
                text = call.describe() if call is not None else "<None>"
                lines.append(f"    #{self._index + offset} {text}")

        lines.append("")
        lines.append(f"  Result: {'VALID' if self.is_valid() else 'INVALID'}")
        return "\n".join(lines)

    def assert_valid(self) -> None:
        """Raise ``AssertionError`` with :meth:`summary` unless :meth:`is_valid`."""
        if not self.is_valid():
            raise AssertionError(self.summary())

    def to_dict(self) -> dict[str, object]:
        """Serialize the mock's state to a plain dict for diagnostics."""
        return {
            "index": self._index,
            "expected_calls": [c.to_dict() if c is not None else None for c in self._expected_calls],
            "bad_calls": [b.to_dict() for b in self._bad_calls],
            "valid": self.is_valid(),
        }

    def to_json(self, indent: int | None = 2) -> str:
        """Serialize the mock's state to a JSON string."""
        return json.dumps(self.to_dict(), indent=indent)
