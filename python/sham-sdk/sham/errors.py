"""Error types returned by the canned-response mock.

Verification mismatches are *values*, not control flow: the mock hands a
:class:`VerificationError` back to the double that made the call, and the
double returns it to the code under test exactly as the real dependency
would return its own errors. Nothing in this module is raised by the mock
during verification.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sham.calls import BadCall

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# MismatchKind
# ---------------------------------------------------------------------------

class MismatchKind(Enum):
    """Categories of verification failure, in the order they are checked."""
    UNEXPECTED_CALL = "unexpected_call"
    NAME_MISMATCH = "name_mismatch"
    ARGUMENT_COUNT_MISMATCH = "argument_count_mismatch"
    ARGUMENT_VALUE_MISMATCH = "argument_value_mismatch"
    RESULT_ARITY_MISMATCH = "result_arity_mismatch"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class ShamError(Exception):
    """Base class for all sham errors."""


class InvariantError(ShamError):
    """The expected call list is not usable (empty, or holds a ``None`` slot)."""


class VerificationError(ShamError):
    """A call did not match the expectation active at the time.

    Attributes:
        kind: Which check failed.
        bad_call: The :class:`~sham.calls.BadCall` recorded for the failure.
    """

    def __init__(self, bad_call: BadCall) -> None:
        super().__init__(bad_call.message)
        self.bad_call = bad_call

    @property
    def kind(self) -> MismatchKind:
        return self.bad_call.kind

    @property
    def message(self) -> str:
        return self.bad_call.message


# ---------------------------------------------------------------------------
# to_error
# ---------------------------------------------------------------------------

def to_error(value: object) -> BaseException | None:
    """Reconstitute a canned error slot as an exception (or ``None``).

    Canned results are stored as plain values, so a double that returns an
    error has to turn the stored slot back into one::

        call, err = self.verify_call("Baz", 2, s)
        if err is not None:
            return -1, err
        return call.result[0], to_error(call.result[1])

    Raises:
        TypeError: If ``value`` is neither ``None`` nor an exception instance.
    """
    if value is None:
        return None
    if isinstance(value, BaseException):
        return value
    msg = f"canned error slot must hold an exception or None, got {type(value).__name__}: {value!r}"
    raise TypeError(msg)
