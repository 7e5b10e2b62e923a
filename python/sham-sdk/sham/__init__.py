"""Sham -- ordered canned-response mocks for Python tests.

Register the calls a dependency should receive, in order, with canned
results; route a hand-written double through :class:`CannedResponseMock`;
check :meth:`CannedResponseMock.is_valid` at the end of the test.
"""

__version__ = "0.1.0"

# Re-export key types for convenience.
from sham.calls import BadCall, Call, new_call
from sham.equality import deep_equal
from sham.errors import (
    InvariantError,
    MismatchKind,
    ShamError,
    VerificationError,
    to_error,
)
from sham.mock import BadCallHandler, CannedResponseMock

__all__ = [
    "BadCall",
    "BadCallHandler",
    "Call",
    "CannedResponseMock",
    "InvariantError",
    "MismatchKind",
    "ShamError",
    "VerificationError",
    "deep_equal",
    "new_call",
    "to_error",
]
