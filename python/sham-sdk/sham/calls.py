"""Expected calls and bad-call records.

A :class:`Call` is one pre-registered step of the conversation a test
expects to have with a double: the name of the operation, the arguments
it should receive and the canned values it hands back. Calls are built
with :func:`new_call` and :meth:`Call.returning`::

    expected = [
        new_call("Bar"),
        new_call("Baz", "two").returning(2, None),
    ]

A :class:`BadCall` records an invocation that did not match.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Self

from sham.equality import format_value
from sham.errors import MismatchKind

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Call
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Call:
    """An expected function call with its canned response.

    Attributes:
        name: Name of the operation expected next.
        args: Expected argument values, compared structurally.
        result: Canned return values; ``len(result)`` is the result arity.
    """
    name: str
    args: tuple[object, ...] = ()
    result: tuple[object, ...] = ()

    def returning(self, *values: object) -> Self:
        """Return a copy of this call with ``values`` as its canned result."""
        return dataclasses.replace(self, result=tuple(values))

    @property
    def result_count(self) -> int:
        return len(self.result)

    def describe(self) -> str:
        """Render as ``Name(arg, ...) -> (value, ...)``."""
        args = ", ".join(format_value(a) for a in self.args)
        text = f"{self.name}({args})"
        if self.result:
            values = ", ".join(format_value(v) for v in self.result)
            text += f" -> ({values})"
        return text

    def to_dict(self) -> dict[str, object]:
        """Serialize to a plain dict for diagnostics (values rendered with repr)."""
        return {
            "name": self.name,
            "args": [repr(a) for a in self.args],
            "result": [repr(v) for v in self.result],
        }


def new_call(name: str, *args: object) -> Call:
    """Create an expected call to ``name`` with ``args`` and no result."""
    return Call(name=name, args=tuple(args))


# ---------------------------------------------------------------------------
# BadCall
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BadCall:
    """A call that failed verification.

    Attributes:
        name: Name of the operation that was actually invoked.
        args: Arguments actually supplied.
        index: Cursor position when the call arrived. Equals the number of
            expected calls when the call came after all of them were used up.
        message: Human-readable description of the mismatch.
        kind: Which check failed.
    """
    name: str
    args: tuple[object, ...]
    index: int
    message: str
    kind: MismatchKind = field(default=MismatchKind.UNEXPECTED_CALL)

    def to_dict(self) -> dict[str, object]:
        """Serialize to a plain dict for diagnostics."""
        return {
            "name": self.name,
            "args": [repr(a) for a in self.args],
            "index": self.index,
            "message": self.message,
            "kind": self.kind.value,
        }
