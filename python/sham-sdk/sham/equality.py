"""Structural equality and value formatting for call arguments.

Arguments are compared by content, never by identity: two distinct lists,
dicts or dataclass instances holding equal values are the same argument.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping, Set

logger = logging.getLogger(__name__)


def deep_equal(expected: object, actual: object) -> bool:
    """Return True if ``expected`` and ``actual`` are structurally equal.

    Rules, applied recursively:

    - ``bool`` only equals ``bool`` (``True`` is not ``1`` here), including
      as a mapping key or set member.
    - Exceptions are equal when they share a type and ``args``.
    - Mappings need the same keys with deep-equal values.
    - Sets need the same members.
    - Lists and tuples need the same concrete type and deep-equal items.
    - Dataclass instances need the same type and deep-equal fields.
    - Anything else falls back to ``==``.

    Self-referential containers are supported: a pair of containers already
    being compared further up the recursion is treated as equal.
    """
    return _deep_equal(expected, actual, set())


def _deep_equal(expected: object, actual: object, active: set[tuple[int, int]]) -> bool:
    if expected is actual:
        return True

    if isinstance(expected, bool) or isinstance(actual, bool):
        return type(expected) is type(actual) and expected == actual

    if isinstance(expected, BaseException) or isinstance(actual, BaseException):
        if type(expected) is not type(actual):
            return False
        return _deep_equal(expected.args, actual.args, active)  # type: ignore[union-attr]

    pair = (id(expected), id(actual))
    if pair in active:
        return True

    if isinstance(expected, Mapping) and isinstance(actual, Mapping):
        if _typed(expected.keys()) != _typed(actual.keys()):
            return False
        active.add(pair)
        try:
            return all(_deep_equal(expected[k], actual[k], active) for k in expected)
        finally:
            active.discard(pair)

    if isinstance(expected, Set) and isinstance(actual, Set):
        return _typed(expected) == _typed(actual)

    if isinstance(expected, (list, tuple)) or isinstance(actual, (list, tuple)):
        if type(expected) is not type(actual):
            return False
        if len(expected) != len(actual):  # type: ignore[arg-type]
            return False
        active.add(pair)
        try:
            return all(
                _deep_equal(e, a, active)
                for e, a in zip(expected, actual)  # type: ignore[call-overload]
            )
        finally:
            active.discard(pair)

    if _is_dataclass_instance(expected) or _is_dataclass_instance(actual):
        if type(expected) is not type(actual):
            return False
        active.add(pair)
        try:
            return all(
                _deep_equal(getattr(expected, f.name), getattr(actual, f.name), active)
                for f in dataclasses.fields(expected)  # type: ignore[arg-type]
            )
        finally:
            active.discard(pair)

    return bool(expected == actual)


def _typed(members: Set) -> set[tuple[type, object]]:
    # Pairing each member with its type keeps True and 1 apart.
    return {(type(m), m) for m in members}


def _is_dataclass_instance(value: object) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def format_value(value: object) -> str:
    """Render a value for a mismatch message.

    Strings and numbers render bare (``two``, not ``'two'``) since the
    message already quotes them. ``None`` renders as ``nil``; everything
    else uses ``repr``.
    """
    if value is None:
        return "nil"
    if isinstance(value, (str, int, float)):
        return str(value)
    return repr(value)
