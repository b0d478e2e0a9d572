"""Scalar assignment with safe conversions.

A source scalar is written into a leaf slot when its type matches the slot's
type, or when it converts without guessing: numbers between `int` and
`float`, text between `str` and `bytes`, enum members from their values,
and classes derived from a builtin scalar from a value of that builtin.
Strings are never parsed into `int`, `float` or `bool`, and `bool` never
mixes with numbers even though it subclasses `int`.
"""

import math
from decimal import Decimal, InvalidOperation
from enum import Enum
from pathlib import PurePath
from typing import Any

from .slots import Slot

_REFUSED = object()

_NAMED_BASES = (str, bytes)


def coerce(slot: Slot, value: Any) -> int:
    """Write `value` into `slot` if possible.

    Returns:
        1 if the slot was written, 0 otherwise. Nothing is raised.
    """
    tp = slot.tp
    if not isinstance(tp, type):
        return 0
    if type(value) is tp:
        slot.set(value)
        return 1
    converted = convert(value, tp)
    if converted is _REFUSED:
        return 0
    slot.set(converted)
    return 1


def convert(value: Any, tp: type) -> Any:
    """Convert `value` to `tp`, or return the refusal sentinel."""
    if tp is bool or isinstance(value, bool):
        return _REFUSED

    if issubclass(tp, Enum):
        try:
            return tp(value)
        except ValueError:
            return _REFUSED

    if issubclass(tp, (int, float, complex)) and isinstance(value, (int, float)):
        return _convert_number(value, tp)

    if tp is str and isinstance(value, (bytes, bytearray)):
        try:
            return bytes(value).decode("utf-8")
        except UnicodeDecodeError:
            return _REFUSED

    if issubclass(tp, (bytes, bytearray)) and isinstance(value, str):
        return tp(value.encode("utf-8"))

    if tp is Decimal and isinstance(value, (int, float, str)):
        try:
            # str() keeps 0.1 from turning into its binary expansion
            return Decimal(str(value))
        except InvalidOperation:
            return _REFUSED

    if issubclass(tp, PurePath) and isinstance(value, str):
        return tp(value)

    for base in _NAMED_BASES:
        if issubclass(tp, base) and isinstance(value, base):
            return tp(value)

    if isinstance(value, tp):
        return value

    return _REFUSED


def _convert_number(value: int | float, tp: type) -> Any:
    if issubclass(tp, int):
        if isinstance(value, float) and not math.isfinite(value):
            return _REFUSED
        return tp(int(value))
    try:
        return tp(value)
    except OverflowError:
        return _REFUSED
