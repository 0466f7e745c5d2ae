#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/blackprint/expression/values.py
"""Runtime value helpers for the expression language.

Expression values form a closed set: ``None``, ``bool``, numbers, ``str``,
ordered sequences and string-keyed mappings. Context data comes straight
from Python callers, so every check here is a runtime type test; ``bool`` is
deliberately never treated as a number even though it subclasses ``int``.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import Any, Union

from blackprint.constants import DISPLAY_FALSE, DISPLAY_INFINITY, DISPLAY_NAN, DISPLAY_TRUE

Value = Union[None, bool, int, float, str, Sequence[Any], Mapping[str, Any]]

# Integral floats at or above this magnitude keep exponent notation
_MAX_PLAIN_INTEGRAL = 1e21


def is_number(value: Any) -> bool:
    """Return True for ints and floats, excluding booleans."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_sequence(value: Any) -> bool:
    """Return True for ordered sequences other than strings and bytes."""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def is_mapping(value: Any) -> bool:
    """Return True for mapping values."""
    return isinstance(value, Mapping)


def type_name(value: Any) -> str:
    """Return the expression-language name of a value's type.

    Parameters
    ----------
    value : Any
        Value to describe

    Returns
    -------
    str
        One of ``null``, ``boolean``, ``number``, ``string``, ``array``,
        ``object`` or the Python type name for foreign values

    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if is_number(value):
        return "number"
    if isinstance(value, str):
        return "string"
    if is_sequence(value):
        return "array"
    if is_mapping(value):
        return "object"
    return type(value).__name__


def is_truthy(value: Any) -> bool:
    """Evaluate truthiness the way the expression operators see it.

    ``None``, ``False``, zero, NaN and the empty string are falsy. Every
    sequence and mapping is truthy, including empty ones.

    Examples
    --------
        >>> is_truthy([])
        True
        >>> is_truthy(0)
        False

    """
    if value is None or value is False:
        return False
    if value is True:
        return True
    if is_number(value):
        return value != 0 and not math.isnan(value)
    if isinstance(value, str):
        return value != ""
    return True


def values_equal(left: Any, right: Any) -> bool:
    """Compare two values with type-strict value equality.

    Numbers compare numerically regardless of int/float, booleans only equal
    booleans, and sequences and mappings are compared element by element
    with the same rules.

    Parameters
    ----------
    left : Any
        Left operand
    right : Any
        Right operand

    Returns
    -------
    bool
        True if the values are equal

    """
    if left is None or right is None:
        return left is None and right is None
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if is_number(left) or is_number(right):
        return is_number(left) and is_number(right) and left == right
    if isinstance(left, str) or isinstance(right, str):
        return isinstance(left, str) and isinstance(right, str) and left == right
    if is_sequence(left) and is_sequence(right):
        return len(left) == len(right) and all(values_equal(a, b) for a, b in zip(left, right))
    if is_mapping(left) and is_mapping(right):
        return left.keys() == right.keys() and all(values_equal(left[k], right[k]) for k in left)
    return left is right


def format_number(value: int | float) -> str:
    """Format a number in its display form.

    Integral values print without a fractional part, so ``3.0`` becomes
    ``"3"``; NaN and infinities use their JavaScript spellings.

    Examples
    --------
        >>> format_number(3.0)
        '3'
        >>> format_number(2.5)
        '2.5'
        >>> format_number(float("inf"))
        'Infinity'

    """
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return DISPLAY_NAN
    if math.isinf(value):
        return DISPLAY_INFINITY if value > 0 else f"-{DISPLAY_INFINITY}"
    if value.is_integer() and abs(value) < _MAX_PLAIN_INTEGRAL:
        return str(int(value))
    return repr(value)


def to_display_string(value: Any) -> str:
    """Convert a primitive value to the string used for output.

    Parameters
    ----------
    value : Any
        ``None``, a boolean, a number or a string

    Returns
    -------
    str
        Display form; ``None`` becomes the empty string

    Raises
    ------
    TypeError
        If the value is a sequence, mapping or foreign object

    """
    if value is None:
        return ""
    if value is True:
        return DISPLAY_TRUE
    if value is False:
        return DISPLAY_FALSE
    if is_number(value):
        return format_number(value)
    if isinstance(value, str):
        return value
    raise TypeError(f"Cannot display a value of type {type_name(value)}")


def as_integral_index(value: Any) -> int | None:
    """Return ``value`` as an int if it is an integral number, else None."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None
