"""Value model helpers for parsed JSON documents.

Parsed documents are plain Python values (``None``, ``bool``, ``int``,
``float``, ``str``, ``list``, ``dict``). These helpers classify them and
compare them structurally.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ValueKind(Enum):
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


class _Missing:
    """Marker for a value that is absent on one side of a comparison."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


def kind_of(value: Any) -> ValueKind:
    """Classify a JSON value. ``bool`` is checked before ``int``."""
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, list):
        return ValueKind.ARRAY
    if isinstance(value, dict):
        return ValueKind.OBJECT
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


def values_equal(left: Any, right: Any) -> bool:
    """
    Deep structural equality.

    Objects compare by key set and values (key order is ignored), arrays
    element by element. Booleans never equal numbers; ``1`` equals ``1.0``.
    """
    left_kind = kind_of(left)
    if left_kind is not kind_of(right):
        return False

    if left_kind is ValueKind.OBJECT:
        if left.keys() != right.keys():
            return False
        return all(values_equal(left[key], right[key]) for key in left)

    if left_kind is ValueKind.ARRAY:
        if len(left) != len(right):
            return False
        return all(values_equal(a, b) for a, b in zip(left, right))

    return left == right
