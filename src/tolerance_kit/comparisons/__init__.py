"""Tolerance predicates for float, double, long, int, short and byte values."""

from tolerance_kit.comparisons.errors import InvalidArgumentError
from tolerance_kit.comparisons.floating import DOUBLE, FLOAT, FloatingEquality
from tolerance_kit.comparisons.integral import BYTE, INT, LONG, SHORT, IntegerEquality

NumericKind = FloatingEquality | IntegerEquality

__all__ = [
    "BYTE",
    "DOUBLE",
    "FLOAT",
    "INT",
    "LONG",
    "SHORT",
    "FloatingEquality",
    "IntegerEquality",
    "InvalidArgumentError",
    "NumericKind",
]
