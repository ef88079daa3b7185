"""Numeric tolerance predicates and helpers for writing tests."""

from tolerance_kit.comparisons import (
    BYTE,
    DOUBLE,
    FLOAT,
    INT,
    LONG,
    SHORT,
    InvalidArgumentError,
)

__version__ = "0.1.0"

__all__ = [
    "BYTE",
    "DOUBLE",
    "FLOAT",
    "INT",
    "LONG",
    "SHORT",
    "InvalidArgumentError",
    "__version__",
]
