"""Tolerance predicates for two's complement integer kinds.

Python integers never overflow, so differences and magnitudes are exact even for
pairs such as ``(max_value, min_value)`` or a magnitude taken at ``min_value``.
The absolute error accepted by each kind is bounded by the largest possible
difference between two of its values, exclusive.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from tolerance_kit.comparisons import descriptions
from tolerance_kit.comparisons.errors import InvalidArgumentError
from tolerance_kit.comparisons.validation import (
    require_integer,
    validate_asymmetric_relative_error,
    validate_integer_absolute_error,
    validate_symmetric_relative_error,
)


@dataclass(frozen=True)
class IntegerEquality:
    """Equality predicates for one fixed-width signed integer kind."""

    name: str
    bits: int

    @property
    def min_value(self) -> int:
        return -(1 << (self.bits - 1))

    @property
    def max_value(self) -> int:
        return (1 << (self.bits - 1)) - 1

    @property
    def max_abs_error(self) -> int:
        """Exclusive upper bound for the absolute error (``max_value - min_value``)."""
        return self.max_value - self.min_value

    def coerce(self, value: Any) -> int:
        number = require_integer(value, f"{self.name} operand")
        if not self.min_value <= number <= self.max_value:
            raise InvalidArgumentError(
                f"Value {number} is outside the {self.name} range "
                f"[{self.min_value}, {self.max_value}]"
            )
        return number

    def are_equal(self, value1: Any, value2: Any) -> bool:
        return self.coerce(value1) == self.coerce(value2)

    def are_within(self, value1: Any, value2: Any, absolute_error: Any) -> bool:
        """Test ``|v1-v2| <= absolute_error``."""
        error = validate_integer_absolute_error(absolute_error, self.max_abs_error)
        return abs(self.coerce(value1) - self.coerce(value2)) <= error

    def are_close(
        self, value1: Any, value2: Any, relative_error: float, absolute_error: Any
    ) -> bool:
        """Test ``|v1-v2| <= max(relative_error * max(|v1|, |v2|), absolute_error)``."""
        relative = validate_symmetric_relative_error(relative_error)
        error = validate_integer_absolute_error(absolute_error, self.max_abs_error)
        first = self.coerce(value1)
        second = self.coerce(value2)
        delta = abs(first - second)
        if delta <= error:
            return True
        # Relative bound in double precision.
        return delta <= max(abs(first), abs(second)) * relative

    def is_close_to(
        self, expected: Any, actual: Any, relative_error: float, absolute_error: Any
    ) -> bool:
        """Test ``|v1-v2| <= max(relative_error * |v1|, absolute_error)``.

        Not symmetric: the relative bound scales with ``expected`` only.
        """
        relative = validate_asymmetric_relative_error(relative_error)
        error = validate_integer_absolute_error(absolute_error, self.max_abs_error)
        first = self.coerce(expected)
        second = self.coerce(actual)
        delta = abs(first - second)
        if delta <= error:
            return True
        return delta <= abs(first) * relative

    def describe_within(self, absolute_error: int) -> str:
        return descriptions.describe_within(absolute_error)

    def describe_close(self, relative_error: float, absolute_error: int) -> str:
        return descriptions.describe_close(relative_error, absolute_error)

    def describe_is_close_to(self, relative_error: float, absolute_error: int) -> str:
        return descriptions.describe_is_close_to(relative_error, absolute_error)


LONG = IntegerEquality("int64", 64)
INT = IntegerEquality("int32", 32)
SHORT = IntegerEquality("int16", 16)
BYTE = IntegerEquality("int8", 8)
