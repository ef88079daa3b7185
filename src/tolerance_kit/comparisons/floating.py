"""Tolerance predicates for IEEE-754 binary floating-point kinds.

Operands are rounded to the kind before comparison, and differences are taken in
the kind's native precision, so ``FLOAT`` behaves like single-precision arithmetic
even though Python floats are doubles. Relative bounds are always evaluated in
double precision.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Any

import numpy as np

from tolerance_kit.comparisons import descriptions
from tolerance_kit.comparisons.errors import InvalidArgumentError
from tolerance_kit.comparisons.validation import (
    validate_asymmetric_relative_error,
    validate_float_absolute_error,
    validate_symmetric_relative_error,
    validate_ulp_error,
)


@dataclass(frozen=True)
class FloatingEquality:
    """Equality predicates for one floating-point kind."""

    name: str
    dtype: type[np.floating[Any]]
    bits_dtype: type[np.signedinteger[Any]]
    max_ulp_error: int

    @property
    def bits(self) -> int:
        return np.dtype(self.dtype).itemsize * 8

    @property
    def max_value(self) -> float:
        return float(np.finfo(self.dtype).max)

    @property
    def min_value(self) -> float:
        """Smallest positive subnormal value."""
        return float(np.finfo(self.dtype).smallest_subnormal)

    def coerce(self, value: Any) -> np.floating[Any]:
        """Round ``value`` to this kind."""
        if isinstance(value, self.dtype):
            return value
        if isinstance(value, bool) or not isinstance(value, Real):
            raise TypeError(f"{self.name} operand must be a real number; got {type(value).__name__}")
        try:
            with np.errstate(over="ignore"):
                return self.dtype(value)
        except OverflowError:
            # Integers beyond the float range round to a signed infinity.
            return self.dtype(math.inf if value > 0 else -math.inf)

    def format_value(self, value: Any) -> str:
        """Shortest string that round-trips ``value`` in this kind."""
        if isinstance(value, bool) or not isinstance(value, Real):
            return str(value)
        return str(self.coerce(value))

    # Bit-level helpers

    def raw_bits(self, value: Any) -> int:
        """Signed integer view of the value's IEEE-754 bit pattern."""
        return int(np.array(self.coerce(value)).view(self.bits_dtype))

    def _ordered_bits(self, value: Any) -> int:
        # Remap sign-magnitude bits onto a monotonic integer line where adjacent
        # representable values differ by one and both zeros map to 0.
        bits = self.raw_bits(value)
        if bits >= 0:
            return bits
        return -(bits & ((1 << (self.bits - 1)) - 1))

    def ulp_distance(self, value1: Any, value2: Any) -> int:
        """Number of representable steps between two non-NaN values."""
        if math.isnan(self.coerce(value1)) or math.isnan(self.coerce(value2)):
            raise InvalidArgumentError("ULP distance is undefined for NaN")
        return abs(self._ordered_bits(value1) - self._ordered_bits(value2))

    def next_up(self, value: Any) -> float:
        return float(np.nextafter(self.coerce(value), self.dtype(np.inf)))

    def next_down(self, value: Any) -> float:
        return float(np.nextafter(self.coerce(value), self.dtype(-np.inf)))

    # Predicates

    def are_equal(self, value1: Any, value2: Any) -> bool:
        """Equality under the total ordering: NaN equals NaN and -0.0 differs from 0.0."""
        first = self.coerce(value1)
        second = self.coerce(value2)
        if math.isnan(first) or math.isnan(second):
            return bool(math.isnan(first) and math.isnan(second))
        return self.raw_bits(first) == self.raw_bits(second)

    def are_within_ulp(self, value1: Any, value2: Any, ulp_error: int) -> bool:
        """Test that the values are within ``ulp_error`` representable steps.

        NaN is never within any ULP error, including of itself. The count is capped
        at ``max_ulp_error``, so opposite infinities are never within range.
        """
        ulps = validate_ulp_error(ulp_error, self.max_ulp_error)
        first = self.coerce(value1)
        second = self.coerce(value2)
        if math.isnan(first) or math.isnan(second):
            return False
        return abs(self._ordered_bits(first) - self._ordered_bits(second)) <= ulps

    def are_within(self, value1: Any, value2: Any, absolute_error: Any) -> bool:
        """Test ``|v1-v2| <= absolute_error``."""
        error = self._absolute_error(absolute_error)
        # NaN and infinite operands yield a NaN or infinite delta which fails the test.
        return self._delta(self.coerce(value1), self.coerce(value2)) <= error

    def are_close(
        self, value1: Any, value2: Any, relative_error: float, absolute_error: Any
    ) -> bool:
        """Test ``|v1-v2| <= max(relative_error * max(|v1|, |v2|), absolute_error)``."""
        relative = validate_symmetric_relative_error(relative_error)
        error = self._absolute_error(absolute_error)
        first = self.coerce(value1)
        second = self.coerce(value2)
        if not (math.isfinite(first) and math.isfinite(second)):
            return False
        delta = self._delta(first, second)
        if delta <= error:
            return True
        return delta <= max(abs(float(first)), abs(float(second))) * relative

    def is_close_to(
        self, expected: Any, actual: Any, relative_error: float, absolute_error: Any
    ) -> bool:
        """Test ``|v1-v2| <= max(relative_error * |v1|, absolute_error)``.

        The relative bound scales with ``expected`` only, so the test is not
        symmetric.
        """
        relative = validate_asymmetric_relative_error(relative_error)
        error = self._absolute_error(absolute_error)
        first = self.coerce(expected)
        second = self.coerce(actual)
        if not (math.isfinite(first) and math.isfinite(second)):
            return False
        delta = self._delta(first, second)
        if delta <= error:
            return True
        return delta <= abs(float(first)) * relative

    # Descriptions

    def describe_within_ulp(self, ulp_error: int) -> str:
        return descriptions.describe_within_ulp(ulp_error)

    def describe_within(self, absolute_error: Any) -> str:
        return descriptions.describe_within(absolute_error, self.format_value)

    def describe_close(self, relative_error: float, absolute_error: Any) -> str:
        return descriptions.describe_close(relative_error, absolute_error, self.format_value)

    def describe_is_close_to(self, relative_error: float, absolute_error: Any) -> str:
        return descriptions.describe_is_close_to(
            relative_error, absolute_error, self.format_value
        )

    def _absolute_error(self, absolute_error: Any) -> float:
        if isinstance(absolute_error, bool) or not isinstance(absolute_error, Real):
            raise TypeError(
                f"absolute_error must be a real number; got {type(absolute_error).__name__}"
            )
        error = float(self.coerce(absolute_error))
        validate_float_absolute_error(error)
        return error

    @staticmethod
    def _delta(first: np.floating[Any], second: np.floating[Any]) -> float:
        with np.errstate(over="ignore", invalid="ignore"):
            return float(abs(first - second))


FLOAT = FloatingEquality("float32", np.float32, np.int32, 2**15 - 1)
DOUBLE = FloatingEquality("float64", np.float64, np.int64, 2**31 - 1)
