"""Shared tolerance validation for all numeric kinds."""

from __future__ import annotations

import math
from numbers import Integral, Real

from tolerance_kit.comparisons.errors import InvalidArgumentError

MAX_SYMMETRIC_RELATIVE_ERROR = 1.0


def _require_real(value: object, field_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise TypeError(f"{field_name} must be a real number; got {type(value).__name__}")
    return float(value)


def require_integer(value: object, field_name: str) -> int:
    """Return ``value`` as an int, rejecting bools and non-integral types."""
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise TypeError(f"{field_name} must be an integer; got {type(value).__name__}")
    return int(value)


def validate_symmetric_relative_error(relative_error: object) -> float:
    """Validate a relative error scaled by the larger operand magnitude.

    Accepts values in ``[0, 1]``.
    """
    value = _require_real(relative_error, "relative_error")
    if math.isnan(value) or value < 0 or value > MAX_SYMMETRIC_RELATIVE_ERROR:
        raise InvalidArgumentError(
            f"Relative error must be in [0, {MAX_SYMMETRIC_RELATIVE_ERROR}] but was: {value}"
        )
    return value


def validate_asymmetric_relative_error(relative_error: object) -> float:
    """Validate a relative error scaled by the reference operand only.

    Any finite non-negative value is accepted.
    """
    value = _require_real(relative_error, "relative_error")
    if math.isnan(value) or value < 0 or math.isinf(value):
        raise InvalidArgumentError(f"Relative error must be positive finite but was: {value}")
    return value


def validate_ulp_error(ulp_error: object, maximum: int) -> int:
    """Validate a ULP count against ``[0, maximum]``."""
    value = require_integer(ulp_error, "ulp_error")
    if value < 0:
        raise InvalidArgumentError(f"ULP error must be positive but was: {value}")
    if value > maximum:
        raise InvalidArgumentError(f"ULP error must not exceed {maximum} but was: {value}")
    return value


def validate_float_absolute_error(absolute_error: float) -> None:
    """Validate an absolute error already rounded to its floating kind."""
    if math.isnan(absolute_error) or absolute_error < 0 or math.isinf(absolute_error):
        raise InvalidArgumentError(
            f"Absolute error must be positive finite but was: {absolute_error}"
        )


def validate_integer_absolute_error(absolute_error: object, maximum_difference: int) -> int:
    """Validate an integer absolute error against ``[0, maximum_difference)``."""
    value = require_integer(absolute_error, "absolute_error")
    if value < 0:
        raise InvalidArgumentError(f"Absolute error must be positive: {value}")
    if value >= maximum_difference:
        raise InvalidArgumentError(
            "Absolute error must be less than the maximum difference: "
            f"{value} >= {maximum_difference}"
        )
    return value
