"""Human-readable descriptions of configured tolerance predicates.

The strings are used in assertion failure messages, e.g.
``"|v1-v2|/max(|v1|,|v2|) <= 0.5 || |v1-v2| <= 2"``. Callers are expected to pass
tolerances that have already been validated (non-negative).
"""

from __future__ import annotations

from collections.abc import Callable

_OR = " || "
_REL_ERROR_LTE = "|v1-v2|/max(|v1|,|v2|) <= "
_ASYM_REL_ERROR_LTE = "|v1-v2|/|v1| <= "
_ABS_ERROR_LTE = "|v1-v2| <= "
_ABS_ERROR_0 = "|v1-v2| == 0"
_ULP_ERROR_LTE = "ulp <= "
_ULP_ERROR_0 = "ulp == 0"

Formatter = Callable[[float | int], str]


def describe_within_ulp(ulp_error: int) -> str:
    return _ULP_ERROR_0 if ulp_error == 0 else f"{_ULP_ERROR_LTE}{ulp_error}"


def describe_within(absolute_error: float | int, formatter: Formatter = str) -> str:
    if absolute_error == 0:
        return _ABS_ERROR_0
    return f"{_ABS_ERROR_LTE}{formatter(absolute_error)}"


def describe_close(
    relative_error: float, absolute_error: float | int, formatter: Formatter = str
) -> str:
    """Describe the symmetric close test scaled by the larger magnitude."""
    return _describe_relative(_REL_ERROR_LTE, relative_error, absolute_error, formatter)


def describe_is_close_to(
    relative_error: float, absolute_error: float | int, formatter: Formatter = str
) -> str:
    """Describe the asymmetric close test scaled by the first (expected) value."""
    return _describe_relative(_ASYM_REL_ERROR_LTE, relative_error, absolute_error, formatter)


def _describe_relative(
    prefix: str,
    relative_error: float,
    absolute_error: float | int,
    formatter: Formatter,
) -> str:
    clauses: list[str] = []
    # A relative error of 0 is equivalent to an absolute error of 0.
    if relative_error > 0:
        clauses.append(f"{prefix}{relative_error}")
        # An absolute error of 0 adds nothing once the relative clause is active.
        if absolute_error > 0:
            clauses.append(describe_within(absolute_error, formatter))
    else:
        clauses.append(describe_within(absolute_error, formatter))
    return _OR.join(clauses)
