"""Assertion helpers that turn false tolerance predicates into descriptive failures."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from numbers import Real
from typing import Any

from tolerance_kit.comparisons import DOUBLE, FloatingEquality, NumericKind


def _fail(path: str, actual: Any, expected: Any, description: str) -> None:
    raise AssertionError(
        f"{path} not within tolerance: actual={actual!r}, expected={expected!r} ({description})"
    )


def assert_equal(kind: NumericKind, actual: Any, expected: Any, *, path: str = "value") -> None:
    if not kind.are_equal(expected, actual):
        _fail(path, actual, expected, "v1 == v2")


def assert_within_ulp(
    kind: FloatingEquality,
    actual: Any,
    expected: Any,
    ulp_error: int,
    *,
    path: str = "value",
) -> None:
    if not kind.are_within_ulp(expected, actual, ulp_error):
        _fail(path, actual, expected, kind.describe_within_ulp(ulp_error))


def assert_within(
    kind: NumericKind,
    actual: Any,
    expected: Any,
    absolute_error: Any,
    *,
    path: str = "value",
) -> None:
    if not kind.are_within(expected, actual, absolute_error):
        _fail(path, actual, expected, kind.describe_within(absolute_error))


def assert_close(
    kind: NumericKind,
    actual: Any,
    expected: Any,
    *,
    relative_error: float,
    absolute_error: Any = 0,
    path: str = "value",
) -> None:
    if not kind.are_close(expected, actual, relative_error, absolute_error):
        _fail(path, actual, expected, kind.describe_close(relative_error, absolute_error))


def assert_is_close_to(
    kind: NumericKind,
    expected: Any,
    actual: Any,
    *,
    relative_error: float,
    absolute_error: Any = 0,
    path: str = "value",
) -> None:
    """Assert ``actual`` is close to ``expected`` with the relative error scaled by ``expected``."""
    if not kind.is_close_to(expected, actual, relative_error, absolute_error):
        _fail(path, actual, expected, kind.describe_is_close_to(relative_error, absolute_error))


def assert_numeric_outputs_close(
    actual: Any,
    expected: Any,
    *,
    kind: NumericKind = DOUBLE,
    relative_error: float = 1e-9,
    absolute_error: Any = 1e-9,
    path: str = "value",
) -> None:
    """Assert nested outputs match using ``kind.are_close`` for numeric leaves."""

    if isinstance(expected, Mapping):
        if not isinstance(actual, Mapping):
            raise AssertionError(f"{path} expected mapping but got {type(actual).__name__}")

        actual_keys = set(actual)
        expected_keys = set(expected)
        if actual_keys != expected_keys:
            missing = sorted(expected_keys - actual_keys, key=str)
            extra = sorted(actual_keys - expected_keys, key=str)
            raise AssertionError(f"{path} key mismatch; missing={missing}, extra={extra}")

        for key in sorted(expected, key=str):
            assert_numeric_outputs_close(
                actual[key],
                expected[key],
                kind=kind,
                relative_error=relative_error,
                absolute_error=absolute_error,
                path=f"{path}.{key}",
            )
        return

    if isinstance(expected, Sequence) and not isinstance(expected, (str, bytes, bytearray)):
        if not isinstance(actual, Sequence) or isinstance(actual, (str, bytes, bytearray)):
            raise AssertionError(f"{path} expected sequence but got {type(actual).__name__}")
        if len(actual) != len(expected):
            raise AssertionError(f"{path} length mismatch: {len(actual)} != {len(expected)}")

        for index, (actual_item, expected_item) in enumerate(zip(actual, expected, strict=True)):
            assert_numeric_outputs_close(
                actual_item,
                expected_item,
                kind=kind,
                relative_error=relative_error,
                absolute_error=absolute_error,
                path=f"{path}[{index}]",
            )
        return

    if _is_number(expected) and _is_number(actual):
        assert_close(
            kind,
            actual,
            expected,
            relative_error=relative_error,
            absolute_error=absolute_error,
            path=path,
        )
        return

    if actual != expected:
        raise AssertionError(f"{path} mismatch: actual={actual!r}, expected={expected!r}")


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)
