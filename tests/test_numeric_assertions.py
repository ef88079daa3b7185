from __future__ import annotations

import math

import pytest

from tolerance_kit.assertions import (
    assert_close,
    assert_equal,
    assert_is_close_to,
    assert_numeric_outputs_close,
    assert_within,
    assert_within_ulp,
)
from tolerance_kit.comparisons import DOUBLE, FLOAT, INT, InvalidArgumentError


def test_assert_numeric_outputs_close_accepts_close_numeric_values() -> None:
    assert_numeric_outputs_close(
        {"a": 1.0, "b": [2.0, {"c": 3.0000001}]},
        {"a": 1.0, "b": [2.0, {"c": 3.0}]},
        absolute_error=1e-6,
        relative_error=1e-6,
    )


def test_assert_numeric_outputs_close_raises_for_numeric_mismatch() -> None:
    with pytest.raises(AssertionError, match="value.notional not within tolerance"):
        assert_numeric_outputs_close(
            {"notional": 125.0},
            {"notional": 126.0},
            absolute_error=1e-9,
            relative_error=1e-9,
        )


def test_assert_numeric_outputs_close_raises_for_key_mismatch() -> None:
    with pytest.raises(AssertionError, match="key mismatch"):
        assert_numeric_outputs_close(
            {"notional": 125.0},
            {"notional": 125.0, "cash": 50.0},
            absolute_error=1e-9,
            relative_error=1e-9,
        )


def test_assert_numeric_outputs_close_reports_sequence_problems() -> None:
    with pytest.raises(AssertionError, match=r"value\.b length mismatch: 1 != 2"):
        assert_numeric_outputs_close({"b": [1.0]}, {"b": [1.0, 2.0]})
    with pytest.raises(AssertionError, match="expected sequence but got str"):
        assert_numeric_outputs_close("12", [1, 2])


def test_assert_numeric_outputs_close_compares_non_numeric_leaves() -> None:
    assert_numeric_outputs_close({"label": "a", "count": 3}, {"label": "a", "count": 3})
    with pytest.raises(AssertionError, match=r"value\.label mismatch"):
        assert_numeric_outputs_close({"label": "a"}, {"label": "b"})


def test_assert_numeric_outputs_close_uses_integer_kind() -> None:
    assert_numeric_outputs_close([100, 200], [101, 200], kind=INT, relative_error=0.0, absolute_error=1)
    with pytest.raises(AssertionError, match=r"value\[0\] not within tolerance"):
        assert_numeric_outputs_close([100], [102], kind=INT, relative_error=0.0, absolute_error=1)


def test_assert_equal_treats_nan_as_equal() -> None:
    assert_equal(DOUBLE, math.nan, math.nan)
    with pytest.raises(AssertionError, match="v1 == v2"):
        assert_equal(DOUBLE, -0.0, 0.0)


def test_assert_within_ulp_message_includes_description() -> None:
    assert_within_ulp(FLOAT, FLOAT.next_up(1.0), 1.0, 1)
    with pytest.raises(AssertionError, match="ulp <= 1"):
        assert_within_ulp(FLOAT, FLOAT.next_up(FLOAT.next_up(1.0)), 1.0, 1, path="x")


def test_assert_within_and_assert_close_messages() -> None:
    assert_within(DOUBLE, 1.5, 1.0, 0.5)
    with pytest.raises(AssertionError, match=r"\|v1-v2\| <= 0\.25"):
        assert_within(DOUBLE, 1.5, 1.0, 0.25)

    assert_close(DOUBLE, 1.0, 2.0, relative_error=0.5)
    with pytest.raises(AssertionError) as excinfo:
        assert_close(DOUBLE, 1.0, 3.0, relative_error=0.5, absolute_error=1.0, path="total")
    message = str(excinfo.value)
    assert message.startswith("total not within tolerance: actual=1.0, expected=3.0")
    assert "|v1-v2|/max(|v1|,|v2|) <= 0.5 || |v1-v2| <= 1.0" in message


def test_assert_is_close_to_scales_with_expected() -> None:
    assert_is_close_to(DOUBLE, 2.0, 1.0, relative_error=0.5)
    with pytest.raises(AssertionError, match=r"\|v1-v2\|/\|v1\| <= 0\.5"):
        assert_is_close_to(DOUBLE, 1.0, 2.0, relative_error=0.5)


def test_invalid_tolerances_are_not_assertion_failures() -> None:
    with pytest.raises(InvalidArgumentError):
        assert_close(DOUBLE, 1.0, 1.0, relative_error=2.0)
