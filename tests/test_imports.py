"""Import smoke tests for the tolerance_kit package."""

from __future__ import annotations

import importlib


def test_import_tolerance_kit() -> None:
    module = importlib.import_module("tolerance_kit")
    assert hasattr(module, "__version__")
    assert hasattr(module, "DOUBLE")


def test_import_tolerance_kit_comparisons() -> None:
    module = importlib.import_module("tolerance_kit.comparisons")
    assert hasattr(module, "FloatingEquality")
    assert hasattr(module, "IntegerEquality")


def test_import_tolerance_kit_logging() -> None:
    module = importlib.import_module("tolerance_kit.logging")
    assert hasattr(module, "configure_logging")


def test_import_tolerance_kit_timing() -> None:
    module = importlib.import_module("tolerance_kit.timing")
    assert hasattr(module, "TimingService")
