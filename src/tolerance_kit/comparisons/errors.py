"""Error types raised by the tolerance predicates."""

from __future__ import annotations


class InvalidArgumentError(ValueError):
    """Raised when a tolerance or operand lies outside its declared domain."""
