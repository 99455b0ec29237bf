"""Error types raised by the curve slider model."""

from __future__ import annotations


class CurveSliderError(Exception):
    """Base class for curve slider errors."""


class InvalidCurveError(CurveSliderError, ValueError):
    """Raised when a curve cannot be sampled into at least two points."""


class IndexOutOfRangeError(CurveSliderError, IndexError):
    """Raised when a sample index falls outside the active sample set."""

    def __init__(self, index: int, count: int) -> None:
        super().__init__(f"Sample index {index} is out of range for {count} samples.")
        self.index = index
        self.count = count


class NotConfiguredError(CurveSliderError, RuntimeError):
    """Raised when the tracker is used before a curve has been installed."""
