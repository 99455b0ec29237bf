"""Slider control whose handle travels along an arbitrary sampled curve."""
from __future__ import annotations

from curve_slider.errors import (
    CurveSliderError,
    IndexOutOfRangeError,
    InvalidCurveError,
    NotConfiguredError,
)
from curve_slider.model.sample_set import CurveSampleSet, Point
from curve_slider.model.tracker import PositionTracker

__all__ = [
    "CurveSampleSet",
    "CurveSliderError",
    "IndexOutOfRangeError",
    "InvalidCurveError",
    "NotConfiguredError",
    "Point",
    "PositionTracker",
]
