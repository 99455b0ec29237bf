"""Curve samplers that turn curve definitions into ordered point lists."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Sequence, Tuple

import numpy as np

from curve_slider.errors import InvalidCurveError

if TYPE_CHECKING:
    from PyQt5 import QtGui

Point = Tuple[float, float]
CubicSegment = Tuple[Point, Point, Point, Point]

logger = logging.getLogger(__name__)


def _require_count(count: int) -> None:
    if count < 2:
        raise InvalidCurveError(f"Sample count must be at least 2, got {count}.")


def _to_points(array: np.ndarray) -> List[Point]:
    return [(float(x), float(y)) for x, y in array]


def sample_cubic_bezier(
    start: Point,
    control1: Point,
    control2: Point,
    end: Point,
    count: int,
) -> List[Point]:
    """Sample a cubic bezier at ``count`` evenly spaced parameter values."""

    _require_count(count)
    t = np.linspace(0.0, 1.0, count)[:, None]
    mt = 1.0 - t
    p0, p1, p2, p3 = (np.asarray(p, dtype=float) for p in (start, control1, control2, end))
    curve = (
        (mt ** 3) * p0
        + 3.0 * (mt ** 2) * t * p1
        + 3.0 * mt * (t ** 2) * p2
        + (t ** 3) * p3
    )
    return _to_points(curve)


def sample_bezier_chain(
    segments: Sequence[CubicSegment], count_per_segment: int
) -> List[Point]:
    if not segments:
        raise InvalidCurveError("A bezier chain needs at least one segment.")

    points: List[Point] = []
    for segment in segments:
        sampled = sample_cubic_bezier(*segment, count=count_per_segment)
        if points and points[-1] == sampled[0]:
            sampled = sampled[1:]
        points.extend(sampled)
    return points


def resample_polyline(points: Sequence[Point], spacing: float) -> List[Point]:
    """Resample ``points`` so consecutive samples are ``spacing`` apart.

    Distances are measured along the polyline. Both endpoints are kept, so
    the final gap may be shorter than ``spacing``.
    """

    if spacing <= 0:
        raise InvalidCurveError(f"Spacing must be positive, got {spacing}.")
    if len(points) < 2:
        raise InvalidCurveError(f"A polyline needs at least 2 points, got {len(points)}.")

    coords = np.asarray(points, dtype=float)
    seg_lengths = np.hypot(*np.diff(coords, axis=0).T)
    cumulative = np.concatenate(([0.0], np.cumsum(seg_lengths)))
    total = float(cumulative[-1])
    if total <= 0:
        raise InvalidCurveError("Polyline has zero length.")

    distances = np.arange(0.0, total, spacing)
    if distances[-1] < total:
        distances = np.append(distances, total)

    xs = np.interp(distances, cumulative, coords[:, 0])
    ys = np.interp(distances, cumulative, coords[:, 1])
    resampled = _to_points(np.column_stack((xs, ys)))
    logger.debug(
        "Resampled %d-point polyline of length %.2f into %d points",
        len(points),
        total,
        len(resampled),
    )
    return resampled


def sample_painter_path(path: "QtGui.QPainterPath", count: int) -> List[Point]:
    """Sample a Qt painter path at ``count`` evenly spaced length fractions.

    PyQt5 is not imported here; ``path`` only needs the ``QPainterPath``
    methods ``isEmpty``, ``length`` and ``pointAtPercent``.
    """

    _require_count(count)
    if path.isEmpty() or path.length() <= 0:
        raise InvalidCurveError("Cannot sample an empty painter path.")

    points: List[Point] = []
    for fraction in np.linspace(0.0, 1.0, count):
        point = path.pointAtPercent(float(fraction))
        points.append((point.x(), point.y()))
    return points
