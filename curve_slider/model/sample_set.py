"""Discretized curve positions and their normalized slider values."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from math import isfinite
from typing import Iterable, Tuple

from curve_slider.errors import IndexOutOfRangeError, InvalidCurveError

Point = Tuple[float, float]

logger = logging.getLogger(__name__)


def build_values(count: int) -> tuple[float, ...]:
    """Return the slider value table for ``count`` samples.

    The first and last entries are exactly ``0.0`` and ``1.0``. Interior
    entries accumulate ``1.0 / count`` one step at a time, so the last
    interior value stops short of ``1.0`` by roughly one step.
    """

    if count < 2:
        raise InvalidCurveError(f"A curve needs at least 2 samples, got {count}.")

    step = 1.0 / count
    counter = 0.0
    values = [0.0]
    for _ in range(1, count - 1):
        counter += step
        values.append(counter)
    values.append(1.0)
    return tuple(values)


def _coerce_point(index: int, raw) -> Point:
    try:
        x, y = raw
        point = (float(x), float(y))
    except (TypeError, ValueError) as exc:
        raise InvalidCurveError(f"Sample {index} is not an (x, y) pair: {raw!r}") from exc
    if not (isfinite(point[0]) and isfinite(point[1])):
        raise InvalidCurveError(f"Sample {index} has non-finite coordinates: {point!r}")
    return point


@dataclass(frozen=True)
class CurveSampleSet:
    """Immutable, co-indexed sample points and slider values.

    Index 0 is the curve start and index ``len(self) - 1`` the curve end.
    A new curve always produces a new instance; nothing here is resized.
    """

    points: tuple[Point, ...]
    values: tuple[float, ...]

    def __post_init__(self) -> None:
        if len(self.points) < 2:
            raise InvalidCurveError(
                f"A curve needs at least 2 samples, got {len(self.points)}."
            )
        if len(self.values) != len(self.points):
            raise InvalidCurveError(
                f"Value table has {len(self.values)} entries for {len(self.points)} samples."
            )

    @classmethod
    def from_points(cls, points: Iterable[Point]) -> "CurveSampleSet":
        coerced = tuple(_coerce_point(index, raw) for index, raw in enumerate(points))
        sample_set = cls(points=coerced, values=build_values(len(coerced)))
        logger.debug("Built curve sample set with %d samples", len(coerced))
        return sample_set

    def __len__(self) -> int:
        return len(self.points)

    @property
    def count(self) -> int:
        return len(self.points)

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= len(self.points):
            raise IndexOutOfRangeError(index, len(self.points))

    def point_at(self, index: int) -> Point:
        self._check_index(index)
        return self.points[index]

    def value_at(self, index: int) -> float:
        self._check_index(index)
        return self.values[index]

    def wrap_index(self, base: int, offset: int) -> int:
        """Return ``base + offset`` wrapped into ``[0, len(self) - 1]``.

        Walking past either end continues from the opposite end, so the
        neighbours of the first sample include the last one.
        """

        return (base + offset) % len(self.points)
