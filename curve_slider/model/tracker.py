"""Handle position tracking along a sampled curve.

The tracker keeps the sample index the handle occupies and moves it in
response to drag deltas by searching the neighbouring samples for the one
closest to the accumulated drag target. All calls must come from a single
logical thread of control; the widget drives it from the Qt GUI thread.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Iterable

from curve_slider.errors import NotConfiguredError
from curve_slider.model.sample_set import CurveSampleSet, Point

PositionListener = Callable[[float], None]

logger = logging.getLogger(__name__)


class PositionTracker:
    def __init__(self, sample_set: CurveSampleSet | None = None) -> None:
        self._sample_set: CurveSampleSet | None = None
        self._current_index = 0
        self._drag_anchor: Point | None = None
        self._listeners: list[PositionListener] = []
        if sample_set is not None:
            self.configure(sample_set)

    # ------------------------------------------------------------------
    # State helpers
    # ------------------------------------------------------------------
    @property
    def sample_set(self) -> CurveSampleSet | None:
        return self._sample_set

    @property
    def is_configured(self) -> bool:
        return self._sample_set is not None

    @property
    def is_dragging(self) -> bool:
        return self._drag_anchor is not None

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def drag_anchor(self) -> Point | None:
        return self._drag_anchor

    @property
    def handle_point(self) -> Point:
        return self._require_sample_set().point_at(self._current_index)

    @property
    def value(self) -> float:
        return self._require_sample_set().value_at(self._current_index)

    def _require_sample_set(self) -> CurveSampleSet:
        if self._sample_set is None:
            raise NotConfiguredError("No curve has been installed on the tracker.")
        return self._sample_set

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------
    def add_listener(self, listener: PositionListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: PositionListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def _notify(self, value: float) -> None:
        for listener in list(self._listeners):
            listener(value)

    # ------------------------------------------------------------------
    # Curve installation
    # ------------------------------------------------------------------
    def configure(self, sample_set: CurveSampleSet) -> float:
        """Install ``sample_set`` and move the handle to the curve start."""

        self._sample_set = sample_set
        self._drag_anchor = None
        logger.info("Installed curve with %d samples", len(sample_set))
        return self.initialize_position()

    def set_points(self, points: Iterable[Point]) -> float:
        # Build first so a bad curve leaves the active one in place.
        sample_set = CurveSampleSet.from_points(points)
        return self.configure(sample_set)

    def initialize_position(self) -> float:
        sample_set = self._require_sample_set()
        self._current_index = sample_set.wrap_index(0, 0)
        value = sample_set.value_at(self._current_index)
        self._notify(value)
        return value

    def place_at(self, index: int) -> float:
        sample_set = self._require_sample_set()
        value = sample_set.value_at(index)
        self._current_index = index
        self._notify(value)
        return value

    # ------------------------------------------------------------------
    # Drag protocol
    # ------------------------------------------------------------------
    def begin_drag(self, center: Point) -> None:
        self._require_sample_set()
        self._drag_anchor = (float(center[0]), float(center[1]))

    def drag_by(self, delta: Point) -> float:
        """Accumulate ``delta`` into the drag target and snap to the curve.

        Returns the slider value of the sample the handle ends up on. The
        listeners are notified once with the same value.
        """

        sample_set = self._require_sample_set()
        if self._drag_anchor is None:
            self._drag_anchor = sample_set.point_at(self._current_index)
        anchor_x, anchor_y = self._drag_anchor
        self._drag_anchor = (anchor_x + delta[0], anchor_y + delta[1])

        offset = self._search_offset(sample_set, self._drag_anchor)
        if offset:
            self._current_index = sample_set.wrap_index(self._current_index + offset, 0)
            logger.debug(
                "Handle moved by %d samples to index %d", offset, self._current_index
            )

        value = sample_set.value_at(self._current_index)
        self._notify(value)
        return value

    def end_drag(self, delta: Point = (0.0, 0.0)) -> float:
        value = self.drag_by(delta)
        self._drag_anchor = None
        return value

    def cancel_drag(self, delta: Point = (0.0, 0.0)) -> float:
        # Cancelling keeps whatever movement has already happened.
        return self.end_drag(delta)

    # ------------------------------------------------------------------
    # Nearest-sample search
    # ------------------------------------------------------------------
    def _distance_at_offset(
        self, sample_set: CurveSampleSet, target: Point, offset: int
    ) -> float:
        index = sample_set.wrap_index(self._current_index, offset)
        px, py = sample_set.point_at(index)
        return math.hypot(target[0] - px, target[1] - py)

    def _search_offset(self, sample_set: CurveSampleSet, target: Point) -> int:
        earlier = self._distance_at_offset(sample_set, target, -1)
        current = self._distance_at_offset(sample_set, target, 0)
        later = self._distance_at_offset(sample_set, target, 1)
        if current <= earlier and current <= later:
            return 0

        # The direction is committed here; the walk never turns around.
        direction = -1 if earlier < later else 1
        distance = earlier if direction < 0 else later
        offset = direction
        while True:
            next_offset = offset + direction
            next_distance = self._distance_at_offset(sample_set, target, next_offset)
            if next_distance >= distance:
                break
            distance = next_distance
            offset = next_offset
        return offset
