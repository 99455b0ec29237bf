import math

import pytest

from curve_slider.errors import IndexOutOfRangeError, InvalidCurveError, NotConfiguredError
from curve_slider.model.sample_set import CurveSampleSet
from curve_slider.model.tracker import PositionTracker

LINE = [(0.0, 0.0), (10.0, 0.0), (20.0, 0.0), (30.0, 0.0), (40.0, 0.0)]


@pytest.fixture
def notifications():
    return []


@pytest.fixture
def tracker(notifications):
    tracker = PositionTracker()
    tracker.add_listener(notifications.append)
    tracker.configure(CurveSampleSet.from_points(LINE))
    notifications.clear()
    return tracker


def test_unconfigured_tracker_raises():
    tracker = PositionTracker()

    assert not tracker.is_configured
    with pytest.raises(NotConfiguredError):
        tracker.begin_drag((0.0, 0.0))
    with pytest.raises(NotConfiguredError):
        tracker.drag_by((1.0, 0.0))
    with pytest.raises(NotConfiguredError):
        tracker.initialize_position()
    with pytest.raises(NotConfiguredError):
        tracker.place_at(0)
    with pytest.raises(NotConfiguredError):
        tracker.handle_point


def test_configure_places_handle_at_curve_start():
    seen = []
    tracker = PositionTracker()
    tracker.add_listener(seen.append)

    value = tracker.configure(CurveSampleSet.from_points(LINE))

    assert value == 0.0
    assert seen == [0.0]
    assert tracker.current_index == 0
    assert tracker.handle_point == (0.0, 0.0)


def test_constructor_with_sample_set_is_configured():
    tracker = PositionTracker(CurveSampleSet.from_points(LINE))

    assert tracker.is_configured
    assert tracker.value == 0.0


def test_small_drag_keeps_current_sample(tracker, notifications):
    tracker.place_at(2)
    tracker.begin_drag(tracker.handle_point)

    value = tracker.drag_by((0.1, 0.0))

    assert tracker.current_index == 2
    assert value == tracker.sample_set.value_at(2)
    assert tracker.drag_anchor == pytest.approx((20.1, 0.0))


def test_zero_delta_at_local_minimum_is_idempotent(tracker):
    tracker.place_at(3)
    tracker.begin_drag(tracker.handle_point)
    before = tracker.value

    assert tracker.drag_by((0.0, 0.0)) == before
    assert tracker.drag_by((0.0, 0.0)) == before
    assert tracker.current_index == 3


def test_drag_onto_far_sample_lands_on_it(tracker):
    tracker.begin_drag(tracker.handle_point)

    value = tracker.drag_by((30.0, 0.0))

    assert tracker.current_index == 3
    assert value == tracker.sample_set.value_at(3)


def test_forward_descent_stops_at_nearest_sample(tracker):
    tracker.place_at(1)
    tracker.begin_drag(tracker.handle_point)

    tracker.drag_by((21.0, 0.0))

    assert tracker.current_index == 3


def test_incremental_gesture_walks_along_curve(tracker):
    tracker.begin_drag(tracker.handle_point)

    values = [tracker.drag_by((2.0, 0.0)) for _ in range(20)]

    assert tracker.current_index == 4
    assert values[-1] == 1.0
    assert all(a <= b for a, b in zip(values, values[1:]))


def test_drag_near_curve_start_can_wrap_to_curve_end(notifications):
    # Neighbour search treats the index space as cyclic, so on a nearly
    # closed curve the first sample's neighbour is the last sample.
    circle = [
        (10.0 * math.cos(math.radians(angle)), 10.0 * math.sin(math.radians(angle)))
        for angle in range(0, 360, 45)
    ]
    tracker = PositionTracker()
    tracker.add_listener(notifications.append)
    tracker.configure(CurveSampleSet.from_points(circle))
    tracker.begin_drag(tracker.handle_point)

    value = tracker.drag_by((-1.0, -5.0))

    assert tracker.current_index == 7
    assert value == 1.0
    assert notifications == [0.0, 1.0]


def test_line_drag_past_start_wraps_search_through_far_end(tracker):
    tracker.begin_drag(tracker.handle_point)

    tracker.drag_by((39.0, 0.0))

    assert tracker.current_index == 4
    assert tracker.value == 1.0


def test_listener_notified_once_per_drag_delta(tracker, notifications):
    tracker.begin_drag(tracker.handle_point)

    tracker.drag_by((0.5, 0.0))
    tracker.drag_by((30.0, 0.0))

    assert notifications == [0.0, tracker.sample_set.value_at(3)]


def test_drag_without_begin_starts_from_handle(tracker):
    tracker.place_at(1)

    tracker.drag_by((10.0, 0.0))

    assert tracker.current_index == 2
    assert tracker.is_dragging


def test_end_drag_applies_final_delta_and_clears_anchor(tracker):
    tracker.begin_drag(tracker.handle_point)
    tracker.drag_by((5.0, 0.0))

    value = tracker.end_drag((15.0, 0.0))

    assert tracker.current_index == 2
    assert value == tracker.sample_set.value_at(2)
    assert not tracker.is_dragging


def test_cancel_drag_keeps_partial_movement(tracker):
    tracker.begin_drag(tracker.handle_point)
    tracker.drag_by((20.0, 0.0))

    tracker.cancel_drag()

    assert tracker.current_index == 2
    assert tracker.drag_anchor is None


def test_initialize_position_resets_to_start(tracker, notifications):
    tracker.place_at(3)
    notifications.clear()

    value = tracker.initialize_position()

    assert value == 0.0
    assert tracker.current_index == 0
    assert notifications == [0.0]


def test_failed_set_points_keeps_active_curve(tracker):
    original = tracker.sample_set
    tracker.place_at(3)

    with pytest.raises(InvalidCurveError):
        tracker.set_points([(1.0, 1.0)])

    assert tracker.sample_set is original
    assert tracker.current_index == 3


def test_set_points_replaces_curve_and_resets(tracker, notifications):
    tracker.place_at(3)
    tracker.begin_drag(tracker.handle_point)
    notifications.clear()

    value = tracker.set_points([(5.0, 5.0), (6.0, 6.0), (7.0, 7.0)])

    assert value == 0.0
    assert len(tracker.sample_set) == 3
    assert tracker.current_index == 0
    assert not tracker.is_dragging
    assert notifications == [0.0]


def test_place_at_rejects_out_of_range_index(tracker):
    tracker.place_at(1)

    with pytest.raises(IndexOutOfRangeError):
        tracker.place_at(5)

    assert tracker.current_index == 1


def test_remove_listener_stops_notifications(tracker, notifications):
    tracker.remove_listener(notifications.append)
    tracker.remove_listener(print)

    tracker.drag_by((10.0, 0.0))

    assert notifications == []


def test_listener_registered_once(tracker, notifications):
    tracker.add_listener(notifications.append)

    tracker.place_at(1)

    assert notifications == [tracker.sample_set.value_at(1)]
