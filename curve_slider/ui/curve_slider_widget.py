"""Qt widget that draws a curve and a thumb constrained to travel along it.

This module lives in the UI layer. It samples the curve, forwards mouse
drags to the position tracker and repaints the thumb at the tracked sample.
The search itself lives in :mod:`curve_slider.model.tracker`.
"""
from __future__ import annotations

import logging
from typing import Sequence

from PyQt5 import QtCore, QtGui, QtWidgets

from curve_slider.config import SliderStyle
from curve_slider.geometry.sampling import sample_painter_path
from curve_slider.model.sample_set import CurveSampleSet, Point
from curve_slider.model.tracker import PositionTracker

logger = logging.getLogger(__name__)


def polyline_path(points: Sequence[Point]) -> QtGui.QPainterPath:
    path = QtGui.QPainterPath()
    if not points:
        return path
    path.moveTo(QtCore.QPointF(*points[0]))
    for point in points[1:]:
        path.lineTo(QtCore.QPointF(*point))
    return path


class CurveSliderWidget(QtWidgets.QWidget):
    """Slider whose thumb follows an arbitrary curve.

    ``positionChanged`` fires with a value in ``[0.0, 1.0]`` whenever a
    curve is installed and after every processed drag movement.
    """

    positionChanged = QtCore.pyqtSignal(float)

    def __init__(
        self,
        parent: QtWidgets.QWidget | None = None,
        style: SliderStyle | None = None,
    ) -> None:
        super().__init__(parent)
        self.setMinimumSize(120, 80)
        self._style = style or SliderStyle()
        self._tracker = PositionTracker()
        self._tracker.add_listener(self._on_position_changed)
        self._curve_path = QtGui.QPainterPath()
        self._source_path: QtGui.QPainterPath | None = None
        self._drawn_set: CurveSampleSet | None = None
        self._last_drag_pos: QtCore.QPoint | None = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def tracker(self) -> PositionTracker:
        """Position tracker driving the thumb.

        A curve installed directly on the tracker is drawn as a polyline
        through its samples on the next repaint.
        """

        return self._tracker

    def slider_style(self) -> SliderStyle:
        return self._style

    def value(self) -> float | None:
        if not self._tracker.is_configured:
            return None
        return self._tracker.value

    def handle_point(self) -> Point | None:
        if not self._tracker.is_configured:
            return None
        return self._tracker.handle_point

    def set_curve_path(self, path: QtGui.QPainterPath) -> None:
        self._install_path(path, self._style.sample_count)

    def set_curve_points(self, points: Sequence[Point]) -> None:
        self._tracker.set_points(points)
        self._source_path = None
        self._curve_path = polyline_path(self._tracker.sample_set.points)
        self._drawn_set = self._tracker.sample_set
        self._last_drag_pos = None
        self.update()

    def curve_path(self) -> QtGui.QPainterPath:
        self._sync_curve_path()
        return QtGui.QPainterPath(self._curve_path)

    def set_style(self, style: SliderStyle) -> None:
        if (
            self._source_path is not None
            and style.sample_count != self._style.sample_count
        ):
            # Resample before adopting the style so a bad count changes nothing.
            self._install_path(self._source_path, style.sample_count)
        self._style = style
        self.update()

    def _install_path(self, path: QtGui.QPainterPath, sample_count: int) -> None:
        points = sample_painter_path(path, sample_count)
        self._tracker.set_points(points)
        self._source_path = QtGui.QPainterPath(path)
        self._curve_path = QtGui.QPainterPath(path)
        self._drawn_set = self._tracker.sample_set
        self._last_drag_pos = None
        self.update()

    def _sync_curve_path(self) -> None:
        sample_set = self._tracker.sample_set
        if sample_set is None or sample_set is self._drawn_set:
            return
        self._source_path = None
        self._curve_path = polyline_path(sample_set.points)
        self._drawn_set = sample_set

    def thumb_rect(self) -> QtCore.QRectF | None:
        center = self.handle_point()
        if center is None:
            return None
        width, height = self._style.thumb_size
        return QtCore.QRectF(
            center[0] - width / 2.0, center[1] - height / 2.0, width, height
        )

    # ------------------------------------------------------------------
    # Tracker callbacks
    # ------------------------------------------------------------------
    def _on_position_changed(self, value: float) -> None:
        self.positionChanged.emit(value)
        self.update()

    # ------------------------------------------------------------------
    # Qt events
    # ------------------------------------------------------------------
    def paintEvent(self, event) -> None:  # noqa: D401 - Qt signature
        self._sync_curve_path()
        painter = QtGui.QPainter(self)
        painter.setRenderHint(QtGui.QPainter.Antialiasing)

        curve_pen = QtGui.QPen(QtGui.QColor(self._style.curve_stroke_color))
        curve_pen.setWidthF(self._style.curve_line_width)
        painter.setPen(curve_pen)
        painter.setBrush(QtCore.Qt.NoBrush)
        painter.drawPath(self._curve_path)

        rect = self.thumb_rect()
        if rect is not None:
            thumb_pen = QtGui.QPen(QtGui.QColor(self._style.thumb_stroke_color))
            thumb_pen.setWidthF(self._style.thumb_line_width)
            painter.setPen(thumb_pen)
            painter.setBrush(QtGui.QColor(self._style.thumb_fill_color))
            painter.drawEllipse(rect)
        painter.end()

    def mousePressEvent(self, event: QtGui.QMouseEvent) -> None:  # noqa: D401 - Qt signature
        if event.button() != QtCore.Qt.LeftButton:
            super().mousePressEvent(event)
            return
        rect = self.thumb_rect()
        if rect is None or not rect.contains(QtCore.QPointF(event.pos())):
            super().mousePressEvent(event)
            return
        self._tracker.begin_drag(self._tracker.handle_point)
        self._last_drag_pos = event.pos()
        event.accept()

    def mouseMoveEvent(self, event: QtGui.QMouseEvent) -> None:  # noqa: D401 - Qt signature
        if self._last_drag_pos is None:
            super().mouseMoveEvent(event)
            return
        self._tracker.drag_by(self._consume_delta(event.pos()))
        event.accept()

    def mouseReleaseEvent(self, event: QtGui.QMouseEvent) -> None:  # noqa: D401 - Qt signature
        if self._last_drag_pos is None or event.button() != QtCore.Qt.LeftButton:
            super().mouseReleaseEvent(event)
            return
        value = self._tracker.end_drag(self._consume_delta(event.pos()))
        self._last_drag_pos = None
        logger.debug("Drag finished at value %.4f", value)
        event.accept()

    def _consume_delta(self, pos: QtCore.QPoint) -> Point:
        last = self._last_drag_pos
        self._last_drag_pos = pos
        return (float(pos.x() - last.x()), float(pos.y() - last.y()))
