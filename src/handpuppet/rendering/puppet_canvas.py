"""QPainter canvas that drives and draws the puppet."""

from __future__ import annotations

import logging
import math
from typing import Callable, Optional

from PySide6.QtCore import QPointF, QRectF, Qt, QTimer
from PySide6.QtGui import QBrush, QColor, QPainter, QPen
from PySide6.QtWidgets import QWidget

from handpuppet.constants import FRAME_INTERVAL_MS, POINTS_PER_SIDE
from handpuppet.coordination.frame_driver import FrameDriver, FrameResult
from handpuppet.core.clock import DeltaClock
from handpuppet.core.config import PuppetConfig

logger = logging.getLogger(__name__)


class PuppetCanvas(QWidget):
    """Widget that steps a :class:`FrameDriver` on a timer and paints it.

    Every tick runs the registered pre-frame callbacks (e.g. a replay
    source writing into the hand slot), steps the driver once and
    schedules a repaint.  The paint pass only reads the last
    :class:`FrameResult`; it never touches the physics space.
    """

    def __init__(self, driver: FrameDriver, config: PuppetConfig, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.driver = driver
        self.config = config
        self.clock = DeltaClock()
        self.pre_frame_callbacks: list[Callable[[], None]] = []

        self.setMinimumSize(320, 240)
        self.setAttribute(Qt.WidgetAttribute.WA_OpaquePaintEvent, config.background_color is not None)

        self._stroke_pen = QPen(QColor(*config.stroke_color))
        self._stroke_pen.setWidthF(config.stroke_weight)
        self._stroke_pen.setCapStyle(Qt.PenCapStyle.RoundCap)
        self._circle_brush = QBrush(QColor(*config.circle_color))
        self._floor_brush = QBrush(QColor(*config.stroke_color))

        # Refresh timer (~60 fps)
        self._timer = QTimer(self)
        self._timer.setInterval(FRAME_INTERVAL_MS)
        self._timer.timeout.connect(self._on_timer)

    # ── Public API ──

    def start(self) -> None:
        self.clock.reset()
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    @property
    def running(self) -> bool:
        return self._timer.isActive()

    # ── Qt events ──

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        size = event.size()
        self.driver.resize(size.width(), size.height())

    def closeEvent(self, event) -> None:
        self.stop()
        super().closeEvent(event)

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        if self.config.background_color is not None:
            painter.fillRect(self.rect(), QColor(*self.config.background_color))

        result = self.driver.last_result
        if result is not None:
            self._paint_chain(painter, result)
            self._paint_bodies(painter, result)
        painter.end()

    # ── Internals ──

    def _on_timer(self) -> None:
        self.clock.get_delta()
        for callback in self.pre_frame_callbacks:
            callback()
        self.driver.step(fps=self.clock.fps)
        self.update()

    def _paint_chain(self, painter: QPainter, result: FrameResult) -> None:
        points = result.chain.points
        if len(points) == 0:
            return
        painter.setPen(self._stroke_pen)
        # each side is start -> apex -> end
        for i in range(0, len(points) - POINTS_PER_SIDE + 1, POINTS_PER_SIDE):
            p0, p1, p2 = points[i], points[i + 1], points[i + 2]
            painter.drawLine(QPointF(p0[0], p0[1]), QPointF(p1[0], p1[1]))
            painter.drawLine(QPointF(p1[0], p1[1]), QPointF(p2[0], p2[1]))

    def _paint_bodies(self, painter: QPainter, result: FrameResult) -> None:
        snap = result.physics
        painter.setPen(Qt.PenStyle.NoPen)

        painter.setBrush(self._circle_brush)
        r = snap.circle_radius
        painter.drawEllipse(QPointF(snap.circle.x, snap.circle.y), r, r)

        painter.setBrush(self._floor_brush)
        fw, fh = snap.floor_size
        painter.drawRect(QRectF(snap.floor.x - fw / 2, snap.floor.y - fh / 2, fw, fh))

        if not self.config.draw_edges:
            return
        ew, eh = snap.edge_size[0], self.config.stroke_weight
        for pose in snap.edges:
            painter.save()
            painter.translate(pose.x, pose.y)
            painter.rotate(math.degrees(pose.angle))
            painter.drawRect(QRectF(-ew / 2, -eh / 2, ew, eh))
            painter.restore()
