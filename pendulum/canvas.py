"""Pendulum canvas: QPainter rendering of the arm and sphere."""

import math
from collections import deque

from PyQt6.QtCore import Qt, QPointF
from PyQt6.QtGui import QPainter, QPen, QBrush, QColor, QFont
from PyQt6.QtWidgets import QWidget

from simulation import PendulumParams, position


class PendulumCanvas(QWidget):
    """Custom widget that draws the pendulum using QPainter.

    An optional ghost sphere shows a second angle (the analytic
    approximation) on top of the primary one.
    """

    TRAIL_LENGTH = 200

    def __init__(self, parent=None):
        super().__init__(parent)
        self.params = PendulumParams()
        self.theta = 0.0
        self.ghost_theta = None
        self.trail = deque(maxlen=self.TRAIL_LENGTH)
        self.show_axes = False
        self.setMinimumSize(400, 400)

    def set_theta(self, theta, params, ghost_theta=None, append_trail=True):
        """Update the displayed angle (and optional ghost angle)."""
        self.theta = theta
        self.params = params
        self.ghost_theta = ghost_theta
        if append_trail:
            self.trail.append(position(theta, params))
        self.update()

    def clear_trail(self):
        self.trail = deque(maxlen=self.TRAIL_LENGTH)

    def _scale(self):
        w, h = self.width(), self.height()
        return min(w, h) * 0.4 / max(self.params.length, 0.01)

    def _to_pixel(self, x, y):
        """Convert physics coords to pixel coords."""
        scale = self._scale()
        cx = self.width() / 2
        cy = self.height() * 0.3
        return cx + x * scale, cy - y * scale

    def _sphere_radius_px(self):
        return max(4.0, self.params.radius * self._scale())

    def _draw_axes(self, painter):
        """Draw the vertical through the pivot and a 10-degree protractor."""
        cx, cy = self._to_pixel(0, 0)
        r_px = self.params.length * self._scale()

        line_pen = QPen(QColor(255, 255, 255, 30))
        line_pen.setWidthF(1.0)
        line_pen.setStyle(Qt.PenStyle.DashLine)
        painter.setPen(line_pen)
        painter.drawLine(QPointF(cx, cy), QPointF(cx, cy + r_px * 1.1))

        label_font = QFont()
        label_font.setPointSizeF(8)
        painter.setFont(label_font)
        painter.setPen(QColor(255, 255, 255, 50))
        for deg in range(-90, 91, 10):
            a = math.radians(deg)
            x0 = cx + r_px * 1.05 * math.sin(a)
            y0 = cy + r_px * 1.05 * math.cos(a)
            x1 = cx + r_px * 1.1 * math.sin(a)
            y1 = cy + r_px * 1.1 * math.cos(a)
            painter.drawLine(QPointF(x0, y0), QPointF(x1, y1))
            if deg % 30 == 0:
                painter.drawText(QPointF(x1 + 3, y1 + 10), f"{deg}°")

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        painter.fillRect(self.rect(), QColor(20, 20, 30))

        if self.show_axes:
            self._draw_axes(painter)

        pivot_px = self._to_pixel(0, 0)
        bob_r = self._sphere_radius_px()

        # Trail
        if len(self.trail) > 1:
            trail_list = list(self.trail)
            for i in range(1, len(trail_list)):
                alpha = int(255 * i / len(trail_list))
                pen = QPen(QColor(100, 200, 255, alpha))
                pen.setWidthF(1.5)
                painter.setPen(pen)
                px0, py0 = self._to_pixel(*trail_list[i - 1])
                px1, py1 = self._to_pixel(*trail_list[i])
                painter.drawLine(QPointF(px0, py0), QPointF(px1, py1))

        # Ghost (approximation)
        if self.ghost_theta is not None:
            ghost_px = self._to_pixel(*position(self.ghost_theta, self.params))
            ghost_pen = QPen(QColor(255, 220, 60, 90))
            ghost_pen.setWidthF(2.0)
            ghost_pen.setStyle(Qt.PenStyle.DashLine)
            painter.setPen(ghost_pen)
            painter.setBrush(Qt.BrushStyle.NoBrush)
            painter.drawLine(QPointF(*pivot_px), QPointF(*ghost_px))
            painter.drawEllipse(QPointF(*ghost_px), bob_r, bob_r)

        # Arm
        bob_px = self._to_pixel(*position(self.theta, self.params))
        arm_pen = QPen(QColor(200, 200, 200))
        arm_pen.setWidthF(2.5)
        painter.setPen(arm_pen)
        painter.drawLine(QPointF(*pivot_px), QPointF(*bob_px))

        # Pivot
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(QColor(180, 180, 180)))
        painter.drawEllipse(QPointF(*pivot_px), 5, 5)

        # Sphere
        painter.setBrush(QBrush(QColor(190, 195, 205)))
        painter.drawEllipse(QPointF(*bob_px), bob_r, bob_r)

        painter.end()
