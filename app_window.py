"""App window: QStackedWidget with toolbar for mode switching.

Hosts a numerical and an approximation PendulumView, each with its own
session, and shows the active view's readouts in the status bar.
"""

import logging

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QActionGroup
from PyQt6.QtWidgets import (
    QMainWindow, QStackedWidget, QToolBar, QStatusBar,
)

from pendulum.view import PendulumView

logger = logging.getLogger(__name__)


class AppWindow(QMainWindow):
    """Top-level window with mode switching between the two views."""

    # Mode indices
    NUMERICAL_MODE = PendulumView.NUMERICAL
    APPROXIMATION_MODE = PendulumView.APPROXIMATION

    def __init__(self):
        super().__init__()
        self.setWindowTitle("Simple Pendulum")
        self.resize(1100, 700)

        # --- Views ---
        self.views = [
            PendulumView(PendulumView.NUMERICAL),
            PendulumView(PendulumView.APPROXIMATION),
        ]

        # --- Stacked widget ---
        self.stack = QStackedWidget()
        for view in self.views:
            self.stack.addWidget(view)
        self.setCentralWidget(self.stack)

        # --- Toolbar ---
        toolbar = QToolBar("Mode")
        toolbar.setMovable(False)
        self.addToolBar(Qt.ToolBarArea.TopToolBarArea, toolbar)

        self._mode_group = QActionGroup(self)
        self._mode_group.setExclusive(True)

        for mode, title in [
            (self.NUMERICAL_MODE, "Numerical"),
            (self.APPROXIMATION_MODE, "Approximation"),
        ]:
            action = QAction(title, self)
            action.setCheckable(True)
            action.setChecked(mode == self.NUMERICAL_MODE)
            action.triggered.connect(lambda _checked=False, m=mode: self._switch_mode(m))
            self._mode_group.addAction(action)
            toolbar.addAction(action)

        # --- Status bar ---
        self._status_bar = QStatusBar()
        self.setStatusBar(self._status_bar)
        for view in self.views:
            for label in self._status_labels(view):
                self._status_bar.addWidget(label)

        self._update_status_visibility()

    @staticmethod
    def _status_labels(view):
        return [view.time_label, view.theta_label, view.velocity_label, view.energy_label]

    def _update_status_visibility(self):
        """Show only the active view's status labels."""
        current = self.stack.currentIndex()
        for i, view in enumerate(self.views):
            for label in self._status_labels(view):
                label.setVisible(i == current)

    def _switch_mode(self, mode: int) -> None:
        current = self.stack.currentIndex()
        if current == mode:
            return

        self.views[current].deactivate()
        self.stack.setCurrentIndex(mode)
        self.views[mode].activate()

        self._update_status_visibility()
        logger.info(
            "Switched to %s mode",
            "numerical" if mode == self.NUMERICAL_MODE else "approximation",
        )
