"""Pendulum view: drives a PendulumSession frame by frame.

Two modes share this widget: NUMERICAL advances the integrated state each
frame, APPROXIMATION advances only the elapsed time counter and shows the
analytic angle. Batch export runs on a copy of the session in a
background thread.
"""

import logging

from PyQt6.QtCore import Qt, QTimer, QThread
from PyQt6.QtWidgets import (
    QWidget, QHBoxLayout, QSplitter, QLabel, QFileDialog,
)

from session import PendulumSession
from simulation import IntegrationError
from pendulum.canvas import PendulumCanvas
from pendulum.controls import PendulumControls

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# ExportWorker
# ---------------------------------------------------------------------------

class ExportWorker(QThread):
    """Runs a batch export on its own session copy in a background thread."""

    def __init__(self, session, dt, path, t_end):
        super().__init__()
        self.session = session
        self.dt = dt
        self.path = path
        self.t_end = t_end
        self.n_samples = 0
        self.error = None

    def run(self):
        try:
            self.n_samples = self.session.run_to_file(self.dt, self.path, self.t_end)
        except (OSError, ValueError, IntegrationError) as exc:
            logger.exception("Export to %s failed", self.path)
            self.error = exc


# ---------------------------------------------------------------------------
# PendulumView
# ---------------------------------------------------------------------------

class PendulumView(QWidget):
    """Complete pendulum mode: canvas + controls + session wiring."""

    NUMERICAL = 0
    APPROXIMATION = 1

    FPS = 60

    def __init__(self, mode=NUMERICAL, parent=None):
        super().__init__(parent)
        self.mode = mode

        self.canvas = PendulumCanvas()
        self.controls = PendulumControls()

        splitter = QSplitter(Qt.Orientation.Horizontal)
        splitter.addWidget(self.canvas)
        splitter.addWidget(self.controls)
        splitter.setStretchFactor(0, 3)
        splitter.setStretchFactor(1, 2)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(splitter)

        # Status bar labels (AppWindow will place these in a real status bar)
        self.time_label = QLabel()
        self.theta_label = QLabel()
        self.velocity_label = QLabel()
        self.energy_label = QLabel()

        self.session = PendulumSession(
            self.controls.get_length(),
            self.controls.get_radius(),
            self.controls.get_initial_theta(),
        )
        self.playing = False
        self._export_worker = None

        # Timer
        self.timer = QTimer()
        self.timer.setInterval(int(1000 / self.FPS))
        self.timer.timeout.connect(self._on_timer)

        # Wire signals
        self.controls._on_theta_changed = self._reset
        self.controls._on_geometry_changed = self._on_geometry_changed
        self.controls._on_drag_changed = self._on_drag_changed
        self.controls.play_btn.clicked.connect(self._toggle_play)
        self.controls.reset_btn.clicked.connect(self._reset)
        self.controls.axes_checkbox.toggled.connect(self._on_axes_toggled)
        self.controls.ghost_checkbox.toggled.connect(lambda _on: self._update_display())
        self.controls.export_btn.clicked.connect(self._on_export)

        self._update_display(append_trail=False)

    # -- Public interface for mode switching --

    def activate(self):
        """Called when switching to this view."""
        self._update_display(append_trail=False)

    def deactivate(self):
        """Called when switching away from this view."""
        if self.playing:
            self._toggle_play()

    # -- Display --

    def _displayed_theta(self):
        if self.mode == self.APPROXIMATION:
            return self.session.approx_angle()
        return self.session.get_angle()

    def _displayed_velocity(self):
        if self.mode == self.APPROXIMATION:
            return self.session.approx_velocity()
        return self.session.get_velocity()

    def _update_display(self, append_trail=True):
        s = self.session
        theta = self._displayed_theta()
        v = self._displayed_velocity()

        ghost = None
        if self.controls.ghost_checkbox.isChecked():
            ghost = (
                s.get_angle() if self.mode == self.APPROXIMATION
                else s.approx_angle()
            )
        self.canvas.set_theta(theta, s.params, ghost, append_trail=append_trail)

        kinetic = s.kinetic_energy(v)
        potential = s.potential_energy(theta)
        self.time_label.setText(f"  t = {s.get_elapsed_time():.3f} s  ")
        self.theta_label.setText(f"  θ = {theta:+.4f} rad  ")
        self.velocity_label.setText(f"  v = {v:+.4f} m/s  ")
        self.energy_label.setText(
            f"  K = {kinetic:.4f} J  U = {potential:.4f} J  "
            f"E = {kinetic + potential:.4f} J  "
        )

    # -- Playback --

    def _toggle_play(self):
        if self.playing:
            self.playing = False
            self.timer.stop()
            self.controls.play_btn.setText("Start")
        else:
            self.playing = True
            self.timer.start()
            self.controls.play_btn.setText("Stop")

    def _on_timer(self):
        dt = self.controls.get_speed() / self.FPS

        if self.mode == self.NUMERICAL:
            try:
                self.session.advance(dt)
            except IntegrationError as exc:
                logger.error("Integration failed, stopping playback: %s", exc)
                self._toggle_play()
                self.time_label.setText(f"  Integration failed: {exc}  ")
                return
        self.session.advance_elapsed_time(dt)

        self._update_display()

    def _reset(self):
        theta0 = self.controls.get_initial_theta()
        self.session.set_initial_angle(theta0)
        self.session.reset(theta0)
        self.canvas.clear_trail()
        self._update_display(append_trail=False)

    # -- Axes toggle --

    def _on_axes_toggled(self, checked):
        self.canvas.show_axes = checked
        self.canvas.update()

    # -- Parameter changes --

    def _on_geometry_changed(self):
        self.session.initialize(
            self.controls.get_length(),
            self.controls.get_radius(),
            self.controls.get_initial_theta(),
        )
        self._on_drag_changed()

    def _on_drag_changed(self):
        self.session.set_fluid(self.controls.get_fluid())
        self.session.set_inertial_drag_enabled(self.controls.get_inertial_drag())
        self._reset()

    # -- Export --

    def _on_export(self):
        if self._export_worker is not None:
            return
        path, _ = QFileDialog.getSaveFileName(
            self, "Export trajectory", "result.csv", "CSV files (*.csv)",
        )
        if not path:
            return

        self.controls.export_btn.setEnabled(False)
        self.controls.export_btn.setText("Exporting...")
        self._export_worker = ExportWorker(
            self.session.copy(),
            self.controls.get_export_dt(),
            path,
            self.controls.get_export_t_end(),
        )
        self._export_worker.finished.connect(self._on_export_finished)
        self._export_worker.start()

    def _on_export_finished(self):
        worker = self._export_worker
        self._export_worker = None
        self.controls.export_btn.setEnabled(True)
        self.controls.export_btn.setText("Export CSV...")
        if worker.error is None:
            logger.info("Exported %d samples to %s", worker.n_samples, worker.path)
