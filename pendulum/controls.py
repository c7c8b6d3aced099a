"""Pendulum control panel: initial angle, physics parameters, playback."""

import math

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QGridLayout, QHBoxLayout,
    QLabel, QPushButton, QComboBox, QGroupBox, QCheckBox,
)

from ui_common import make_slider, slider_value, set_slider_value, PhysicsParamsWidget


class PendulumControls(QWidget):
    """Sliders for the initial angle, system parameters, and playback."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self._building = True
        self._init_ui()
        self._building = False

    def _add_param_row(self, layout, row, label_text, slider, unit=""):
        label = QLabel(label_text)
        value_label = QLabel()
        value_label.setMinimumWidth(55)
        value_label.setAlignment(
            Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter
        )
        layout.addWidget(label, row, 0)
        layout.addWidget(slider, row, 1)
        layout.addWidget(value_label, row, 2)

        def _update(val, vl=value_label, sl=slider, u=unit):
            vl.setText(f"{slider_value(sl):.2f}{u}")

        slider.valueChanged.connect(_update)
        _update(slider.value())
        return value_label

    # -- UI construction --

    def _init_ui(self):
        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(8, 8, 8, 8)

        # --- Initial Conditions ---
        ic_group = QGroupBox("Initial Conditions")
        ic_layout = QGridLayout()
        ic_group.setLayout(ic_layout)

        self.theta_slider = make_slider(-180, 180, 60, resolution=10)
        self._add_param_row(ic_layout, 0, "θ₀", self.theta_slider, "°")
        self.theta_slider.valueChanged.connect(
            lambda _val: self._on_theta_changed() if not self._building else None
        )

        main_layout.addWidget(ic_group)

        # --- System Parameters ---
        sys_group = QGroupBox("System Parameters")
        sys_layout = QVBoxLayout()
        sys_group.setLayout(sys_layout)

        self.physics_params = PhysicsParamsWidget()
        for sl in [
            self.physics_params.length_slider,
            self.physics_params.radius_slider,
        ]:
            sl.valueChanged.connect(
                lambda _val: self._on_geometry_changed() if not self._building else None
            )
        self.physics_params.fluid_combo.currentIndexChanged.connect(
            lambda _idx: self._on_drag_changed() if not self._building else None
        )
        self.physics_params.inertial_checkbox.toggled.connect(
            lambda _on: self._on_drag_changed() if not self._building else None
        )
        sys_layout.addWidget(self.physics_params)

        main_layout.addWidget(sys_group)

        # --- Playback ---
        pb_group = QGroupBox("Playback")
        pb_layout = QHBoxLayout()
        pb_group.setLayout(pb_layout)

        self.play_btn = QPushButton("Start")
        self.reset_btn = QPushButton("Reset")
        self.speed_combo = QComboBox()
        for s in ["0.25x", "0.5x", "1x", "2x", "4x"]:
            self.speed_combo.addItem(s)
        self.speed_combo.setCurrentIndex(2)

        self.axes_checkbox = QCheckBox("Show axes")
        self.ghost_checkbox = QCheckBox("Overlay")

        pb_layout.addWidget(self.play_btn)
        pb_layout.addWidget(self.reset_btn)
        pb_layout.addWidget(QLabel("Speed:"))
        pb_layout.addWidget(self.speed_combo)
        pb_layout.addWidget(self.axes_checkbox)
        pb_layout.addWidget(self.ghost_checkbox)

        main_layout.addWidget(pb_group)

        # --- Export ---
        ex_group = QGroupBox("Export")
        ex_layout = QGridLayout()
        ex_group.setLayout(ex_layout)

        self.export_dt_slider = make_slider(1, 50, 1, resolution=1)
        self._add_param_row(ex_layout, 0, "Δt", self.export_dt_slider, " ms")
        self.export_t_end_slider = make_slider(1, 120, 30, resolution=1)
        self._add_param_row(ex_layout, 1, "Duration", self.export_t_end_slider, " s")
        self.export_btn = QPushButton("Export CSV...")
        ex_layout.addWidget(self.export_btn, 2, 0, 1, 3)

        main_layout.addWidget(ex_group)
        main_layout.addStretch()

    # -- Public accessors --

    def get_initial_theta(self):
        """Initial angle in radians."""
        return math.radians(slider_value(self.theta_slider))

    def set_initial_theta(self, theta):
        set_slider_value(self.theta_slider, math.degrees(theta))

    def get_length(self):
        return self.physics_params.get_length()

    def get_radius(self):
        return self.physics_params.get_radius()

    def get_fluid(self):
        return self.physics_params.get_fluid()

    def get_inertial_drag(self):
        return self.physics_params.get_inertial_drag()

    def get_speed(self):
        text = self.speed_combo.currentText().replace("x", "")
        return float(text)

    def get_export_dt(self):
        return slider_value(self.export_dt_slider) / 1000.0

    def get_export_t_end(self):
        return slider_value(self.export_t_end_slider)

    # -- Callbacks (wired by PendulumView) --

    def _on_theta_changed(self):
        """Called when the initial angle slider moves. Override in parent."""
        pass

    def _on_geometry_changed(self):
        """Called when arm length or sphere radius changes. Override in parent."""
        pass

    def _on_drag_changed(self):
        """Called when the fluid or the inertial drag toggle changes."""
        pass
