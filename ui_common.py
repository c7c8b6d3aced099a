"""Shared UI widgets used by the numerical and approximation views.

Contains PhysicsParamsWidget and reusable slider helpers.
"""

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QGridLayout, QSlider, QLabel, QComboBox, QCheckBox,
)

from simulation import Fluid


# ---------------------------------------------------------------------------
# Slider helpers
# ---------------------------------------------------------------------------

def make_slider(minimum, maximum, value, resolution=100):
    """Create an integer QSlider that maps to float values.

    The slider range is [minimum*resolution, maximum*resolution].
    """
    slider = QSlider(Qt.Orientation.Horizontal)
    slider.setMinimum(int(minimum * resolution))
    slider.setMaximum(int(maximum * resolution))
    slider.setValue(int(value * resolution))
    slider.resolution = resolution
    return slider


def slider_value(slider):
    """Read the float value from a slider created by make_slider."""
    return slider.value() / slider.resolution


def set_slider_value(slider, value):
    """Set a slider created by make_slider from a float value."""
    slider.setValue(int(round(value * slider.resolution)))


# ---------------------------------------------------------------------------
# PhysicsParamsWidget
# ---------------------------------------------------------------------------

class PhysicsParamsWidget(QWidget):
    """Arm length, sphere radius, fluid and inertial drag toggle.

    Emits no signals itself; the parent connects to the individual
    widgets and reads values through the accessors.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        layout = QGridLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.length_slider = make_slider(0.1, 3.0, 1.0)
        self.radius_slider = make_slider(0.005, 0.2, 0.05, resolution=1000)

        self._add_row(layout, 0, "l", self.length_slider, " m")
        self._add_row(layout, 1, "r", self.radius_slider, " m", precision=3)

        self.fluid_combo = QComboBox()
        for fluid in Fluid:
            self.fluid_combo.addItem(fluid.name.capitalize(), int(fluid))
        layout.addWidget(QLabel("Fluid"), 2, 0)
        layout.addWidget(self.fluid_combo, 2, 1, 1, 2)

        self.inertial_checkbox = QCheckBox("Inertial drag")
        layout.addWidget(self.inertial_checkbox, 3, 0, 1, 3)

    def _add_row(self, layout, row, label_text, slider, unit="", precision=2):
        label = QLabel(label_text)
        value_label = QLabel()
        value_label.setMinimumWidth(55)
        value_label.setAlignment(
            Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter
        )
        layout.addWidget(label, row, 0)
        layout.addWidget(slider, row, 1)
        layout.addWidget(value_label, row, 2)

        def _update(_val, vl=value_label, sl=slider, u=unit):
            vl.setText(f"{slider_value(sl):.{precision}f}{u}")

        slider.valueChanged.connect(_update)
        _update(slider.value())

    def get_length(self):
        return slider_value(self.length_slider)

    def get_radius(self):
        return slider_value(self.radius_slider)

    def get_fluid(self):
        return Fluid(self.fluid_combo.currentData())

    def get_inertial_drag(self):
        return self.inertial_checkbox.isChecked()
