"""Fluid drag on the pendulum sphere.

Two regimes, selected on every evaluation from the instantaneous angular
velocity (no hysteresis):

- Stokes (viscous) drag F = 6*pi*mu*r*v, always present.
- Inertial (form) drag 0.5*rho*A*CD(Re)*v^2, added when enabled on the
  parameter set and the Reynolds number reaches RE_THRESHOLD.

CD(Re) for a smooth sphere uses two published correlations:
  Re <= 3000: F. M. White, Viscous Fluid Flow (1991),
              CD = 24/Re + 6/(1 + sqrt(Re)) + 0.4
  Re >  3000: F. A. Morrison, An Introduction to Fluid Mechanics (2013),
              CD = 24/Re + 2.6 (Re/5) / (1 + (Re/5)^1.52)
                   + 0.411 (Re/263000)^-7.94 / (1 + (Re/263000)^-8.00)
                   + 0.25 (Re/1e6) / (1 + Re/1e6)
"""

from __future__ import annotations

import math

# Reynolds number below which only Stokes drag acts
RE_THRESHOLD = 1.0

# Boundary between the two CD correlations
RE_CORRELATION_SWITCH = 3000.0


def reynolds_number(speed, radius, kinematic_viscosity):
    """Reynolds number of the sphere, Re = 2 * r * |v| / nu.

    Args:
        speed: Linear velocity of the sphere centre (m/s), any sign.
        radius: Sphere radius (m).
        kinematic_viscosity: nu = mu / rho (m^2/s).
    """
    if kinematic_viscosity <= 0:
        raise ValueError("kinematic viscosity must be > 0")
    return 2.0 * radius * abs(speed) / kinematic_viscosity


def drag_coefficient(re):
    """Drag coefficient of a smooth sphere at Reynolds number re."""
    if re <= 0.0:
        raise ValueError(f"Reynolds number must be > 0, got {re}")
    if re <= RE_CORRELATION_SWITCH:
        return 24.0 / re + 6.0 / (1.0 + math.sqrt(re)) + 0.4

    x = re / 263000.0
    return (
        24.0 / re
        + 2.6 * (re / 5.0) / (1.0 + (re / 5.0) ** 1.52)
        + 0.411 * x ** -7.94 / (1.0 + x ** -8.00)
        + 0.25 * (re / 1.0e6) / (1.0 + re / 1.0e6)
    )


def viscous_drag(omega, params):
    """Angular acceleration due to Stokes drag, -F / (m * l)."""
    force = 6.0 * math.pi * params.viscosity * params.radius * params.length * omega
    return -force / (params.mass * params.length)


def inertial_drag(omega, params):
    """Angular acceleration due to form drag, always opposing omega.

    Evaluated regardless of the Reynolds threshold; zero at omega == 0.
    """
    if omega == 0.0:
        return 0.0
    v = params.length * omega
    re = reynolds_number(v, params.radius, params.kinematic_viscosity)
    dynamic = 0.5 * params.density * math.pi * (params.radius * v) ** 2
    f2 = dynamic * drag_coefficient(re) / (params.mass * params.length)
    return -f2 if omega >= 0.0 else f2


def is_inertial_regime(omega, params):
    """True when the form-drag term is part of the equation of motion."""
    if not params.inertial_drag:
        return False
    v = params.length * omega
    re = reynolds_number(v, params.radius, params.kinematic_viscosity)
    return re >= RE_THRESHOLD


def drag_acceleration(omega, params):
    """Total drag contribution to d_omega/dt for the current regime."""
    alpha = viscous_drag(omega, params)
    if is_inertial_regime(omega, params):
        alpha += inertial_drag(omega, params)
    return alpha
