"""Damped simple pendulum physics engine.

Implements the equation of motion for a rigid arm ending in an aluminium
sphere, moving under gravity plus fluid drag, and provides numerical
integration via SciPy's solve_ivp (DOP853).

The drag law itself lives in drag.py; this module owns the physical
parameter set, the right-hand side of the ODE and the two integration
modes (interactive single advance and uniformly sampled batch run).
"""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, field
from typing import NamedTuple

import numpy as np
from scipy.integrate import solve_ivp

import drag

logger = logging.getLogger(__name__)

# Gravitational acceleration [m/s^2]
G = 9.80665

# Density of the sphere material (aluminium) [kg/m^3]
ALUMINIUM_DENSITY = 2698.9

# Fluid presets at room temperature
AIR_VISCOSITY = 1.822e-5      # [kg/(m s)]
AIR_DENSITY = 1.205           # [kg/m^3]
WATER_VISCOSITY = 1.004e-3    # [kg/(m s)]
WATER_DENSITY = 998.203       # [kg/m^3]

# Absolute and relative tolerance of the adaptive integrator (the smallest
# rtol solve_ivp accepts is 100 * machine epsilon, about 2.2e-14)
EPS = 1e-13

# Initial trial step for the interactive advance
DX = 0.01


class IntegrationError(RuntimeError):
    """Raised when the adaptive integrator fails to reach the end time."""


class Fluid(enum.IntEnum):
    """Fluid surrounding the pendulum."""

    AIR = 0
    WATER = 1


class FluidProperties(NamedTuple):
    viscosity: float
    density: float


FLUID_PRESETS = {
    Fluid.AIR: FluidProperties(AIR_VISCOSITY, AIR_DENSITY),
    Fluid.WATER: FluidProperties(WATER_VISCOSITY, WATER_DENSITY),
}


@dataclass
class PendulumParams:
    """Physical parameters of the pendulum and its surrounding fluid.

    ``mass``, ``omega0_2`` and ``gamma`` are derived once at construction.
    ``gamma`` uses the viscosity of the construction-time fluid and is not
    recomputed by ``set_fluid``; the equation of motion always reads the
    live ``viscosity``/``density`` instead.
    """

    length: float = 1.0
    radius: float = 0.05
    fluid: Fluid = Fluid.AIR
    inertial_drag: bool = False
    g: float = G
    viscosity: float = field(init=False)
    density: float = field(init=False)
    mass: float = field(init=False)
    omega0_2: float = field(init=False)
    gamma: float = field(init=False)

    def __post_init__(self):
        if not (math.isfinite(self.length) and self.length > 0):
            raise ValueError(f"Arm length must be > 0, got {self.length}")
        if not (math.isfinite(self.radius) and self.radius > 0):
            raise ValueError(f"Sphere radius must be > 0, got {self.radius}")

        self.fluid = Fluid(self.fluid)
        self.viscosity, self.density = FLUID_PRESETS[self.fluid]

        self.mass = 4.0 / 3.0 * math.pi * self.radius ** 3 * ALUMINIUM_DENSITY
        self.omega0_2 = self.g / self.length
        self.gamma = 3.0 * math.pi * self.radius * self.viscosity / self.mass

    @property
    def kinematic_viscosity(self) -> float:
        """nu = mu / rho [m^2/s]."""
        return self.viscosity / self.density

    def set_fluid(self, fluid) -> None:
        """Switch the surrounding fluid to one of the presets.

        Raises ValueError for an id that is not a member of Fluid.
        """
        self.fluid = Fluid(fluid)
        self.viscosity, self.density = FLUID_PRESETS[self.fluid]
        logger.debug(
            "Fluid set to %s (mu=%g, rho=%g)",
            self.fluid.name, self.viscosity, self.density,
        )

    def fluid_properties(self) -> tuple[float, float, float]:
        """Return (viscosity, density, kinematic_viscosity)."""
        return self.viscosity, self.density, self.kinematic_viscosity


def derivatives(t, state, params):
    """Compute the two first-order ODEs for the damped pendulum.

    State vector: [theta, omega]
    Returns: [d_theta/dt, d_omega/dt]
    """
    theta, omega = state
    alpha = -params.g * math.sin(theta) / params.length
    alpha += drag.drag_acceleration(omega, params)
    return [omega, alpha]


def _solve(params, y0, t_end, **kwargs):
    sol = solve_ivp(
        fun=lambda t, y: derivatives(t, y, params),
        t_span=(0.0, t_end),
        y0=y0,
        method="DOP853",
        rtol=EPS,
        atol=EPS,
        **kwargs,
    )
    if not sol.success:
        logger.warning("solve_ivp failed at t=%.6g: %s", sol.t[-1], sol.message)
    return sol


def step(params, state, dt):
    """Advance a single state over [0, dt] with the adaptive integrator.

    Returns:
        New state as a float64 array [theta, omega].

    Raises:
        ValueError: dt is not positive.
        IntegrationError: the solver could not reach dt.
    """
    if not dt > 0:
        raise ValueError(f"dt must be > 0, got {dt}")

    sol = _solve(
        params, np.asarray(state, dtype=np.float64), dt,
        first_step=min(DX, dt),
    )
    if not sol.success:
        raise IntegrationError(sol.message)
    return sol.y[:, -1]


def sample_times(t_end, dt):
    """Uniform sample times 0, dt, ..., n*dt, the largest n with n*dt <= t_end."""
    if not dt > 0:
        raise ValueError(f"dt must be > 0, got {dt}")
    if not t_end > 0:
        raise ValueError(f"t_end must be > 0, got {t_end}")
    n = int(math.floor(t_end / dt + 1e-9))
    return np.arange(n + 1) * dt


def simulate(params, theta0, omega0=0.0, t_end=30.0, dt=0.001):
    """Run a full simulation and return uniformly-spaced results.

    Returns:
        t_array: 1D array of sample times, starting at 0 and including
            the final sample.
        state_array: 2D array of shape (len(t_array), 2)

    Raises:
        IntegrationError: the solver stopped before the last sample.
    """
    t_eval = sample_times(t_end, dt)
    if len(t_eval) == 1:
        # t_end < dt: only the initial sample
        return t_eval, np.array([[theta0, omega0]], dtype=np.float64)

    sol = _solve(params, [theta0, omega0], t_eval[-1], t_eval=t_eval)
    if not sol.success:
        raise IntegrationError(sol.message)
    return sol.t, sol.y.T  # shape: (n_samples, 2)


def kinetic_energy(v, params):
    """Kinetic energy 0.5*m*v^2 for the linear velocity v = l*omega."""
    return 0.5 * params.mass * v * v


def potential_energy(theta, params):
    """Potential energy measured from the lowest point of the sphere."""
    return params.mass * params.g * params.length * (1.0 - math.cos(theta))


def total_energy(state, params):
    """Compute total mechanical energy (T + V) for a single state."""
    theta, omega = state[0], state[1]
    v = params.length * omega
    return kinetic_energy(v, params) + potential_energy(theta, params)


def position(theta, params):
    """Convert an angle to Cartesian coordinates of the sphere centre.

    Returns (x, y) where y points upward from the pivot.
    """
    return params.length * math.sin(theta), -params.length * math.cos(theta)
