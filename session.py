"""Pendulum session: the operations a frontend drives frame by frame.

A session owns one parameter set and one simulation state. Frontends
create their own session object and call into it; nothing is global.
Velocities at this boundary are linear (v = l * omega); the state stores
the angular velocity.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass

import approximation
from simulation import (
    PendulumParams, kinetic_energy, potential_energy, simulate, step,
)
from sinks import CsvFileSink, SampleSink

logger = logging.getLogger(__name__)


@dataclass
class SimulationState:
    """Mutable state of one pendulum.

    ``elapsed_time`` drives only the analytic approximation; the
    interactive advance leaves it alone.
    """

    theta: float = 0.0
    omega: float = 0.0
    theta0: float = 0.0
    elapsed_time: float = 0.0


class PendulumSession:
    """A single simulation session (parameters + state)."""

    def __init__(self, length=1.0, radius=0.05, theta0=0.0):
        self.initialize(length, radius, theta0)

    def initialize(self, length, radius, theta0):
        """(Re)create parameters and state, discarding the previous ones.

        Raises ValueError for non-positive length or radius; the previous
        session contents are kept in that case.
        """
        params = PendulumParams(length=float(length), radius=float(radius))
        self.params = params
        self.state = SimulationState(
            theta=float(theta0), omega=0.0, theta0=float(theta0),
        )
        logger.info(
            "Session initialized: l=%.4f m, r=%.4f m, theta0=%.6f rad, m=%.6f kg",
            params.length, params.radius, theta0, params.mass,
        )

    def copy(self) -> PendulumSession:
        """Return an independent session with the same parameters and state."""
        return copy.deepcopy(self)

    # -- Integration --

    def advance(self, dt) -> float:
        """Integrate the equation of motion over dt; returns the new angle."""
        s = self.state
        s.theta, s.omega = (float(x) for x in step(self.params, [s.theta, s.omega], dt))
        return s.theta

    def run(self, sample_interval, total_time, sink: SampleSink) -> int:
        """Integrate to total_time, sending one sample per interval to sink.

        Each sample is (t, integrated theta, approximate theta). The
        approximation is evaluated at the elapsed time counter plus t;
        afterwards the counter and the state sit at the last sample.

        Returns the number of samples written.
        """
        s = self.state
        t, states = simulate(
            self.params, s.theta, s.omega, total_time, sample_interval,
        )
        t_start = s.elapsed_time
        p = self.params
        for ti, (theta, _) in zip(t, states):
            theta_approx = approximation.approx_theta(
                t_start + ti, s.theta0, p.gamma, p.omega0_2,
            )
            sink.write(float(ti), float(theta), theta_approx)

        s.theta, s.omega = float(states[-1, 0]), float(states[-1, 1])
        s.elapsed_time = t_start + float(t[-1])
        logger.info(
            "Batch run complete: %d samples, dt=%g s, T=%g s",
            len(t), sample_interval, total_time,
        )
        return len(t)

    def run_to_file(self, sample_interval, path, total_time) -> int:
        """Batch run written to a text file (truncated first).

        The file is opened before integrating so an unwritable path fails
        immediately. OSError and IntegrationError propagate; the file is
        closed in both cases.
        """
        with CsvFileSink(path) as sink:
            return self.run(sample_interval, total_time, sink)

    # -- State accessors --

    def get_angle(self) -> float:
        return self.state.theta

    def set_angle(self, theta) -> None:
        self.state.theta = float(theta)

    def get_velocity(self) -> float:
        """Linear velocity of the sphere, v = l * omega."""
        return self.params.length * self.state.omega

    def set_velocity(self, v) -> None:
        self.state.omega = float(v) / self.params.length

    def get_initial_angle(self) -> float:
        return self.state.theta0

    def set_initial_angle(self, theta0) -> None:
        self.state.theta0 = float(theta0)

    def get_elapsed_time(self) -> float:
        return self.state.elapsed_time

    def set_elapsed_time(self, t) -> None:
        self.state.elapsed_time = float(t)

    def advance_elapsed_time(self, dt) -> float:
        """Add dt to the elapsed time counter (per-frame clock)."""
        self.state.elapsed_time += float(dt)
        return self.state.elapsed_time

    def reset_elapsed_time(self) -> None:
        self.state.elapsed_time = 0.0

    def reset(self, theta) -> None:
        """Put the pendulum at rest at theta and restart the clock."""
        self.state.theta = float(theta)
        self.state.omega = 0.0
        self.state.elapsed_time = 0.0

    # -- Parameters --

    def set_fluid(self, fluid) -> None:
        self.params.set_fluid(fluid)

    def set_inertial_drag_enabled(self, enabled) -> None:
        self.params.inertial_drag = bool(enabled)
        logger.debug("Inertial drag %s", "enabled" if enabled else "disabled")

    # -- Analytic approximation --

    def approx_angle(self) -> float:
        p, s = self.params, self.state
        return approximation.approx_theta(s.elapsed_time, s.theta0, p.gamma, p.omega0_2)

    def approx_velocity(self) -> float:
        """Approximate linear velocity l * d(theta_approx)/dt."""
        p, s = self.params, self.state
        omega = approximation.approx_omega(s.elapsed_time, s.theta0, p.gamma, p.omega0_2)
        return p.length * omega

    # -- Energies --

    def kinetic_energy(self, v) -> float:
        return kinetic_energy(v, self.params)

    def potential_energy(self, theta) -> float:
        return potential_energy(theta, self.params)

    def total_energy(self) -> float:
        return self.kinetic_energy(self.get_velocity()) + self.potential_energy(self.state.theta)

    def total_energy_approx(self) -> float:
        return self.kinetic_energy(self.approx_velocity()) + self.potential_energy(self.approx_angle())

