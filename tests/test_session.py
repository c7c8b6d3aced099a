"""Tests for session.py: boundary operations driven by a frontend."""

import math

import numpy as np
import pytest

from session import PendulumSession
from simulation import Fluid, IntegrationError
from sinks import MemorySink


THETA_60 = 1.047197551


@pytest.fixture
def session():
    return PendulumSession(1.0, 0.05, THETA_60)


class TestInitialize:

    def test_starts_at_rest_at_theta0(self, session):
        assert session.get_angle() == THETA_60
        assert session.get_velocity() == 0.0
        assert session.get_initial_angle() == THETA_60
        assert session.get_elapsed_time() == 0.0

    def test_reinitialize_discards_previous_state(self, session):
        session.advance(0.3)
        session.set_fluid(Fluid.WATER)
        session.set_elapsed_time(4.0)
        session.initialize(2.0, 0.02, 0.1)
        assert session.get_angle() == 0.1
        assert session.get_velocity() == 0.0
        assert session.get_elapsed_time() == 0.0
        assert session.params.fluid is Fluid.AIR
        assert session.params.length == 2.0

    @pytest.mark.parametrize("length, radius", [(0.0, 0.05), (1.0, -0.05)])
    def test_degenerate_geometry_keeps_previous_session(self, session, length, radius):
        params = session.params
        with pytest.raises(ValueError):
            session.initialize(length, radius, 0.2)
        assert session.params is params
        assert session.get_angle() == THETA_60


class TestAccessors:

    def test_angle_round_trip(self, session):
        session.set_angle(-0.75)
        assert session.get_angle() == -0.75

    def test_velocity_round_trip(self):
        session = PendulumSession(1.3, 0.05, 0.0)
        session.set_velocity(0.9)
        assert session.get_velocity() == pytest.approx(0.9, rel=1e-15)
        assert session.state.omega == pytest.approx(0.9 / 1.3)

    def test_initial_angle_round_trip(self, session):
        session.set_initial_angle(0.25)
        assert session.get_initial_angle() == 0.25
        assert session.get_angle() == THETA_60

    def test_elapsed_time(self, session):
        session.set_elapsed_time(2.5)
        assert session.get_elapsed_time() == 2.5
        session.advance_elapsed_time(0.5)
        assert session.get_elapsed_time() == 3.0
        session.reset_elapsed_time()
        assert session.get_elapsed_time() == 0.0

    def test_reset_elapsed_time_leaves_state(self, session):
        session.advance(0.2)
        theta, v = session.get_angle(), session.get_velocity()
        session.reset_elapsed_time()
        assert session.get_angle() == theta
        assert session.get_velocity() == v

    def test_reset_puts_pendulum_at_rest(self, session):
        session.advance(0.4)
        session.advance_elapsed_time(0.4)
        session.reset(0.5)
        assert session.get_angle() == 0.5
        assert session.get_velocity() == 0.0
        assert session.get_elapsed_time() == 0.0

    def test_undefined_fluid_rejected(self, session):
        with pytest.raises(ValueError):
            session.set_fluid(7)

    def test_fluid_round_trip(self, session):
        original = session.params.fluid_properties()
        session.set_fluid(Fluid.WATER)
        session.set_fluid(Fluid.AIR)
        assert session.params.fluid_properties() == original

    def test_inertial_drag_toggle(self, session):
        session.set_inertial_drag_enabled(True)
        assert session.params.inertial_drag is True
        session.set_inertial_drag_enabled(False)
        assert session.params.inertial_drag is False


class TestAdvance:

    def test_returns_new_angle(self, session):
        theta = session.advance(0.1)
        assert theta == session.get_angle()
        assert theta < THETA_60
        assert session.get_velocity() < 0

    def test_does_not_touch_elapsed_time(self, session):
        session.advance(0.1)
        session.advance(0.1)
        assert session.get_elapsed_time() == 0.0

    def test_energy_conserved_without_drag(self, session):
        session.params.viscosity = 0.0
        e0 = session.total_energy()
        for _ in range(200):
            session.advance(0.016)
        assert session.total_energy() == pytest.approx(e0, rel=1e-10)

    def test_energy_dissipated_with_drag(self, session):
        session.set_fluid(Fluid.WATER)
        session.set_inertial_drag_enabled(True)
        e0 = session.total_energy()
        for _ in range(60):
            session.advance(0.05)
        assert session.total_energy() < e0

    def test_non_positive_dt_rejected(self, session):
        with pytest.raises(ValueError):
            session.advance(0.0)


class TestApproximation:

    def test_at_time_zero(self, session):
        assert session.approx_angle() == THETA_60
        assert session.approx_velocity() == pytest.approx(
            -session.params.gamma * THETA_60 * session.params.length
        )

    def test_driven_by_elapsed_time_only(self, session):
        session.advance(0.5)
        assert session.approx_angle() == THETA_60
        session.advance_elapsed_time(0.5)
        assert session.approx_angle() != THETA_60

    def test_uses_initial_angle(self, session):
        session.set_initial_angle(0.2)
        assert session.approx_angle() == 0.2

    def test_total_energy_approx_near_initial_energy(self, session):
        e0 = session.total_energy()
        session.set_elapsed_time(0.0)
        assert session.total_energy_approx() == pytest.approx(e0, rel=1e-6)

    def test_gamma_frozen_after_fluid_change(self, session):
        session.set_elapsed_time(3.0)
        before = session.approx_angle()
        session.set_fluid(Fluid.WATER)
        assert session.approx_angle() == before


class TestEnergyAccessors:

    def test_kinetic_energy(self, session):
        assert session.kinetic_energy(1.0) == pytest.approx(0.5 * session.params.mass)

    def test_potential_energy(self, session):
        expected = session.params.mass * 9.80665 * 1.0 * (1 - math.cos(0.3))
        assert session.potential_energy(0.3) == pytest.approx(expected)

    def test_total_energy_at_rest_is_potential(self, session):
        assert session.total_energy() == pytest.approx(session.potential_energy(THETA_60))


class TestRun:

    def test_sample_count_and_layout(self, session):
        sink = MemorySink()
        n = session.run(0.01, 1.0, sink)
        assert n == 101
        assert len(sink) == 101
        assert sink.t[0] == 0.0
        assert sink.t[-1] == pytest.approx(1.0)
        assert sink.theta[0] == THETA_60
        assert sink.theta_approx[0] == THETA_60

    def test_state_and_clock_end_at_last_sample(self, session):
        sink = MemorySink()
        session.run(0.01, 0.5, sink)
        assert session.get_angle() == pytest.approx(sink.theta[-1])
        assert session.get_elapsed_time() == pytest.approx(0.5)

    def test_continues_from_current_state(self, session):
        first, second = MemorySink(), MemorySink()
        session.run(0.01, 0.5, first)
        session.run(0.01, 0.5, second)
        assert second.theta[0] == pytest.approx(first.theta[-1])
        # the approximation keeps counting from the elapsed time
        other = PendulumSession(1.0, 0.05, THETA_60)
        whole = MemorySink()
        other.run(0.01, 1.0, whole)
        assert second.theta_approx[-1] == pytest.approx(whole.theta_approx[-1])
        assert second.theta[-1] == pytest.approx(whole.theta[-1], abs=1e-9)

    def test_samples_stay_within_total_time(self, session):
        sink = MemorySink()
        n = session.run(0.6, 1.0, sink)
        assert n == 2
        np.testing.assert_allclose(sink.t, [0.0, 0.6])
        assert session.get_elapsed_time() == pytest.approx(0.6)

    def test_total_time_below_interval_writes_initial_sample(self, session):
        sink = MemorySink()
        n = session.run(0.01, 0.004, sink)
        assert n == 1
        assert sink.t[0] == 0.0
        assert sink.theta[0] == THETA_60
        assert session.get_angle() == THETA_60
        assert session.get_elapsed_time() == 0.0

    def test_failure_leaves_state_untouched(self, session, monkeypatch):
        import session as session_module

        def failing_simulate(*args, **kwargs):
            raise IntegrationError("step size underflow")

        monkeypatch.setattr(session_module, "simulate", failing_simulate)
        with pytest.raises(IntegrationError):
            session.run(0.01, 1.0, MemorySink())
        assert session.get_angle() == THETA_60
        assert session.get_elapsed_time() == 0.0

    def test_copy_is_independent(self, session):
        clone = session.copy()
        clone.run(0.01, 0.5, MemorySink())
        clone.set_fluid(Fluid.WATER)
        assert session.get_angle() == THETA_60
        assert session.params.fluid is Fluid.AIR


class TestRunToFile:

    def test_line_format(self, session, tmp_path):
        path = tmp_path / "out.csv"
        session.run_to_file(0.1, path, 1.0)
        lines = path.read_text().splitlines()
        assert len(lines) == 11
        assert lines[0] == "0.000, 1.047197551000000, 1.047197551000000"
        t, theta, approx = lines[5].split(", ")
        assert t == "0.500"
        assert len(theta.split(".")[1]) == 15
        assert len(approx.split(".")[1]) == 15

    def test_file_truncated_on_each_run(self, session, tmp_path):
        path = tmp_path / "out.csv"
        path.write_text("stale\n" * 1000)
        session.run_to_file(0.1, path, 0.5)
        assert len(path.read_text().splitlines()) == 6

    def test_unwritable_path_raises(self, session, tmp_path):
        with pytest.raises(OSError):
            session.run_to_file(0.1, tmp_path / "missing" / "out.csv", 1.0)
        assert session.get_angle() == THETA_60

    def test_sixty_degree_scenario(self, session, tmp_path):
        path = tmp_path / "deg_60.csv"
        n = session.run_to_file(0.001, path, 30.0)
        lines = path.read_text().splitlines()
        assert n == len(lines) == 30001
        assert lines[0].startswith("0.000, 1.047197551")
        assert lines[-1].startswith("30.000, ")

        data = np.array([[float(x) for x in line.split(", ")] for line in lines])
        theta = data[:, 1]
        early = np.max(np.abs(theta[:2000]))
        late = np.max(np.abs(theta[-2000:]))
        assert late < early
        # the two curves drift apart as time goes on
        diff = np.abs(data[:, 1] - data[:, 2])
        assert np.max(diff[-2000:]) > np.max(diff[:200])
