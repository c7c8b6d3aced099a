"""Closed-form approximation of the damped pendulum trajectory.

    theta(t) = A(t) * cos(phi(t)),   A(t) = theta0 * exp(-gamma * t)
    phi(t)   = sqrt((omega0^2 - gamma^2) * (3 + cos(A(t)))) / 2 * t

The amplitude-dependent frequency corrects the small-angle result for
moderate initial displacements. Only Stokes damping is modelled; inertial
drag is ignored, so this is a reference curve rather than a substitute for
the integrated trajectory.
"""

import math


def _amplitude_and_phase(t, theta0, gamma, omega0_2):
    amplitude = theta0 * math.exp(-gamma * t)
    w = omega0_2 - gamma * gamma
    s = math.sqrt(w * (3.0 + math.cos(amplitude)))
    return amplitude, w, s


def approx_theta(t, theta0, gamma, omega0_2):
    """Approximate angle at elapsed time t."""
    amplitude, _, s = _amplitude_and_phase(t, theta0, gamma, omega0_2)
    return amplitude * math.cos(s / 2.0 * t)


def approx_omega(t, theta0, gamma, omega0_2):
    """Time derivative of approx_theta.

    d/dt [A cos(phi)] = -gamma * A * cos(phi) - A * sin(phi) * dphi/dt
    with dphi/dt = s/2 + t/2 * ds/dt and
         ds/dt   = gamma * A * w * sin(A) / (2 s).
    """
    amplitude, w, s = _amplitude_and_phase(t, theta0, gamma, omega0_2)
    phase = s / 2.0 * t
    ds_dt = gamma * amplitude * w * math.sin(amplitude) / (2.0 * s)
    dphase_dt = s / 2.0 + t / 2.0 * ds_dt
    return (
        -gamma * amplitude * math.cos(phase)
        - amplitude * math.sin(phase) * dphase_dt
    )
