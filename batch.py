"""Batch runner: integrate one pendulum and dump the samples to a file.

Usage:
    python batch.py --theta0 1.047197551 --dt 0.001 --t-end 30 --output deg_60.csv

Each output line is ``t, theta, theta_approx`` (see sinks.LINE_FORMAT).
"""

from __future__ import annotations

import argparse
import logging
import sys
import time

from session import PendulumSession
from simulation import Fluid, IntegrationError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Integrate a damped pendulum and save theta(t) to a file.",
    )
    parser.add_argument("--length", type=float, default=1.0,
                        help="Arm length in m (default: 1.0)")
    parser.add_argument("--radius", type=float, default=0.05,
                        help="Sphere radius in m (default: 0.05)")
    parser.add_argument("--theta0", type=float, default=1.047197551,
                        help="Initial angle in rad (default: 60 degrees)")
    parser.add_argument("--dt", type=float, default=0.001,
                        help="Sample interval in s (default: 0.001)")
    parser.add_argument("--t-end", type=float, default=30.0,
                        help="Total simulated time in s (default: 30.0)")
    parser.add_argument("--fluid", choices=[f.name.lower() for f in Fluid],
                        default="air", help="Surrounding fluid (default: air)")
    parser.add_argument("--inertial-drag", action="store_true",
                        help="Include form drag above the Reynolds threshold")
    parser.add_argument("--output", type=str, default="deg_60.csv",
                        help="Output path (default: deg_60.csv)")
    return parser


def main(argv=None) -> int:
    """CLI entry point for batch runs. Returns the process exit code."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        session = PendulumSession(args.length, args.radius, args.theta0)
    except ValueError as exc:
        logger.error("Invalid geometry: %s", exc)
        return 2

    session.set_fluid(Fluid[args.fluid.upper()])
    session.set_inertial_drag_enabled(args.inertial_drag)

    t0 = time.monotonic()
    try:
        n = session.run_to_file(args.dt, args.output, args.t_end)
    except (OSError, ValueError, IntegrationError) as exc:
        logger.error("Batch run failed: %s", exc)
        return 1

    logger.info(
        "Saved %d samples to %s in %.1f s", n, args.output, time.monotonic() - t0,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
