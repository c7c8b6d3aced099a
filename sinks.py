"""Sample sinks for batch runs.

A batch run hands every sample (t, integrated theta, approximate theta)
to a sink, keeping the integrator free of any I/O.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

import numpy as np

logger = logging.getLogger(__name__)

# One line per sample: time, integrated angle, approximate angle
LINE_FORMAT = "%.3f, %.15f, %.15f\n"


class SampleSink(Protocol):
    """Protocol for consumers of batch-run samples."""

    def write(self, t: float, theta: float, theta_approx: float) -> None:
        ...


class CsvFileSink:
    """Write samples to a text file, truncating it on open.

    Use as a context manager; the file is closed on exit even when the
    run raises. OSError from opening or writing propagates unchanged.
    """

    def __init__(self, path):
        self.path = Path(path)
        self._file = None
        self.n_written = 0

    def __enter__(self):
        self._file = self.path.open("w", encoding="ascii", newline="\n")
        self.n_written = 0
        return self

    def __exit__(self, exc_type, exc, tb):
        self._file.close()
        self._file = None
        if exc_type is None:
            logger.info("Wrote %d samples to %s", self.n_written, self.path)
        return False

    def write(self, t, theta, theta_approx):
        if self._file is None:
            raise RuntimeError("CsvFileSink used outside of a with-block")
        self._file.write(LINE_FORMAT % (t, theta, theta_approx))
        self.n_written += 1


class MemorySink:
    """Collect samples in memory, e.g. for plotting or tests."""

    def __init__(self):
        self._t = []
        self._theta = []
        self._theta_approx = []

    def __len__(self):
        return len(self._t)

    def write(self, t, theta, theta_approx):
        self._t.append(t)
        self._theta.append(theta)
        self._theta_approx.append(theta_approx)

    @property
    def t(self) -> np.ndarray:
        return np.asarray(self._t, dtype=np.float64)

    @property
    def theta(self) -> np.ndarray:
        return np.asarray(self._theta, dtype=np.float64)

    @property
    def theta_approx(self) -> np.ndarray:
        return np.asarray(self._theta_approx, dtype=np.float64)
