from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from typing import Any, Mapping

import numpy as np
from numpy.typing import NDArray

from estimators.base import EstimatorBase
from utils.pmu.measurement import InstantaneousMeasurement, measurement_values
from utils.pmu.phasor import Phasor, PhasorStatus

logger = logging.getLogger(__name__)


def rms(values: NDArray[np.float64]) -> float:
    """Root-mean-square of the window: sqrt(1/n * sum(x_i^2))."""
    x = np.asarray(values, dtype=float).ravel()
    if x.size == 0:
        return 0.0
    return float(np.sqrt(np.mean(x * x)))


def phase_angle_deg(values: NDArray[np.float64], rms_value: float) -> float:
    """
    Phase angle at t = 0 from the first two samples of a clean sinusoid.

    The first sample gives the arcsine of the normalized instantaneous value;
    whether the wave is rising or falling at t = 0 picks the quadrant.
    """
    x = np.asarray(values, dtype=float).ravel()
    peak = rms_value * math.sqrt(2.0)
    x0, x1 = float(x[0]), float(x[1])

    # At (or numerically past) the crest
    if x0 >= peak:
        return 90.0
    if x0 <= -peak:
        return -90.0

    arc = math.degrees(math.asin(x0 / peak))
    if x1 >= x0:  # ascending
        return arc
    if x0 >= 0.0:  # descending, Q2
        return 180.0 - arc
    return -180.0 - arc  # descending, Q3


class RmsAscent(EstimatorBase):
    """
    Single-window phasor estimator: RMS magnitude plus a phase angle read off
    the first sample and the direction of the wave.

    Only valid for a clean, single-frequency sinusoid sampled finely over whole
    cycles; it is not a DFT phasor estimator.

    Config keys (with defaults):
      - min_samples: int   (default 2) windows shorter than this are rejected
      - validate: bool     (default False) check every sample for finiteness
    """

    def __init__(
        self,
        config: Mapping[str, Any] | Any = None,
        name: str = "rms_ascent",
    ) -> None:
        super().__init__(config=config, name=name)

        self.min_samples: int = int(self._get("min_samples", 2))
        if self.min_samples < 2:
            raise ValueError("RmsAscent requires min_samples >= 2")
        self.validate: bool = bool(self._get("validate", False))

    def estimate(self, samples: Sequence[InstantaneousMeasurement]) -> Phasor:
        self._check_samples(samples)

        if len(samples) < self.min_samples:
            logger.warning(
                "Insufficient number of samples to calculate a phasor (%d < %d).",
                len(samples),
                self.min_samples,
            )
            self.memory["last_status"] = PhasorStatus.INSUFFICIENT_SAMPLES
            return Phasor(0.0, 0.0, PhasorStatus.INSUFFICIENT_SAMPLES)

        if self.validate:
            for m in samples:
                m.validate()

        values = measurement_values(samples)
        r = rms(values)
        if r == 0.0:
            # flat window; the arcsine is undefined
            logger.warning("Window RMS is 0; returning the zero phasor.")
            phasor = Phasor()
        else:
            phasor = Phasor(r, phase_angle_deg(values, r))

        self.memory["last_status"] = phasor.status
        self.memory["n_samples"] = len(samples)
        return phasor
