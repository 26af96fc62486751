# utils/pmu/measurement.py
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray


# ---- Data carriers ----------------------------------------------------------
@dataclass(frozen=True, slots=True)
class InstantaneousMeasurement:
    """A voltage or current reading at an exact time."""

    timestamp: float  # seconds
    value: float  # base units (V or A)

    def validate(self) -> None:
        if not np.isfinite([self.timestamp, self.value]).all():
            raise ValueError("Non-finite value in instantaneous measurement.")


def measurement_values(samples: Sequence[InstantaneousMeasurement]) -> NDArray[np.float64]:
    """Sample values as a float array, in the given order."""
    return np.fromiter((m.value for m in samples), dtype=float, count=len(samples))
