# scenarios/s1_synthetic/make_clean.py
from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

from utils.pmu.measurement import InstantaneousMeasurement
from utils.pmu.phasor import Phasor


def make_clean(
    reference: Phasor,
    f0: float = 60.0,
    duration: float = 1.0,
    fs: int = 32000,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """
    Sample the sinusoid described by a reference phasor.

    Parameters
    ----------
    reference : Phasor
        RMS value and phase angle at t = 0.
    f0 : float
        Waveform frequency [Hz].
    duration : float
        Signal length [s].
    fs : int
        Sampling rate [Hz].

    Returns
    -------
    t : NDArray[np.float64]
        Sample timestamps [s].
    signal : NDArray[np.float64]
        A * sin(2*pi*f0*t + theta) with A = sqrt(2) * RMS.
    """
    if fs <= 0:
        raise ValueError("fs must be > 0")
    if duration < 0:
        raise ValueError("duration must be >= 0")

    n = int(float(fs) * float(duration))
    t: NDArray[np.float64] = np.arange(n, dtype=float) / float(fs)
    amplitude = math.sqrt(2.0) * reference.rms
    theta = math.radians(reference.angle_deg)
    signal: NDArray[np.float64] = (amplitude * np.sin(2.0 * np.pi * f0 * t + theta)).astype(
        np.float64, copy=False
    )
    return t, signal


def to_measurements(
    t: NDArray[np.float64], signal: NDArray[np.float64]
) -> list[InstantaneousMeasurement]:
    """Pair timestamps and values into measurement records."""
    t = np.asarray(t, dtype=float).ravel()
    signal = np.asarray(signal, dtype=float).ravel()
    if t.size != signal.size:
        raise ValueError("t and signal must have the same length")
    return [InstantaneousMeasurement(float(ts), float(x)) for ts, x in zip(t, signal)]
