# tests/test_rms_ascent.py
import math

import pytest

from estimators.basic.rms_ascent import RmsAscent, rms
from evaluation.metrics import percent_error
from grid.parameter import Parameter
from scenarios.s1_synthetic.make_clean import make_clean, to_measurements
from utils.pmu.measurement import InstantaneousMeasurement
from utils.pmu.phasor import Phasor, PhasorStatus


def test_reference_phasor_is_recovered() -> None:
    reference = Phasor(120, 30)
    t, sig = make_clean(reference, f0=60.0, duration=1.0, fs=32000)
    assert sig.size == 32000

    param = Parameter.from_samples(to_measurements(t, sig), "V1", "V", 1, 0)

    assert param.n_samples == 32000
    assert param.phasor.rms == pytest.approx(120.0, rel=1e-3)
    assert param.phasor.angle_deg == pytest.approx(30.0, abs=0.1)
    assert percent_error(reference, param.phasor) < 0.5


@pytest.mark.parametrize("angle", [-150.0, -100.0, -30.0, 0.0, 45.0, 90.0, 120.0, 170.0])
def test_every_quadrant(angle: float) -> None:
    t, sig = make_clean(Phasor(10.0, angle), f0=60.0, duration=0.5, fs=32000)
    est = RmsAscent().estimate(to_measurements(t, sig))
    assert est.rms == pytest.approx(10.0, rel=1e-3)
    assert est.angle_deg == pytest.approx(angle, abs=0.5)


def test_crest_is_clamped_to_ninety() -> None:
    # first sample above sqrt(2) * rms of the window
    values = [3.0, 0.0, 0.0]
    assert rms(values) == pytest.approx(math.sqrt(3.0))
    samples = [InstantaneousMeasurement(float(i), x) for i, x in enumerate(values)]
    assert RmsAscent().estimate(samples).angle_deg == 90.0

    samples = [InstantaneousMeasurement(float(i), -x) for i, x in enumerate(values)]
    assert RmsAscent().estimate(samples).angle_deg == -90.0


@pytest.mark.parametrize("n", [0, 1])
def test_insufficient_samples(n: int) -> None:
    samples = [InstantaneousMeasurement(0.0, 5.0)][:n]
    est = RmsAscent()
    p = est.estimate(samples)
    assert p == Phasor(0.0, 0.0)
    assert p.status & PhasorStatus.INSUFFICIENT_SAMPLES
    assert est.memory["last_status"] == PhasorStatus.INSUFFICIENT_SAMPLES


def test_flat_window_is_zero_phasor() -> None:
    samples = [InstantaneousMeasurement(i / 100, 0.0) for i in range(10)]
    p = RmsAscent().estimate(samples)
    assert p.rms == 0.0
    assert p.angle_deg == 0.0


def test_config_and_input_checks() -> None:
    with pytest.raises(ValueError):
        RmsAscent(config={"min_samples": 1})

    with pytest.raises(TypeError):
        RmsAscent().estimate([0.0, 1.0])  # type: ignore[list-item]

    bad = [InstantaneousMeasurement(0.0, 1.0), InstantaneousMeasurement(1.0, math.nan)]
    with pytest.raises(ValueError):
        RmsAscent(config={"validate": True}).estimate(bad)

    short = [InstantaneousMeasurement(i, float(i)) for i in range(3)]
    p = RmsAscent(config={"min_samples": 4}).estimate(short)
    assert p.status & PhasorStatus.INSUFFICIENT_SAMPLES
