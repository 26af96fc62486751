# tests/test_phasor.py
import logging
import math

import numpy as np
import pytest

from utils.pmu.phasor import Phasor, PhasorStatus, wrap_degrees


@pytest.mark.parametrize("rms", [0.5, 1.0, 120.0, 250_000.0])
@pytest.mark.parametrize("angle", [-179.5, -90.0, -15.0, 0.0, 30.0, 90.0, 180.0])
def test_polar_cartesian_round_trip(rms: float, angle: float) -> None:
    p = Phasor(rms, angle)
    q = Phasor.from_cartesian(p.real, p.imag)
    assert q.rms == pytest.approx(rms, rel=1e-12)
    assert q.angle_deg == pytest.approx(angle, abs=1e-9)
    assert q.real == pytest.approx(p.real, rel=1e-9, abs=1e-9 * rms)
    assert q.imag == pytest.approx(p.imag, rel=1e-9, abs=1e-9 * rms)


def test_cartesian_axes_and_zero() -> None:
    assert Phasor.from_cartesian(0.0, 0.0).angle_deg == 0.0
    assert Phasor.from_cartesian(0.0, 3.0).angle_deg == 90.0
    assert Phasor.from_cartesian(0.0, -3.0).angle_deg == -90.0
    assert Phasor.from_cartesian(-2.0, 0.0).angle_deg == 180.0
    assert Phasor.from_cartesian(-1.0, -1.0).angle_deg == pytest.approx(-135.0)
    assert complex(Phasor.from_complex(3 + 4j)) == pytest.approx(3 + 4j)


def test_angle_is_wrapped_on_construction() -> None:
    assert Phasor(1.0, 360.0) == Phasor(1.0, 0.0)
    assert Phasor(1.0, -180.0).angle_deg == 180.0
    assert Phasor(1.0, 540.0).angle_deg == 180.0
    with pytest.raises(ValueError):
        wrap_degrees(math.inf)


def test_huge_angles_are_wrapped() -> None:
    assert -180.0 < Phasor(1.0, 1e17).angle_deg <= 180.0
    assert -180.0 < wrap_degrees(-1e300) <= 180.0
    assert wrap_degrees(720.0 * 1e6 + 90.0) == pytest.approx(90.0)
    p = Phasor(1.0, 100.0) ** 1e17
    assert p.rms == 1.0
    assert -180.0 < p.angle_deg <= 180.0


def test_add_and_subtract() -> None:
    s = Phasor(1.0, 0.0) + Phasor(1.0, 90.0)
    assert s.rms == pytest.approx(math.sqrt(2.0))
    assert s.angle_deg == pytest.approx(45.0)

    d = Phasor(25.0, 15.0) - Phasor(25.0, 15.0)
    assert d.rms == 0.0
    assert d.angle_deg == 0.0

    # opposite phasors of equal size are a full diameter apart
    assert (Phasor(1.0, 15.0) - Phasor(1.0, -165.0)).rms == pytest.approx(2.0)


def test_multiply_divide_keep_angle_in_range() -> None:
    assert (Phasor(1.0, 170.0) * Phasor(2.0, 20.0)).angle_deg == pytest.approx(-170.0)
    assert (Phasor(1.0, -170.0) / Phasor(1.0, 20.0)).angle_deg == pytest.approx(170.0)

    rng = np.random.default_rng(7)
    for _ in range(200):
        a = Phasor(rng.uniform(0.1, 10.0), rng.uniform(-179.9, 180.0))
        b = Phasor(rng.uniform(0.1, 10.0), rng.uniform(-179.9, 180.0))
        for r in (a * b, a / b):
            assert -180.0 < r.angle_deg <= 180.0
        assert (a * b).rms == pytest.approx(a.rms * b.rms)
        assert (a / b).rms == pytest.approx(a.rms / b.rms)


def test_scalars_act_as_real_phasors() -> None:
    p = Phasor(25.0, 15.0) * 0.9
    assert p.rms == pytest.approx(22.5)
    assert p.angle_deg == pytest.approx(15.0)
    assert (2 * Phasor(1.0, 30.0)).rms == pytest.approx(2.0)
    assert (Phasor(50.0, -30.0) / 25).rms == pytest.approx(2.0)


def test_divide_by_zero_returns_flagged_zero(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        q = Phasor(5.0, 30.0) / Phasor(0.0, 45.0)
    assert q == Phasor(0.0, 0.0)
    assert q.angle_deg == 0.0
    assert q.status & PhasorStatus.DIVISION_BY_ZERO
    assert "Divisor phasor is 0" in caplog.text


def test_zero_to_non_positive_power_is_flagged() -> None:
    for p in (0.0, -1.0, -2.5):
        r = Phasor(0.0, 0.0) ** p
        assert r.rms == 0.0
        assert r.angle_deg == 0.0
        assert r.status & PhasorStatus.INVALID_POWER

    ok = Phasor(0.0, 0.0) ** 2
    assert ok.rms == 0.0
    assert ok.status == PhasorStatus.OK


def test_power() -> None:
    r = Phasor(2.0, 100.0) ** 2
    assert r.rms == pytest.approx(4.0)
    assert r.angle_deg == pytest.approx(-160.0)
    root = Phasor(9.0, 60.0) ** 0.5
    assert root.rms == pytest.approx(3.0)
    assert root.angle_deg == pytest.approx(30.0)
    # negative magnitude: integer powers stay real, fractional ones have no phasor
    assert (Phasor(-2.0, 0.0) ** 2).rms == pytest.approx(4.0)
    with pytest.raises(ValueError):
        Phasor(-4.0, 0.0) ** 0.5


def test_status_propagates_through_arithmetic() -> None:
    bad = Phasor(1.0, 0.0) / Phasor()
    assert (bad + Phasor(1.0, 0.0)).status & PhasorStatus.DIVISION_BY_ZERO
    assert (Phasor(1.0, 0.0) * bad).status & PhasorStatus.DIVISION_BY_ZERO
    assert (Phasor(1.0, 0.0) + Phasor(2.0, 0.0)).status == PhasorStatus.OK


def test_string_form() -> None:
    assert str(Phasor(120, 30)) == "120.000000 @ 30.000000deg"
    assert abs(Phasor(120, 30)) == 120.0
