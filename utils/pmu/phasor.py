# utils/pmu/phasor.py
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import IntFlag
from numbers import Real

__all__ = ["PhasorStatus", "Phasor", "wrap_degrees"]

logger = logging.getLogger(__name__)


class PhasorStatus(IntFlag):
    OK = 0x0000
    DIVISION_BY_ZERO = 0x0001
    INVALID_POWER = 0x0002
    INSUFFICIENT_SAMPLES = 0x0004


def wrap_degrees(angle_deg: float) -> float:
    """Bring an angle into (-180, 180] by whole turns."""
    angle = float(angle_deg)
    if not math.isfinite(angle):
        raise ValueError(f"phase angle must be finite, got {angle_deg!r}")
    if abs(angle) > 720.0:
        # one subtraction per turn would never finish on huge angles
        angle = math.remainder(angle, 360.0)
    while angle > 180.0:
        angle -= 360.0
    while angle <= -180.0:
        angle += 360.0
    return angle


def _polar_from_cartesian(real: float, imag: float) -> tuple[float, float]:
    rms = math.hypot(real, imag)
    if real == 0.0:
        # on the imaginary axis; atan(imag / real) is undefined here
        if imag < 0.0:
            return rms, -90.0
        if imag > 0.0:
            return rms, 90.0
        return rms, 0.0

    angle = math.degrees(math.atan(imag / real))
    if real < 0.0:
        # atan only covers Q1/Q4
        angle = angle + 180.0 if imag >= 0.0 else angle - 180.0
    return rms, angle


@dataclass(frozen=True, slots=True)
class Phasor:
    """
    Complex representation of a sinusoid: RMS value (base units) and phase
    angle in degrees, kept in (-180, 180].

    The Cartesian pair (``real``, ``imag``) is derived on construction, so both
    forms always agree. Arithmetic returns new phasors; recoverable conditions
    (zero divisor, zero base to a non-positive power) produce the zero phasor
    with the matching ``status`` flag set instead of raising.
    """

    rms: float = 0.0
    angle_deg: float = 0.0
    status: PhasorStatus = field(default=PhasorStatus.OK, compare=False)
    real: float = field(init=False, repr=False, compare=False)
    imag: float = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        rms = float(self.rms)
        angle = wrap_degrees(self.angle_deg)
        rad = math.radians(angle)
        object.__setattr__(self, "rms", rms)
        object.__setattr__(self, "angle_deg", angle)
        object.__setattr__(self, "real", rms * math.cos(rad))
        object.__setattr__(self, "imag", rms * math.sin(rad))

    # ---- Constructors -------------------------------------------------------
    @classmethod
    def from_cartesian(
        cls, real: float, imag: float, status: PhasorStatus = PhasorStatus.OK
    ) -> Phasor:
        rms, angle = _polar_from_cartesian(float(real), float(imag))
        return cls(rms, angle, status)

    @classmethod
    def from_complex(cls, value: complex) -> Phasor:
        return cls.from_cartesian(value.real, value.imag)

    # ---- Conversions ----------------------------------------------------------
    def __complex__(self) -> complex:
        return complex(self.real, self.imag)

    def __abs__(self) -> float:
        return self.rms

    def __str__(self) -> str:
        return f"{self.rms:.6f} @ {self.angle_deg:.6f}deg"

    @property
    def is_zero(self) -> bool:
        return self.rms == 0.0

    # ---- Arithmetic -----------------------------------------------------------
    def __add__(self, other: object) -> Phasor:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return Phasor.from_cartesian(
            self.real + rhs.real, self.imag + rhs.imag, self.status | rhs.status
        )

    __radd__ = __add__

    def __sub__(self, other: object) -> Phasor:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return Phasor.from_cartesian(
            self.real - rhs.real, self.imag - rhs.imag, self.status | rhs.status
        )

    def __rsub__(self, other: object) -> Phasor:
        lhs = _coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs - self

    def __mul__(self, other: object) -> Phasor:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        return Phasor(
            self.rms * rhs.rms, self.angle_deg + rhs.angle_deg, self.status | rhs.status
        )

    __rmul__ = __mul__

    def __truediv__(self, other: object) -> Phasor:
        rhs = _coerce(other)
        if rhs is None:
            return NotImplemented
        status = self.status | rhs.status
        if rhs.rms == 0.0:
            logger.warning("Divisor phasor is 0; returning the zero phasor.")
            return Phasor(0.0, 0.0, status | PhasorStatus.DIVISION_BY_ZERO)
        return Phasor(self.rms / rhs.rms, self.angle_deg - rhs.angle_deg, status)

    def __rtruediv__(self, other: object) -> Phasor:
        lhs = _coerce(other)
        if lhs is None:
            return NotImplemented
        return lhs / self

    def __pow__(self, power: float) -> Phasor:
        if not isinstance(power, Real):
            return NotImplemented
        p = float(power)
        if self.rms == 0.0 and p <= 0.0:
            logger.warning("Base is 0 and power is non-positive; returning the zero phasor.")
            return Phasor(0.0, 0.0, self.status | PhasorStatus.INVALID_POWER)
        if self.rms < 0.0 and not p.is_integer():
            raise ValueError(f"cannot raise negative magnitude {self.rms} to fractional power {p}")
        return Phasor(self.rms**p, self.angle_deg * p, self.status)


def _coerce(value: object) -> Phasor | None:
    """Real scalars act as phasors at 0 degrees."""
    if isinstance(value, Phasor):
        return value
    if isinstance(value, Real):
        return Phasor(float(value), 0.0)
    return None
