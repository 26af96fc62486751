# grid/parameter.py
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace

from estimators.base import EstimatorBase
from estimators.basic.rms_ascent import RmsAscent
from utils.pmu.measurement import InstantaneousMeasurement
from utils.pmu.phasor import Phasor

GROUND = 0


@dataclass(frozen=True, slots=True)
class Parameter:
    """
    A quantity of interest on the grid, such as a node voltage or a line
    current, addressed by its start and destination node (0 is ground).
    """

    phasor: Phasor
    name: str = ""
    units: str = ""
    start_node: int = GROUND
    destination_node: int = GROUND
    n_samples: int = 0

    @classmethod
    def from_samples(
        cls,
        samples: Sequence[InstantaneousMeasurement],
        name: str = "",
        units: str = "",
        start_node: int = GROUND,
        destination_node: int = GROUND,
        estimator: EstimatorBase | None = None,
    ) -> Parameter:
        """Estimate the phasor from a raw window; the window itself is not kept."""
        est = estimator if estimator is not None else RmsAscent()
        return cls(
            phasor=est.estimate(samples),
            name=name,
            units=units,
            start_node=start_node,
            destination_node=destination_node,
            n_samples=len(samples),
        )

    @property
    def identity(self) -> tuple[int, int]:
        return self.start_node, self.destination_node

    def normalized(self, rating: float) -> Parameter:
        """Same identity, magnitude divided by ``rating`` (angle untouched)."""
        return replace(self, phasor=self.phasor / Phasor(float(rating), 0.0))

    def describe(self) -> str:
        return "\n".join(
            [
                f"Name: {self.name}",
                f"Number of samples: {self.n_samples}",
                f"Phasor: {self.phasor}{self.units}",
                f"Starting Node: {self.start_node}",
                f"Destination Node: {self.destination_node}",
            ]
        )
