# grid/node_sample.py
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from utils.pmu.phasor import Phasor

from .parameter import GROUND, Parameter


@dataclass(frozen=True, slots=True)
class NodeRatings:
    """Per-node normalization divisors (base units)."""

    voltage: float = 250_000.0
    current: float = 25.0

    def __post_init__(self) -> None:
        if not self.voltage > 0.0:
            raise ValueError("rated voltage must be > 0")
        if not self.current > 0.0:
            raise ValueError("rated current must be > 0")


# Module-level default (OK for B008)
DEFAULT_RATINGS = NodeRatings()


@dataclass(frozen=True, slots=True)
class NodeSample:
    """
    One grid point over one sampling epoch: its voltage to ground and every
    current leaving it, each addressed to the peer node it flows towards.
    """

    node_number: int
    voltage: Parameter
    currents: tuple[Parameter, ...] = ()
    ratings: NodeRatings = DEFAULT_RATINGS

    def __post_init__(self) -> None:
        object.__setattr__(self, "currents", tuple(self.currents))
        if self.voltage.identity != (self.node_number, GROUND):
            raise ValueError(
                f"voltage of node {self.node_number} must run from the node to ground, "
                f"got {self.voltage.identity}"
            )
        for current in self.currents:
            if current.start_node != self.node_number:
                raise ValueError(
                    f"current {current.name!r} does not start at node {self.node_number}"
                )

    @classmethod
    def from_phasors(
        cls,
        node_number: int,
        voltage: Phasor,
        currents: Iterable[tuple[Phasor, int]] = (),
        ratings: NodeRatings | None = None,
    ) -> NodeSample:
        """Wrap raw phasors into named parameters ("V1", "I12", ...)."""
        v = Parameter(voltage, f"V{node_number}", "V", node_number, GROUND)
        i = tuple(
            Parameter(phasor, f"I{node_number}{dest}", "A", node_number, dest)
            for phasor, dest in currents
        )
        return cls(node_number, v, i, DEFAULT_RATINGS if ratings is None else ratings)

    def describe(self) -> str:
        lines = [f"Node {self.node_number}", f"{self.voltage.name} = {self.voltage.phasor}V"]
        lines += [f"{c.name} = {c.phasor}A" for c in self.currents]
        lines.append(f"Rated Voltage: {self.ratings.voltage:f}V")
        lines.append(f"Rated Current: {self.ratings.current:f}A")
        return "\n".join(lines)
