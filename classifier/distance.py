# classifier/distance.py
from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from grid.line_sample import LineSample
from grid.parameter import Parameter

__all__ = [
    "DistanceWeights",
    "DEFAULT_WEIGHTS",
    "TopologyMismatchError",
    "are_samples_of_the_same_line",
    "calculate_distance",
    "DistanceSample",
]


@dataclass(frozen=True, slots=True)
class DistanceWeights:
    """Feature-group weights of the line distance."""

    line: float = 20.0  # both line currents
    node: float = 4.0  # both node voltages
    other: float = 1.0  # remaining currents at each node


# Module-level default (OK for B008)
DEFAULT_WEIGHTS = DistanceWeights()


class TopologyMismatchError(ValueError):
    """The known and query samples do not describe the same line."""


def are_samples_of_the_same_line(known: LineSample | None, query: LineSample | None) -> bool:
    """
    True when both samples address the same currents and voltages in the same
    positions. Labels and units are not compared.
    """
    if known is None or query is None:
        return False
    return known.topology() == query.topology()


def _squared_gap(a: Parameter, b: Parameter) -> float:
    # magnitude of the vector difference, so phase counts too
    return (a.phasor - b.phasor).rms ** 2


def _group_sum(known: Sequence[Parameter], query: Sequence[Parameter], weight: float) -> float:
    n = len(known)
    if n == 0:
        return 0.0
    pairs = zip(known, query, strict=True)
    return sum(weight / (2.0 * n) * _squared_gap(k, q) for k, q in pairs)


def calculate_distance(
    known: LineSample, query: LineSample, weights: DistanceWeights = DEFAULT_WEIGHTS
) -> float:
    """
    Weighted Euclidean distance between two samples of the same line.

    Each line end and each node counts half of its group weight; the other
    currents at a node share that node's half evenly. Assumes the topology was
    checked beforehand.
    """
    d2 = 0.0
    d2 += weights.line / 2.0 * _squared_gap(known.node1_line_current, query.node1_line_current)
    d2 += weights.line / 2.0 * _squared_gap(known.node2_line_current, query.node2_line_current)
    d2 += weights.node / 2.0 * _squared_gap(known.node1_voltage, query.node1_voltage)
    d2 += weights.node / 2.0 * _squared_gap(known.node2_voltage, query.node2_voltage)
    d2 += _group_sum(known.node1_other_currents, query.node1_other_currents, weights.other)
    d2 += _group_sum(known.node2_other_currents, query.node2_other_currents, weights.other)
    return math.sqrt(d2)


@dataclass(frozen=True, slots=True)
class DistanceSample:
    """Distance of one labeled line sample from the query, with its label."""

    distance: float
    is_working: bool
    line: LineSample = field(repr=False, compare=False)
    weights: DistanceWeights = field(default=DEFAULT_WEIGHTS, repr=False, compare=False)

    @classmethod
    def between(
        cls,
        known: LineSample,
        query: LineSample,
        weights: DistanceWeights | None = None,
    ) -> DistanceSample:
        if not are_samples_of_the_same_line(known, query):
            raise TopologyMismatchError(
                "The known and query line samples are not samples of the same line."
            )
        w = DEFAULT_WEIGHTS if weights is None else weights
        return cls(calculate_distance(known, query, w), known.is_working, known, w)

    def describe(self) -> str:
        return "\n".join(
            [
                self.line.describe(),
                f"Wline = {self.weights.line:f}",
                f"Wnode = {self.weights.node:f}",
                f"Wother = {self.weights.other:f}",
                f"distance = {self.distance:f}",
                f"isWorking = {int(self.is_working)}",
            ]
        )
