# grid/line_sample.py
from __future__ import annotations

from dataclasses import dataclass, field

from .node_sample import NodeSample
from .parameter import Parameter

__all__ = ["LineSampleError", "LineCurrentNotFoundError", "LineSample"]


class LineSampleError(ValueError):
    """A line sample could not be built from the given node pair."""


class LineCurrentNotFoundError(LineSampleError):
    def __init__(self, from_node: int, to_node: int) -> None:
        super().__init__(f"Unable to find a current in node {from_node} going to node {to_node}")
        self.from_node = from_node
        self.to_node = to_node


def _split_line_current(
    node: NodeSample, peer_number: int
) -> tuple[Parameter, tuple[Parameter, ...]]:
    """First current towards ``peer_number`` and every other current, order preserved."""
    for idx, current in enumerate(node.currents):
        if current.destination_node == peer_number:
            return current, node.currents[:idx] + node.currents[idx + 1 :]
    raise LineCurrentNotFoundError(node.node_number, peer_number)


@dataclass(frozen=True, slots=True)
class LineSample:
    """
    Normalized view of one line sampled at both of its end nodes.

    Build it with ``LineSample.build``; the node samples are shared read-only
    and the normalized parameters keep the addressing of the originals.
    """

    node1: NodeSample = field(repr=False)
    node2: NodeSample = field(repr=False)
    is_working: bool
    node1_line_current: Parameter
    node2_line_current: Parameter
    node1_voltage: Parameter
    node2_voltage: Parameter
    node1_other_currents: tuple[Parameter, ...]
    node2_other_currents: tuple[Parameter, ...]

    @classmethod
    def build(cls, node1: NodeSample, node2: NodeSample, is_working: bool) -> LineSample:
        """
        Pair two node samples into a line sample.

        Raises
        ------
        LineCurrentNotFoundError
            If either node has no current addressed to the other one.
        LineSampleError
            If both samples belong to the same node.
        """
        if node1.node_number == node2.node_number:
            raise LineSampleError(f"Both samples belong to node {node1.node_number}")

        line1, others1 = _split_line_current(node1, node2.node_number)
        line2, others2 = _split_line_current(node2, node1.node_number)

        i_rated1 = node1.ratings.current
        i_rated2 = node2.ratings.current
        return cls(
            node1=node1,
            node2=node2,
            is_working=bool(is_working),
            node1_line_current=line1.normalized(i_rated1),
            node2_line_current=line2.normalized(i_rated2),
            node1_voltage=node1.voltage.normalized(node1.ratings.voltage),
            node2_voltage=node2.voltage.normalized(node2.ratings.voltage),
            node1_other_currents=tuple(c.normalized(i_rated1) for c in others1),
            node2_other_currents=tuple(c.normalized(i_rated2) for c in others2),
        )

    def topology(self) -> tuple[object, ...]:
        """Addressing of every feature, in comparison order."""
        return (
            self.node1_line_current.identity,
            self.node2_line_current.identity,
            self.node1_voltage.start_node,
            self.node2_voltage.start_node,
            tuple(c.identity for c in self.node1_other_currents),
            tuple(c.identity for c in self.node2_other_currents),
        )

    def describe(self) -> str:
        parts = [
            "Node 1:",
            self.node1.describe(),
            "Node 2:",
            self.node2.describe(),
            f"Line status: {int(self.is_working)}",
            "Node 1 Normalized Line Current:",
            self.node1_line_current.describe(),
            "Node 2 Normalized Line Current:",
            self.node2_line_current.describe(),
            "Node 1 Normalized Node Voltage:",
            self.node1_voltage.describe(),
            "Node 2 Normalized Node Voltage:",
            self.node2_voltage.describe(),
            "Node 1 Normalized Other Currents:",
            *(c.describe() for c in self.node1_other_currents),
            "Node 2 Normalized Other Currents:",
            *(c.describe() for c in self.node2_other_currents),
        ]
        return "\n".join(parts)
