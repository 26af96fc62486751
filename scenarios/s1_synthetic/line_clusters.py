# scenarios/s1_synthetic/line_clusters.py
from __future__ import annotations

from dataclasses import dataclass, field

from grid.line_sample import LineSample
from grid.node_sample import NodeSample
from utils.pmu.phasor import Phasor


@dataclass(frozen=True)
class NodeProfile:
    """Average voltage and currents of one node in one line state."""

    voltage: Phasor
    currents: tuple[Phasor, ...]


@dataclass(frozen=True)
class ClusterConfig:
    """Two-node line (1 -- 2) with a ground branch at each end."""

    node1: int = 1
    node2: int = 2
    node1_destinations: tuple[int, ...] = (0, 2)
    node2_destinations: tuple[int, ...] = (1, 0)
    node1_working: NodeProfile = field(
        default_factory=lambda: NodeProfile(
            Phasor(250_000, 15), (Phasor(25, 165), Phasor(25, -15))
        )
    )
    node1_not_working: NodeProfile = field(
        default_factory=lambda: NodeProfile(
            Phasor(50_000, -150), (Phasor(250, -70), Phasor(250, 110))
        )
    )
    node2_working: NodeProfile = field(
        default_factory=lambda: NodeProfile(
            Phasor(250_000, 15), (Phasor(25, -15), Phasor(25, 165))
        )
    )
    node2_not_working: NodeProfile = field(
        default_factory=lambda: NodeProfile(
            Phasor(75_000, -120), (Phasor(250, 70), Phasor(250, -110))
        )
    )


# Module-level default (OK for B008)
DEFAULT_CLUSTER_CFG = ClusterConfig()


def _node(
    number: int, profile: NodeProfile, destinations: tuple[int, ...], scale: float
) -> NodeSample:
    currents = [(c * scale, d) for c, d in zip(profile.currents, destinations)]
    return NodeSample.from_phasors(number, profile.voltage * scale, currents)


def _spread(index: int, count: int) -> float:
    # 0.9 .. just under 1.1
    return 0.9 + 0.2 * index / count


def make_line_clusters(
    n_working: int = 6,
    n_not_working: int = 4,
    cfg: ClusterConfig | None = None,
) -> tuple[list[LineSample], LineSample]:
    """
    Labeled samples of one line, clustered around a working and a
    not-working average, plus a query built from the working average.

    Returns
    -------
    known : list[LineSample]
        ``n_working`` working samples followed by ``n_not_working`` failed ones.
    query : LineSample
        The working average, labeled working.
    """
    cfg = DEFAULT_CLUSTER_CFG if cfg is None else cfg
    if n_working < 0 or n_not_working < 0:
        raise ValueError("sample counts must be >= 0")

    known: list[LineSample] = []
    for i in range(n_working):
        s = _spread(i, n_working)
        known.append(
            LineSample.build(
                _node(cfg.node1, cfg.node1_working, cfg.node1_destinations, s),
                _node(cfg.node2, cfg.node2_working, cfg.node2_destinations, s),
                True,
            )
        )
    for i in range(n_not_working):
        s = _spread(i, n_not_working)
        known.append(
            LineSample.build(
                _node(cfg.node1, cfg.node1_not_working, cfg.node1_destinations, s),
                _node(cfg.node2, cfg.node2_not_working, cfg.node2_destinations, s),
                False,
            )
        )

    query = LineSample.build(
        _node(cfg.node1, cfg.node1_working, cfg.node1_destinations, 1.0),
        _node(cfg.node2, cfg.node2_working, cfg.node2_destinations, 1.0),
        True,
    )
    return known, query
