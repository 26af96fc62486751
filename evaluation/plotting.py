from __future__ import annotations

from collections.abc import Iterable, Sequence

import matplotlib.gridspec as gridspec
import matplotlib.pyplot as plt
import numpy as np
from brokenaxes import brokenaxes
from matplotlib.figure import Figure

WORKING_COLOR = "tab:green"
NOT_WORKING_COLOR = "tab:red"


def _waveform_panel(
    fig: Figure,
    spec: gridspec.SubplotSpec,
    t: np.ndarray,
    samples: np.ndarray,
    title: str,
    windows: list[tuple[float, float]],
) -> None:
    """Raw samples the phasor was estimated from; broken x-axis when windows are given."""
    if not windows:
        ax = fig.add_subplot(spec)
        ax.plot(t, samples, linewidth=0.8, color="tab:blue")
        ax.set_xlabel("Time [s]", fontsize=8)
        ax.set_ylabel("Value", fontsize=9)
        ax.set_title(f"{title}: input samples", fontsize=9)
        ax.grid(True, linestyle=":", linewidth=0.5)
        return

    bax = brokenaxes(xlims=windows, hspace=0.05, fig=fig, subplot_spec=spec)
    for t0, t1 in windows:
        inside = (t >= t0) & (t <= t1)
        bax.plot(t[inside], samples[inside], linewidth=0.8, color="tab:blue")
    bax.set_ylabel("Value", fontsize=9)
    bax.set_title(f"{title}: input samples, {len(windows)} windows", fontsize=9)


def _neighbour_panel(
    fig: Figure, spec: gridspec.SubplotSpec, neighbours: Sequence[tuple[float, bool]]
) -> None:
    ax = fig.add_subplot(spec)
    rank = np.arange(1, len(neighbours) + 1)
    heights = np.array([d for d, _ in neighbours], dtype=float)
    colors = [WORKING_COLOR if working else NOT_WORKING_COLOR for _, working in neighbours]
    ax.bar(rank, heights, color=colors)
    ax.set_xticks(rank)
    ax.set_xlabel("Neighbour rank", fontsize=9)
    ax.set_ylabel("Distance [p.u.]", fontsize=9)
    ax.grid(True, axis="y", linestyle="--", linewidth=0.5)
    working = sum(1 for _, w in neighbours if w)
    ax.set_title(
        f"k = {len(neighbours)}: {working} working, {len(neighbours) - working} not working",
        fontsize=9,
    )


def plot_signal_and_neighbours(
    signal: np.ndarray,
    neighbours: Sequence[tuple[float, bool]],
    fs: float,
    title: str = "Scenario",
    zoom_windows_top: Iterable[tuple[float, float]] | None = None,
) -> Figure:
    """
    Two stacked panels: the sampled voltage on top and the distance of each
    nearest neighbour below, green when that neighbour is labeled working.
    """
    samples = np.asarray(signal, dtype=float).ravel()
    t = np.arange(samples.shape[0], dtype=float) / float(fs)

    fig = plt.figure(figsize=(6.0, 3.2))
    grid = gridspec.GridSpec(2, 1, height_ratios=[1, 2], figure=fig)
    _waveform_panel(fig, grid[0], t, samples, title, list(zoom_windows_top or []))
    _neighbour_panel(fig, grid[1], neighbours)

    fig.tight_layout()
    return fig
