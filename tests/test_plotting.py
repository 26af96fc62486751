# tests/test_plotting.py
import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402

from matplotlib.colors import to_rgba  # noqa: E402

from evaluation.plotting import NOT_WORKING_COLOR, plot_signal_and_neighbours  # noqa: E402


def test_neighbour_bars_follow_labels() -> None:
    signal = np.sin(2 * np.pi * 60 * np.arange(320) / 3200.0)
    fig = plot_signal_and_neighbours(signal, [(0.1, True), (0.4, False)], 3200.0)
    try:
        bars = fig.axes[-1].patches
        assert [b.get_height() for b in bars] == [0.1, 0.4]
        assert bars[1].get_facecolor() == to_rgba(NOT_WORKING_COLOR)
    finally:
        plt.close(fig)


def test_zoom_windows_render() -> None:
    signal = np.zeros(3200)
    fig = plot_signal_and_neighbours(
        signal, [(0.2, True)], 3200.0, zoom_windows_top=[(0.0, 0.1), (0.9, 1.0)]
    )
    try:
        assert len(fig.axes) >= 3
    finally:
        plt.close(fig)
