from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import TypedDict

import matplotlib.pyplot as plt
import numpy as np

from classifier.knn import KnnClassifier
from estimators.basic.rms_ascent import RmsAscent
from evaluation import metrics
from evaluation.plotting import plot_signal_and_neighbours
from grid.parameter import Parameter
from scenarios.s1_synthetic.line_clusters import make_line_clusters
from scenarios.s1_synthetic.make_clean import make_clean, to_measurements
from utils.pmu.phasor import Phasor


class PhasorResult(TypedDict):
    reference: str
    estimate: str
    n_samples: int
    percent_error: float


class KnnResult(TypedDict):
    k: int
    n_known: int
    predicted_status: bool
    neighbours: list[tuple[float, bool]]
    loo_accuracy: float


def run_phasor_accuracy(
    reference: Phasor, f0: float = 60.0, duration: float = 1.0, fs: int = 32000
) -> tuple[PhasorResult, np.ndarray]:
    """Sample a reference phasor, estimate it back and score the estimate."""
    t, signal = make_clean(reference, f0=f0, duration=duration, fs=fs)
    param = Parameter.from_samples(
        to_measurements(t, signal), "V1", "V", 1, 0, estimator=RmsAscent()
    )
    result: PhasorResult = {
        "reference": str(reference),
        "estimate": str(param.phasor),
        "n_samples": param.n_samples,
        "percent_error": metrics.percent_error(reference, param.phasor),
    }
    return result, signal


def run_knn(n_working: int = 6, n_not_working: int = 4, k: int = 3) -> KnnResult:
    known, query = make_line_clusters(n_working, n_not_working)
    knn = KnnClassifier(known, query, k=k)
    print(knn.describe())
    return {
        "k": knn.k,
        "n_known": len(known),
        "predicted_status": knn.predicted_status,
        "neighbours": knn.neighbour_distances(),
        "loo_accuracy": metrics.leave_one_out_accuracy(known, k=k),
    }


def main() -> None:
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    fs: int = 32000

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    root_dir = Path("data/results") / f"knn_{timestamp}"
    json_dir = root_dir / "jsons"
    plot_dir = root_dir / "plots"
    json_dir.mkdir(parents=True, exist_ok=True)
    plot_dir.mkdir(parents=True, exist_ok=True)

    print("▶ Running scenario: phasor_accuracy")
    phasor_res, signal = run_phasor_accuracy(Phasor(120, 30), fs=fs)
    print(f"  Calculated Phasor: {phasor_res['estimate']}")
    print(f"  Reference Phasor: {phasor_res['reference']}")
    print(f"  The percent error is {phasor_res['percent_error']:.6f}")

    print("▶ Running scenario: knn_clusters")
    knn_res = run_knn(6, 4, k=3)

    summary = {"phasor_accuracy": phasor_res, "knn_clusters": knn_res}
    json_file = json_dir / "summary.json"
    with json_file.open("w", encoding="utf-8") as fh:
        json.dump(summary, fh, indent=2)
    print(f"✅ JSON saved to {json_file}")

    fig = plot_signal_and_neighbours(
        signal,
        knn_res["neighbours"],
        fs,
        title="V1 = 120∠30°",
        zoom_windows_top=[(0.0, 0.05), (0.95, 1.0)],
    )
    plot_file = plot_dir / "knn_clusters.png"
    fig.savefig(plot_file, dpi=300, bbox_inches="tight")
    plt.close(fig)
    print(f"📈 Plot saved to {plot_file}")


if __name__ == "__main__":
    main()
