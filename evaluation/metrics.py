from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from classifier.knn import KnnClassifier
from grid.line_sample import LineSample
from utils.pmu.phasor import Phasor


def percent_error(reference: Phasor, estimate: Phasor) -> float:
    """
    Total vector error in percent: 100 * |reference - estimate| / |reference|.
    """
    if reference.rms == 0.0:
        raise ValueError("reference phasor must be non-zero")
    return float(100.0 * (reference - estimate).rms / abs(reference.rms))


def classification_accuracy(predicted: np.ndarray, truth: np.ndarray) -> float:
    """
    Fraction of matching boolean labels, elementwise.
    Both arrays must be 1-D and same length.
    """
    pred = np.asarray(predicted, dtype=bool).ravel()
    tru = np.asarray(truth, dtype=bool).ravel()
    if pred.size != tru.size:
        raise ValueError("predicted and truth must have the same length")
    if pred.size == 0:
        raise ValueError("at least one label is required")
    return float(np.mean(pred == tru))


def leave_one_out_accuracy(known: Sequence[LineSample], k: int = 3) -> float:
    """Classify each labeled sample against all the others and score the votes."""
    known = list(known)
    predicted = np.zeros(len(known), dtype=bool)
    for i, sample in enumerate(known):
        rest = known[:i] + known[i + 1 :]
        predicted[i] = KnnClassifier(rest, sample, k=k).predicted_status
    truth = np.array([s.is_working for s in known], dtype=bool)
    return classification_accuracy(predicted, truth)
