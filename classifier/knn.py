# classifier/knn.py
# ---------------------------------------------------------------------
# Exact k-nearest-neighbour status prediction for one query line sample.
#
# Provides:
#   - push_top_k():     running top-k insertion into a small sorted list
#   - predict_status(): majority vote, ties go to "not working"
#   - KnnClassifier:    scans the labeled set and keeps the k closest
# ---------------------------------------------------------------------
from __future__ import annotations

import logging
from collections.abc import Sequence

from grid.line_sample import LineSample

from .distance import DistanceSample, DistanceWeights

logger = logging.getLogger(__name__)

DEFAULT_K = 5


class KnnConfigurationError(ValueError):
    """k does not fit the labeled set."""


def _sink(top: list[DistanceSample], last: int) -> None:
    """Bubble the entry at ``last`` towards the front while it beats its predecessor."""
    for j in range(last, 0, -1):
        if top[j].distance < top[j - 1].distance:
            top[j - 1], top[j] = top[j], top[j - 1]


def push_top_k(top: list[DistanceSample], candidate: DistanceSample, k: int) -> bool:
    """
    Offer ``candidate`` to ``top``, a list kept sorted ascending and at most
    ``k`` long. Returns whether the candidate was kept.

    While the list is filling the candidate is appended and sunk into place;
    afterwards it only replaces the current worst when strictly closer.
    """
    if len(top) < k:
        top.append(candidate)
        _sink(top, len(top) - 1)
        return True
    if candidate.distance < top[k - 1].distance:
        top[k - 1] = candidate
        _sink(top, k - 1)
        return True
    return False


def predict_status(neighbours: Sequence[DistanceSample]) -> bool:
    """True only with strictly more working than not-working neighbours."""
    working = sum(1 for d in neighbours if d.is_working)
    return working > len(neighbours) - working


class KnnClassifier:
    """
    Predicts whether the query line is working from the k labeled samples
    closest to it.

    Every labeled sample must describe the same line as the query; a mismatch
    raises ``TopologyMismatchError`` during the scan. Replacing the query, the
    labeled set or k recomputes the neighbours from scratch; a replacement that
    fails leaves the previous result in place.
    """

    def __init__(
        self,
        known_samples: Sequence[LineSample],
        query: LineSample,
        k: int = DEFAULT_K,
        weights: DistanceWeights | None = None,
    ) -> None:
        self.weights: DistanceWeights | None = weights
        self._known: tuple[LineSample, ...] = ()
        self._query: LineSample = query
        self._k: int = 0
        self._distances: tuple[DistanceSample, ...] = ()
        self._predicted: bool = False
        self._rebuild(tuple(known_samples), query, k)

    @staticmethod
    def _check_k(k: int, n_known: int) -> int:
        k = int(k)
        if k < 1:
            raise KnnConfigurationError(f"The number of nearest neighbors must be >= 1, got {k}.")
        if k > n_known:
            raise KnnConfigurationError(
                f"The number of nearest neighbors ({k}) is larger than the number of "
                f"known statuses ({n_known})."
            )
        return k

    def _rebuild(self, known_samples: tuple[LineSample, ...], query: LineSample, k: int) -> None:
        k = self._check_k(k, len(known_samples))
        top: list[DistanceSample] = []
        for known in known_samples:
            push_top_k(top, DistanceSample.between(known, query, self.weights), k)

        self._known = known_samples
        self._query = query
        self._k = k
        self._distances = tuple(top)
        self._predicted = predict_status(self._distances)
        logger.debug(
            "Rebuilt %d nearest neighbours over %d known samples -> %s",
            k,
            len(known_samples),
            self._predicted,
        )

    # ---- Public API -----------------------------------------------------------
    @property
    def known_samples(self) -> tuple[LineSample, ...]:
        return self._known

    @known_samples.setter
    def known_samples(self, samples: Sequence[LineSample]) -> None:
        self._rebuild(tuple(samples), self._query, self._k)

    @property
    def query(self) -> LineSample:
        return self._query

    @query.setter
    def query(self, sample: LineSample) -> None:
        self._rebuild(self._known, sample, self._k)

    @property
    def k(self) -> int:
        return self._k

    @property
    def distances(self) -> tuple[DistanceSample, ...]:
        """The k nearest neighbours, closest first."""
        return self._distances

    @property
    def predicted_status(self) -> bool:
        return self._predicted

    def neighbour_distances(self) -> list[tuple[float, bool]]:
        return [(d.distance, d.is_working) for d in self._distances]

    def change_k(self, k: int) -> None:
        """Use a different number of neighbours and recompute from scratch."""
        new_k = self._check_k(k, len(self._known))
        if new_k == self._k:
            return
        self._rebuild(self._known, self._query, new_k)

    def describe(self) -> str:
        lines = ["KNN Algorithm:"]
        lines += [f"distances[{i}] distance: {d.distance:f}" for i, d in enumerate(self._distances)]
        lines.append(f"Line Status Prediction: {int(self._predicted)}")
        return "\n".join(lines)
