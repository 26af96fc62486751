from collections.abc import Sequence
from typing import Any, Dict, Mapping

from utils.pmu.measurement import InstantaneousMeasurement
from utils.pmu.phasor import Phasor


class EstimatorBase:
    """Base class for phasor estimators, enforcing the measurement-window contract."""

    def __init__(self, config: Mapping[str, Any] | Any = None, name: str = "") -> None:
        """
        Initializes the estimator with fixed parameters.
        :param config: Mapping or object carrying estimator-specific keys.
        :param name: Label used in reports.
        """
        self.name: str = name
        self.config: Mapping[str, Any] | Any = {} if config is None else config
        self.memory: Dict[str, Any] = {}

    def _get(self, key: str, default: Any) -> Any:
        """Fetch config value from object attribute or mapping key (fallback to default)."""
        cfg = self.config
        if hasattr(cfg, key):
            return getattr(cfg, key)
        try:
            return cfg.get(key, default)
        except AttributeError:
            return default

    def reset(self) -> None:
        """Reset internal state (last estimate, diagnostics, etc.)."""
        self.memory.clear()

    @staticmethod
    def _check_samples(samples: Sequence[InstantaneousMeasurement]) -> None:
        if any(not isinstance(m, InstantaneousMeasurement) for m in samples):
            raise TypeError("estimate() requires a sequence of InstantaneousMeasurement.")

    def estimate(self, samples: Sequence[InstantaneousMeasurement]) -> Phasor:
        """
        Turns one ordered window of time-tagged samples into a phasor.
        """
        self._check_samples(samples)

        # Implementation in derived classes must handle the window.
        raise NotImplementedError
