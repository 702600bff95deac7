"""Common interface for latency models."""

from abc import ABC, abstractmethod
from typing import Any, Sequence

import numpy as np

from ..exceptions import ConfigurationError


class LatencyModel(ABC):
    """A model that produces end-to-end latency samples.

    The event-driven M/M/1 simulator and the component-composition
    Monte Carlo topology both implement this interface, which lets one be
    validated against the other without sharing any simulation logic.
    """

    @abstractmethod
    def sample_latencies(self, n: int) -> np.ndarray:
        """Produce ``n`` latency samples in seconds."""

    @abstractmethod
    def summarize(self, samples: Sequence[float]) -> Any:
        """Reduce samples to the model's result record."""

    def simulate(self, n: int) -> Any:
        """Produce ``n`` samples and reduce them to percentiles.

        Args:
            n: Number of requests to simulate (>= 1)

        Returns:
            Result record of the concrete model
        """
        if n < 1:
            raise ConfigurationError(f"Request count must be at least 1, got {n}")
        return self.summarize(self.sample_latencies(n))
