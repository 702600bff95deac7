"""Base class for infrastructure hops that add latency."""

from abc import ABC, abstractmethod
from typing import Dict, Iterable

import numpy as np

from ..exceptions import ConfigurationError


class LatencyComponent(ABC):
    """One hop of a request path (network, compute, database).

    A component keeps only its fixed configuration and its random source,
    so it can be reused across independent simulation runs.
    """

    def __init__(self, name: str, rng: np.random.Generator):
        self.name = name
        self.rng = rng

    @abstractmethod
    def sample(self) -> float:
        """Latency added by this hop for one request, in seconds (> 0)."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


def require_keys(config: Dict, keys: Iterable[str], section: str) -> None:
    """Raise ConfigurationError if any required key is absent."""
    missing = [k for k in keys if k not in config]
    if missing:
        raise ConfigurationError(f"{section} config missing required keys: {', '.join(missing)}")


def check_probability(value: float, label: str) -> None:
    if not 0.0 <= value <= 1.0:
        raise ConfigurationError(f"{label} must be in [0, 1], got {value}")


def check_non_negative(value: float, label: str) -> None:
    if value < 0:
        raise ConfigurationError(f"{label} cannot be negative, got {value}")


def check_positive(value: float, label: str) -> None:
    if value <= 0:
        raise ConfigurationError(f"{label} must be positive, got {value}")
