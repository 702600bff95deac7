"""Database hop (single key-value read)."""

from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np

from .base import LatencyComponent, check_non_negative, check_positive, require_keys
from ..models.probability import create_rng, sample_normal

# Floor for a single query (1 ms)
MIN_QUERY_LATENCY = 0.001


@dataclass(frozen=True)
class DatabaseConfig:
    """Database read parameters (seconds)."""
    mean_latency: float
    stddev: float

    def __post_init__(self):
        check_positive(self.mean_latency, "Database mean latency")
        check_non_negative(self.stddev, "Database stddev")

    @classmethod
    def from_dict(cls, config: Dict) -> "DatabaseConfig":
        require_keys(config, ('mean_latency', 'stddev'), "Database")
        return cls(
            mean_latency=float(config['mean_latency']),
            stddev=float(config['stddev']),
        )


class DatabaseComponent(LatencyComponent):
    """Models a database GetItem-style read: one clamped normal draw."""

    def __init__(self, config: DatabaseConfig, rng: Optional[np.random.Generator] = None,
                 name: str = "Database"):
        super().__init__(name, rng if rng is not None else create_rng())
        self.config = config

    def sample(self) -> float:
        return max(
            MIN_QUERY_LATENCY,
            sample_normal(self.config.mean_latency, self.config.stddev, self.rng),
        )
