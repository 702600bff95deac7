"""Serverless compute hop with cold starts."""

from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np

from .base import (
    LatencyComponent, check_non_negative, check_positive, check_probability, require_keys
)
from ..models.probability import create_rng, sample_bimodal, sample_normal

# Floor for a single invocation (1 ms)
MIN_INVOCATION_LATENCY = 0.001

WARM_STDDEV_FRACTION = 0.1
COLD_START_STDDEV_FRACTION = 0.2


@dataclass(frozen=True)
class ComputeConfig:
    """Serverless function parameters (seconds).

    ``warm_stddev`` defaults to 10% of ``warm_latency`` and
    ``cold_start_stddev`` to 20% of ``cold_start_latency``.
    """
    warm_latency: float
    cold_start_latency: float
    cold_start_probability: float
    warm_stddev: Optional[float] = None
    cold_start_stddev: Optional[float] = None

    def __post_init__(self):
        check_positive(self.warm_latency, "Warm latency")
        check_positive(self.cold_start_latency, "Cold start latency")
        check_probability(self.cold_start_probability, "Cold start probability")
        if self.warm_stddev is not None:
            check_non_negative(self.warm_stddev, "Warm stddev")
        if self.cold_start_stddev is not None:
            check_non_negative(self.cold_start_stddev, "Cold start stddev")

    @property
    def effective_warm_stddev(self) -> float:
        if self.warm_stddev is None:
            return self.warm_latency * WARM_STDDEV_FRACTION
        return self.warm_stddev

    @property
    def effective_cold_start_stddev(self) -> float:
        if self.cold_start_stddev is None:
            return self.cold_start_latency * COLD_START_STDDEV_FRACTION
        return self.cold_start_stddev

    @classmethod
    def from_dict(cls, config: Dict) -> "ComputeConfig":
        require_keys(
            config,
            ('warm_latency', 'cold_start_latency', 'cold_start_probability'),
            "Compute",
        )
        warm_stddev = config.get('warm_stddev')
        cold_start_stddev = config.get('cold_start_stddev')
        return cls(
            warm_latency=float(config['warm_latency']),
            cold_start_latency=float(config['cold_start_latency']),
            cold_start_probability=float(config['cold_start_probability']),
            warm_stddev=None if warm_stddev is None else float(warm_stddev),
            cold_start_stddev=None if cold_start_stddev is None else float(cold_start_stddev),
        )


class ComputeComponent(LatencyComponent):
    """Models a serverless function (e.g. AWS Lambda).

    Each invocation is cold with probability ``cold_start_probability``;
    warm and cold latencies are each normally distributed around their
    configured means.
    """

    def __init__(self, config: ComputeConfig, rng: Optional[np.random.Generator] = None,
                 name: str = "Compute"):
        super().__init__(name, rng if rng is not None else create_rng())
        self.config = config

    def sample(self) -> float:
        is_cold_start = sample_bimodal(False, True, self.config.cold_start_probability, self.rng)

        if is_cold_start:
            mean = self.config.cold_start_latency
            stddev = self.config.effective_cold_start_stddev
        else:
            mean = self.config.warm_latency
            stddev = self.config.effective_warm_stddev

        return max(MIN_INVOCATION_LATENCY, sample_normal(mean, stddev, self.rng))
