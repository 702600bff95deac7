"""Network hop with jitter and packet loss."""

from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np

from .base import LatencyComponent, check_non_negative, check_positive, require_keys
from ..exceptions import ConfigurationError
from ..models.probability import create_rng, sample_normal

# Floor for a single transmission attempt (0.1 ms)
MIN_ATTEMPT_LATENCY = 0.0001


@dataclass(frozen=True)
class NetworkConfig:
    """Network hop parameters.

    Attributes:
        mean_latency: Mean one-way latency in seconds
        stddev: Jitter (standard deviation) in seconds
        packet_loss_rate: Probability that an attempt is lost, in [0, 1)
    """
    mean_latency: float
    stddev: float
    packet_loss_rate: float = 0.0

    def __post_init__(self):
        check_positive(self.mean_latency, "Network mean latency")
        check_non_negative(self.stddev, "Network stddev")
        if not 0.0 <= self.packet_loss_rate < 1.0:
            raise ConfigurationError(
                f"Packet loss rate must be in [0, 1), got {self.packet_loss_rate}"
            )

    @classmethod
    def from_dict(cls, config: Dict) -> "NetworkConfig":
        require_keys(config, ('mean_latency', 'stddev', 'packet_loss_rate'), "Network")
        return cls(
            mean_latency=float(config['mean_latency']),
            stddev=float(config['stddev']),
            packet_loss_rate=float(config['packet_loss_rate']),
        )


class NetworkComponent(LatencyComponent):
    """Models a network hop whose latency is normally distributed.

    A lost packet is retransmitted and pays the full latency again, so the
    number of attempts is geometric with mean ``1 / (1 - packet_loss_rate)``.
    """

    def __init__(self, config: NetworkConfig, rng: Optional[np.random.Generator] = None,
                 name: str = "Network"):
        super().__init__(name, rng if rng is not None else create_rng())
        self.config = config

    def sample(self) -> float:
        total_latency = 0.0

        while True:
            total_latency += max(
                MIN_ATTEMPT_LATENCY,
                sample_normal(self.config.mean_latency, self.config.stddev, self.rng),
            )
            if self.rng.random() >= self.config.packet_loss_rate:
                return total_latency
