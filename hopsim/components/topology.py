"""Chain components into an end-to-end request path."""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import numpy as np
from dataclasses_json import dataclass_json
from tqdm import tqdm

from .base import LatencyComponent
from .factory import build_component
from ..core.latency_model import LatencyModel
from ..exceptions import ConfigurationError
from ..models.probability import create_rng
from ..models.statistics import percentiles
from ..utils.logger import setup_logger


@dataclass_json
@dataclass(frozen=True)
class TopologyResult:
    """Latency percentiles (seconds) of a topology run."""
    p50: float
    p95: float
    p99: float
    sample_count: int


class Topology(LatencyModel):
    """Ordered chain of components.

    End-to-end latency is the sum of the per-hop samples, taken in order.
    No component observes another's output.
    """

    def __init__(self, components: Sequence[LatencyComponent], show_progress: bool = False):
        """Initialize topology.

        Args:
            components: Hops in traversal order
            show_progress: Display a progress bar during ``simulate``
        """
        if not components:
            raise ConfigurationError("Topology needs at least one component")
        self._components = tuple(components)
        self.show_progress = show_progress
        self.logger = setup_logger(self.__class__.__name__)

    @classmethod
    def from_config(cls, hops: List[Dict], rng: Optional[np.random.Generator] = None,
                    show_progress: bool = False) -> "Topology":
        """Build a topology from a list of hop descriptions.

        All hops share ``rng`` so a single seed reproduces the whole run.
        """
        rng = rng if rng is not None else create_rng()
        return cls([build_component(hop, rng) for hop in hops], show_progress)

    @property
    def components(self) -> Sequence[LatencyComponent]:
        return self._components

    def process_once(self) -> float:
        """Send one request through every hop.

        Returns:
            Total latency in seconds
        """
        total = 0.0
        for component in self._components:
            total += component.sample()
        return total

    def sample_latencies(self, n: int) -> np.ndarray:
        self.logger.debug(f"Sampling {n} requests through {' → '.join(self.component_names())}")
        iterator = tqdm(range(n), desc="Simulating", unit="req", disable=not self.show_progress)
        return np.fromiter((self.process_once() for _ in iterator), dtype=float, count=n)

    def summarize(self, samples: Sequence[float]) -> TopologyResult:
        summary = percentiles(samples)
        return TopologyResult(
            p50=summary.p50,
            p95=summary.p95,
            p99=summary.p99,
            sample_count=len(samples),
        )

    def component_names(self) -> List[str]:
        """Component names in traversal order."""
        return [c.name for c in self._components]

    def __len__(self) -> int:
        return len(self._components)

    def __repr__(self) -> str:
        return f"Topology({' → '.join(self.component_names())})"
