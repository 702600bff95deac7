"""Event-driven M/M/1 queue simulator."""

import time
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Union

import numpy as np
from dataclasses_json import dataclass_json

from .event_queue import SimulationEvent, EventType, EventQueue
from .latency_model import LatencyModel
from .metrics_collector import MetricsCollector
from ..exceptions import ConfigurationError
from ..models.probability import create_rng, sample_exponential
from ..models.queueing_model import calculate_utilization, check_stability
from ..models.statistics import percentiles
from ..utils.logger import setup_logger


@dataclass
class MM1Config:
    """Parameters of one M/M/1 simulation run.

    Attributes:
        arrival_rate: λ, requests per second
        service_rate: μ, requests per second
        request_count: Number of requests to push through the queue
        random_seed: Seed for the run's generator (None for entropy)
    """
    arrival_rate: float
    service_rate: float
    request_count: int
    random_seed: Optional[int] = None

    def validate(self) -> None:
        """Reject unstable or empty configurations."""
        check_stability(self.arrival_rate, self.service_rate)
        if self.request_count < 1:
            raise ConfigurationError(
                f"Request count must be at least 1, got {self.request_count}"
            )

    @classmethod
    def from_dict(cls, config: Dict) -> "MM1Config":
        """Build from a config section with ``arrival_rate``, ``service_rate``
        and ``request_count`` (``random_seed`` is optional)."""
        missing = [k for k in ('arrival_rate', 'service_rate', 'request_count') if k not in config]
        if missing:
            raise ConfigurationError(f"M/M/1 config missing required keys: {', '.join(missing)}")
        return cls(
            arrival_rate=float(config['arrival_rate']),
            service_rate=float(config['service_rate']),
            request_count=int(config['request_count']),
            random_seed=config.get('random_seed'),
        )


@dataclass_json
@dataclass(frozen=True)
class SimulationResult:
    """Latency percentiles (seconds) of one M/M/1 run."""
    p50: float
    p95: float
    p99: float
    sample_count: int
    utilization: float


class MM1Simulator:
    """Discrete event simulator of a single-server FIFO queue.

    The simulator owns its event queue, the in-flight request map and the
    server's ``busy_until`` time for the duration of one run; none of them
    outlive :meth:`run`. All N arrivals are generated upfront as a Poisson
    process, and each arrival schedules exactly one departure, so the
    queue drains after 2N events.
    """

    def __init__(self, config: MM1Config, rng: Optional[np.random.Generator] = None,
                 metrics_config: Optional[Dict] = None):
        """Initialize simulator.

        Args:
            config: Run parameters
            rng: Random source; defaults to a generator seeded from the config
            metrics_config: Configuration dictionary for the metrics collector
                (reads ``metrics.percentiles``)
        """
        config.validate()
        self.config = config
        self.rng = rng if rng is not None else create_rng(config.random_seed)
        self.logger = setup_logger(self.__class__.__name__)
        self.metrics_collector = MetricsCollector(metrics_config)

    def run(self) -> SimulationResult:
        """Run the simulation to completion.

        Returns:
            Percentiles of time in system, request count and utilization
        """
        start_time = time.time()
        arrival_rate = self.config.arrival_rate
        service_rate = self.config.service_rate
        request_count = self.config.request_count

        self.logger.info(
            f"Simulating M/M/1: λ={arrival_rate}/s, μ={service_rate}/s, "
            f"{request_count} requests"
        )

        event_queue = EventQueue()
        in_flight: Dict[int, float] = {}
        self.metrics_collector.reset()

        self._schedule_arrivals(event_queue)

        server_busy_until = 0.0
        processed = 0

        while not event_queue.is_empty():
            event = event_queue.pop()
            clock = event.time
            processed += 1

            if event.event_type == EventType.ARRIVAL:
                in_flight[event.request_id] = clock

                # FIFO: service starts once the server finishes its backlog
                service_start = max(clock, server_busy_until)
                departure = service_start + sample_exponential(service_rate, self.rng)
                server_busy_until = departure

                event_queue.push(SimulationEvent(
                    time=departure,
                    event_type=EventType.DEPARTURE,
                    request_id=event.request_id,
                ))

            elif event.event_type == EventType.DEPARTURE:
                arrival_time = in_flight.pop(event.request_id)
                self.metrics_collector.record_latency(clock - arrival_time)

        if in_flight:
            raise RuntimeError(f"{len(in_flight)} requests never departed")

        self.logger.debug(f"Processed {processed} events")
        self.logger.debug(self.metrics_collector.get_summary())

        summary = self.metrics_collector.percentile_summary()
        result = SimulationResult(
            p50=summary.p50,
            p95=summary.p95,
            p99=summary.p99,
            sample_count=request_count,
            utilization=calculate_utilization(arrival_rate, service_rate),
        )

        elapsed_time = time.time() - start_time
        self.logger.info(f"Simulation completed in {elapsed_time:.2f}s")

        return result

    @property
    def latencies(self) -> np.ndarray:
        """Per-request latencies of the last run, in departure order."""
        return self.metrics_collector.as_array()

    def compute_metrics(self) -> Dict:
        """Distribution metrics of the last run, with the configured percentiles."""
        return self.metrics_collector.compute_metrics()

    def _schedule_arrivals(self, event_queue: EventQueue) -> None:
        """Push all arrivals of a Poisson process with rate λ."""
        arrival_time = 0.0
        for request_id in range(self.config.request_count):
            arrival_time += sample_exponential(self.config.arrival_rate, self.rng)
            event_queue.push(SimulationEvent(
                time=arrival_time,
                event_type=EventType.ARRIVAL,
                request_id=request_id,
            ))


def simulate_mm1(
    config: Union[MM1Config, Dict],
    rng: Optional[np.random.Generator] = None,
) -> SimulationResult:
    """Run one M/M/1 simulation.

    Args:
        config: ``MM1Config`` or a dict accepted by ``MM1Config.from_dict``
        rng: Optional random source

    Returns:
        Simulation result

    Raises:
        ConfigurationError: If λ >= μ, a rate is not positive, or the
            request count is below one
    """
    if isinstance(config, dict):
        config = MM1Config.from_dict(config)
    return MM1Simulator(config, rng).run()


class MM1Model(LatencyModel):
    """M/M/1 queue exposed through the common latency model interface."""

    def __init__(self, arrival_rate: float, service_rate: float,
                 rng: Optional[np.random.Generator] = None):
        check_stability(arrival_rate, service_rate)
        self.arrival_rate = arrival_rate
        self.service_rate = service_rate
        self.rng = rng if rng is not None else create_rng()

    def sample_latencies(self, n: int) -> np.ndarray:
        simulator = MM1Simulator(
            MM1Config(self.arrival_rate, self.service_rate, n), self.rng
        )
        simulator.run()
        return simulator.latencies

    def summarize(self, samples: Sequence[float]) -> SimulationResult:
        summary = percentiles(samples)
        return SimulationResult(
            p50=summary.p50,
            p95=summary.p95,
            p99=summary.p99,
            sample_count=len(samples),
            utilization=calculate_utilization(self.arrival_rate, self.service_rate),
        )
