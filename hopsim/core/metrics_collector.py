"""Latency sample collection and aggregation."""

import numpy as np
from typing import Dict, Iterable, List, Optional

from ..models.statistics import describe, percentile, percentiles, PercentileSummary
from ..utils.logger import setup_logger

DEFAULT_PERCENTILES = [50, 95, 99]


class MetricsCollector:
    """Collect per-request latencies and reduce them to summary metrics.

    Latencies are stored in seconds; derived metrics are reported in
    seconds as well and converted only at the reporting edge.
    """

    def __init__(self, config: Optional[Dict] = None):
        """Initialize metrics collector.

        Args:
            config: Configuration dictionary; reads ``metrics.percentiles``
        """
        config = config or {}
        self.logger = setup_logger(self.__class__.__name__)

        self.latencies: List[float] = []

        # Percentiles to compute, as whole numbers (e.g. 95 for p95)
        self.percentiles = config.get('metrics', {}).get('percentiles', DEFAULT_PERCENTILES)

    def record_latency(self, latency: float) -> None:
        """Record the end-to-end latency of one completed request."""
        self.latencies.append(latency)

    def record_many(self, latencies: Iterable[float]) -> None:
        """Record a batch of latencies."""
        self.latencies.extend(latencies)

    @property
    def sample_count(self) -> int:
        return len(self.latencies)

    def as_array(self) -> np.ndarray:
        """Collected latencies as a float array."""
        return np.asarray(self.latencies, dtype=float)

    def percentile_summary(self) -> PercentileSummary:
        """p50/p95/p99 of the collected latencies."""
        return percentiles(self.latencies)

    def compute_metrics(self) -> Dict:
        """Compute aggregate metrics from collected data.

        Returns:
            Dictionary of computed metrics, empty when nothing was recorded
        """
        if not self.latencies:
            self.logger.warning("No latencies recorded")
            return {}

        stats = describe(self.latencies)
        results = {
            'sample_count': stats['count'],
            'mean_latency': stats['mean'],
            'median_latency': stats['median'],
            'std_latency': stats['std'],
            'min_latency': stats['min'],
            'max_latency': stats['max'],
        }

        for p in self.percentiles:
            results[f'p{p}_latency'] = percentile(self.latencies, p / 100.0)

        return results

    def reset(self) -> None:
        """Drop all recorded samples."""
        self.latencies.clear()

    def get_summary(self) -> str:
        """Get human-readable summary of metrics (milliseconds)."""
        if not self.latencies:
            return "No metrics collected"

        summary = self.percentile_summary()
        return "\n".join([
            "=== Metrics Summary ===",
            f"Requests: {len(self.latencies)}",
            f"Mean Latency: {np.mean(self.latencies) * 1000:.2f} ms",
            f"P50 Latency: {summary.p50 * 1000:.2f} ms",
            f"P95 Latency: {summary.p95 * 1000:.2f} ms",
            f"P99 Latency: {summary.p99 * 1000:.2f} ms",
        ])
