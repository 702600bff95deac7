"""Percentile and summary statistics for latency samples."""

from dataclasses import dataclass
from typing import Dict, Sequence

import numpy as np
from dataclasses_json import dataclass_json


@dataclass_json
@dataclass(frozen=True)
class PercentileSummary:
    """The standard p50/p95/p99 latency triple (seconds)."""
    p50: float
    p95: float
    p99: float


def percentile(samples: Sequence[float], p: float) -> float:
    """Compute the p-th percentile by linear interpolation of order statistics.

    This is the R-7 definition: ``index = p * (n - 1)`` and the result is
    interpolated between the two order statistics around ``index``.

    Args:
        samples: Sample values (any order)
        p: Percentile as a fraction in [0, 1]

    Returns:
        Percentile value, or NaN when ``samples`` is empty
    """
    if not 0.0 <= p <= 1.0:
        raise ValueError(f"Percentile must be in [0, 1], got {p}")

    data = np.asarray(samples, dtype=float)
    if data.size == 0:
        return float("nan")
    if data.size == 1:
        return float(data[0])

    ordered = np.sort(data)
    index = p * (ordered.size - 1)
    lower = int(np.floor(index))
    upper = int(np.ceil(index))
    if lower == upper:
        return float(ordered[lower])

    return float(ordered[lower] + (index - lower) * (ordered[upper] - ordered[lower]))


def percentiles(samples: Sequence[float]) -> PercentileSummary:
    """Compute p50, p95 and p99 of ``samples``."""
    return PercentileSummary(
        p50=percentile(samples, 0.50),
        p95=percentile(samples, 0.95),
        p99=percentile(samples, 0.99),
    )


def describe(samples: Sequence[float]) -> Dict[str, float]:
    """Mean, median, spread, range and tail percentiles of ``samples``.

    Empty input yields NaN for every statistic.
    """
    data = np.asarray(samples, dtype=float)
    summary = percentiles(data)

    if data.size == 0:
        nan = float("nan")
        return {
            'count': 0, 'mean': nan, 'median': nan, 'std': nan,
            'min': nan, 'max': nan, 'p50': nan, 'p95': nan, 'p99': nan,
        }

    return {
        'count': int(data.size),
        'mean': float(np.mean(data)),
        'median': summary.p50,
        'std': float(np.std(data)),
        'min': float(np.min(data)),
        'max': float(np.max(data)),
        'p50': summary.p50,
        'p95': summary.p95,
        'p99': summary.p99,
    }
