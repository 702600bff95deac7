"""Check simulated M/M/1 latencies against queueing theory."""

from typing import Dict, Optional, Sequence

import numpy as np
from scipy import stats

from ..models.queueing_model import calculate_percentile_latency, check_stability

# Allowed relative error per percentile; the tail is sparser so wider
DEFAULT_TOLERANCES = {'p50': 0.25, 'p95': 0.35, 'p99': 0.40}

PERCENTILE_FRACTIONS = {'p50': 0.50, 'p95': 0.95, 'p99': 0.99}


def relative_error(simulated: float, reference: float) -> float:
    """Return |simulated - reference| / |reference|."""
    if reference == 0:
        return 0.0 if simulated == 0 else float("inf")
    return abs(simulated - reference) / abs(reference)


def compare_to_theory(
    result,
    arrival_rate: float,
    service_rate: float,
    tolerances: Optional[Dict[str, float]] = None,
) -> Dict[str, Dict[str, float]]:
    """Compare a simulation result's percentiles with the closed form.

    Args:
        result: Any record with ``p50``, ``p95`` and ``p99`` attributes
        arrival_rate: λ used for the run
        service_rate: μ used for the run
        tolerances: Relative error allowed per percentile key

    Returns:
        Mapping of percentile key to simulated, theoretical, relative
        error and whether it is within tolerance
    """
    tolerances = {**DEFAULT_TOLERANCES, **(tolerances or {})}
    comparison = {}

    for key, fraction in PERCENTILE_FRACTIONS.items():
        simulated = getattr(result, key)
        theoretical = calculate_percentile_latency(arrival_rate, service_rate, fraction)
        error = relative_error(simulated, theoretical)
        comparison[key] = {
            'simulated': simulated,
            'theoretical': theoretical,
            'relative_error': error,
            'within_tolerance': error <= tolerances[key],
        }

    return comparison


def exponential_fit(
    latencies: Sequence[float],
    arrival_rate: float,
    service_rate: float,
) -> Dict[str, float]:
    """Kolmogorov-Smirnov test of sojourn times against Exp(μ - λ).

    Time in a stable M/M/1 system is exponentially distributed with rate
    μ - λ, so a well-behaved simulation should not reject this fit.

    Returns:
        KS statistic and p-value
    """
    check_stability(arrival_rate, service_rate)
    data = np.asarray(latencies, dtype=float)
    if data.size == 0:
        raise ValueError("Cannot test an empty sample")

    statistic, p_value = stats.kstest(
        data, 'expon', args=(0.0, 1.0 / (service_rate - arrival_rate))
    )
    return {'ks_statistic': float(statistic), 'p_value': float(p_value)}
