"""Sweep arrival rates against a fixed service rate."""

from typing import Optional, Sequence

import numpy as np
import pandas as pd

from ..core.simulator import MM1Config, MM1Simulator
from ..models.probability import create_rng
from ..models.queueing_model import calculate_theoretical_percentiles, check_stability
from ..utils.logger import setup_logger

logger = setup_logger("Sweep")


def sweep_arrival_rates(
    service_rate: float,
    arrival_rates: Sequence[float],
    request_count: int,
    rng: Optional[np.random.Generator] = None,
) -> pd.DataFrame:
    """Simulate an M/M/1 queue at each arrival rate.

    Args:
        service_rate: μ shared by every run
        arrival_rates: λ values, each below ``service_rate``
        request_count: Requests per run
        rng: Random source shared across runs

    Returns:
        DataFrame with one row per λ: utilization, simulated and
        theoretical p50/p95/p99 (seconds), sorted by arrival rate
    """
    for arrival_rate in arrival_rates:
        check_stability(arrival_rate, service_rate)

    rng = rng if rng is not None else create_rng()
    rows = []

    for arrival_rate in sorted(arrival_rates):
        result = MM1Simulator(MM1Config(arrival_rate, service_rate, request_count), rng).run()
        theory = calculate_theoretical_percentiles(arrival_rate, service_rate)
        rows.append({
            'arrival_rate': arrival_rate,
            'service_rate': service_rate,
            'utilization': result.utilization,
            'sim_p50': result.p50,
            'sim_p95': result.p95,
            'sim_p99': result.p99,
            'theory_p50': theory.p50,
            'theory_p95': theory.p95,
            'theory_p99': theory.p99,
        })
        logger.debug(f"λ={arrival_rate}: p50={result.p50 * 1000:.2f} ms")

    return pd.DataFrame(rows)
