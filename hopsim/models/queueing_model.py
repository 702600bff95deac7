"""Closed-form M/M/1 queueing formulas.

    λ = arrival rate (requests/second)
    μ = service rate (requests/second)
    ρ = λ/μ utilization

Formulas whose value diverges for an unstable queue (λ >= μ) raise
``ConfigurationError`` instead of returning a negative or infinite number.
"""

import math
from dataclasses import dataclass

from dataclasses_json import dataclass_json

from .statistics import PercentileSummary
from ..exceptions import ConfigurationError


@dataclass_json
@dataclass(frozen=True)
class MM1Theory:
    """Steady-state metrics of a stable M/M/1 queue."""
    utilization: float
    average_queue_length: float   # L, requests in system
    average_waiting_count: float  # Lq, requests waiting for service
    average_wait: float           # W, time in system
    average_queue_wait: float     # Wq, time waiting for service


def _check_rates(arrival_rate: float, service_rate: float) -> None:
    if arrival_rate <= 0:
        raise ConfigurationError(f"Arrival rate must be positive, got {arrival_rate}")
    if service_rate <= 0:
        raise ConfigurationError(f"Service rate must be positive, got {service_rate}")


def check_stability(arrival_rate: float, service_rate: float) -> None:
    """Raise ConfigurationError unless 0 < λ < μ."""
    _check_rates(arrival_rate, service_rate)
    if arrival_rate >= service_rate:
        raise ConfigurationError(
            f"Unstable queue: arrival rate {arrival_rate} must be below "
            f"service rate {service_rate} (utilization "
            f"{arrival_rate / service_rate:.2f} >= 1)"
        )


def calculate_utilization(arrival_rate: float, service_rate: float) -> float:
    """ρ = λ/μ. Values >= 1 are returned as-is to flag overload."""
    _check_rates(arrival_rate, service_rate)
    return arrival_rate / service_rate


def calculate_average_wait(arrival_rate: float, service_rate: float) -> float:
    """Mean time in system, W = 1/(μ - λ)."""
    check_stability(arrival_rate, service_rate)
    return 1.0 / (service_rate - arrival_rate)


def calculate_average_queue_length(arrival_rate: float, service_rate: float) -> float:
    """Mean number in system, L = ρ/(1 - ρ)."""
    check_stability(arrival_rate, service_rate)
    rho = arrival_rate / service_rate
    return rho / (1.0 - rho)


def calculate_percentile_latency(
    arrival_rate: float,
    service_rate: float,
    percentile: float,
) -> float:
    """Latency at a percentile: t(p) = -ln(1 - p)/(μ - λ).

    Time in an M/M/1 system is exponential with rate μ - λ, so its
    quantile function is available in closed form.

    Args:
        arrival_rate: λ
        service_rate: μ
        percentile: Fraction in [0, 1)

    Returns:
        Latency in seconds
    """
    check_stability(arrival_rate, service_rate)
    if not 0.0 <= percentile < 1.0:
        raise ConfigurationError(f"Percentile must be in [0, 1), got {percentile}")
    return -math.log(1.0 - percentile) / (service_rate - arrival_rate)


def calculate_theoretical_percentiles(
    arrival_rate: float,
    service_rate: float,
) -> PercentileSummary:
    """Closed-form p50/p95/p99 latency for an M/M/1 queue."""
    return PercentileSummary(
        p50=calculate_percentile_latency(arrival_rate, service_rate, 0.50),
        p95=calculate_percentile_latency(arrival_rate, service_rate, 0.95),
        p99=calculate_percentile_latency(arrival_rate, service_rate, 0.99),
    )


def mm1_theory(arrival_rate: float, service_rate: float) -> MM1Theory:
    """Bundle the steady-state M/M/1 metrics (Little's law for the waits)."""
    check_stability(arrival_rate, service_rate)
    rho = arrival_rate / service_rate
    length = rho / (1.0 - rho)
    waiting = rho * rho / (1.0 - rho)
    return MM1Theory(
        utilization=rho,
        average_queue_length=length,
        average_waiting_count=waiting,
        average_wait=length / arrival_rate,
        average_queue_wait=waiting / arrival_rate,
    )
