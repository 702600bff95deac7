"""Probability distributions, percentile statistics and closed-form queueing models."""

from .probability import create_rng, sample_exponential, sample_normal, sample_bimodal
from .statistics import PercentileSummary, percentile, percentiles, describe
from .queueing_model import (
    MM1Theory,
    calculate_utilization,
    calculate_average_wait,
    calculate_average_queue_length,
    calculate_percentile_latency,
    calculate_theoretical_percentiles,
    check_stability,
    mm1_theory,
)

__all__ = [
    "create_rng",
    "sample_exponential",
    "sample_normal",
    "sample_bimodal",
    "PercentileSummary",
    "percentile",
    "percentiles",
    "describe",
    "MM1Theory",
    "calculate_utilization",
    "calculate_average_wait",
    "calculate_average_queue_length",
    "calculate_percentile_latency",
    "calculate_theoretical_percentiles",
    "check_stability",
    "mm1_theory",
]
