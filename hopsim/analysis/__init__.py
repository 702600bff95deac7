"""Validation against theory and parameter sweeps."""

from .validation import compare_to_theory, exponential_fit, relative_error
from .sweep import sweep_arrival_rates

__all__ = ["compare_to_theory", "exponential_fit", "relative_error", "sweep_arrival_rates"]
