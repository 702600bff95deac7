"""Probability distributions used by the latency models.

Every sampler takes its uniform random source explicitly as a
``numpy.random.Generator`` so that runs are reproducible under a seed and
independent simulations never share hidden state.
"""

import math
from typing import Optional

import numpy as np

from ..exceptions import ConfigurationError


def create_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create a random generator, seeded when ``seed`` is given."""
    return np.random.default_rng(seed)


def _open_uniform(rng: np.random.Generator) -> float:
    """Draw a uniform value on the open interval (0, 1)."""
    u = rng.random()
    while u == 0.0:
        u = rng.random()
    return u


def sample_exponential(rate: float, rng: np.random.Generator) -> float:
    """Sample from Exp(rate) by inverse transform.

    Used for inter-arrival and service times in M/M/1.

    Args:
        rate: Events per unit time (must be positive)
        rng: Uniform random source

    Returns:
        Strictly positive sample
    """
    if rate <= 0:
        raise ConfigurationError(f"Exponential rate must be positive, got {rate}")
    return -math.log(_open_uniform(rng)) / rate


def sample_normal(mean: float, stddev: float, rng: np.random.Generator) -> float:
    """Sample from N(mean, stddev^2) using the Box-Muller transform.

    The result is not clamped and can be negative when ``mean`` is small
    relative to ``stddev``.

    Args:
        mean: Center of the distribution
        stddev: Spread of the distribution
        rng: Uniform random source

    Returns:
        Gaussian sample
    """
    u1 = _open_uniform(rng)
    u2 = _open_uniform(rng)
    z = math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)
    return mean + stddev * z


def sample_bimodal(
    low_value: float,
    high_value: float,
    high_probability: float,
    rng: np.random.Generator,
) -> float:
    """Return ``high_value`` with probability ``high_probability``, else ``low_value``."""
    return high_value if rng.random() < high_probability else low_value
