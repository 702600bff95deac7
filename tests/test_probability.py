"""Tests for probability samplers."""

import unittest

import numpy as np

from hopsim.exceptions import ConfigurationError
from hopsim.models.probability import (
    create_rng, sample_exponential, sample_normal, sample_bimodal
)


class TestExponential(unittest.TestCase):
    """Test cases for sample_exponential."""

    def setUp(self):
        self.rng = create_rng(42)

    def test_always_positive(self):
        """Test samples are strictly positive."""
        samples = [sample_exponential(1000.0, self.rng) for _ in range(5000)]
        self.assertTrue(all(s > 0 for s in samples))

    def test_mean_is_inverse_rate(self):
        """Test the sample mean approaches 1/rate."""
        samples = [sample_exponential(10.0, self.rng) for _ in range(20000)]
        self.assertAlmostEqual(np.mean(samples), 0.1, delta=0.005)

    def test_invalid_rate(self):
        """Test non-positive rates are rejected."""
        with self.assertRaises(ConfigurationError):
            sample_exponential(0.0, self.rng)
        with self.assertRaises(ConfigurationError):
            sample_exponential(-1.0, self.rng)


class TestNormal(unittest.TestCase):
    """Test cases for sample_normal."""

    def setUp(self):
        self.rng = create_rng(42)

    def test_mean_and_stddev(self):
        """Test Box-Muller samples match the requested moments."""
        samples = [sample_normal(5.0, 2.0, self.rng) for _ in range(20000)]

        self.assertAlmostEqual(np.mean(samples), 5.0, delta=0.1)
        self.assertAlmostEqual(np.std(samples), 2.0, delta=0.1)

    def test_can_be_negative(self):
        """Test the primitive does not clamp."""
        samples = [sample_normal(0.001, 0.01, self.rng) for _ in range(1000)]
        self.assertTrue(any(s < 0 for s in samples))

    def test_zero_stddev_returns_mean(self):
        """Test zero spread gives the mean exactly."""
        self.assertEqual(sample_normal(0.25, 0.0, self.rng), 0.25)


class TestBimodal(unittest.TestCase):
    """Test cases for sample_bimodal."""

    def setUp(self):
        self.rng = create_rng(42)

    def test_only_two_outcomes(self):
        """Test only the two configured values are returned."""
        samples = {sample_bimodal(1.0, 9.0, 0.3, self.rng) for _ in range(1000)}
        self.assertEqual(samples, {1.0, 9.0})

    def test_high_probability(self):
        """Test the high value appears with the configured probability."""
        samples = [sample_bimodal(0.0, 1.0, 0.2, self.rng) for _ in range(20000)]
        self.assertAlmostEqual(np.mean(samples), 0.2, delta=0.015)

    def test_extremes(self):
        """Test probabilities 0 and 1 are deterministic."""
        self.assertTrue(all(sample_bimodal(1.0, 2.0, 0.0, self.rng) == 1.0 for _ in range(100)))
        self.assertTrue(all(sample_bimodal(1.0, 2.0, 1.0, self.rng) == 2.0 for _ in range(100)))


class TestReproducibility(unittest.TestCase):
    """Test seeded generators replay the same draws."""

    def test_same_seed_same_samples(self):
        rng_a = create_rng(7)
        rng_b = create_rng(7)

        a = [sample_exponential(3.0, rng_a) for _ in range(10)]
        b = [sample_exponential(3.0, rng_b) for _ in range(10)]

        self.assertEqual(a, b)

    def test_independent_generators_do_not_interfere(self):
        rng_a = create_rng(7)
        rng_b = create_rng(7)
        other = create_rng(8)

        first = sample_normal(0.0, 1.0, rng_a)
        sample_normal(0.0, 1.0, other)
        second = sample_normal(0.0, 1.0, rng_b)

        self.assertEqual(first, second)


if __name__ == '__main__':
    unittest.main()
