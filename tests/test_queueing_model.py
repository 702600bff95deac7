"""Tests for closed-form M/M/1 formulas."""

import unittest

from hopsim.exceptions import ConfigurationError
from hopsim.models.queueing_model import (
    calculate_utilization,
    calculate_average_wait,
    calculate_average_queue_length,
    calculate_percentile_latency,
    calculate_theoretical_percentiles,
    mm1_theory,
)


class TestClosedForm(unittest.TestCase):
    """Test cases for λ=800, μ=1000."""

    def test_utilization(self):
        self.assertAlmostEqual(calculate_utilization(800, 1000), 0.8)

    def test_average_wait(self):
        self.assertAlmostEqual(calculate_average_wait(800, 1000), 0.005)

    def test_average_queue_length(self):
        self.assertAlmostEqual(calculate_average_queue_length(800, 1000), 4.0)

    def test_percentile_latency(self):
        self.assertAlmostEqual(calculate_percentile_latency(800, 1000, 0.5), 0.00347, places=5)
        self.assertAlmostEqual(calculate_percentile_latency(800, 1000, 0.95), 0.01498, places=5)
        self.assertAlmostEqual(calculate_percentile_latency(800, 1000, 0.99), 0.02303, places=5)

    def test_zero_percentile(self):
        self.assertEqual(calculate_percentile_latency(800, 1000, 0.0), 0.0)

    def test_theoretical_percentiles(self):
        summary = calculate_theoretical_percentiles(800, 1000)

        self.assertAlmostEqual(summary.p50, calculate_percentile_latency(800, 1000, 0.5))
        self.assertLess(summary.p50, summary.p95)
        self.assertLess(summary.p95, summary.p99)

    def test_theory_bundle_satisfies_littles_law(self):
        theory = mm1_theory(800, 1000)

        self.assertAlmostEqual(theory.utilization, 0.8)
        self.assertAlmostEqual(theory.average_queue_length, 4.0)
        self.assertAlmostEqual(theory.average_waiting_count, 3.2)
        self.assertAlmostEqual(theory.average_wait, 0.005)
        self.assertAlmostEqual(theory.average_queue_wait, 0.004)
        self.assertAlmostEqual(theory.average_queue_length, 800 * theory.average_wait)


class TestUnstableQueue(unittest.TestCase):
    """Test cases for λ >= μ and invalid inputs."""

    def test_divergent_formulas_raise(self):
        for arrival_rate in (1000, 1200):
            with self.assertRaises(ConfigurationError):
                calculate_average_wait(arrival_rate, 1000)
            with self.assertRaises(ConfigurationError):
                calculate_average_queue_length(arrival_rate, 1000)
            with self.assertRaises(ConfigurationError):
                calculate_percentile_latency(arrival_rate, 1000, 0.5)
            with self.assertRaises(ConfigurationError):
                mm1_theory(arrival_rate, 1000)

    def test_overload_utilization_is_reported(self):
        self.assertAlmostEqual(calculate_utilization(1200, 1000), 1.2)

    def test_non_positive_rates(self):
        with self.assertRaises(ConfigurationError):
            calculate_utilization(0, 1000)
        with self.assertRaises(ConfigurationError):
            calculate_utilization(800, 0)

    def test_percentile_range(self):
        with self.assertRaises(ConfigurationError):
            calculate_percentile_latency(800, 1000, 1.0)
        with self.assertRaises(ConfigurationError):
            calculate_percentile_latency(800, 1000, -0.1)

    def test_configuration_error_is_value_error(self):
        with self.assertRaises(ValueError):
            calculate_average_wait(1000, 1000)


if __name__ == '__main__':
    unittest.main()
