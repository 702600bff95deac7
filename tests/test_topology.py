"""Tests for topology composition."""

import unittest

import numpy as np

from hopsim.components import (
    NetworkComponent, NetworkConfig,
    ComputeComponent, ComputeConfig,
    DatabaseComponent, DatabaseConfig,
    Topology,
)
from hopsim.exceptions import ConfigurationError
from hopsim.models.probability import create_rng


class TestTopology(unittest.TestCase):
    """Test cases for Topology."""

    def setUp(self):
        self.rng = create_rng(42)

    def network(self, mean=0.100, stddev=0.001, loss=0.0):
        return NetworkComponent(NetworkConfig(mean, stddev, loss), self.rng)

    def warm_compute(self):
        return ComputeComponent(ComputeConfig(
            warm_latency=0.010,
            warm_stddev=0.001,
            cold_start_latency=0.300,
            cold_start_probability=0.0,
        ), self.rng)

    def database(self):
        return DatabaseComponent(DatabaseConfig(0.005, 0.001), self.rng)

    def mean_latency(self, topology, n=2000):
        return float(np.mean([topology.process_once() for _ in range(n)]))

    def test_single_component(self):
        """Test latency equals component latency."""
        topology = Topology([self.network()])
        self.assertAlmostEqual(self.mean_latency(topology), 0.100, delta=0.002)

    def test_latencies_add_up(self):
        """Test 100 ms + 10 ms + 5 ms ≈ 115 ms."""
        topology = Topology([self.network(), self.warm_compute(), self.database()])
        self.assertAlmostEqual(self.mean_latency(topology), 0.115, delta=0.002)

    def test_round_trip(self):
        """Test two network hops around compute ≈ 210 ms."""
        topology = Topology([self.network(), self.warm_compute(), self.network()])
        self.assertAlmostEqual(self.mean_latency(topology), 0.210, delta=0.002)

    def test_simulate_returns_percentiles(self):
        """Test simulate reduces samples to ordered percentiles."""
        topology = Topology([self.network(stddev=0.010)])
        result = topology.simulate(1000)

        self.assertGreater(result.p50, 0)
        self.assertGreater(result.p95, result.p50)
        self.assertGreater(result.p99, result.p95)
        self.assertEqual(result.sample_count, 1000)

    def test_cold_starts_dominate_p99(self):
        """Test a realistic Manila → Singapore path."""
        topology = Topology([
            self.network(mean=0.055, stddev=0.003, loss=0.001),
            ComputeComponent(ComputeConfig(0.008, 0.265, 0.10), self.rng),
            DatabaseComponent(DatabaseConfig(0.005, 0.003), self.rng),
            self.network(mean=0.055, stddev=0.003, loss=0.001),
        ])
        result = topology.simulate(5000)

        # Warm path is ~123 ms; cold path ~380 ms
        self.assertLess(result.p50, 0.200)
        self.assertGreater(result.p99, result.p50 * 1.5)

    def test_component_names(self):
        topology = Topology([self.network(), self.warm_compute(), self.database()])
        self.assertEqual(topology.component_names(), ["Network", "Compute", "Database"])
        self.assertEqual(len(topology), 3)

    def test_components_are_immutable(self):
        components = [self.network()]
        topology = Topology(components)
        components.append(self.database())

        self.assertEqual(len(topology), 1)
        self.assertIsInstance(topology.components, tuple)

    def test_empty_topology(self):
        with self.assertRaises(ConfigurationError):
            Topology([])

    def test_invalid_request_count(self):
        with self.assertRaises(ConfigurationError):
            Topology([self.network()]).simulate(0)

    def test_from_config(self):
        hops = [
            {'type': 'network', 'mean_latency': 0.050, 'stddev': 0.0, 'packet_loss_rate': 0.0},
            {'type': 'database', 'name': 'Cache', 'mean_latency': 0.002, 'stddev': 0.0},
        ]
        topology = Topology.from_config(hops, create_rng(1))

        self.assertEqual(topology.component_names(), ["Network", "Cache"])
        self.assertAlmostEqual(topology.process_once(), 0.052)

    def test_reusable_across_runs(self):
        """Test components can serve independent simulations."""
        topology = Topology([self.network()])
        first = topology.simulate(500)
        second = topology.simulate(500)

        self.assertAlmostEqual(first.p50, second.p50, delta=0.002)


if __name__ == '__main__':
    unittest.main()
