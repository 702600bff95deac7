"""Tests for route calibration loading."""

import json
import shutil
import tempfile
import unittest
from pathlib import Path

import yaml

from hopsim.calibration import (
    build_topology, get_available_routes, load_calibration, ms_to_seconds, parse_calibration
)
from hopsim.calibration.loader import ROUTES_DIR
from hopsim.exceptions import CalibrationError
from hopsim.models.probability import create_rng


class TestCalibrationLoader(unittest.TestCase):
    """Test cases for loading route files."""

    def setUp(self):
        self.temp_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def raw_route(self):
        with open(ROUTES_DIR / "manila-aws-singapore.yaml") as f:
            return yaml.safe_load(f)

    def test_load_bundled_route(self):
        calibration = load_calibration("manila-aws-singapore")

        self.assertEqual(calibration.route, "manila-aws-singapore")
        self.assertEqual(calibration.network.one_way_latency.mean, 55)
        self.assertEqual(calibration.compute.cold_start_probability, 0.10)
        self.assertEqual(calibration.database.get_item.p50, 5)
        self.assertIsNotNone(calibration.vpn)
        self.assertIsNotNone(calibration.direct_connect)

    def test_available_routes(self):
        routes = get_available_routes()

        self.assertIn("manila-aws-singapore", routes)
        self.assertIn("singapore-aws-singapore", routes)

    def test_unknown_route(self):
        with self.assertRaises(FileNotFoundError):
            load_calibration("atlantis-aws-nowhere")

    def test_json_route(self):
        (self.temp_dir / "custom.json").write_text(json.dumps(self.raw_route()))

        calibration = load_calibration("custom", routes_dir=self.temp_dir)

        self.assertEqual(calibration.network.packet_loss, 0.001)
        self.assertEqual(get_available_routes(self.temp_dir), ["custom"])

    def test_missing_required_field(self):
        data = self.raw_route()
        del data['compute']['warm']['p50']

        with self.assertRaises(CalibrationError) as ctx:
            parse_calibration(data)
        self.assertIn("compute.warm.p50", str(ctx.exception))

    def test_missing_section_in_file(self):
        data = self.raw_route()
        del data['database']
        with open(self.temp_dir / "broken.yaml", "w") as f:
            yaml.safe_dump(data, f)

        with self.assertRaises(CalibrationError):
            load_calibration("broken", routes_dir=self.temp_dir)

    def test_non_numeric_field(self):
        data = self.raw_route()
        data['network']['packet_loss'] = "lots"

        with self.assertRaises(CalibrationError):
            parse_calibration(data)

    def test_optional_overlays(self):
        calibration = load_calibration("singapore-aws-singapore")

        self.assertIsNone(calibration.vpn)
        self.assertIsNone(calibration.direct_connect)

    def test_ms_to_seconds(self):
        self.assertEqual(ms_to_seconds(250), 0.25)


class TestBuildTopology(unittest.TestCase):
    """Test cases for turning calibration into components."""

    def setUp(self):
        self.calibration = load_calibration("manila-aws-singapore")

    def test_default_topology(self):
        topology = build_topology(self.calibration, create_rng(42))

        self.assertEqual(topology.component_names(), ["Network", "Lambda", "DynamoDB", "Network"])
        network = topology.components[0]
        self.assertAlmostEqual(network.config.mean_latency, 0.055)
        self.assertAlmostEqual(topology.components[2].config.stddev, 0.0025)

    def test_simulated_percentiles(self):
        topology = build_topology(self.calibration, create_rng(42))
        result = topology.simulate(5000)

        # Warm path 55 + 8 + 5 + 55 = 123 ms; 10% of requests are cold
        self.assertAlmostEqual(result.p50, 0.123, delta=0.01)
        self.assertGreater(result.p99, 0.3)

    def test_vpn_overlay(self):
        topology = build_topology(self.calibration, create_rng(42), overlay="vpn")

        self.assertEqual(
            topology.component_names(),
            ["Network", "VPN", "Lambda", "DynamoDB", "VPN", "Network"],
        )

    def test_direct_connect_overlay(self):
        topology = build_topology(self.calibration, create_rng(42), overlay="direct_connect")

        # 20% reduction of 55 ms
        self.assertAlmostEqual(topology.components[0].config.mean_latency, 0.044)
        self.assertEqual(len(topology), 4)

    def test_missing_overlay(self):
        calibration = load_calibration("singapore-aws-singapore")

        with self.assertRaises(CalibrationError):
            build_topology(calibration, create_rng(42), overlay="vpn")
        with self.assertRaises(CalibrationError):
            build_topology(calibration, create_rng(42), overlay="direct_connect")

    def test_unknown_overlay(self):
        with self.assertRaises(CalibrationError):
            build_topology(self.calibration, create_rng(42), overlay="satellite")

    def test_overlays_change_latency(self):
        base = build_topology(self.calibration, create_rng(1)).simulate(3000)
        vpn = build_topology(self.calibration, create_rng(1), overlay="vpn").simulate(3000)
        direct = build_topology(self.calibration, create_rng(1), overlay="direct_connect").simulate(3000)

        self.assertGreater(vpn.p50, base.p50)
        self.assertLess(direct.p50, base.p50)


if __name__ == '__main__':
    unittest.main()
