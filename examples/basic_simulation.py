"""Basic simulation example."""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from hopsim.analysis import compare_to_theory
from hopsim.calibration import build_topology, load_calibration
from hopsim.core.simulator import MM1Config, MM1Simulator
from hopsim.models.probability import create_rng
from hopsim.utils.logger import setup_logger
from configs import load_simulation_config


def main():
    """Run an M/M/1 queue and a calibrated route side by side."""
    logger = setup_logger("BasicSimulation")

    logger.info("=== Basic Hop Latency Simulation ===")

    config = load_simulation_config()
    rng = create_rng(config['simulation']['random_seed'])
    request_count = config['simulation']['request_count']

    # Single queue at 80% utilization
    mm1 = MM1Config(arrival_rate=800, service_rate=1000, request_count=request_count)
    result = MM1Simulator(mm1, rng).run()
    comparison = compare_to_theory(result, mm1.arrival_rate, mm1.service_rate)

    logger.info("\n=== M/M/1 ===")
    logger.info(f"Utilization: {result.utilization:.1%}")
    for key, entry in comparison.items():
        logger.info(f"  {key.upper()}: {entry['simulated'] * 1000:.2f} ms "
                    f"(theory {entry['theoretical'] * 1000:.2f} ms)")

    # Manila -> Singapore serverless request, with and without VPN
    calibration = load_calibration("manila-aws-singapore")
    for overlay in (None, "vpn", "direct_connect"):
        topology = build_topology(calibration, rng, overlay=overlay)
        route_result = topology.simulate(request_count)

        logger.info(f"\n=== {calibration.route} ({overlay or 'public internet'}) ===")
        logger.info(f"  Hops: {' -> '.join(topology.component_names())}")
        logger.info(f"  P50: {route_result.p50 * 1000:.1f} ms")
        logger.info(f"  P95: {route_result.p95 * 1000:.1f} ms")
        logger.info(f"  P99: {route_result.p99 * 1000:.1f} ms")

    logger.info("\nSimulation complete!")


if __name__ == "__main__":
    main()
