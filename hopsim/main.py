"""Main entry point for the HopSim latency simulator."""

import argparse
import sys
from pathlib import Path
from typing import Optional

import yaml

from configs import load_simulation_config
from hopsim.analysis import compare_to_theory, exponential_fit, sweep_arrival_rates
from hopsim.calibration import build_topology, get_available_routes, load_calibration
from hopsim.components import Topology
from hopsim.core.metrics_collector import MetricsCollector
from hopsim.core.simulator import MM1Config, MM1Simulator
from hopsim.exceptions import ConfigurationError
from hopsim.models.probability import create_rng
from hopsim.reports import ReportWriter
from hopsim.utils.logger import setup_logger


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="HopSim: infrastructure hop latency simulator"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML file overriding configs/default.yaml",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed (overrides simulation.random_seed)",
    )
    parser.add_argument(
        "--requests",
        type=int,
        default=None,
        help="Requests to simulate (overrides simulation.request_count)",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Directory to save results",
    )
    parser.add_argument(
        "--visualize",
        action="store_true",
        help="Generate plots (requires --output-dir)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    mm1 = subparsers.add_parser("mm1", help="Event-driven M/M/1 queue simulation")
    mm1.add_argument("--arrival-rate", type=float, default=None, help="λ, requests/sec")
    mm1.add_argument("--service-rate", type=float, default=None, help="μ, requests/sec")

    topology = subparsers.add_parser("topology", help="Monte Carlo simulation of a hop chain")
    topology.add_argument("--route", type=str, default=None, help="Calibrated route name")
    topology.add_argument(
        "--overlay",
        choices=["vpn", "direct_connect"],
        default=None,
        help="Network overlay applied to the route",
    )

    sweep = subparsers.add_parser("sweep", help="Sweep M/M/1 arrival rates")
    sweep.add_argument("--service-rate", type=float, default=None, help="μ, requests/sec")
    sweep.add_argument("--arrival-rates", type=float, nargs="+", default=None,
                       help="λ values to simulate")

    subparsers.add_parser("routes", help="List calibrated routes")

    return parser.parse_args(argv)


def _save_yaml(data: dict, output_dir: Path, filename: str, logger) -> None:
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / filename
    with open(path, 'w') as f:
        yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
    logger.info(f"Results saved to {path}")


def run_mm1(config: dict, args, rng, output_dir: Optional[Path], logger) -> None:
    mm1_section = config['mm1']
    arrival_rate = args.arrival_rate if args.arrival_rate is not None else mm1_section['arrival_rate']
    service_rate = args.service_rate if args.service_rate is not None else mm1_section['service_rate']

    mm1_config = MM1Config.from_dict({
        'arrival_rate': arrival_rate,
        'service_rate': service_rate,
        'request_count': config['simulation']['request_count'],
    })
    simulator = MM1Simulator(mm1_config, rng, metrics_config=config)
    result = simulator.run()
    metrics = simulator.compute_metrics()

    comparison = compare_to_theory(result, mm1_config.arrival_rate, mm1_config.service_rate)
    fit = exponential_fit(simulator.latencies, mm1_config.arrival_rate, mm1_config.service_rate)

    print(ReportWriter().generate_mm1_summary(
        result, mm1_config.arrival_rate, mm1_config.service_rate, comparison, metrics
    ))
    logger.info(f"KS statistic vs Exp(μ-λ): {fit['ks_statistic']:.4f} (p={fit['p_value']:.3f})")

    if output_dir is not None:
        _save_yaml({
            'result': result.to_dict(),
            'theory': {k: v['theoretical'] for k, v in comparison.items()},
            'metrics': metrics,
            'exponential_fit': fit,
        }, output_dir, "mm1_results.yaml", logger)

        if args.visualize:
            from hopsim.utils.visualization import plot_latency_distribution
            plot_latency_distribution(simulator.latencies, result,
                                      output_dir / "mm1_latency.png", title="M/M/1 Time in System")


def run_topology(config: dict, args, rng, output_dir: Optional[Path], logger) -> None:
    topology_section = config.get('topology', {})
    show_progress = config['simulation'].get('show_progress', False)
    calibration = None
    overlay = args.overlay if args.overlay is not None else topology_section.get('overlay')

    hops = topology_section.get('hops') or []
    if hops and args.route is None:
        topology = Topology.from_config(hops, rng, show_progress=show_progress)
        if overlay:
            logger.warning(f"Overlay '{overlay}' ignored: overlays apply to calibrated routes, "
                           f"not to explicitly configured hops")
        overlay = None
    else:
        route = args.route or topology_section.get('route')
        if not route:
            raise ConfigurationError("No topology hops or calibrated route configured")
        calibration = load_calibration(route)
        topology = build_topology(calibration, rng, overlay=overlay, show_progress=show_progress)

    request_count = config['simulation']['request_count']
    logger.info(f"Simulating {request_count} requests through {topology!r}")

    samples = topology.sample_latencies(request_count)
    result = topology.summarize(samples)

    collector = MetricsCollector(config)
    collector.record_many(samples)
    metrics = collector.compute_metrics()

    print(ReportWriter().generate_topology_summary(
        result, topology.component_names(), calibration, overlay, metrics
    ))

    if output_dir is not None:
        _save_yaml({
            'components': topology.component_names(),
            'result': result.to_dict(),
            'metrics': metrics,
        }, output_dir, "topology_results.yaml", logger)

        if args.visualize:
            from hopsim.utils.visualization import plot_latency_distribution
            plot_latency_distribution(samples, result, output_dir / "topology_latency.png")


def run_sweep(config: dict, args, rng, output_dir: Optional[Path], logger) -> None:
    service_rate = args.service_rate if args.service_rate is not None else config['mm1']['service_rate']
    arrival_rates = args.arrival_rates or config['sweep']['arrival_rates']

    table = sweep_arrival_rates(
        service_rate, arrival_rates, config['simulation']['request_count'], rng
    )
    print(ReportWriter().generate_sweep_table(table))

    if output_dir is not None:
        output_dir.mkdir(parents=True, exist_ok=True)
        csv_path = output_dir / "sweep.csv"
        table.to_csv(csv_path, index=False)
        logger.info(f"Sweep table saved to {csv_path}")

        if args.visualize:
            from hopsim.utils.visualization import plot_sweep
            plot_sweep(table, output_dir / "sweep.png")


def main(argv=None) -> int:
    """Main function."""
    args = parse_args(argv)

    logger = setup_logger("HopSim", level="DEBUG" if args.verbose else "INFO")

    if args.command == "routes":
        for route in get_available_routes():
            print(route)
        return 0

    try:
        config = load_simulation_config(args.config)
        if args.seed is not None:
            config['simulation']['random_seed'] = args.seed
        if args.requests is not None:
            config['simulation']['request_count'] = args.requests

        rng = create_rng(config['simulation'].get('random_seed'))
        output_dir = Path(args.output_dir) if args.output_dir else None

        if args.visualize and output_dir is None:
            logger.warning("--visualize needs --output-dir; skipping plots")

        handler = {
            "mm1": run_mm1,
            "topology": run_topology,
            "sweep": run_sweep,
        }[args.command]
        handler(config, args, rng, output_dir, logger)
        return 0

    except (ConfigurationError, FileNotFoundError, yaml.YAMLError) as e:
        logger.error(f"Simulation failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
