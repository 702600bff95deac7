"""
Calibration data for named routes and conversion into topologies.

Route files live in ``hopsim/calibration/routes`` as YAML (JSON is also
accepted) with every latency in milliseconds. The simulation core works in
seconds, so values are converted when components are built.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import numpy as np
import yaml

from ..components.compute import ComputeComponent, ComputeConfig
from ..components.database import DatabaseComponent, DatabaseConfig
from ..components.network import NetworkComponent, NetworkConfig
from ..components.topology import Topology
from ..exceptions import CalibrationError
from ..models.probability import create_rng
from ..utils.logger import setup_logger

ROUTES_DIR = Path(__file__).resolve().parent / "routes"
ROUTE_SUFFIXES = (".yaml", ".yml", ".json")

OVERLAYS = ("vpn", "direct_connect")

# DynamoDB-style reads publish percentiles only; spread is estimated from p50
DATABASE_STDDEV_FRACTION = 0.5

logger = setup_logger("Calibration")


@dataclass(frozen=True)
class LatencyMs:
    mean: float
    stddev: float


@dataclass(frozen=True)
class PercentilesMs:
    p50: float
    p95: float
    p99: float


@dataclass(frozen=True)
class NetworkCalibration:
    one_way_latency: LatencyMs
    packet_loss: float


@dataclass(frozen=True)
class ComputeCalibration:
    cold_start: PercentilesMs
    warm: PercentilesMs
    cold_start_probability: float


@dataclass(frozen=True)
class DatabaseCalibration:
    get_item: PercentilesMs


@dataclass(frozen=True)
class VPNCalibration:
    additional_latency: LatencyMs


@dataclass(frozen=True)
class DirectConnectCalibration:
    latency_reduction_percent: float


@dataclass(frozen=True)
class CalibrationData:
    """Measured latency profile of one route."""
    route: str
    description: str
    source: str
    network: NetworkCalibration
    compute: ComputeCalibration
    database: DatabaseCalibration
    vpn: Optional[VPNCalibration] = None
    direct_connect: Optional[DirectConnectCalibration] = None


def ms_to_seconds(ms: float) -> float:
    """Convert milliseconds to seconds (the simulation's time unit)."""
    return ms / 1000.0


def _field(data: Dict[str, Any], path: str) -> Any:
    """Fetch a dotted path, failing loudly on anything missing."""
    node: Any = data
    for key in path.split('.'):
        if not isinstance(node, dict) or key not in node:
            raise CalibrationError(f"Calibration missing required field: {path}")
        node = node[key]
    return node


def _number(data: Dict[str, Any], path: str) -> float:
    value = _field(data, path)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise CalibrationError(f"Calibration field {path} must be a number, got {value!r}")
    return float(value)


def _latency(data: Dict[str, Any], path: str) -> LatencyMs:
    return LatencyMs(mean=_number(data, f"{path}.mean"), stddev=_number(data, f"{path}.stddev"))


def _percentiles(data: Dict[str, Any], path: str) -> PercentilesMs:
    return PercentilesMs(
        p50=_number(data, f"{path}.p50"),
        p95=_number(data, f"{path}.p95"),
        p99=_number(data, f"{path}.p99"),
    )


def parse_calibration(data: Dict[str, Any]) -> CalibrationData:
    """Validate a raw calibration mapping and convert it to typed records.

    Raises:
        CalibrationError: If a required field is missing or not numeric
    """
    if not isinstance(data, dict):
        raise CalibrationError("Calibration data must be a mapping")

    vpn = None
    if data.get('vpn') is not None:
        vpn = VPNCalibration(additional_latency=_latency(data, 'vpn.additional_latency'))

    direct_connect = None
    if data.get('direct_connect') is not None:
        direct_connect = DirectConnectCalibration(
            latency_reduction_percent=_number(data, 'direct_connect.latency_reduction.percent')
        )

    return CalibrationData(
        route=str(_field(data, 'route')),
        description=str(data.get('description', '')),
        source=str(data.get('source', '')),
        network=NetworkCalibration(
            one_way_latency=_latency(data, 'network.one_way_latency'),
            packet_loss=_number(data, 'network.packet_loss'),
        ),
        compute=ComputeCalibration(
            cold_start=_percentiles(data, 'compute.cold_start'),
            warm=_percentiles(data, 'compute.warm'),
            cold_start_probability=_number(data, 'compute.cold_start_probability'),
        ),
        database=DatabaseCalibration(get_item=_percentiles(data, 'database.get_item')),
        vpn=vpn,
        direct_connect=direct_connect,
    )


def _route_path(route_name: str, routes_dir: Path) -> Path:
    for suffix in ROUTE_SUFFIXES:
        candidate = routes_dir / f"{route_name}{suffix}"
        if candidate.exists():
            return candidate
    raise FileNotFoundError(
        f"Calibration file not found for route '{route_name}' in {routes_dir} "
        f"(available: {', '.join(get_available_routes(routes_dir)) or 'none'})"
    )


def load_calibration(
    route_name: str,
    routes_dir: Optional[Union[str, Path]] = None,
) -> CalibrationData:
    """Load calibration data for a route.

    Args:
        route_name: Route name, e.g. 'manila-aws-singapore'
        routes_dir: Directory of route files (defaults to the bundled routes)

    Returns:
        Parsed calibration data

    Raises:
        FileNotFoundError: If no file exists for the route
        CalibrationError: If the file is malformed or incomplete
    """
    routes_dir = Path(routes_dir) if routes_dir is not None else ROUTES_DIR
    path = _route_path(route_name, routes_dir)

    with open(path, 'r') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise CalibrationError(f"Could not parse calibration file {path}: {e}") from e

    calibration = parse_calibration(data)
    logger.info(f"Loaded calibration for {calibration.route} from {path.name}")
    return calibration


def get_available_routes(routes_dir: Optional[Union[str, Path]] = None) -> List[str]:
    """Names of all routes with a calibration file."""
    routes_dir = Path(routes_dir) if routes_dir is not None else ROUTES_DIR
    if not routes_dir.is_dir():
        return []
    return sorted(p.stem for p in routes_dir.iterdir() if p.suffix in ROUTE_SUFFIXES)


def build_topology(
    calibration: CalibrationData,
    rng: Optional[np.random.Generator] = None,
    overlay: Optional[str] = None,
    show_progress: bool = False,
) -> Topology:
    """Assemble client → network → compute → database → network.

    Args:
        calibration: Route calibration (milliseconds)
        rng: Random source shared by every hop
        overlay: None, 'vpn' (adds a VPN hop in each direction) or
            'direct_connect' (reduces network latency by the calibrated
            percentage)
        show_progress: Display a progress bar while simulating

    Returns:
        Topology with all parameters in seconds
    """
    if overlay is not None and overlay not in OVERLAYS:
        raise CalibrationError(f"Unknown overlay: {overlay!r} (expected one of {', '.join(OVERLAYS)})")

    rng = rng if rng is not None else create_rng()

    network = calibration.network
    network_mean = network.one_way_latency.mean
    network_stddev = network.one_way_latency.stddev

    if overlay == 'direct_connect':
        if calibration.direct_connect is None:
            raise CalibrationError(f"Route {calibration.route} has no direct_connect calibration")
        scale = 1.0 - calibration.direct_connect.latency_reduction_percent / 100.0
        network_mean *= scale
        network_stddev *= scale

    network_config = NetworkConfig(
        mean_latency=ms_to_seconds(network_mean),
        stddev=ms_to_seconds(network_stddev),
        packet_loss_rate=network.packet_loss,
    )

    compute = ComputeComponent(ComputeConfig(
        warm_latency=ms_to_seconds(calibration.compute.warm.p50),
        cold_start_latency=ms_to_seconds(calibration.compute.cold_start.p50),
        cold_start_probability=calibration.compute.cold_start_probability,
    ), rng, name="Lambda")

    get_item_p50 = calibration.database.get_item.p50
    database = DatabaseComponent(DatabaseConfig(
        mean_latency=ms_to_seconds(get_item_p50),
        stddev=ms_to_seconds(get_item_p50 * DATABASE_STDDEV_FRACTION),
    ), rng, name="DynamoDB")

    components = [NetworkComponent(network_config, rng, name="Network")]

    vpn_hop = None
    if overlay == 'vpn':
        if calibration.vpn is None:
            raise CalibrationError(f"Route {calibration.route} has no vpn calibration")
        vpn_hop = NetworkConfig(
            mean_latency=ms_to_seconds(calibration.vpn.additional_latency.mean),
            stddev=ms_to_seconds(calibration.vpn.additional_latency.stddev),
            packet_loss_rate=0.0,
        )
        components.append(NetworkComponent(vpn_hop, rng, name="VPN"))

    components.extend([compute, database])

    if vpn_hop is not None:
        components.append(NetworkComponent(vpn_hop, rng, name="VPN"))
    components.append(NetworkComponent(network_config, rng, name="Network"))

    return Topology(components, show_progress=show_progress)
