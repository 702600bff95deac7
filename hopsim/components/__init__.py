"""Latency components and topology composition."""

from .base import LatencyComponent
from .network import NetworkComponent, NetworkConfig
from .compute import ComputeComponent, ComputeConfig
from .database import DatabaseComponent, DatabaseConfig
from .factory import build_component
from .topology import Topology, TopologyResult

__all__ = [
    "LatencyComponent",
    "NetworkComponent",
    "NetworkConfig",
    "ComputeComponent",
    "ComputeConfig",
    "DatabaseComponent",
    "DatabaseConfig",
    "build_component",
    "Topology",
    "TopologyResult",
]
