"""HopSim: latency distributions for chains of infrastructure hops."""

from .core.simulator import MM1Config, MM1Simulator, MM1Model, SimulationResult, simulate_mm1
from .core.event_queue import SimulationEvent, EventType, EventQueue
from .components import (
    NetworkComponent,
    ComputeComponent,
    DatabaseComponent,
    Topology,
    TopologyResult,
)
from .exceptions import ConfigurationError, CalibrationError
from .utils.logger import setup_logger

__version__ = "0.1.0"
__all__ = [
    "MM1Config",
    "MM1Simulator",
    "MM1Model",
    "SimulationResult",
    "simulate_mm1",
    "SimulationEvent",
    "EventType",
    "EventQueue",
    "NetworkComponent",
    "ComputeComponent",
    "DatabaseComponent",
    "Topology",
    "TopologyResult",
    "ConfigurationError",
    "CalibrationError",
    "setup_logger",
]
