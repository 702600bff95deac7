"""Core simulation components."""

from .event_queue import SimulationEvent, EventType, EventQueue
from .metrics_collector import MetricsCollector
from .latency_model import LatencyModel
from .simulator import MM1Config, MM1Simulator, MM1Model, SimulationResult, simulate_mm1

__all__ = [
    "SimulationEvent",
    "EventType",
    "EventQueue",
    "MetricsCollector",
    "LatencyModel",
    "MM1Config",
    "MM1Simulator",
    "MM1Model",
    "SimulationResult",
    "simulate_mm1",
]
