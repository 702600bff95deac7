"""Route calibration data and topology assembly."""

from .loader import (
    CalibrationData,
    build_topology,
    get_available_routes,
    load_calibration,
    ms_to_seconds,
    parse_calibration,
)

__all__ = [
    "CalibrationData",
    "build_topology",
    "get_available_routes",
    "load_calibration",
    "ms_to_seconds",
    "parse_calibration",
]
