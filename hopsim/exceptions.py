"""Exception types raised by the simulator."""


class ConfigurationError(ValueError):
    """Invalid simulation parameters (e.g. an unstable queue with λ >= μ)."""


class CalibrationError(ConfigurationError):
    """Calibration data is malformed or missing required fields."""
