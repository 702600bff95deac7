"""Configuration module for HopSim."""

from pathlib import Path
from typing import Optional
import yaml

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "default.yaml"


def load_config(config_path: str) -> dict:
    """Load configuration from YAML file.

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration dictionary (empty for an empty file)
    """
    with open(config_path, 'r') as f:
        return yaml.safe_load(f) or {}


def merge_configs(base_config: dict, override_config: dict) -> dict:
    """Merge two configuration dictionaries.

    Nested sections are merged key by key; any other override value
    replaces the base value.

    Args:
        base_config: Base configuration
        override_config: Override configuration

    Returns:
        Merged configuration
    """
    merged = base_config.copy()
    for key, value in override_config.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_simulation_config(config_path: Optional[str] = None) -> dict:
    """Load the default configuration, overlaid with ``config_path`` if given."""
    config = load_config(str(DEFAULT_CONFIG_PATH))
    if config_path:
        config = merge_configs(config, load_config(config_path))
    return config
