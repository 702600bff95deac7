"""Build components from configuration dictionaries."""

from typing import Dict, Optional

import numpy as np

from .base import LatencyComponent
from .compute import ComputeComponent, ComputeConfig
from .database import DatabaseComponent, DatabaseConfig
from .network import NetworkComponent, NetworkConfig
from ..exceptions import ConfigurationError

COMPONENT_TYPES = {
    'network': (NetworkComponent, NetworkConfig),
    'compute': (ComputeComponent, ComputeConfig),
    'database': (DatabaseComponent, DatabaseConfig),
}


def build_component(hop: Dict, rng: Optional[np.random.Generator] = None) -> LatencyComponent:
    """Create one component from a hop description.

    Args:
        hop: Dict with ``type`` (network, compute or database), the
            parameters of that type and an optional ``name``
        rng: Random source shared with the rest of the topology

    Returns:
        Configured component
    """
    hop_type = hop.get('type')
    if hop_type not in COMPONENT_TYPES:
        raise ConfigurationError(
            f"Unknown component type: {hop_type!r} "
            f"(expected one of {', '.join(sorted(COMPONENT_TYPES))})"
        )

    component_cls, config_cls = COMPONENT_TYPES[hop_type]
    params = {k: v for k, v in hop.items() if k not in ('type', 'name')}
    config = config_cls.from_dict(params)

    if 'name' in hop:
        return component_cls(config, rng, name=hop['name'])
    return component_cls(config, rng)
