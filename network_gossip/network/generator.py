"""
Network generator dispatching to the topology implementations.
"""

import numpy as np
from enum import Enum
from typing import Dict, Any, Optional, Union

from ..core.base_models import DEFAULT_MAX_ATTEMPTS, NetworkTopology
from ..errors import InvalidTopologyParameter
from ..topologies import Lattice, Random, SmallWorld, ScaleFree
from .graph_model import NetworkModel


class TopologyKind(str, Enum):
    LATTICE = "lattice"
    RANDOM = "random"
    SMALLWORLD = "smallworld"
    SCALEFREE = "scalefree"


def resolve_kind(kind: Union[TopologyKind, str]) -> TopologyKind:
    try:
        return TopologyKind(kind.lower() if isinstance(kind, str) else kind)
    except ValueError:
        raise ValueError(f"Unknown topology: {kind}")

def create_topology(kind: Union[TopologyKind, str], n: int, params: Optional[Dict[str, Any]] = None,
                    max_attempts: int = DEFAULT_MAX_ATTEMPTS) -> NetworkTopology:
    """
    Build the topology object for a kind without generating a network yet.

    Args:
        kind: Topology kind
        n: Number of nodes
        params: ``rewiring_probability`` and/or ``connection_probability``
        max_attempts: Retry budget of the connectivity loop

    Returns:
        Configured topology; parameters are already validated
    """
    kind = resolve_kind(kind)
    params = params or {}
    topology_params: Dict[str, Any] = {"n_agents": n}

    if kind is TopologyKind.RANDOM:
        if "connection_probability" not in params:
            raise InvalidTopologyParameter("random topology requires connection_probability")
        topology_params["p"] = params["connection_probability"]
    elif kind is TopologyKind.SMALLWORLD:
        if "rewiring_probability" not in params:
            raise InvalidTopologyParameter("smallworld topology requires rewiring_probability")
        topology_params["beta"] = params["rewiring_probability"]

    classes = {
        TopologyKind.LATTICE: Lattice,
        TopologyKind.RANDOM: Random,
        TopologyKind.SMALLWORLD: SmallWorld,
        TopologyKind.SCALEFREE: ScaleFree,
    }
    return classes[kind](topology_params, max_attempts=max_attempts)

def generate_topology(kind: Union[TopologyKind, str], n: int, params: Optional[Dict[str, Any]] = None,
                      rng: Optional[np.random.Generator] = None, random_seed: Optional[int] = None,
                      max_attempts: int = DEFAULT_MAX_ATTEMPTS) -> NetworkModel:
    """
    Generate a connected network of the given kind.

    Args:
        kind: Topology kind
        n: Number of nodes
        params: ``rewiring_probability`` and/or ``connection_probability``
        rng: Random source; takes precedence over ``random_seed``
        random_seed: Seed for a fresh generator when ``rng`` is not given
        max_attempts: Retry budget of the connectivity loop

    Returns:
        Connected network

    Raises:
        InvalidTopologyParameter: parameters rejected before construction
        GenerationError: retry budget exhausted
    """
    topology = create_topology(kind, n, params, max_attempts)
    if rng is None:
        rng = np.random.default_rng(random_seed)
    return topology.generate_network(rng)

def get_network_params(kind: Union[TopologyKind, str], n_agents: int) -> Dict[str, Any]:
    """Get default parameters for a network topology"""
    kind = resolve_kind(kind)
    params: Dict[str, Any] = {}

    if kind is TopologyKind.RANDOM:
        params["connection_probability"] = 0.1
    elif kind is TopologyKind.SMALLWORLD:
        params["rewiring_probability"] = 0.1

    return params
