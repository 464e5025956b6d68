"""
Gossip aggregation over a network.

One call to ``aggregate`` is one round of the active node: it exchanges its
value with one random neighbor or with every neighbor in turn, each exchange
updating both parties before the next one starts.
"""

import numpy as np
from enum import Enum
from typing import Callable, Dict, List, Optional, Union

from ..network.graph_model import NetworkModel

SOURCE_VALUE = 1000.0


class AggregationMode(str, Enum):
    AVERAGE = "average"
    MAX = "max"
    MIN = "min"


_COMBINE: Dict[AggregationMode, Callable[[float, float], float]] = {
    AggregationMode.AVERAGE: lambda u, v: (u + v) / 2.0,
    AggregationMode.MAX: max,
    AggregationMode.MIN: min,
}


def resolve_mode(mode: Union[AggregationMode, str]) -> AggregationMode:
    try:
        return AggregationMode(mode.lower() if isinstance(mode, str) else mode)
    except ValueError:
        raise ValueError(f"Unknown aggregation mode: {mode}")

def select_partners(graph: NetworkModel, node_id: int, random_neighbor: bool,
                    rng: np.random.Generator) -> List[int]:
    """
    Neighbors the active node exchanges with this round.

    Args:
        graph: Current network
        node_id: Active node
        random_neighbor: One uniformly random neighbor instead of all of them
        rng: Random source, consumed only when ``random_neighbor`` is set and
            the node has neighbors

    Returns:
        Neighbor ids in exchange order
    """
    neighbors = graph.neighbors(node_id)
    if random_neighbor and neighbors:
        return [neighbors[rng.integers(len(neighbors))]]
    return neighbors

def aggregate(graph: NetworkModel, values: np.ndarray, node_id: int,
              mode: Union[AggregationMode, str], random_neighbor: bool,
              rng: np.random.Generator) -> List[int]:
    """
    Run one gossip round for the active node, updating ``values`` in place.

    Both sides of an exchange adopt the combined value (the pair mean, max or
    min), so average mode preserves the sum of all values and max/min mode
    only ever spreads existing extremes. A node without neighbors is left
    unchanged.

    Args:
        graph: Current network
        values: Per-node values indexed by node id
        node_id: Active node
        mode: Aggregation function
        random_neighbor: Exchange with one random neighbor instead of all
        rng: Random source

    Returns:
        The neighbors visited, in order
    """
    combine = _COMBINE[resolve_mode(mode)]
    partners = select_partners(graph, node_id, random_neighbor, rng)

    for partner in partners:
        combined = combine(values[node_id], values[partner])
        values[node_id] = combined
        values[partner] = combined

    return partners

def estimate_network_size(value: float, source_value: float = SOURCE_VALUE) -> Optional[float]:
    """
    Network size implied by a node's share of the source mass.

    Only meaningful in average mode when exactly one node started at
    ``source_value`` and every other node at 0.
    """
    if value > 0:
        return source_value / value
    return None
