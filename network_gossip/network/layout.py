"""
Node position hints for displaying a network.

Positions are presentational only; nothing in the simulation reads them.
"""

import networkx as nx
from typing import Dict, Optional, Tuple

from .graph_model import NetworkModel

RING_LAYOUTS = ("lattice", "smallworld")


def node_positions(graph: NetworkModel, kind: str = "lattice",
                   seed: Optional[int] = None) -> Dict[int, Tuple[float, float]]:
    """
    Compute a 2D position for every node.

    Ring-based topologies are laid out on a circle, everything else with a
    spring layout.

    Args:
        graph: Network to lay out
        kind: Topology kind the network was generated with
        seed: Seed for the spring layout

    Returns:
        Mapping node id -> (x, y)
    """
    G = graph.to_networkx()
    if str(getattr(kind, "value", kind)).lower() in RING_LAYOUTS:
        pos = nx.circular_layout(G)
    else:
        pos = nx.spring_layout(G, k=1 / max(graph.n_nodes, 1) ** 0.5, iterations=50, seed=seed)
    return {int(node): (float(xy[0]), float(xy[1])) for node, xy in pos.items()}
