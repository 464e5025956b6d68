"""
Watts-Strogatz small-world network topology implementation.
"""

import numpy as np
from typing import Dict, Any

from ..core.base_models import NetworkTopology
from ..network.graph_model import NetworkModel
from .lattice import build_lattice


class SmallWorld(NetworkTopology):
    """
    Watts-Strogatz small-world network topology.

    Starts from the chord-2 ring lattice, then rewires each lattice edge with
    probability beta. The whole construction is repeated until the result is
    connected.
    """

    retry_until_connected = True
    min_nodes = 5

    def __init__(self, parameters: Dict[str, Any], **kwargs):
        super().__init__(parameters, **kwargs)
        self.beta = self._check_probability("beta", parameters["beta"])

    def build(self, rng: np.random.Generator) -> NetworkModel:
        """
        Build one candidate small-world network.

        Edges are visited in lattice creation order. A rewired edge keeps its
        lower endpoint A and moves its other end to a uniformly chosen node that
        is neither A nor already a neighbor of A.
        """
        n = self.n_agents
        graph = build_lattice(n)

        for edge in graph.edges():
            if rng.random() >= self.beta:
                continue
            a, b = edge.end1, edge.end2
            linked = set(graph.neighbors(a))
            candidates = [x for x in range(n) if x != a and x not in linked]
            if not candidates:
                # A is already connected to every other node
                continue
            target = candidates[rng.integers(len(candidates))]
            graph.remove_edge(a, b)
            graph.add_edge(a, target, rewired=True)

        return graph
