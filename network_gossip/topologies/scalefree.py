"""
Barabási-Albert scale-free network topology implementation.
"""

import numpy as np
from typing import Iterator

from ..core.base_models import NetworkTopology
from ..network.graph_model import NetworkModel


class ScaleFree(NetworkTopology):
    """
    Barabási-Albert scale-free network topology.

    Grows a network from two linked nodes by adding one node at a time. Each
    newcomer links to one endpoint of a uniformly random existing edge, which
    selects a node with probability proportional to its degree. Every
    intermediate network is connected, so no retry loop is needed.
    """

    def grow(self, rng: np.random.Generator) -> Iterator[NetworkModel]:
        """
        Yield the growing network after the seed edge and after every new node.

        The same object is yielded each time; copy it to keep a snapshot.
        """
        graph = NetworkModel(2)
        graph.add_edge(0, 1)
        yield graph

        while graph.n_nodes < self.n_agents:
            edges = graph.edges()
            edge = edges[rng.integers(len(edges))]
            partner = edge.end1 if rng.random() < 0.5 else edge.end2
            new_node = graph.add_node()
            graph.add_edge(new_node, partner)
            yield graph

    def build(self, rng: np.random.Generator) -> NetworkModel:
        graph = None
        for graph in self.grow(rng):
            pass
        return graph
