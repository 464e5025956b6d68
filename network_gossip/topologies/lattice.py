"""
Ring lattice topology with chord-2 connections.
"""

import numpy as np

from ..core.base_models import NetworkTopology
from ..network.graph_model import NetworkModel


def build_lattice(n_agents: int) -> NetworkModel:
    """Connect node i to (i + 1) mod N and (i + 2) mod N; every degree is 4."""
    graph = NetworkModel(n_agents)
    for i in range(n_agents):
        graph.add_edge(i, (i + 1) % n_agents)
        graph.add_edge(i, (i + 2) % n_agents)
    return graph


class Lattice(NetworkTopology):
    """
    Deterministic ring lattice.

    Always connected, so no retry loop is needed.
    """

    min_nodes = 5

    def build(self, rng: np.random.Generator) -> NetworkModel:
        return build_lattice(self.n_agents)
