"""
Erdős-Rényi random network topology implementation.
"""

import numpy as np
from typing import Dict, Any

from ..core.base_models import NetworkTopology
from ..network.graph_model import NetworkModel


class Random(NetworkTopology):
    """
    Erdős-Rényi random network topology.

    Starts from the complete graph and keeps each edge independently with
    probability p. Disconnected outcomes are discarded and regenerated.
    """

    retry_until_connected = True

    def __init__(self, parameters: Dict[str, Any], **kwargs):
        super().__init__(parameters, **kwargs)
        self.p = self._check_probability("p", parameters["p"], allow_zero=False)

    def build(self, rng: np.random.Generator) -> NetworkModel:
        """
        Build one candidate random network.

        One draw per node pair, pairs visited as (i, j) with i < j in
        lexicographic order.
        """
        n = self.n_agents
        graph = NetworkModel(n)
        for i in range(n):
            for j in range(i + 1, n):
                graph.add_edge(i, j)

        for i in range(n):
            for j in range(i + 1, n):
                # Keep with probability p
                if rng.random() >= self.p:
                    graph.remove_edge(i, j)

        return graph
