"""
Structural analysis of generated networks.

Floyd-Warshall all-pairs shortest paths plus the metrics derived from them,
the clustering coefficient and the degree distribution.
"""

import math
import numpy as np
from collections import Counter
from typing import Dict, Any, Optional

from ..network.graph_model import NetworkModel

# ============================================================================
# SHORTEST PATHS
# ============================================================================

def compute_distances(graph: NetworkModel) -> np.ndarray:
    """
    All-pairs shortest path lengths via Floyd-Warshall.

    Rows and columns follow ``graph.nodes()`` order. Every edge has weight 1,
    unreachable pairs hold ``np.inf`` and the diagonal is 0.

    Args:
        graph: Network to analyse

    Returns:
        Distance matrix (n_nodes x n_nodes)
    """
    A = graph.get_adjacency_matrix()
    n = A.shape[0]
    D = np.where(A == 1, 1.0, np.inf)
    np.fill_diagonal(D, 0.0)

    for k in range(n):
        D = np.minimum(D, D[:, k, np.newaxis] + D[np.newaxis, k, :])

    return D

def average_path_length(distances: np.ndarray) -> float:
    """
    Mean shortest path length over all pairs of distinct nodes.

    The metric is all-or-nothing: a single unreachable pair makes the whole
    value infinite. Networks with fewer than two nodes report 0.
    """
    n = distances.shape[0]
    if n < 2:
        return 0.0
    off_diagonal = distances[~np.eye(n, dtype=bool)]
    if np.isinf(off_diagonal).any():
        return math.inf
    return float(off_diagonal.mean())

def is_connected(graph: NetworkModel) -> bool:
    """Acceptance test used by the generators: finite average path length."""
    return math.isfinite(average_path_length(compute_distances(graph)))

# ============================================================================
# CLUSTERING
# ============================================================================

def local_clustering(graph: NetworkModel) -> Dict[int, Optional[float]]:
    """
    Local clustering coefficient of every node.

    Nodes of degree <= 1 have no defined coefficient and map to None.
    """
    coefficients: Dict[int, Optional[float]] = {}
    for node_id in graph.nodes():
        neighbors = graph.neighbors(node_id)
        deg = len(neighbors)
        if deg <= 1:
            coefficients[node_id] = None
            continue
        links = 0
        for i, a in enumerate(neighbors):
            for b in neighbors[i + 1:]:
                if graph.has_edge(a, b):
                    links += 1
        coefficients[node_id] = 2.0 * links / (deg * (deg - 1))
    return coefficients

def clustering_coefficient(graph: NetworkModel) -> float:
    """
    Network clustering coefficient.

    Mean of the local coefficients over nodes with degree > 1. When no node
    qualifies the network reports 0.
    """
    defined = [c for c in local_clustering(graph).values() if c is not None]
    if not defined:
        return 0.0
    return float(np.mean(defined))

# ============================================================================
# NETWORK ANALYSIS
# ============================================================================

def degree_histogram(graph: NetworkModel) -> Dict[int, int]:
    """Map each degree present in the network to the number of nodes having it."""
    counts = Counter(graph.degrees().values())
    return {degree: counts[degree] for degree in sorted(counts)}

def network_metrics(graph: NetworkModel) -> Dict[str, float]:
    """Average path length and clustering coefficient of a network"""
    return {
        "average_path_length": average_path_length(compute_distances(graph)),
        "clustering_coefficient": clustering_coefficient(graph),
    }

def get_network_info(graph: NetworkModel) -> Dict[str, Any]:
    """Get information about a network"""
    n_nodes = graph.n_nodes
    total_edges = graph.n_edges
    max_possible_edges = n_nodes * (n_nodes - 1) / 2
    density = total_edges / max_possible_edges if max_possible_edges > 0 else 0
    degrees = np.array(list(graph.degrees().values())) if n_nodes else np.zeros(1)

    return {
        "n_nodes": n_nodes,
        "total_edges": total_edges,
        "rewired_edges": graph.rewired_edge_count(),
        "density": density,
        "average_degree": float(np.mean(degrees)),
        "max_degree": int(np.max(degrees)),
        "min_degree": int(np.min(degrees))
    }
