"""
Network graph model holding the nodes and undirected edges of a topology.
"""

import numpy as np
import networkx as nx
from dataclasses import dataclass
from typing import Dict, List, Optional, Set, Tuple


def _edge_key(a: int, b: int) -> Tuple[int, int]:
    return (a, b) if a < b else (b, a)


@dataclass
class Edge:
    """
    Undirected link between two distinct nodes.

    ``rewired`` marks edges produced by small-world rewiring. It is provenance
    only; no algorithm reads it.
    """
    end1: int
    end2: int
    rewired: bool = False

    @property
    def key(self) -> Tuple[int, int]:
        return (self.end1, self.end2)


class NetworkModel:
    """
    Mutable node/edge container.

    Node ids are assigned sequentially from 0. Edges are kept in creation order
    so that algorithms drawing a random edge are reproducible for a fixed seed.
    """
    def __init__(self, n_nodes: int = 0):
        """
        Initialize the network model.

        Args:
            n_nodes: Number of isolated nodes to start with
        """
        self._adjacency: Dict[int, Set[int]] = {}
        self._edges: Dict[Tuple[int, int], Edge] = {}
        self._next_id = 0
        for _ in range(n_nodes):
            self.add_node()

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    @property
    def n_nodes(self) -> int:
        return len(self._adjacency)

    @property
    def n_edges(self) -> int:
        return len(self._edges)

    def nodes(self) -> List[int]:
        """Node ids in ascending order."""
        return sorted(self._adjacency)

    def has_node(self, node_id: int) -> bool:
        return node_id in self._adjacency

    def add_node(self) -> int:
        """
        Add an isolated node.

        Returns:
            The id of the new node
        """
        node_id = self._next_id
        self._next_id += 1
        self._adjacency[node_id] = set()
        return node_id

    def remove_node(self, node_id: int):
        """Remove a node together with all of its incident edges."""
        self.isolate_node(node_id)
        del self._adjacency[node_id]

    def isolate_node(self, node_id: int):
        """Drop every edge incident to ``node_id`` but keep the node."""
        for other in list(self._adjacency[node_id]):
            self.remove_edge(node_id, other)

    # ------------------------------------------------------------------
    # Edges
    # ------------------------------------------------------------------

    def add_edge(self, a: int, b: int, rewired: bool = False) -> bool:
        """
        Link two nodes.

        Self loops, duplicates and unknown endpoints are silently ignored, so
        callers that care about the outcome should check ``has_edge`` first or
        inspect the return value.

        Returns:
            True if a new edge was created
        """
        if a == b or a not in self._adjacency or b not in self._adjacency:
            return False
        key = _edge_key(a, b)
        if key in self._edges:
            return False
        self._edges[key] = Edge(key[0], key[1], rewired)
        self._adjacency[a].add(b)
        self._adjacency[b].add(a)
        return True

    def remove_edge(self, a: int, b: int) -> bool:
        key = _edge_key(a, b)
        if self._edges.pop(key, None) is None:
            return False
        self._adjacency[a].discard(b)
        self._adjacency[b].discard(a)
        return True

    def has_edge(self, a: int, b: int) -> bool:
        return _edge_key(a, b) in self._edges

    def get_edge(self, a: int, b: int) -> Optional[Edge]:
        return self._edges.get(_edge_key(a, b))

    def edges(self) -> List[Edge]:
        """Edges in creation order."""
        return list(self._edges.values())

    def rewired_edge_count(self) -> int:
        return sum(1 for edge in self._edges.values() if edge.rewired)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def neighbors(self, node_id: int) -> List[int]:
        """Neighbors of ``node_id`` in ascending id order."""
        return sorted(self._adjacency[node_id])

    def degree(self, node_id: int) -> int:
        return len(self._adjacency[node_id])

    def degrees(self) -> Dict[int, int]:
        return {node_id: len(adj) for node_id, adj in self._adjacency.items()}

    def copy(self) -> "NetworkModel":
        """Deep copy of nodes and edges, including rewired flags."""
        clone = NetworkModel()
        clone._next_id = self._next_id
        clone._adjacency = {node_id: set(adj) for node_id, adj in self._adjacency.items()}
        clone._edges = {key: Edge(e.end1, e.end2, e.rewired) for key, e in self._edges.items()}
        return clone

    def get_adjacency_matrix(self) -> np.ndarray:
        """
        Get the adjacency matrix.

        Rows and columns follow ``nodes()`` order.

        Returns:
            Symmetric 0/1 matrix (n_nodes x n_nodes)
        """
        order = self.nodes()
        index = {node_id: i for i, node_id in enumerate(order)}
        A = np.zeros((len(order), len(order)), dtype=int)
        for a, b in self._edges:
            A[index[a], index[b]] = A[index[b], index[a]] = 1
        return A

    def to_networkx(self) -> nx.Graph:
        """Convert to a networkx graph; edges carry the ``rewired`` attribute."""
        G = nx.Graph()
        G.add_nodes_from(self.nodes())
        for edge in self._edges.values():
            G.add_edge(edge.end1, edge.end2, rewired=edge.rewired)
        return G

    def __repr__(self) -> str:
        return f"NetworkModel(n_nodes={self.n_nodes}, n_edges={self.n_edges})"
