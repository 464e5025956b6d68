"""Small hand-built graphs used across the test suite."""

from network_gossip.network.graph_model import NetworkModel


def make_path_graph(n: int = 4) -> NetworkModel:
    """Path 0-1-...-(n-1)."""
    g = NetworkModel(n)
    for i in range(n - 1):
        g.add_edge(i, i + 1)
    return g


def make_complete_graph(n: int = 5) -> NetworkModel:
    """Complete graph on n nodes."""
    g = NetworkModel(n)
    for i in range(n):
        for j in range(i + 1, n):
            g.add_edge(i, j)
    return g


def make_star_graph(n: int = 5) -> NetworkModel:
    """Star with hub 0 and leaves 1..n-1."""
    g = NetworkModel(n)
    for i in range(1, n):
        g.add_edge(0, i)
    return g
