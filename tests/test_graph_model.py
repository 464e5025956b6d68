"""Tests for the NetworkModel node/edge container."""

import numpy as np

from network_gossip.network.graph_model import NetworkModel

from graph_builders import make_path_graph, make_star_graph


class TestNodes:
    """Node creation and removal."""

    def test_sequential_ids(self):
        g = NetworkModel()
        assert [g.add_node() for _ in range(3)] == [0, 1, 2]
        assert g.n_nodes == 3
        assert g.nodes() == [0, 1, 2]

    def test_initial_nodes_are_isolated(self):
        g = NetworkModel(4)
        assert g.n_edges == 0
        assert all(g.degree(i) == 0 for i in g.nodes())

    def test_remove_node_cascades_to_edges(self):
        g = make_star_graph(5)
        g.remove_node(0)
        assert not g.has_node(0)
        assert g.n_edges == 0
        assert g.nodes() == [1, 2, 3, 4]

    def test_ids_not_reused_after_removal(self):
        g = NetworkModel(3)
        g.remove_node(2)
        assert g.add_node() == 3

    def test_isolate_node_keeps_node(self):
        g = make_star_graph(4)
        g.isolate_node(0)
        assert g.has_node(0)
        assert g.degree(0) == 0
        assert g.n_edges == 0


class TestEdges:
    """Edge invariants: no self loops, no duplicates."""

    def test_add_edge(self):
        g = NetworkModel(2)
        assert g.add_edge(0, 1) is True
        assert g.has_edge(0, 1)
        assert g.has_edge(1, 0)

    def test_self_loop_is_noop(self):
        g = NetworkModel(2)
        assert g.add_edge(1, 1) is False
        assert g.n_edges == 0

    def test_duplicate_is_noop(self):
        g = NetworkModel(2)
        g.add_edge(0, 1)
        assert g.add_edge(1, 0) is False
        assert g.n_edges == 1

    def test_unknown_endpoint_is_noop(self):
        g = NetworkModel(2)
        assert g.add_edge(0, 7) is False

    def test_remove_edge(self):
        g = make_path_graph(3)
        assert g.remove_edge(2, 1) is True
        assert not g.has_edge(1, 2)
        assert g.remove_edge(1, 2) is False
        assert g.neighbors(1) == [0]

    def test_edge_is_stored_with_lower_endpoint_first(self):
        g = NetworkModel(3)
        g.add_edge(2, 0)
        edge = g.get_edge(0, 2)
        assert edge.key == (0, 2)
        assert edge.rewired is False

    def test_edges_in_creation_order(self):
        g = NetworkModel(4)
        g.add_edge(2, 3)
        g.add_edge(0, 1)
        g.add_edge(1, 3)
        assert [e.key for e in g.edges()] == [(2, 3), (0, 1), (1, 3)]

    def test_rewired_flag(self):
        g = NetworkModel(3)
        g.add_edge(0, 1)
        g.add_edge(0, 2, rewired=True)
        assert g.rewired_edge_count() == 1
        assert g.get_edge(2, 0).rewired


class TestQueries:
    """Neighbor and degree queries plus conversions."""

    def test_neighbors_sorted(self):
        g = NetworkModel(5)
        for other in (4, 2, 3, 1):
            g.add_edge(0, other)
        assert g.neighbors(0) == [1, 2, 3, 4]

    def test_degree(self):
        g = make_star_graph(6)
        assert g.degree(0) == 5
        assert g.degree(3) == 1
        assert g.degrees() == {0: 5, 1: 1, 2: 1, 3: 1, 4: 1, 5: 1}

    def test_copy_is_independent(self):
        g = make_path_graph(4)
        clone = g.copy()
        clone.remove_edge(0, 1)
        clone.add_node()
        assert g.has_edge(0, 1)
        assert g.n_nodes == 4
        assert clone.n_nodes == 5

    def test_adjacency_matrix(self):
        A = make_path_graph(3).get_adjacency_matrix()
        expected = np.array([[0, 1, 0], [1, 0, 1], [0, 1, 0]])
        np.testing.assert_array_equal(A, expected)

    def test_to_networkx(self):
        g = NetworkModel(3)
        g.add_edge(0, 1)
        g.add_edge(1, 2, rewired=True)
        G = g.to_networkx()
        assert sorted(G.nodes()) == [0, 1, 2]
        assert G.number_of_edges() == 2
        assert G.edges[1, 2]["rewired"] is True
        assert G.edges[0, 1]["rewired"] is False
