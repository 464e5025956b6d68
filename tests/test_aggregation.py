"""Tests for the gossip aggregation engine."""

import numpy as np
import pytest

from network_gossip.core.aggregation import (
    AggregationMode,
    aggregate,
    estimate_network_size,
    resolve_mode,
    select_partners,
)
from network_gossip.network.graph_model import NetworkModel

from graph_builders import make_complete_graph, make_path_graph, make_star_graph


class TestPartnerSelection:
    """One random neighbor versus all neighbors."""

    def test_all_neighbors_in_order(self, rng):
        g = make_star_graph(5)
        assert select_partners(g, 0, False, rng) == [1, 2, 3, 4]

    def test_random_neighbor_is_a_neighbor(self, rng):
        g = make_star_graph(6)
        for _ in range(20):
            partners = select_partners(g, 0, True, rng)
            assert len(partners) == 1
            assert partners[0] in g.neighbors(0)

    def test_isolated_node_has_no_partners(self, rng):
        g = NetworkModel(3)
        assert select_partners(g, 1, True, rng) == []
        assert select_partners(g, 1, False, rng) == []


class TestAverage:
    """Pairwise push-pull averaging."""

    def test_sequential_exchanges_update_running_value(self, rng):
        g = make_path_graph(3)
        values = np.array([0.0, 1000.0, 0.0])
        visited = aggregate(g, values, 1, AggregationMode.AVERAGE, False, rng)
        assert visited == [0, 2]
        # 1 meets 0 (both 500), then 1 meets 2 (both 250)
        np.testing.assert_allclose(values, [500.0, 250.0, 250.0])

    def test_single_random_exchange(self, rng):
        g = make_complete_graph(4)
        values = np.array([1000.0, 0.0, 0.0, 0.0])
        (partner,) = aggregate(g, values, 0, "average", True, rng)
        assert values[0] == values[partner] == 500.0
        assert values.sum() == pytest.approx(1000.0)

    def test_mass_preserved(self, rng):
        g = make_complete_graph(6)
        values = rng.random(6) * 100
        total = values.sum()
        for node in range(6):
            aggregate(g, values, node, AggregationMode.AVERAGE, False, rng)
            assert values.sum() == pytest.approx(total)

    def test_isolated_node_unchanged(self, rng):
        g = NetworkModel(2)
        values = np.array([7.0, 3.0])
        assert aggregate(g, values, 0, AggregationMode.AVERAGE, False, rng) == []
        np.testing.assert_array_equal(values, [7.0, 3.0])


class TestExtremes:
    """Max and min propagation."""

    def test_max_spreads_to_all_neighbors(self, rng):
        g = make_star_graph(4)
        values = np.array([1.0, 5.0, 2.0, 3.0])
        aggregate(g, values, 0, AggregationMode.MAX, False, rng)
        np.testing.assert_array_equal(values, [5.0, 5.0, 5.0, 5.0])

    def test_max_running_value_order(self, rng):
        g = make_star_graph(4)
        values = np.array([1.0, 2.0, 5.0, 3.0])
        aggregate(g, values, 0, AggregationMode.MAX, False, rng)
        # Neighbor 1 is visited before the hub has seen 5
        np.testing.assert_array_equal(values, [5.0, 2.0, 5.0, 5.0])

    def test_min(self, rng):
        g = make_path_graph(3)
        values = np.array([4.0, 6.0, 1.0])
        aggregate(g, values, 1, AggregationMode.MIN, False, rng)
        np.testing.assert_array_equal(values, [4.0, 1.0, 1.0])

    def test_extremes_never_leave_value_set(self, rng):
        g = make_complete_graph(5)
        values = np.array([3.0, 9.0, 1.0, 4.0, 7.0])
        original = set(values)
        for _ in range(10):
            aggregate(g, values, int(rng.integers(5)), AggregationMode.MIN, True, rng)
            assert set(values) <= original
            assert values.min() == 1.0


class TestModeAndSize:
    """Mode parsing and size estimation."""

    @pytest.mark.parametrize("raw,mode", [
        ("average", AggregationMode.AVERAGE),
        ("Max", AggregationMode.MAX),
        (AggregationMode.MIN, AggregationMode.MIN),
    ])
    def test_resolve_mode(self, raw, mode):
        assert resolve_mode(raw) is mode

    def test_unknown_mode(self):
        with pytest.raises(ValueError, match="Unknown aggregation mode"):
            resolve_mode("median")

    def test_estimate_network_size(self):
        assert estimate_network_size(10.0) == 100.0
        assert estimate_network_size(250.0) == 4.0
        assert estimate_network_size(0.0) is None
        assert estimate_network_size(5.0, source_value=50.0) == 10.0
