"""Tests for WeightedBipartiteGraph storage, copies, and helpers."""

import numpy as np
import pytest

from clustiflor.biclusters import Bicluster, Biclustering
from clustiflor.errors import NodeIndexError
from clustiflor.graph import WeightedBipartiteGraph


@pytest.fixture
def small_graph() -> WeightedBipartiteGraph:
    weights = np.array([
        [1.0, 0.5, 0.0],
        [0.0, 2.0, 0.0],
    ])
    return WeightedBipartiteGraph.from_dense(weights)


class TestEdgeAccess:
    """Insertion, lookup, and deletion keep both adjacency maps in sync."""

    def test_from_dense(self, small_graph) -> None:
        assert small_graph.n == 2
        assert small_graph.m == 3
        assert small_graph.n_edges == 3
        assert small_graph.weight(0, 1) == 0.5
        assert small_graph.weight(1, 0) == 0.0

    def test_default_labels(self, small_graph) -> None:
        assert small_graph.labels_a == ["a0", "a1"]
        assert small_graph.labels_b == ["b0", "b1", "b2"]

    def test_set_weight_updates_both_sides(self) -> None:
        g = WeightedBipartiteGraph(2, 2)
        g.set_weight(1, 0, 0.7)
        assert g.row(1) == {0: 0.7}
        assert g.col(0) == {1: 0.7}
        g.set_weight(1, 0, 0.9)
        assert g.n_edges == 1
        assert g.col(0) == {1: 0.9}

    def test_zero_weight_deletes(self, small_graph) -> None:
        small_graph.set_weight(0, 0, 0.0)
        assert small_graph.n_edges == 2
        assert 0 not in small_graph.row(0)
        assert 0 not in small_graph.col(0)

    def test_negative_weight_rejected(self, small_graph) -> None:
        with pytest.raises(ValueError):
            small_graph.set_weight(0, 0, -1.0)

    def test_non_finite_weight_rejected(self, small_graph) -> None:
        with pytest.raises(ValueError):
            small_graph.set_weight(0, 0, float("inf"))

    def test_out_of_range_index(self, small_graph) -> None:
        with pytest.raises(NodeIndexError):
            small_graph.weight(2, 0)
        with pytest.raises(NodeIndexError):
            small_graph.set_weight(0, 3, 1.0)

    def test_remove_edge_returns_weight(self, small_graph) -> None:
        assert small_graph.remove_edge(1, 1) == 2.0
        assert small_graph.remove_edge(1, 1) == 0.0
        assert small_graph.n_edges == 2

    def test_remove_edges_block(self, small_graph) -> None:
        removed = small_graph.remove_edges([0, 1], [1, 2])
        assert removed == 2
        assert small_graph.n_edges == 1
        assert list(small_graph.edges()) == [(0, 0, 1.0)]
        assert small_graph.col(1) == {}

    def test_row_is_a_copy(self, small_graph) -> None:
        small_graph.row(0)[2] = 5.0
        assert small_graph.weight(0, 2) == 0.0

    def test_label_count_mismatch(self) -> None:
        with pytest.raises(ValueError):
            WeightedBipartiteGraph(2, 2, labels_a=["x"])


class TestMatrixViews:
    """Dense, sparse, and sub-matrix views agree."""

    def test_to_dense_round_trip(self, small_graph) -> None:
        expected = np.array([[1.0, 0.5, 0.0], [0.0, 2.0, 0.0]])
        np.testing.assert_array_equal(small_graph.to_dense(), expected)

    def test_to_csr(self, small_graph) -> None:
        csr = small_graph.to_csr()
        assert csr.shape == (2, 3)
        assert csr.nnz == 3
        np.testing.assert_array_equal(csr.toarray(), small_graph.to_dense())

    def test_submatrix_order(self, small_graph) -> None:
        block = small_graph.submatrix([1, 0], [1, 0])
        np.testing.assert_array_equal(block, [[2.0, 0.0], [0.5, 1.0]])

    def test_total_weight(self, small_graph) -> None:
        assert small_graph.total_weight == pytest.approx(3.5)


class TestCopies:
    """clone() and transpose() produce independent graphs."""

    def test_clone_is_independent(self, small_graph) -> None:
        copy = small_graph.clone()
        copy.remove_edges([0, 1], [0, 1, 2])
        assert copy.n_edges == 0
        assert small_graph.n_edges == 3
        assert small_graph.weight(1, 1) == 2.0

    def test_clone_keeps_ground_truth(self, small_graph) -> None:
        small_graph.ground_truth = Biclustering([Bicluster([0], [0])])
        assert small_graph.clone().ground_truth == small_graph.ground_truth

    def test_transpose(self, small_graph) -> None:
        small_graph.ground_truth = Biclustering([Bicluster([1], [0, 2])])
        t = small_graph.transpose()
        assert (t.n, t.m) == (3, 2)
        np.testing.assert_array_equal(t.to_dense(), small_graph.to_dense().T)
        assert t.labels_a == small_graph.labels_b
        assert t.ground_truth[0].rows == frozenset({0, 2})
        assert t.ground_truth[0].cols == frozenset({1})


class TestHelpers:
    """Labels, statistics, and measured noise."""

    def test_get_labels(self) -> None:
        g = WeightedBipartiteGraph(2, 1, labels_a=["x", "y"], labels_b=["z"])
        labels_a, labels_b, map_a, map_b = g.get_labels()
        assert labels_a == ["x", "y"]
        assert map_a == {"x": 0, "y": 1}
        assert map_b == {"z": 0}

    def test_stats(self, small_graph) -> None:
        s = small_graph.stats()
        assert s.n_edges == 3
        assert s.density == pytest.approx(0.5)
        assert s.mean_weight == pytest.approx(3.5 / 3)

    def test_stats_empty(self) -> None:
        s = WeightedBipartiteGraph(0, 0).stats()
        assert s.density == 0.0
        assert s.mean_weight == 0.0

    def test_compute_noise_exact(self) -> None:
        g = WeightedBipartiteGraph.from_dense(np.array([[1.0, 1.0], [0.0, 0.0]]))
        gt = Biclustering([Bicluster([0], [0, 1], density=1.0)])
        assert g.compute_noise(gt) == 0.0

    def test_compute_noise_missing_and_extra_cell(self) -> None:
        g = WeightedBipartiteGraph.from_dense(np.array([[1.0, 0.0], [0.0, 0.5]]))
        gt = Biclustering([Bicluster([0], [0, 1], density=1.0)])
        # one planted cell missing (1.0) plus one background edge (0.5)
        assert g.compute_noise(gt) == pytest.approx(1.5 / 4)
