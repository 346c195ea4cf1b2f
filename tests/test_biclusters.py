"""Tests for Bicluster / Biclustering and the comparison measures."""

import numpy as np
import pytest

from clustiflor.biclusters import (
    Bicluster,
    Biclustering,
    accuracy,
    bicluster_jaccard,
    f_score,
    from_pairs,
    matching_score,
    rows_overlap,
)
from clustiflor.config import BiclusterParams

A = Bicluster({0, 1, 2}, {0, 1})
B = Bicluster({5, 6}, {4, 5, 6})


class TestBicluster:
    """Value semantics of a single bicluster."""

    def test_converts_to_frozensets(self) -> None:
        bic = Bicluster([2, 1, 1], np.array([3, 4]))
        assert bic.rows == frozenset({1, 2})
        assert bic.cols == frozenset({3, 4})
        assert all(type(c) is int for c in bic.cols)

    def test_equality_ignores_order(self) -> None:
        assert Bicluster([1, 2], [3]) == Bicluster([2, 1], [3])

    def test_shape_and_cells(self) -> None:
        assert A.shape == (3, 2)
        assert len(A.cells()) == 6

    def test_validity(self) -> None:
        assert A.is_valid()
        assert not Bicluster([], [1]).is_valid()


class TestBiclustering:
    """Sequence behavior and scoring delegates."""

    def test_sequence_protocol(self) -> None:
        bc = Biclustering([A, B])
        assert len(bc) == 2
        assert bc[1] == B
        assert list(bc) == [A, B]
        assert isinstance(bc[:1], Biclustering)
        assert len(bc + Biclustering([A])) == 3

    def test_from_pairs(self) -> None:
        bc = from_pairs([([0, 1, 2], [0, 1])])
        assert bc[0] == A

    def test_valid_drops_degenerate(self) -> None:
        bc = Biclustering([A, Bicluster([1], [])])
        assert list(bc.valid()) == [A]

    def test_to_labels(self) -> None:
        bc = Biclustering([Bicluster([1, 0], [1])])
        assert bc.to_labels(["x", "y"], ["p", "q"]) == [(["x", "y"], ["q"])]

    def test_get_rows_overlapping(self) -> None:
        bc = Biclustering([Bicluster([0, 1], [0]), Bicluster([1, 2], [1])])
        assert bc.get_rows_overlapping() == pytest.approx(4 / 3)

    def test_print_stats_does_not_mutate(self, capsys) -> None:
        bc = Biclustering([A])
        labels_a = [f"r{i}" for i in range(3)]
        labels_b = ["c0", "c1"]
        text = bc.print_stats(BiclusterParams(), labels_a, labels_b)
        assert "# n_biclusters=1" in text
        assert "rows\tr0 r1 r2" in text
        assert capsys.readouterr().out == text
        assert bc == Biclustering([A])

    def test_print_stats_to_file(self, tmp_path, capsys) -> None:
        path = tmp_path / "report.txt"
        Biclustering().print_stats(BiclusterParams(), [], [], output_path=path)
        assert path.read_text().startswith("# params: size_sensitivity=1")
        assert capsys.readouterr().out == ""


class TestJaccard:
    """Tagged row + column Jaccard."""

    def test_identical(self) -> None:
        assert bicluster_jaccard(A, A) == 1.0

    def test_disjoint(self) -> None:
        assert bicluster_jaccard(A, B) == 0.0

    def test_partial(self) -> None:
        x = Bicluster({0, 1}, {0})
        y = Bicluster({1}, {0})
        assert x.jaccard(y) == pytest.approx(2 / 3)

    def test_rows_and_cols_are_distinct_kinds(self) -> None:
        x = Bicluster({1}, {2})
        y = Bicluster({2}, {1})
        assert x.jaccard(y) == 0.0


class TestMatchingScore:
    """Average best match over the reference side."""

    def test_empty_reference(self) -> None:
        assert matching_score([], [A]) == 0.0

    def test_empty_candidate(self) -> None:
        assert matching_score([A], []) == 0.0

    def test_perfect(self) -> None:
        assert matching_score([A, B], [B, A]) == 1.0

    def test_asymmetric(self) -> None:
        assert matching_score([A], [A, B]) == 1.0
        assert matching_score([A, B], [A]) == pytest.approx(0.5)

    def test_method_delegates(self) -> None:
        assert Biclustering([A, B]).matching_score(Biclustering([A])) == pytest.approx(0.5)

    def test_in_unit_interval(self) -> None:
        rng = np.random.default_rng(0)
        for _ in range(20):
            ref = [Bicluster(rng.choice(20, 5), rng.choice(20, 4)) for _ in range(3)]
            cand = [Bicluster(rng.choice(20, 6), rng.choice(20, 3)) for _ in range(4)]
            assert 0.0 <= matching_score(ref, cand) <= 1.0


class TestCellScores:
    """Cell-level accuracy and F-score."""

    def test_accuracy_full_cover(self) -> None:
        assert accuracy([A], [Bicluster(range(5), range(5))]) == 1.0

    def test_accuracy_partial(self) -> None:
        assert accuracy([A], [Bicluster({0}, {0, 1})]) == pytest.approx(2 / 6)

    def test_accuracy_empty(self) -> None:
        assert accuracy([], [A]) == 0.0
        assert accuracy([A], []) == 0.0

    def test_accuracy_monotone(self) -> None:
        partial = [Bicluster({0}, {0})]
        assert accuracy([A], partial + [B]) >= accuracy([A], partial)

    def test_f_score(self) -> None:
        # 2 hits, 6 reference cells, 4 candidate cells
        cand = [Bicluster({0, 9}, {0, 1})]
        precision, recall = 2 / 4, 2 / 6
        expected = 2 * precision * recall / (precision + recall)
        assert f_score([A], cand) == pytest.approx(expected)
        assert Biclustering([A]).f_score(cand) == pytest.approx(expected)

    def test_f_score_disjoint(self) -> None:
        assert f_score([A], [B]) == 0.0

    def test_rows_overlap_empty(self) -> None:
        assert rows_overlap([]) == 0.0
        assert rows_overlap([A, B]) == 1.0
