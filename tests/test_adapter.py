"""Tests for adapting external cluster listings to Biclustering."""

import numpy as np
import pytest

from clustiflor.biclusters import (
    Bicluster,
    biclusters_from_indices,
    biclusters_from_labels,
    load_reference_biclusters,
    parse_reference_lines,
    resolve_labels,
)
from clustiflor.errors import MappingError, NodeIndexError, ParseError

MAP_A = {"g0": 0, "g1": 1, "g2": 2}
MAP_B = {"c0": 0, "c1": 1}


class TestResolveLabels:
    """Label -> index resolution."""

    def test_resolves(self) -> None:
        assert resolve_labels(["g2", "g0"], MAP_A, "A") == frozenset({0, 2})

    def test_unknown_label(self) -> None:
        with pytest.raises(MappingError) as exc:
            resolve_labels(["g0", "gX"], MAP_A, "A")
        assert "gX" in str(exc.value)
        assert "node set A" in str(exc.value)

    def test_mapping_error_is_key_error(self) -> None:
        with pytest.raises(KeyError):
            resolve_labels(["missing"], MAP_B, "B")


class TestFromLabels:
    """Label pairs become index biclusters in the graph's numbering."""

    def test_basic(self) -> None:
        bc = biclusters_from_labels([(["g0", "g1"], ["c1"])], MAP_A, MAP_B)
        assert list(bc) == [Bicluster({0, 1}, {1})]

    def test_degenerate_dropped(self) -> None:
        bc = biclusters_from_labels(
            [(["g0"], []), (["g2"], ["c0"])], MAP_A, MAP_B
        )
        assert list(bc) == [Bicluster({2}, {0})]


class TestFromIndices:
    """In-process index arrays, as returned by numerical tools."""

    def test_numpy_arrays(self) -> None:
        bc = biclusters_from_indices([(np.array([0, 2]), np.array([1]))], 3, 2)
        assert bc[0] == Bicluster({0, 2}, {1})

    def test_lists_and_sets(self) -> None:
        bc = biclusters_from_indices([([1], {0, 1})], 3, 2)
        assert bc[0].cols == frozenset({0, 1})

    def test_out_of_range(self) -> None:
        with pytest.raises(NodeIndexError):
            biclusters_from_indices([([0, 3], [0])], 3, 2)

    def test_negative_index(self) -> None:
        with pytest.raises(NodeIndexError):
            biclusters_from_indices([([0], [-1])], 3, 2)

    def test_empty_dropped(self) -> None:
        assert len(biclusters_from_indices([([], [0])], 3, 2)) == 0


class TestReferenceListing:
    """Two-line-per-cluster listing written by reference tools."""

    def test_parse_pairs(self) -> None:
        lines = ["# tool output", "g0 g1", "c0", "", "g2", "c0 c1"]
        assert parse_reference_lines(lines) == [
            (["g0", "g1"], ["c0"]),
            (["g2"], ["c0", "c1"]),
        ]

    def test_odd_line_count(self) -> None:
        with pytest.raises(ParseError) as exc:
            parse_reference_lines(["g0", "c0", "g1"])
        assert exc.value.lineno == 3

    def test_load_from_file(self, tmp_path) -> None:
        path = tmp_path / "results.txt"
        path.write_text("g0 g2\nc1\n")
        bc = load_reference_biclusters(path, MAP_A, MAP_B)
        assert list(bc) == [Bicluster({0, 2}, {1})]

    def test_load_unknown_label(self) -> None:
        with pytest.raises(MappingError):
            load_reference_biclusters(["g0", "c7"], MAP_A, MAP_B)
