"""Tests for the ground-truth / result file format."""

import pytest

from clustiflor.biclusters import (
    Bicluster,
    Biclustering,
    format_biclusters,
    load_biclusters,
    parse_biclusters,
    write_biclusters,
)
from clustiflor.config import BiclusterParams
from clustiflor.errors import MappingError, ParseError

LABELS_A = ["g0", "g1", "g2", "g3"]
LABELS_B = ["c0", "c1", "c2"]


@pytest.fixture
def biclustering() -> Biclustering:
    return Biclustering([Bicluster([0, 2], [1]), Bicluster([1, 2, 3], [0, 2])])


class TestFormat:
    """Rendering of tagged lines."""

    def test_format_with_labels(self, biclustering) -> None:
        lines = format_biclusters(biclustering, LABELS_A, LABELS_B)
        assert lines == [
            "rows\tg0 g2",
            "cols\tc1",
            "rows\tg1 g2 g3",
            "cols\tc0 c2",
        ]

    def test_format_indices(self, biclustering) -> None:
        lines = format_biclusters(biclustering)
        assert lines[0] == "rows\t0 2"

    def test_vocabulary_lines_first(self, biclustering) -> None:
        lines = format_biclusters(biclustering, LABELS_A, LABELS_B, include_vocabulary=True)
        assert lines[0] == "labels_a\tg0 g1 g2 g3"
        assert lines[1] == "labels_b\tc0 c1 c2"


class TestRoundTrip:
    """Writing then loading restores the same index sets."""

    def test_with_vocabulary(self, biclustering, tmp_path) -> None:
        path = tmp_path / "gt.txt"
        biclustering.write(path, labels=(LABELS_A, LABELS_B), header="planted")
        loaded, vocab_a, vocab_b = load_biclusters(path)
        assert loaded == biclustering
        assert vocab_a == LABELS_A
        assert vocab_b == LABELS_B
        assert path.read_text().startswith("# planted\n")

    def test_indices_only(self, biclustering, tmp_path) -> None:
        path = write_biclusters(biclustering, tmp_path / "gt.txt")
        loaded, vocab_a, _ = load_biclusters(path)
        assert loaded == biclustering
        assert vocab_a is None

    def test_report_reloads_with_graph_maps(self, biclustering, tmp_path) -> None:
        path = tmp_path / "graph.edges.biclusters"
        biclustering.print_stats(BiclusterParams(), LABELS_A, LABELS_B, output_path=path)
        map_a = {label: i for i, label in enumerate(LABELS_A)}
        map_b = {label: i for i, label in enumerate(LABELS_B)}
        loaded, _, _ = load_biclusters(path, map_a, map_b)
        assert loaded == biclustering

    def test_report_without_clusters(self, biclustering) -> None:
        text = biclustering.print_stats(
            BiclusterParams(), LABELS_A, LABELS_B, output_path=None, include_clusters=False
        )
        assert "rows\t" not in text
        assert "# n_biclusters=2" in text


class TestParseErrors:
    """Malformed files raise ParseError or MappingError."""

    def test_unknown_tag(self) -> None:
        with pytest.raises(ParseError, match="unknown tag"):
            parse_biclusters(["rows\t0", "cols\t1", "members\t2"])

    def test_rows_without_cols(self) -> None:
        with pytest.raises(ParseError) as exc:
            parse_biclusters(["rows\t0", "cols\t1", "rows\t2"])
        assert exc.value.lineno == 3

    def test_double_rows(self) -> None:
        with pytest.raises(ParseError):
            parse_biclusters(["rows\t0", "rows\t1", "cols\t1"])

    def test_cols_without_rows(self) -> None:
        with pytest.raises(ParseError):
            parse_biclusters(["cols\t1"])

    def test_unresolvable_label(self) -> None:
        with pytest.raises(MappingError):
            parse_biclusters(["rows\tgeneX", "cols\t1"])

    def test_unknown_label_with_map(self) -> None:
        with pytest.raises(MappingError, match="'g9'"):
            parse_biclusters(["rows\tg9", "cols\tc0"], {"g0": 0}, {"c0": 0})
