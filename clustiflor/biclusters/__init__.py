"""Bicluster data model, scoring, file format, and external-result adapters."""

from clustiflor.biclusters.types import Bicluster, Biclustering, from_pairs
from clustiflor.biclusters.scoring import (
    accuracy,
    bicluster_jaccard,
    covered_cells,
    f_score,
    matching_score,
    rows_overlap,
)
from clustiflor.biclusters.adapter import (
    biclusters_from_indices,
    biclusters_from_labels,
    load_reference_biclusters,
    parse_reference_lines,
    resolve_labels,
)
from clustiflor.biclusters.io import (
    format_biclusters,
    format_report,
    load_biclusters,
    parse_biclusters,
    write_biclusters,
)

__all__ = [
    "Bicluster",
    "Biclustering",
    "from_pairs",
    "accuracy",
    "bicluster_jaccard",
    "covered_cells",
    "f_score",
    "matching_score",
    "rows_overlap",
    "biclusters_from_indices",
    "biclusters_from_labels",
    "load_reference_biclusters",
    "parse_reference_lines",
    "resolve_labels",
    "format_biclusters",
    "format_report",
    "load_biclusters",
    "parse_biclusters",
    "write_biclusters",
]
