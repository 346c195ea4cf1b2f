"""Convert externally produced cluster listings into Biclustering form.

Reference algorithms report clusters by node label (or, when run
in-process, by index array). Resolving them through the label tables of
the graph they were run on makes their indices comparable with the
discovery engine's output. This module never launches the external tools;
it only transforms their results.
"""

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path

import numpy as np

from clustiflor.biclusters.types import Bicluster, Biclustering
from clustiflor.errors import MappingError, NodeIndexError, ParseError

log = logging.getLogger(__name__)


def resolve_labels(
    labels: Iterable[str], node_map: Mapping[str, int], side: str
) -> frozenset[int]:
    """Map labels to node indices.

    Args:
        labels: External node labels.
        node_map: Label -> index table of the graph.
        side: "A" or "B", used in the error message.

    Raises:
        MappingError: If any label is missing from `node_map`.
    """
    indices = set()
    for label in labels:
        try:
            indices.add(node_map[label])
        except KeyError:
            raise MappingError(
                f"Label {label!r} not found in node set {side} "
                f"({len(node_map)} known labels)"
            ) from None
    return frozenset(indices)


def biclusters_from_labels(
    clusters: Iterable[tuple[Iterable[str], Iterable[str]]],
    node_map_a: Mapping[str, int],
    node_map_b: Mapping[str, int],
) -> Biclustering:
    """Build a Biclustering from (row labels, col labels) pairs.

    Clusters with an empty side are dropped, since degenerate clusters
    are never part of a result.

    Raises:
        MappingError: If a label cannot be resolved.
    """
    out: list[Bicluster] = []
    for i, (row_labels, col_labels) in enumerate(clusters):
        bic = Bicluster(
            resolve_labels(row_labels, node_map_a, "A"),
            resolve_labels(col_labels, node_map_b, "B"),
        )
        if not bic.is_valid():
            log.debug("Dropping degenerate external cluster %d", i)
            continue
        out.append(bic)
    return Biclustering(out)


def _as_index_set(x: Iterable[int], bound: int, side: str) -> frozenset[int]:
    """Convert a list/set/array of indices to a frozenset, checking range."""
    if isinstance(x, np.ndarray):
        arr = x.astype(np.int64, copy=False).ravel()
    else:
        arr = np.fromiter(x, dtype=np.int64)
    if arr.size and (arr.min() < 0 or arr.max() >= bound):
        raise NodeIndexError(
            f"Index out of range for node set {side} of size {bound}: "
            f"[{int(arr.min())}, {int(arr.max())}]"
        )
    return frozenset(arr.tolist())


def biclusters_from_indices(
    results: Iterable[tuple[Iterable[int], Iterable[int]]], n: int, m: int
) -> Biclustering:
    """Build a Biclustering from in-process (rows, cols) index arrays.

    Raises:
        NodeIndexError: If an index falls outside [0, n) or [0, m).
    """
    out: list[Bicluster] = []
    for rows, cols in results:
        bic = Bicluster(_as_index_set(rows, n, "A"), _as_index_set(cols, m, "B"))
        if bic.is_valid():
            out.append(bic)
    return Biclustering(out)


def parse_reference_lines(lines: Iterable[str]) -> list[tuple[list[str], list[str]]]:
    """Parse the reference-tool listing format.

    Each cluster occupies two consecutive content lines: whitespace
    separated row labels, then column labels. Blank lines and lines
    starting with '#' are skipped.

    Raises:
        ParseError: If the last cluster has no column line.
    """
    clusters: list[tuple[list[str], list[str]]] = []
    pending: tuple[int, list[str]] | None = None
    for lineno, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if pending is None:
            pending = (lineno, line.split())
        else:
            clusters.append((pending[1], line.split()))
            pending = None
    if pending is not None:
        raise ParseError("cluster row labels without a column line", pending[0])
    return clusters


def load_reference_biclusters(
    source: str | Path | Iterable[str],
    node_map_a: Mapping[str, int],
    node_map_b: Mapping[str, int],
) -> Biclustering:
    """Load a reference tool's results file into a Biclustering.

    Args:
        source: Path to the results file, or an iterable of lines.
        node_map_a: Row label -> index table of the graph the tool ran on.
        node_map_b: Column label -> index table.

    Raises:
        ParseError: If the listing is malformed.
        MappingError: If a label is unknown to the graph.
    """
    if isinstance(source, (str, Path)):
        with open(source) as f:
            clusters = parse_reference_lines(f)
    else:
        clusters = parse_reference_lines(source)
    result = biclusters_from_labels(clusters, node_map_a, node_map_b)
    log.info("Loaded %d reference biclusters", len(result))
    return result
