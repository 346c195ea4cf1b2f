"""Ground-truth / result file format for bicluster collections.

One tagged line per record, tag and labels separated by whitespace:

    # free comment
    labels_a    a0 a1 a2 ...     (optional row vocabulary, in index order)
    labels_b    b0 b1 ...        (optional column vocabulary)
    rows        a0 a2
    cols        b1 b3

Every `rows` line must be followed by its `cols` line. Labels must not
contain whitespace.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any

from clustiflor.biclusters.adapter import resolve_labels
from clustiflor.biclusters.types import Bicluster, Biclustering
from clustiflor.errors import MappingError, ParseError

log = logging.getLogger(__name__)

TAG_LABELS_A = "labels_a"
TAG_LABELS_B = "labels_b"
TAG_ROWS = "rows"
TAG_COLS = "cols"


def _format_value(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:.6g}"
    return str(value)


def _format_pairs(values: Mapping[str, Any]) -> str:
    return " ".join(f"{k}={_format_value(v)}" for k, v in values.items())


def format_biclusters(
    biclustering: Biclustering,
    labels_a: Sequence[str] | None = None,
    labels_b: Sequence[str] | None = None,
    include_vocabulary: bool = False,
) -> list[str]:
    """Render biclusters as tagged lines (without trailing newlines).

    Without label tables, indices are written as decimal labels.
    """
    lines: list[str] = []
    if include_vocabulary and labels_a is not None and labels_b is not None:
        lines.append(f"{TAG_LABELS_A}\t{' '.join(labels_a)}")
        lines.append(f"{TAG_LABELS_B}\t{' '.join(labels_b)}")
    for bic in biclustering:
        rows = sorted(bic.rows)
        cols = sorted(bic.cols)
        row_labels = [labels_a[r] for r in rows] if labels_a is not None else map(str, rows)
        col_labels = [labels_b[c] for c in cols] if labels_b is not None else map(str, cols)
        lines.append(f"{TAG_ROWS}\t{' '.join(row_labels)}")
        lines.append(f"{TAG_COLS}\t{' '.join(col_labels)}")
    return lines


def write_biclusters(
    biclustering: Biclustering,
    path: str | Path,
    labels_a: Sequence[str] | None = None,
    labels_b: Sequence[str] | None = None,
    include_vocabulary: bool = False,
    header: str | None = None,
) -> Path:
    """Write a Biclustering in ground-truth format.

    Returns:
        The written path.
    """
    path = Path(path)
    lines = []
    if header:
        lines.append(header if header.startswith("#") else f"# {header}")
    lines.extend(format_biclusters(biclustering, labels_a, labels_b, include_vocabulary))
    path.write_text("\n".join(lines) + "\n")
    log.info("Wrote %d biclusters to %s", len(biclustering), path)
    return path


def format_report(
    biclustering: Biclustering,
    params: Mapping[str, Any],
    labels_a: Sequence[str],
    labels_b: Sequence[str],
    run_stats: Mapping[str, Any] | None = None,
    include_clusters: bool = True,
) -> str:
    """Summary of a discovery run, readable back with load_biclusters."""
    lines = [f"# params: {_format_pairs(params)}"]
    if run_stats is not None:
        lines.append(f"# stats: {_format_pairs(run_stats)}")
    lines.append(f"# n_biclusters={len(biclustering)}")
    if include_clusters:
        lines.extend(format_biclusters(biclustering, labels_a, labels_b))
    return "\n".join(lines) + "\n"


def _resolve(
    labels: list[str], node_map: Mapping[str, int] | None, side: str
) -> frozenset[int]:
    if node_map is not None:
        return resolve_labels(labels, node_map, side)
    try:
        return frozenset(int(label) for label in labels)
    except ValueError:
        raise MappingError(
            f"Non-numeric label in node set {side} and no label table available"
        ) from None


def parse_biclusters(
    lines: Iterable[str],
    node_map_a: Mapping[str, int] | None = None,
    node_map_b: Mapping[str, int] | None = None,
) -> tuple[Biclustering, list[str] | None, list[str] | None]:
    """Parse ground-truth format lines.

    Labels are resolved through the given maps, else through the file's own
    vocabulary lines, else read as decimal indices.

    Returns:
        (biclustering, labels_a, labels_b); the label lists are None when
        the file carries no vocabulary.

    Raises:
        ParseError: On unknown tags or unpaired rows/cols lines.
        MappingError: On labels that cannot be resolved.
    """
    vocab_a: list[str] | None = None
    vocab_b: list[str] | None = None
    pairs: list[tuple[list[str], list[str]]] = []
    pending: tuple[int, list[str]] | None = None

    for lineno, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        parts = line.split(None, 1)
        tag = parts[0]
        labels = parts[1].split() if len(parts) > 1 else []
        if tag == TAG_LABELS_A:
            vocab_a = labels
        elif tag == TAG_LABELS_B:
            vocab_b = labels
        elif tag == TAG_ROWS:
            if pending is not None:
                raise ParseError("rows line follows rows line without cols", lineno)
            pending = (lineno, labels)
        elif tag == TAG_COLS:
            if pending is None:
                raise ParseError("cols line without preceding rows line", lineno)
            pairs.append((pending[1], labels))
            pending = None
        else:
            raise ParseError(f"unknown tag {tag!r}", lineno)
    if pending is not None:
        raise ParseError("rows line without cols line", pending[0])

    if node_map_a is None and vocab_a is not None:
        node_map_a = {label: i for i, label in enumerate(vocab_a)}
    if node_map_b is None and vocab_b is not None:
        node_map_b = {label: i for i, label in enumerate(vocab_b)}

    biclustering = Biclustering(
        Bicluster(_resolve(rows, node_map_a, "A"), _resolve(cols, node_map_b, "B"))
        for rows, cols in pairs
    )
    return biclustering, vocab_a, vocab_b


def load_biclusters(
    path: str | Path,
    node_map_a: Mapping[str, int] | None = None,
    node_map_b: Mapping[str, int] | None = None,
) -> tuple[Biclustering, list[str] | None, list[str] | None]:
    """Load a ground-truth or result file. See parse_biclusters."""
    with open(path) as f:
        return parse_biclusters(f, node_map_a, node_map_b)
