"""Edge-list file format for weighted bipartite graphs.

One edge per line, `<label_a><delim><label_b><delim><weight>`. Leading
comment lines start with '#'. Two kinds of comment are understood:

    # n=40 m=30 noise=0.050 row_overlap=1.200 row_separation=0.800
    # labels_a: a0 a1 a2 ...
    # labels_b: b0 b1 ...

The first restores the generator parameters of a synthetic graph; the
label lines fix the vocabularies (and index order) so that isolated nodes
survive a write/load round trip. Label lines separate labels with the
same delimiter as the edges.
"""

import logging
import math
import re
from collections.abc import Iterable, Sequence
from pathlib import Path

from clustiflor.config.experiment import GeneratorConfig
from clustiflor.errors import NodeIndexError, ParseError
from clustiflor.graph.types import WeightedBipartiteGraph

log = logging.getLogger(__name__)

LABELS_A_PREFIX = "# labels_a:"
LABELS_B_PREFIX = "# labels_b:"
_PARAM_RE = re.compile(r"(\w+)=([-+0-9.eE]+)")
_GENERATOR_KEYS = ("n", "m", "noise", "row_overlap", "row_separation")


def format_generation_header(config: GeneratorConfig) -> str:
    """Comment line recording the generator parameters of a graph."""
    return (
        f"# n={config.n} m={config.m} noise={config.noise:.3f} "
        f"row_overlap={config.row_overlap:.3f} "
        f"row_separation={config.row_separation:.3f}"
    )


def parse_generation_header(line: str) -> GeneratorConfig | None:
    """Read generator parameters from a comment line, if all are present."""
    found = dict(_PARAM_RE.findall(line))
    if not all(key in found for key in _GENERATOR_KEYS):
        return None
    try:
        return GeneratorConfig(
            n=int(found["n"]),
            m=int(found["m"]),
            noise=float(found["noise"]),
            row_overlap=float(found["row_overlap"]),
            row_separation=float(found["row_separation"]),
        )
    except ValueError:
        # ConfigurationError is a ValueError: an unusable header is ignored
        log.warning("Ignoring malformed generation header: %s", line.strip())
        return None


def _split_fields(line: str, delimiter: str) -> list[str]:
    if not delimiter or delimiter == " ":
        return line.split()
    return [field.strip() for field in line.split(delimiter)]


def _vocabulary(rest: str, delimiter: str) -> list[str]:
    return [label for label in _split_fields(rest.strip(), delimiter) if label]


def _index_table(
    labels: Sequence[str] | None,
) -> tuple[list[str], dict[str, int], bool]:
    """Label list, label->index map, and whether the vocabulary is fixed."""
    if labels is None:
        return [], {}, False
    labels = list(labels)
    return labels, {label: i for i, label in enumerate(labels)}, True


def parse_graph(
    lines: Iterable[str],
    delimiter: str = " ",
    split_rows: bool = True,
    labels_a: Sequence[str] | None = None,
    labels_b: Sequence[str] | None = None,
) -> WeightedBipartiteGraph:
    """Build a graph from edge-list lines.

    Args:
        lines: Edge-list lines.
        delimiter: Field separator; a single space means any run of whitespace.
        split_rows: Orientation. False swaps the first two columns so the
            file's second node set becomes the rows.
        labels_a: Fixed row vocabulary (after orientation). Overrides a
            `# labels_*:` header.
        labels_b: Fixed column vocabulary (after orientation).

    Returns:
        The graph. Without a fixed vocabulary, indices follow first
        appearance. A repeated edge keeps its last weight.

    Raises:
        ParseError: If a line does not split into two labels and a
            non-negative finite weight.
        NodeIndexError: If a fixed vocabulary does not contain a label.
    """
    header_a: list[str] | None = None
    header_b: list[str] | None = None
    params: GeneratorConfig | None = None
    records: list[tuple[int, str, str, float]] = []

    for lineno, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line:
            continue
        if line.startswith("#"):
            if line.startswith(LABELS_A_PREFIX):
                header_a = _vocabulary(line[len(LABELS_A_PREFIX):], delimiter)
            elif line.startswith(LABELS_B_PREFIX):
                header_b = _vocabulary(line[len(LABELS_B_PREFIX):], delimiter)
            elif params is None:
                params = parse_generation_header(line)
            continue

        fields = _split_fields(line, delimiter)
        if len(fields) != 3 or not fields[0] or not fields[1]:
            raise ParseError(
                f"expected <a>{delimiter!r}<b>{delimiter!r}<weight>, got {line!r}",
                lineno,
            )
        try:
            weight = float(fields[2])
        except ValueError:
            raise ParseError(f"weight {fields[2]!r} is not a number", lineno) from None
        if not math.isfinite(weight) or weight < 0.0:
            raise ParseError(f"weight must be finite and >= 0, got {weight}", lineno)
        records.append((lineno, fields[0], fields[1], weight))

    if not split_rows:
        header_a, header_b = header_b, header_a
        records = [(lineno, b, a, w) for lineno, a, b, w in records]

    table_a, map_a, fixed_a = _index_table(labels_a if labels_a is not None else header_a)
    table_b, map_b, fixed_b = _index_table(labels_b if labels_b is not None else header_b)

    edges: list[tuple[int, int, float]] = []
    for lineno, la, lb, w in records:
        edges.append((
            _lookup(la, table_a, map_a, fixed_a, "A", lineno),
            _lookup(lb, table_b, map_b, fixed_b, "B", lineno),
            w,
        ))

    graph = WeightedBipartiteGraph(len(table_a), len(table_b), table_a, table_b)
    for a, b, w in edges:
        graph.set_weight(a, b, w)
    if split_rows and params is not None and (params.n, params.m) == (graph.n, graph.m):
        graph.params = params
    return graph


def _lookup(
    label: str,
    table: list[str],
    index: dict[str, int],
    fixed: bool,
    side: str,
    lineno: int,
) -> int:
    i = index.get(label)
    if i is not None:
        return i
    if fixed:
        raise NodeIndexError(
            f"line {lineno}: label {label!r} is outside node set {side} "
            f"of size {len(table)}"
        )
    index[label] = len(table)
    table.append(label)
    return index[label]


def load_graph(
    source: str | Path | Iterable[str],
    delimiter: str = " ",
    split_rows: bool = True,
    labels_a: Sequence[str] | None = None,
    labels_b: Sequence[str] | None = None,
) -> WeightedBipartiteGraph:
    """Load a graph from an edge-list file path or an iterable of lines.

    See parse_graph for arguments and errors. File-system errors propagate.
    """
    if isinstance(source, (str, Path)):
        with open(source) as f:
            graph = parse_graph(f, delimiter, split_rows, labels_a, labels_b)
        log.info("Loaded %r from %s", graph, source)
        return graph
    return parse_graph(source, delimiter, split_rows, labels_a, labels_b)


def write_graph(
    graph: WeightedBipartiteGraph,
    path: str | Path,
    header_comment: str = "#",
    delimiter: str = " ",
    include_labels: bool = True,
    ground_truth_path: str | Path | None = None,
) -> Path:
    """Write the graph as an edge list.

    Weights are written with repr() so they reload bit-exact.

    Args:
        graph: Graph to write.
        path: Output edge-list path.
        header_comment: First line; prefixed with '# ' if it lacks '#'.
        delimiter: Field separator.
        include_labels: Write `# labels_*:` vocabulary lines.
        ground_truth_path: Also write graph.ground_truth here, if present.

    Returns:
        The edge-list path.
    """
    path = Path(path)
    lines: list[str] = []
    if header_comment:
        lines.append(header_comment if header_comment.startswith("#") else f"# {header_comment}")
    if include_labels:
        lines.append(f"{LABELS_A_PREFIX} {delimiter.join(graph.labels_a)}")
        lines.append(f"{LABELS_B_PREFIX} {delimiter.join(graph.labels_b)}")
    for a, b, w in graph.edges():
        lines.append(f"{graph.labels_a[a]}{delimiter}{graph.labels_b[b]}{delimiter}{float(w)!r}")
    path.write_text("\n".join(lines) + "\n")
    log.info("Wrote %d edges to %s", graph.n_edges, path)

    if ground_truth_path is not None and graph.ground_truth is not None:
        graph.ground_truth.write(ground_truth_path, labels=(graph.labels_a, graph.labels_b))
    return path
