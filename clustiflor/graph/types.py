"""Weighted bipartite graph with row and column adjacency maps."""

import logging
import math
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import scipy.sparse

from clustiflor.biclusters.types import Bicluster, Biclustering
from clustiflor.errors import NodeIndexError

if TYPE_CHECKING:
    from clustiflor.config.experiment import GeneratorConfig

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GraphStats:
    """Read-only size and density summary of a graph."""

    n: int
    m: int
    n_edges: int
    density: float  # n_edges / (n * m)
    total_weight: float
    mean_weight: float  # over present edges


class WeightedBipartiteGraph:
    """Weighted edges between node sets A (rows, 0..n) and B (cols, 0..m).

    Edges are kept twice, in per-row and per-column dicts, so that lookup,
    insertion, deletion and iteration by row or by column are all cheap.
    An absent edge has weight 0; stored weights are always > 0.

    Labels map indices to external identifiers and are used only for I/O.
    `ground_truth` is set for synthesized graphs and is never read by the
    discovery algorithm. Discovery removes edges in place: callers that
    need the original structure must clone() first.
    """

    def __init__(
        self,
        n: int,
        m: int,
        labels_a: Sequence[str] | None = None,
        labels_b: Sequence[str] | None = None,
    ) -> None:
        if n < 0 or m < 0:
            raise ValueError(f"n and m must be >= 0, got n={n}, m={m}")
        self._rows: list[dict[int, float]] = [{} for _ in range(n)]
        self._cols: list[dict[int, float]] = [{} for _ in range(m)]
        self._n_edges = 0
        self.labels_a = list(labels_a) if labels_a is not None else [f"a{i}" for i in range(n)]
        self.labels_b = list(labels_b) if labels_b is not None else [f"b{j}" for j in range(m)]
        if len(self.labels_a) != n or len(self.labels_b) != m:
            raise ValueError(
                f"Label tables ({len(self.labels_a)}, {len(self.labels_b)}) "
                f"do not match graph size ({n}, {m})"
            )
        self.ground_truth: Biclustering | None = None
        self.params: "GeneratorConfig | None" = None

    @classmethod
    def from_dense(
        cls,
        weights: np.ndarray,
        labels_a: Sequence[str] | None = None,
        labels_b: Sequence[str] | None = None,
    ) -> "WeightedBipartiteGraph":
        """Build a graph from an (n, m) weight matrix; zeros are non-edges."""
        weights = np.asarray(weights, dtype=np.float64)
        if weights.ndim != 2:
            raise ValueError(f"Expected a 2-D weight matrix, got shape {weights.shape}")
        graph = cls(weights.shape[0], weights.shape[1], labels_a, labels_b)
        for a, b in zip(*np.nonzero(weights)):
            graph.set_weight(int(a), int(b), float(weights[a, b]))
        return graph

    def __repr__(self) -> str:
        return f"WeightedBipartiteGraph(n={self.n}, m={self.m}, edges={self._n_edges})"

    @property
    def n(self) -> int:
        return len(self._rows)

    @property
    def m(self) -> int:
        return len(self._cols)

    @property
    def n_edges(self) -> int:
        return self._n_edges

    @property
    def total_weight(self) -> float:
        return float(sum(sum(row.values()) for row in self._rows))

    def _check(self, a: int, b: int) -> None:
        if not 0 <= a < self.n:
            raise NodeIndexError(f"Row index {a} out of range [0, {self.n})")
        if not 0 <= b < self.m:
            raise NodeIndexError(f"Column index {b} out of range [0, {self.m})")

    # ── Edge access ────────────────────────────────────────────────

    def weight(self, a: int, b: int) -> float:
        self._check(a, b)
        return self._rows[a].get(b, 0.0)

    def set_weight(self, a: int, b: int, weight: float) -> None:
        """Insert or update edge (a, b); a weight of 0 deletes it."""
        self._check(a, b)
        if not math.isfinite(weight) or weight < 0.0:
            raise ValueError(f"Edge weight must be finite and >= 0, got {weight}")
        if weight == 0.0:
            self.remove_edge(a, b)
            return
        if b not in self._rows[a]:
            self._n_edges += 1
        self._rows[a][b] = weight
        self._cols[b][a] = weight

    def remove_edge(self, a: int, b: int) -> float:
        """Delete edge (a, b) and return its weight (0.0 if absent)."""
        self._check(a, b)
        w = self._rows[a].pop(b, 0.0)
        if w:
            del self._cols[b][a]
            self._n_edges -= 1
        return w

    def remove_edges(self, rows: Iterable[int], cols: Iterable[int]) -> int:
        """Delete every edge with its row in `rows` and column in `cols`.

        Returns:
            Number of edges removed.
        """
        col_set = set(cols)
        removed = 0
        for a in set(rows):
            row = self._rows[a]
            for b in [b for b in row if b in col_set]:
                del row[b]
                del self._cols[b][a]
                removed += 1
        self._n_edges -= removed
        return removed

    def row(self, a: int) -> dict[int, float]:
        """Copy of row a's edges as {col: weight}."""
        return dict(self._rows[a])

    def col(self, b: int) -> dict[int, float]:
        """Copy of column b's edges as {row: weight}."""
        return dict(self._cols[b])

    def edges(self) -> Iterator[tuple[int, int, float]]:
        """Yield (a, b, weight) row by row."""
        for a, row in enumerate(self._rows):
            for b, w in row.items():
                yield a, b, w

    # ── Matrix views ───────────────────────────────────────────────

    def submatrix(self, rows: Sequence[int], cols: Sequence[int]) -> np.ndarray:
        """Dense weights restricted to rows x cols, in the given order."""
        block = np.zeros((len(rows), len(cols)), dtype=np.float64)
        col_pos = {b: j for j, b in enumerate(cols)}
        for i, a in enumerate(rows):
            for b, w in self._rows[a].items():
                j = col_pos.get(b)
                if j is not None:
                    block[i, j] = w
        return block

    def to_dense(self) -> np.ndarray:
        return self.submatrix(range(self.n), range(self.m))

    def to_csr(self) -> scipy.sparse.csr_matrix:
        """Sparse (n x m) CSR weight matrix."""
        ri, ci, data = [], [], []
        for a, b, w in self.edges():
            ri.append(a)
            ci.append(b)
            data.append(w)
        return scipy.sparse.csr_matrix((data, (ri, ci)), shape=(self.n, self.m))

    # ── Copies ─────────────────────────────────────────────────────

    def clone(self) -> "WeightedBipartiteGraph":
        """Independent copy sharing no mutable edge storage."""
        other = WeightedBipartiteGraph(self.n, self.m, self.labels_a, self.labels_b)
        other._rows = [dict(row) for row in self._rows]
        other._cols = [dict(col) for col in self._cols]
        other._n_edges = self._n_edges
        # Biclustering and GeneratorConfig are immutable
        other.ground_truth = self.ground_truth
        other.params = self.params
        return other

    def transpose(self) -> "WeightedBipartiteGraph":
        """Copy with A and B swapped (ground truth swapped accordingly)."""
        other = WeightedBipartiteGraph(self.m, self.n, self.labels_b, self.labels_a)
        other._rows = [dict(col) for col in self._cols]
        other._cols = [dict(row) for row in self._rows]
        other._n_edges = self._n_edges
        if self.ground_truth is not None:
            other.ground_truth = Biclustering(
                Bicluster(bic.cols, bic.rows, bic.density) for bic in self.ground_truth
            )
        return other

    # ── Labels ─────────────────────────────────────────────────────

    def get_labels(self) -> tuple[list[str], list[str], dict[str, int], dict[str, int]]:
        """Return (labels_a, labels_b, label->index map A, label->index map B)."""
        map_a = {label: i for i, label in enumerate(self.labels_a)}
        map_b = {label: j for j, label in enumerate(self.labels_b)}
        return list(self.labels_a), list(self.labels_b), map_a, map_b

    # ── Evaluation helpers ─────────────────────────────────────────

    def compute_noise(self, ground_truth: Biclustering) -> float:
        """Mean absolute deviation of realized weights from planted weights.

        The ideal weight of a cell is the target density of the planted
        bicluster covering it (1.0 when unspecified) and 0 elsewhere.

        Returns:
            Deviation averaged over all n * m cells; 0.0 for an empty graph.
        """
        if self.n == 0 or self.m == 0:
            return 0.0
        ideal = np.zeros((self.n, self.m), dtype=np.float64)
        for bic in ground_truth:
            if not bic.is_valid():
                continue
            target = 1.0 if bic.density is None else bic.density
            idx = np.ix_(sorted(bic.rows), sorted(bic.cols))
            ideal[idx] = np.maximum(ideal[idx], target)
        return float(np.abs(self.to_dense() - ideal).sum() / (self.n * self.m))

    def stats(self) -> GraphStats:
        cells = self.n * self.m
        total = self.total_weight
        return GraphStats(
            n=self.n,
            m=self.m,
            n_edges=self._n_edges,
            density=self._n_edges / cells if cells else 0.0,
            total_weight=total,
            mean_weight=total / self._n_edges if self._n_edges else 0.0,
        )

    # ── I/O ────────────────────────────────────────────────────────

    def write(
        self,
        path: str | Path,
        header_comment: str = "#",
        delimiter: str = " ",
        ground_truth_path: str | Path | None = None,
    ) -> Path:
        """Write the edge list (see clustiflor.graph.io.write_graph)."""
        from clustiflor.graph.io import write_graph

        return write_graph(
            self,
            path,
            header_comment=header_comment,
            delimiter=delimiter,
            ground_truth_path=ground_truth_path,
        )

    @classmethod
    def load(
        cls,
        source: str | Path | Iterable[str],
        delimiter: str = " ",
        split_rows: bool = True,
    ) -> "WeightedBipartiteGraph":
        """Load an edge list (see clustiflor.graph.io.load_graph)."""
        from clustiflor.graph.io import load_graph

        return load_graph(source, delimiter=delimiter, split_rows=split_rows)


def log_graph_stats(graph: WeightedBipartiteGraph) -> GraphStats:
    """Log a one-line summary of the graph and return its stats."""
    s = graph.stats()
    log.info(
        "Graph: n=%d, m=%d, edges=%d, density=%.4f, mean weight=%.4f",
        s.n, s.m, s.n_edges, s.density, s.mean_weight,
    )
    return s
