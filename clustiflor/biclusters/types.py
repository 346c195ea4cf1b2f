"""Bicluster value records and ordered bicluster collections."""

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import asdict, dataclass
from itertools import product
from pathlib import Path
from typing import TYPE_CHECKING, Any

from clustiflor.biclusters import scoring

if TYPE_CHECKING:
    from clustiflor.config.experiment import BiclusterParams


@dataclass(frozen=True, slots=True)
class Bicluster:
    """A (rows, cols) pair of node-index subsets forming one dense block.

    Holds indices only; a bicluster is meaningful for the graph instance it
    was computed on or planted in. `density` is the measured mean weight
    for discovered clusters and the target weight for planted ones.
    """

    rows: frozenset[int]
    cols: frozenset[int]
    density: float | None = None

    def __post_init__(self) -> None:
        # Accept any iterable of ints
        object.__setattr__(self, "rows", frozenset(int(r) for r in self.rows))
        object.__setattr__(self, "cols", frozenset(int(c) for c in self.cols))

    @property
    def shape(self) -> tuple[int, int]:
        return len(self.rows), len(self.cols)

    def is_valid(self) -> bool:
        """True when both rows and cols are non-empty."""
        return bool(self.rows) and bool(self.cols)

    def cells(self) -> set[tuple[int, int]]:
        return set(product(self.rows, self.cols))

    def jaccard(self, other: "Bicluster") -> float:
        return scoring.bicluster_jaccard(self, other)


@dataclass(frozen=True)
class Biclustering:
    """Ordered, immutable collection of biclusters from one run.

    Order is discovery (or planting) order. Biclusters may overlap in rows
    and/or columns. Scoring methods treat `self` as the reference side.
    """

    biclusters: tuple[Bicluster, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "biclusters", tuple(self.biclusters))

    def __len__(self) -> int:
        return len(self.biclusters)

    def __iter__(self) -> Iterator[Bicluster]:
        return iter(self.biclusters)

    def __getitem__(self, index: int | slice) -> "Bicluster | Biclustering":
        if isinstance(index, slice):
            return Biclustering(self.biclusters[index])
        return self.biclusters[index]

    def __add__(self, other: "Biclustering") -> "Biclustering":
        return Biclustering(self.biclusters + tuple(other))

    def valid(self) -> "Biclustering":
        """Copy without degenerate (empty-sided) biclusters."""
        return Biclustering(b for b in self.biclusters if b.is_valid())

    def cells(self) -> set[tuple[int, int]]:
        return scoring.covered_cells(self.biclusters)

    def matching_score(self, other: Sequence[Bicluster]) -> float:
        return scoring.matching_score(self.biclusters, tuple(other))

    def accuracy(self, other: Sequence[Bicluster]) -> float:
        return scoring.accuracy(self.biclusters, tuple(other))

    def f_score(self, other: Sequence[Bicluster]) -> float:
        return scoring.f_score(self.biclusters, tuple(other))

    def get_rows_overlapping(self) -> float:
        return scoring.rows_overlap(self.biclusters)

    def to_labels(
        self, labels_a: Sequence[str], labels_b: Sequence[str]
    ) -> list[tuple[list[str], list[str]]]:
        """Translate every bicluster into sorted (row labels, col labels)."""
        return [
            (
                [labels_a[r] for r in sorted(bic.rows)],
                [labels_b[c] for c in sorted(bic.cols)],
            )
            for bic in self.biclusters
        ]

    def write(
        self,
        path: str | Path,
        labels: tuple[Sequence[str], Sequence[str]] | None = None,
        header: str | None = None,
    ) -> None:
        """Write in ground-truth format, with label vocabularies if given."""
        from clustiflor.biclusters.io import write_biclusters

        labels_a, labels_b = labels if labels is not None else (None, None)
        write_biclusters(
            self,
            path,
            labels_a=labels_a,
            labels_b=labels_b,
            include_vocabulary=labels is not None,
            header=header,
        )

    def print_stats(
        self,
        params: "BiclusterParams",
        labels_a: Sequence[str],
        labels_b: Sequence[str],
        output_path: str | Path | None = None,
        run_stats: Any = None,
        include_clusters: bool = True,
    ) -> str:
        """Report parameters, run statistics, and (optionally) the clusters.

        Writes to `output_path` when given, otherwise prints to stdout.
        Never mutates the biclusters.

        Returns:
            The report text.
        """
        from clustiflor.biclusters.io import format_report

        stats = asdict(run_stats) if run_stats is not None else None
        text = format_report(
            self,
            params=asdict(params),
            labels_a=labels_a,
            labels_b=labels_b,
            run_stats=stats,
            include_clusters=include_clusters,
        )
        if output_path is not None:
            Path(output_path).write_text(text)
        else:
            print(text, end="")
        return text


def from_pairs(pairs: Iterable[tuple[Iterable[int], Iterable[int]]]) -> Biclustering:
    """Build a Biclustering from (rows, cols) index iterables."""
    return Biclustering(Bicluster(rows, cols) for rows, cols in pairs)
