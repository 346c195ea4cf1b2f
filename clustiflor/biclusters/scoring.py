"""Comparison measures between two collections of biclusters.

Every function here is total: empty or fully disjoint inputs score 0.0
instead of raising, so long comparison sweeps never abort on a bad trial.
"""

from collections import Counter
from collections.abc import Iterable, Sequence
from itertools import product
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from clustiflor.biclusters.types import Bicluster


def bicluster_jaccard(first: "Bicluster", second: "Bicluster") -> float:
    """Jaccard overlap of two biclusters over tagged row + column membership.

    Rows and columns are pooled as distinct element kinds, so a shared row
    and a shared column each count once:
    (|R1 & R2| + |C1 & C2|) / (|R1 | R2| + |C1 | C2|).
    """
    union = len(first.rows | second.rows) + len(first.cols | second.cols)
    if union == 0:
        return 0.0
    inter = len(first.rows & second.rows) + len(first.cols & second.cols)
    return inter / union


def matching_score(
    reference: Sequence["Bicluster"], candidate: Sequence["Bicluster"]
) -> float:
    """Average best-match Jaccard of each reference bicluster.

    Each bicluster of `reference` is paired with its best-overlapping
    counterpart in `candidate`; a bicluster with no overlapping counterpart
    contributes 0 to the average.

    Args:
        reference: Biclusters being explained (e.g. ground truth).
        candidate: Biclusters offered as explanation (e.g. discovered).

    Returns:
        Score in [0, 1]; 0.0 when `reference` is empty.
    """
    if not reference:
        return 0.0
    total = 0.0
    for ref in reference:
        total += max((bicluster_jaccard(ref, cand) for cand in candidate), default=0.0)
    return total / len(reference)


def covered_cells(biclusters: Iterable["Bicluster"]) -> set[tuple[int, int]]:
    """Union of the (row, col) cells spanned by the given biclusters."""
    cells: set[tuple[int, int]] = set()
    for bic in biclusters:
        cells.update(product(bic.rows, bic.cols))
    return cells


def accuracy(
    reference: Sequence["Bicluster"], candidate: Sequence["Bicluster"]
) -> float:
    """Fraction of reference cells covered by any candidate bicluster.

    Monotone in `candidate`: adding a bicluster never lowers the score.

    Returns:
        Score in [0, 1]; 0.0 when either side covers no cells.
    """
    ref_cells = covered_cells(reference)
    if not ref_cells:
        return 0.0
    hit = ref_cells & covered_cells(candidate)
    return len(hit) / len(ref_cells)


def f_score(
    reference: Sequence["Bicluster"], candidate: Sequence["Bicluster"]
) -> float:
    """Harmonic mean of cell-level precision and recall."""
    ref_cells = covered_cells(reference)
    cand_cells = covered_cells(candidate)
    if not ref_cells or not cand_cells:
        return 0.0
    hit = len(ref_cells & cand_cells)
    if hit == 0:
        return 0.0
    precision = hit / len(cand_cells)
    recall = hit / len(ref_cells)
    return 2.0 * precision * recall / (precision + recall)


def rows_overlap(biclusters: Iterable["Bicluster"]) -> float:
    """Mean number of biclusters each clustered row belongs to.

    1.0 means no row is shared; the value is directly comparable to the
    generator's row_overlap factor. 0.0 when no row is clustered.
    """
    memberships = Counter(row for bic in biclusters for row in bic.rows)
    if not memberships:
        return 0.0
    return sum(memberships.values()) / len(memberships)
