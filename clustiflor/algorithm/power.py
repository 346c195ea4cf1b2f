"""Power iteration and affinity split on dense region blocks.

Alternating multiplications by W and W^T, started from the heaviest column
(or row), estimate the affinity of every row and column to the seed's
dense block. After each multiplication the entries below the affinity
cutoff are zeroed, so the iteration stays inside the seed's block instead
of drifting towards a mix of blocks of similar strength. It stops early
once neither support changes.
"""

import numpy as np
import scipy.sparse
from scipy.sparse.csgraph import connected_components

AFFINITY_CUTOFF = 0.5  # keep entries >= cutoff * max


def _normalized(x: np.ndarray) -> np.ndarray:
    norm = np.linalg.norm(x)
    if norm == 0.0:
        return x
    return x / norm


def _truncated(x: np.ndarray, cutoff: float) -> np.ndarray:
    return _normalized(np.where(x >= cutoff * x.max(), x, 0.0))


def power_iteration(
    block: np.ndarray,
    n_iter: int,
    seed_cols: bool = True,
    cutoff: float = AFFINITY_CUTOFF,
) -> tuple[np.ndarray, np.ndarray]:
    """Estimate the (row, column) affinity vectors of the seed's block.

    Deterministic: the start vector is the indicator of the column (or row)
    with the largest total weight, ties going to the lowest index.

    Args:
        block: Non-negative weight matrix of shape (r, c).
        n_iter: Maximum number of alternating W / W^T steps (>= 1).
        seed_cols: Start from a column and grow rows first; otherwise
            start from a row.
        cutoff: Entries below `cutoff` times the vector's maximum are
            zeroed after every step.

    Returns:
        (u, v) unit-norm non-negative vectors of lengths r and c. Both are
        zero if the block has no weight.
    """
    if not seed_cols:
        v, u = power_iteration(block.T, n_iter, seed_cols=True, cutoff=cutoff)
        return u, v

    v = np.zeros(block.shape[1])
    v[int(np.argmax(block.sum(axis=0)))] = 1.0
    u = np.zeros(block.shape[0])
    for _ in range(n_iter):
        u_next = _truncated(block @ v, cutoff)
        v_next = _truncated(block.T @ u_next, cutoff)
        stable = np.array_equal(u_next > 0, u > 0) and np.array_equal(v_next > 0, v > 0)
        u, v = u_next, v_next
        if stable:
            break
    return u, v


def affinity_split(
    u: np.ndarray, v: np.ndarray, cutoff: float = AFFINITY_CUTOFF
) -> tuple[np.ndarray, np.ndarray]:
    """Boolean masks of the high-affinity rows and columns.

    An entry is kept when it reaches `cutoff` times the vector's maximum;
    the maximal entry is always kept.
    """
    return u >= cutoff * u.max(), v >= cutoff * v.max()


def bipartite_components(block: np.ndarray) -> list[tuple[np.ndarray, np.ndarray]]:
    """Connected components of the bipartite graph of a block's non-zeros.

    Returns:
        One (row positions, column positions) pair per component, in the
        order scipy labels them. A row or column with no edge forms a
        component with an empty other side.
    """
    n_rows, n_cols = block.shape
    biadj = scipy.sparse.csr_matrix((block > 0).astype(np.int8))
    adj = scipy.sparse.bmat([[None, biadj], [biadj.T, None]], format="csr")
    n_components, labels = connected_components(adj, directed=False)
    row_labels = labels[:n_rows]
    col_labels = labels[n_rows:]
    return [
        (np.flatnonzero(row_labels == k), np.flatnonzero(col_labels == k))
        for k in range(n_components)
    ]
