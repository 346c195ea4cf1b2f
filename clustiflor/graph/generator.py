"""Planted-block generator for weighted bipartite test graphs.

Columns are split into k disjoint blocks and every row joins one primary
block plus, on average, (row_overlap - 1) further blocks. Cells inside a
planted block carry weight 1 lowered by up to (1 - row_separation); cells
outside are empty. Each cell is then flipped with probability `noise`:
a planted cell is dropped, an empty cell gains a uniform (0, 1] weight.
"""

import logging

import numpy as np

from clustiflor.biclusters.types import Bicluster, Biclustering
from clustiflor.config.experiment import GeneratorConfig, SweepConfig
from clustiflor.errors import GraphGenerationError
from clustiflor.graph.types import WeightedBipartiteGraph

log = logging.getLogger(__name__)

MIN_PLANTED_SIZE = 2  # below this on either side no block is planted
ROWS_PER_BLOCK = 10  # target block height before overlap


def planted_block_count(n: int, m: int, row_overlap: float) -> int:
    """Number of planted blocks k for an (n, m) graph.

    Grows with the smaller side and with the overlap factor, so that a
    block keeps about ROWS_PER_BLOCK rows once rows are shared. Never
    exceeds min(n, m), so every block gets at least one row and column.
    """
    side = min(n, m)
    if side < MIN_PLANTED_SIZE:
        return 0
    k = int(side * row_overlap) // ROWS_PER_BLOCK
    return min(side, max(1, k))


def assign_row_blocks(
    n: int, k: int, row_overlap: float, rng: np.random.Generator
) -> list[list[int]]:
    """Assign each row a primary block and extra overlapping blocks.

    Returns:
        For each of the k blocks, the sorted list of its rows.
    """
    members: list[set[int]] = [set() for _ in range(k)]
    perm = rng.permutation(n)
    for block, rows in enumerate(np.array_split(perm, k)):
        members[block].update(rows.tolist())

    extra = row_overlap - 1.0
    whole, frac = int(extra), extra - int(extra)
    primary = {row: block for block, rows in enumerate(members) for row in rows}
    for row in range(n):
        n_extra = whole + (1 if rng.random() < frac else 0)
        n_extra = min(n_extra, k - 1)
        if n_extra == 0:
            continue
        others = [b for b in range(k) if b != primary[row]]
        for block in rng.choice(others, size=n_extra, replace=False):
            members[int(block)].add(row)
    return [sorted(rows) for rows in members]


def generate_graph(
    n: int,
    m: int,
    noise: float,
    row_overlap: float,
    row_separation: float,
    rng: np.random.Generator | int | None = None,
) -> WeightedBipartiteGraph:
    """Generate a weighted bipartite graph with planted ground truth.

    Args:
        n: Number of rows (node set A).
        m: Number of columns (node set B).
        noise: Probability of flipping each cell, in [0, 1].
        row_overlap: Expected number of planted blocks per row, >= 1.
        row_separation: Signal cleanliness in [0, 1]; 1.0 plants exact 1s.
        rng: numpy Generator, or seed, for reproducibility.

    Returns:
        Graph with `ground_truth` set when n, m >= MIN_PLANTED_SIZE and
        `params` recording the generator configuration.

    Raises:
        ConfigurationError: If a parameter is out of range.
    """
    config = GeneratorConfig(
        n=n, m=m, noise=noise, row_overlap=row_overlap, row_separation=row_separation
    )
    return generate_from_config(config, rng)


def generate_from_config(
    config: GeneratorConfig, rng: np.random.Generator | int | None = None
) -> WeightedBipartiteGraph:
    """Generate a planted-block graph from a GeneratorConfig.

    See generate_graph for the model.
    """
    rng = np.random.default_rng(rng)
    n, m = config.n, config.m
    k = planted_block_count(n, m, config.row_overlap)

    planted = np.zeros((n, m), dtype=bool)
    blocks: list[Bicluster] = []
    if k > 0:
        row_blocks = assign_row_blocks(n, k, config.row_overlap, rng)
        col_blocks = np.array_split(rng.permutation(m), k)
        for rows, cols in zip(row_blocks, col_blocks):
            cols = sorted(cols.tolist())
            if not rows or not cols:
                raise GraphGenerationError(
                    f"Empty planted block for n={n}, m={m}, k={k}"
                )
            planted[np.ix_(rows, cols)] = True
            blocks.append(Bicluster(rows, cols, density=1.0))

    flips = rng.random((n, m)) < config.noise
    strength = rng.random((n, m))
    signal = 1.0 - (1.0 - config.row_separation) * strength  # in (0, 1]
    background = 1.0 - strength  # in (0, 1]
    weights = np.where(
        planted,
        np.where(flips, 0.0, signal),
        np.where(flips, background, 0.0),
    )

    graph = WeightedBipartiteGraph.from_dense(weights)
    graph.params = config
    if blocks:
        graph.ground_truth = Biclustering(blocks)

    log.info(
        "Generated graph n=%d, m=%d, k=%d, edges=%d (noise=%.3f, "
        "row_overlap=%.3f, row_separation=%.3f)",
        n, m, k, graph.n_edges,
        config.noise, config.row_overlap, config.row_separation,
    )
    return graph


def sample_generator_config(
    sweep: SweepConfig, rng: np.random.Generator
) -> GeneratorConfig:
    """Draw a random GeneratorConfig from the sweep's inclusive ranges."""
    return GeneratorConfig(
        n=int(rng.integers(sweep.n_range[0], sweep.n_range[1], endpoint=True)),
        m=int(rng.integers(sweep.m_range[0], sweep.m_range[1], endpoint=True)),
        noise=float(rng.uniform(*sweep.noise_range)),
        row_overlap=float(rng.uniform(*sweep.row_overlap_range)),
        row_separation=float(rng.uniform(*sweep.row_separation_range)),
    )
