"""Bicluster discovery by recursive dense-block extraction.

The engine keeps an explicit worklist of regions (row subset, column
subset). Each region is pruned to the rows and columns that still carry
edges inside it, split into connected components, and then probed with
a truncated power iteration that settles on the seed's block. A
high-affinity core that is dense enough relative to its region is emitted
and its edges are removed from the graph, after which the region goes back
on the worklist. A region that cannot be split further is emitted whole
when it is dense enough relative to the region it was carved from, and
discarded otherwise.

Acceptance tests:
- split: density(core) / density(region) >= split_threshold
- terminal: density(region) / baseline >= split_threshold, where baseline
  is the density of the parent region (the whole n x m graph for the root)

Size floor: max(1, ceil(size_sensitivity * sqrt(n) / 2)) rows and the
same formula in m for columns.
"""

import logging
import math
import time
from collections import deque
from dataclasses import dataclass

import numpy as np

from clustiflor.algorithm.power import affinity_split, bipartite_components, power_iteration
from clustiflor.biclusters.types import Bicluster, Biclustering
from clustiflor.config.defaults import DEFAULT_PARAMS
from clustiflor.config.experiment import BiclusterParams
from clustiflor.graph.types import WeightedBipartiteGraph

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RunStatistics:
    """Counters and timing of one discovery run, for reporting only."""

    n_regions: int  # regions popped from the worklist
    n_splits: int  # cores accepted and extracted
    n_component_splits: int  # regions broken into connected components
    n_terminal: int  # regions emitted whole
    n_discarded: int  # regions dropped as empty, too small, or noise
    cells_visited: int  # sum of region areas examined
    edges_removed: int
    elapsed_s: float


@dataclass(frozen=True, slots=True)
class Region:
    """Worklist item: index subsets of A and B plus the parent's density."""

    rows: tuple[int, ...]
    cols: tuple[int, ...]
    baseline: float
    depth: int = 0


def size_floor(n: int, m: int, size_sensitivity: float) -> tuple[int, int]:
    """Minimum (rows, cols) of an emitted bicluster."""
    min_rows = max(1, math.ceil(size_sensitivity * math.sqrt(n) / 2.0))
    min_cols = max(1, math.ceil(size_sensitivity * math.sqrt(m) / 2.0))
    return min_rows, min_cols


def _ratio(numerator: float, denominator: float) -> float:
    if denominator <= 0.0:
        return math.inf if numerator > 0.0 else 0.0
    return numerator / denominator


def discover(
    graph: WeightedBipartiteGraph, params: BiclusterParams = DEFAULT_PARAMS
) -> tuple[Biclustering, RunStatistics]:
    """Extract dense biclusters, removing their edges from `graph`.

    Deterministic for a given graph and parameters. Clone the graph first
    if the original edges are still needed.

    Args:
        graph: Graph to mine; mutated in place.
        params: Validated algorithm parameters.

    Returns:
        (biclusters in discovery order, run statistics). Every returned
        bicluster has non-empty rows and columns.
    """
    start = time.monotonic()
    min_rows, min_cols = size_floor(graph.n, graph.m, params.size_sensitivity)
    cells = graph.n * graph.m
    root_baseline = graph.total_weight / cells if cells else 0.0

    worklist: deque[Region] = deque(
        [Region(tuple(range(graph.n)), tuple(range(graph.m)), root_baseline)]
    )
    found: list[Bicluster] = []
    n_regions = n_splits = n_component_splits = n_terminal = n_discarded = 0
    cells_visited = edges_removed = 0

    def emit(rows: np.ndarray, cols: np.ndarray, density: float) -> None:
        nonlocal edges_removed
        bic = Bicluster(rows.tolist(), cols.tolist(), density=float(density))
        edges_removed += graph.remove_edges(bic.rows, bic.cols)
        found.append(bic)
        if params.verbosity >= 1:
            log.info(
                "Bicluster %d: %d rows x %d cols, density %.4f",
                len(found), len(bic.rows), len(bic.cols), density,
            )

    while worklist:
        region = worklist.popleft()
        n_regions += 1
        block = graph.submatrix(region.rows, region.cols)
        cells_visited += block.size

        row_mask = block.sum(axis=1) > 0
        col_mask = block.sum(axis=0) > 0
        if not row_mask.any():
            n_discarded += 1
            continue
        rows = np.asarray(region.rows, dtype=np.int64)[row_mask]
        cols = np.asarray(region.cols, dtype=np.int64)[col_mask]
        block = block[np.ix_(row_mask, col_mask)]
        density = float(block.mean())

        if params.verbosity >= 2:
            log.info(
                "Region depth=%d: %d x %d, density %.4f, baseline %.4f",
                region.depth, len(rows), len(cols), density, region.baseline,
            )

        components = bipartite_components(block)
        if len(components) > 1:
            n_component_splits += 1
            for row_pos, col_pos in components:
                worklist.append(Region(
                    tuple(rows[row_pos].tolist()),
                    tuple(cols[col_pos].tolist()),
                    density,
                    region.depth + 1,
                ))
            continue

        if len(rows) < min_rows or len(cols) < min_cols:
            n_discarded += 1
            continue

        u, v = power_iteration(block, params.power_iterations, seed_cols=params.split_rows)
        core_rows, core_cols = affinity_split(u, v)
        splittable = not (core_rows.all() and core_cols.all())

        if splittable and core_rows.sum() >= min_rows and core_cols.sum() >= min_cols:
            core_density = float(block[np.ix_(core_rows, core_cols)].mean())
            if _ratio(core_density, density) >= params.split_threshold:
                n_splits += 1
                emit(rows[core_rows], cols[core_cols], core_density)
                # The residual of this region may still hold other blocks
                worklist.append(Region(
                    tuple(rows.tolist()), tuple(cols.tolist()),
                    region.baseline, region.depth + 1,
                ))
                continue

        if _ratio(density, region.baseline) >= params.split_threshold:
            n_terminal += 1
            emit(rows, cols, density)
        else:
            n_discarded += 1

    stats = RunStatistics(
        n_regions=n_regions,
        n_splits=n_splits,
        n_component_splits=n_component_splits,
        n_terminal=n_terminal,
        n_discarded=n_discarded,
        cells_visited=cells_visited,
        edges_removed=edges_removed,
        elapsed_s=time.monotonic() - start,
    )
    summary = (
        "Discovery: %d biclusters from %d regions (%d splits, %d terminal, "
        "%d discarded) in %.3fs"
    )
    summary_args = (
        len(found), n_regions, n_splits, n_terminal, n_discarded, stats.elapsed_s,
    )
    if params.verbosity >= 1:
        log.info(summary, *summary_args)
    else:
        log.debug(summary, *summary_args)
    return Biclustering(found), stats


def bicluster(
    graph: WeightedBipartiteGraph,
    size_sensitivity: float = 1.0,
    split_threshold: float = 1.0,
    power_iterations: int = 3,
    verbosity: int = 0,
    split_rows: bool = True,
) -> tuple[Biclustering, RunStatistics]:
    """Keyword form of discover().

    Raises:
        ConfigurationError: If a parameter is out of range. Raised before
            the graph is touched.
    """
    params = BiclusterParams(
        size_sensitivity=size_sensitivity,
        split_threshold=split_threshold,
        power_iterations=power_iterations,
        split_rows=split_rows,
        verbosity=verbosity,
    )
    return discover(graph, params)


def discover_residual(
    graph: WeightedBipartiteGraph, params: BiclusterParams = DEFAULT_PARAMS
) -> tuple[Biclustering, RunStatistics, WeightedBipartiteGraph]:
    """Non-mutating discover(): returns the residual graph as a new value.

    Returns:
        (biclusters, statistics, residual graph). `graph` is left intact.
    """
    residual = graph.clone()
    biclusters, stats = discover(residual, params)
    return biclusters, stats, residual
