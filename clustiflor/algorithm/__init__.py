"""Bicluster discovery engine."""

from clustiflor.algorithm.engine import (
    Region,
    RunStatistics,
    bicluster,
    discover,
    discover_residual,
    size_floor,
)
from clustiflor.algorithm.power import (
    AFFINITY_CUTOFF,
    affinity_split,
    bipartite_components,
    power_iteration,
)

__all__ = [
    "Region",
    "RunStatistics",
    "bicluster",
    "discover",
    "discover_residual",
    "size_floor",
    "AFFINITY_CUTOFF",
    "affinity_split",
    "bipartite_components",
    "power_iteration",
]
