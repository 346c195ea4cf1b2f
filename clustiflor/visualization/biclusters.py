"""Weight heatmap with discovered (and planted) biclusters outlined."""

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns
from matplotlib.patches import Rectangle

from clustiflor.biclusters.types import Biclustering
from clustiflor.graph.types import WeightedBipartiteGraph
from clustiflor.visualization.style import DISCOVERY_COLOR, GROUND_TRUTH_COLOR


def cluster_order(biclusters: Biclustering, size: int, axis: str) -> list[int]:
    """Index order grouping members of the same bicluster together.

    Indices follow the first bicluster they belong to, in bicluster order;
    unclustered indices come last.
    """
    order: list[int] = []
    seen: set[int] = set()
    for bic in biclusters:
        members = bic.rows if axis == "rows" else bic.cols
        for i in sorted(members):
            if i not in seen:
                seen.add(i)
                order.append(i)
    order.extend(i for i in range(size) if i not in seen)
    return order


def _outline(ax: plt.Axes, biclusters: Biclustering, row_pos: dict, col_pos: dict,
             color, linestyle: str) -> None:
    # Bounding box in the reordered matrix; exact for non-overlapping clusters
    for bic in biclusters:
        if not bic.is_valid():
            continue
        rs = [row_pos[r] for r in bic.rows]
        cs = [col_pos[c] for c in bic.cols]
        ax.add_patch(Rectangle(
            (min(cs), min(rs)),
            max(cs) - min(cs) + 1,
            max(rs) - min(rs) + 1,
            fill=False, edgecolor=color, linewidth=1.5, linestyle=linestyle,
        ))


def plot_bicluster_heatmap(
    graph: WeightedBipartiteGraph,
    biclusters: Biclustering,
    ground_truth: Biclustering | None = None,
    title: str = "Biclusters",
) -> plt.Figure:
    """Plot the graph's weights with rows/cols reordered by bicluster.

    Pass the graph before discovery (e.g. a clone kept for this purpose);
    after discovery the extracted edges are gone.

    Args:
        graph: Graph whose weights are drawn.
        biclusters: Discovered biclusters, outlined solid.
        ground_truth: Planted biclusters, outlined dashed.
        title: Axes title.
    """
    if graph.n == 0 or graph.m == 0:
        fig, ax = plt.subplots(figsize=(6, 5))
        ax.text(
            0.5, 0.5, "Empty graph",
            transform=ax.transAxes, ha="center", va="center",
            fontsize=12, color="gray",
        )
        ax.set_title(title)
        return fig

    rows = cluster_order(biclusters, graph.n, "rows")
    cols = cluster_order(biclusters, graph.m, "cols")
    matrix = graph.submatrix(rows, cols)
    row_pos = {r: i for i, r in enumerate(rows)}
    col_pos = {c: j for j, c in enumerate(cols)}

    fig, ax = plt.subplots(figsize=(max(6, graph.m * 0.08), max(5, graph.n * 0.08)))
    sns.heatmap(
        matrix,
        cmap="Greys",
        vmin=0.0,
        vmax=max(1.0, float(np.max(matrix))),
        xticklabels=False,
        yticklabels=False,
        cbar_kws={"label": "Edge weight"},
        ax=ax,
    )
    _outline(ax, biclusters, row_pos, col_pos, DISCOVERY_COLOR, "-")
    if ground_truth is not None:
        _outline(ax, ground_truth, row_pos, col_pos, GROUND_TRUTH_COLOR, "--")
    ax.set_xlabel(f"B ({graph.m} columns)")
    ax.set_ylabel(f"A ({graph.n} rows)")
    ax.set_title(f"{title} ({len(biclusters)} found)")
    fig.tight_layout()
    return fig
