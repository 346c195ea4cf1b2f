"""Figures for biclusters and comparison sweeps."""

from clustiflor.visualization.style import PALETTE, apply_style, save_figure
from clustiflor.visualization.biclusters import cluster_order, plot_bicluster_heatmap
from clustiflor.visualization.comparison import plot_comparison

__all__ = [
    "PALETTE",
    "apply_style",
    "save_figure",
    "cluster_order",
    "plot_bicluster_heatmap",
    "plot_comparison",
]
