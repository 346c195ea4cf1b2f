"""Matching score against measured noise, one series per method."""

from collections.abc import Sequence

import matplotlib.pyplot as plt

from clustiflor.experiments.comparison import ComparisonRecord, method_names
from clustiflor.visualization.style import PALETTE


def plot_comparison(
    records: Sequence[ComparisonRecord], metric: str = "matching"
) -> plt.Figure:
    """Scatter a per-method score against the measured noise of each trial.

    Args:
        records: Comparison sweep output.
        metric: "matching" or "accuracy".
    """
    if metric not in ("matching", "accuracy"):
        raise ValueError(f"metric must be 'matching' or 'accuracy', got {metric!r}")

    fig, ax = plt.subplots(figsize=(7, 5))
    if not records:
        ax.text(
            0.5, 0.5, "No comparison data available",
            transform=ax.transAxes, ha="center", va="center",
            fontsize=12, color="gray",
        )
        ax.set_title(f"{metric.capitalize()} vs noise")
        return fig

    for i, name in enumerate(method_names(records)):
        xs = [r.real_noise for r in records if name in r.scores]
        ys = [getattr(r.scores[name], metric) for r in records if name in r.scores]
        ax.scatter(xs, ys, s=14, alpha=0.7, color=PALETTE[i % len(PALETTE)], label=name)

    ax.set_xlabel("Measured noise")
    ax.set_ylabel(f"{metric.capitalize()} vs ground truth")
    ax.set_ylim(-0.02, 1.02)
    ax.set_title(f"{metric.capitalize()} vs noise ({len(records)} trials)")
    ax.legend(loc="best")
    fig.tight_layout()
    return fig
