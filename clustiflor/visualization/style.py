"""Shared figure style and the PNG + SVG save helper."""

import matplotlib
matplotlib.use("Agg")  # Headless rendering for CLI runs and tests

from pathlib import Path

import matplotlib.pyplot as plt
import seaborn as sns

PALETTE = sns.color_palette("colorblind", n_colors=8)
DISCOVERY_COLOR = PALETTE[0]
GROUND_TRUTH_COLOR = PALETTE[2]

_RC = {
    "figure.dpi": 150,
    "savefig.dpi": 300,
    "font.size": 10,
    "axes.titlesize": 12,
    "axes.labelsize": 11,
    "legend.fontsize": 9,
    "image.interpolation": "nearest",
    "svg.fonttype": "none",
}


def apply_style() -> None:
    """Whitegrid theme plus project rcParams. Safe to call repeatedly."""
    sns.set_theme(style="whitegrid", palette=PALETTE)
    plt.rcParams.update(_RC)


def save_figure(fig: plt.Figure, output_dir: str | Path, name: str) -> tuple[Path, Path]:
    """Write `<name>.png` and `<name>.svg` into output_dir and close the figure.

    Returns:
        (png_path, svg_path).
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    paths = (output_dir / f"{name}.png", output_dir / f"{name}.svg")
    for path in paths:
        fig.savefig(path, bbox_inches="tight")
    plt.close(fig)
    return paths
