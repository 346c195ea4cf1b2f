"""Batch generation of planted-block test graphs on disk."""

import logging
from pathlib import Path

from clustiflor.config.experiment import SweepConfig
from clustiflor.graph.generator import generate_from_config, sample_generator_config
from clustiflor.graph.io import format_generation_header
from clustiflor.reproducibility.seed import trial_rng

log = logging.getLogger(__name__)


def generate_batch(
    batch_size: int,
    out_dir: str | Path,
    sweep: SweepConfig | None = None,
    seed: int = 42,
) -> list[Path]:
    """Write `batch_size` random graphs with their ground truth.

    Graph i is written to `<out_dir>/<i>.edges` with a generation header,
    and its ground truth (when one was planted) to `<out_dir>/<i>.ground_truth`
    with label vocabularies.

    Returns:
        The edge-list paths, in batch order.
    """
    sweep = sweep or SweepConfig()
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    paths: list[Path] = []
    for i in range(batch_size):
        rng = trial_rng(seed, i)
        config = sample_generator_config(sweep, rng)
        graph = generate_from_config(config, rng)
        edges_path = out_dir / f"{i}.edges"
        graph.write(
            edges_path,
            header_comment=format_generation_header(config),
            ground_truth_path=out_dir / f"{i}.ground_truth",
        )
        paths.append(edges_path)

    log.info("Generated batch of %d graphs in %s", batch_size, out_dir)
    return paths
