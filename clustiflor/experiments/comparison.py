"""Comparison sweeps: discovery vs ground truth vs reference tools.

Each trial samples a generator configuration, synthesizes a graph, keeps
an untouched clone for the reference tools (discovery consumes edges),
and scores every method against the planted ground truth. A failing
trial is logged and skipped so one bad case never aborts the sweep.
"""

import logging
import time
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np

from clustiflor.algorithm.engine import discover
from clustiflor.biclusters.types import Biclustering
from clustiflor.config.defaults import DEFAULT_PARAMS
from clustiflor.config.experiment import BiclusterParams, GeneratorConfig, SweepConfig
from clustiflor.graph.generator import generate_from_config, sample_generator_config
from clustiflor.graph.types import WeightedBipartiteGraph
from clustiflor.reproducibility.seed import trial_rng

log = logging.getLogger(__name__)

# A reference method receives an unmodified graph and returns its
# biclusters and the duration it reports, in seconds.
ReferenceMethod = Callable[[WeightedBipartiteGraph], tuple[Biclustering, float]]

DISCOVERY_NAME = "CF"


@dataclass(frozen=True, slots=True)
class MethodScore:
    """Scores of one method on one trial."""

    matching: float
    accuracy: float
    duration_s: float
    n_biclusters: int


@dataclass(frozen=True, slots=True)
class ComparisonRecord:
    """One row of the comparison table."""

    trial: int
    config: GeneratorConfig
    real_noise: float  # measured by compute_noise on the untouched graph
    real_overlap: float  # ground-truth rows overlap
    scores: dict[str, MethodScore] = field(default_factory=dict)


def score_method(
    ground_truth: Biclustering, found: Biclustering, duration_s: float
) -> MethodScore:
    return MethodScore(
        matching=ground_truth.matching_score(found),
        accuracy=ground_truth.accuracy(found),
        duration_s=duration_s,
        n_biclusters=len(found),
    )


def run_trial(
    trial: int,
    config: GeneratorConfig,
    rng: np.random.Generator,
    params: BiclusterParams = DEFAULT_PARAMS,
    references: Mapping[str, ReferenceMethod] | None = None,
) -> ComparisonRecord | None:
    """Generate one graph and score discovery plus every reference method.

    Returns:
        The record, or None when the graph is too small to plant ground
        truth.
    """
    graph = generate_from_config(config, rng)
    ground_truth = graph.ground_truth
    if ground_truth is None:
        log.info("Trial %d: no ground truth for n=%d, m=%d", trial, config.n, config.m)
        return None
    untouched = graph.clone()

    start = time.monotonic()
    found, _ = discover(graph, params)
    scores = {DISCOVERY_NAME: score_method(ground_truth, found, time.monotonic() - start)}

    for name, method in (references or {}).items():
        ref_found, ref_duration = method(untouched.clone())
        scores[name] = score_method(ground_truth, ref_found, ref_duration)

    return ComparisonRecord(
        trial=trial,
        config=config,
        real_noise=untouched.compute_noise(ground_truth),
        real_overlap=ground_truth.get_rows_overlapping(),
        scores=scores,
    )


def run_comparison(
    sweep: SweepConfig,
    params: BiclusterParams = DEFAULT_PARAMS,
    seed: int = 42,
    references: Mapping[str, ReferenceMethod] | None = None,
    n_trials: int | None = None,
) -> list[ComparisonRecord]:
    """Run a comparison sweep.

    Args:
        sweep: Ranges to sample generator configs from.
        params: Discovery parameters.
        seed: Master seed; trial t uses trial_rng(seed, t).
        references: Named reference methods to run on each graph.
        n_trials: Overrides sweep.n_trials.

    Returns:
        Records of the trials that completed, in trial order.
    """
    n_trials = sweep.n_trials if n_trials is None else n_trials
    records: list[ComparisonRecord] = []
    n_failed = 0
    for trial in range(n_trials):
        rng = trial_rng(seed, trial)
        try:
            config = sample_generator_config(sweep, rng)
            record = run_trial(trial, config, rng, params, references)
        except Exception:
            n_failed += 1
            log.exception("Comparison trial %d failed", trial)
            continue
        if record is not None:
            records.append(record)

    log.info(
        "Comparison finished: %d records, %d failed trials out of %d",
        len(records), n_failed, n_trials,
    )
    return records


def method_names(records: Sequence[ComparisonRecord]) -> list[str]:
    """Method names in first-seen order, discovery first."""
    names: list[str] = []
    for record in records:
        for name in record.scores:
            if name not in names:
                names.append(name)
    return names


def format_comparison_table(records: Sequence[ComparisonRecord]) -> list[str]:
    """Space-separated table lines, header first.

    Methods missing from a record (e.g. a reference tool that failed to
    produce output) are written as 'nan'.
    """
    names = method_names(records) or [DISCOVERY_NAME]
    header = ["n", "m", "real_noise", "p_noise", "real_overlap", "p_overlap", "p_separation"]
    for name in names:
        header += [f"{name}_mtc", f"{name}_acc", f"{name}_time_s"]
    lines = [" ".join(header)]

    for r in records:
        c = r.config
        row = [
            str(c.n), str(c.m),
            f"{r.real_noise:.4f}", f"{c.noise:.4f}",
            f"{r.real_overlap:.4f}", f"{c.row_overlap:.4f}", f"{c.row_separation:.4f}",
        ]
        for name in names:
            s = r.scores.get(name)
            if s is None:
                row += ["nan", "nan", "nan"]
            else:
                row += [f"{s.matching:.2f}", f"{s.accuracy:.2f}", f"{s.duration_s:.4f}"]
        lines.append(" ".join(row))
    return lines


def write_comparison_table(records: Sequence[ComparisonRecord], path: str | Path) -> Path:
    path = Path(path)
    path.write_text("\n".join(format_comparison_table(records)) + "\n")
    log.info("Comparison table with %d rows written to %s", len(records), path)
    return path
