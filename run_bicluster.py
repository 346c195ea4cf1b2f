#!/usr/bin/env python3
"""Command-line entry point for bicluster discovery and experiments.

Subcommands:
    solve     discover biclusters in an edge-list file
    generate  write a batch of planted-block test graphs
    compare   run a comparison sweep against ground truth and reference tools

Usage:
    python run_bicluster.py solve graph.edges --split-th 1.5 --power 5
    python run_bicluster.py generate --batch-size 20 --out-dir batch/
    python run_bicluster.py compare --trials 50 --reference ISA="Rscript isa.R"
"""

import argparse
import logging
import shlex
import sys
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from clustiflor.config import (
    DEFAULT_CONFIG,
    BiclusterParams,
    ExperimentConfig,
    config_from_json,
    config_hash,
)

log = logging.getLogger(__name__)


@contextmanager
def stage_timer(name: str) -> Generator[None, None, None]:
    """Context manager that prints stage banners with elapsed time."""
    print(f"\n=== {name} ===")
    log.info("Starting: %s", name)
    t0 = time.monotonic()
    yield
    elapsed = time.monotonic() - t0
    print(f"... done in {elapsed:.1f}s")
    log.info("Completed: %s in %.1fs", name, elapsed)


def _load_config(path: str | None) -> ExperimentConfig:
    if path is None:
        return DEFAULT_CONFIG
    config_path = Path(path)
    if not config_path.exists():
        print(f"Error: config file not found: {config_path}", file=sys.stderr)
        sys.exit(1)
    return config_from_json(config_path.read_text())


def _delimiter(value: str) -> str:
    # Shells make a literal tab awkward to pass
    return "\t" if value in ("\\t", "tab") else value


def solve(args: argparse.Namespace) -> Path:
    """Discover biclusters in one file and write the report next to it."""
    from clustiflor.algorithm import discover
    from clustiflor.graph import load_graph, log_graph_stats
    from clustiflor.results import build_run_result, write_result

    params = BiclusterParams(
        size_sensitivity=args.size_sensitivity,
        split_threshold=args.split_th,
        power_iterations=args.power,
        split_rows=not args.split_cols,
        verbosity=args.verbose,
    )
    print(f"Params hash: {config_hash(params)}")

    with stage_timer("Load Graph"):
        graph = load_graph(
            args.file_path,
            delimiter=_delimiter(args.delimiter),
            split_rows=params.split_rows,
        )
        graph_stats = log_graph_stats(graph)
        labels_a, labels_b, _, _ = graph.get_labels()

    with stage_timer("Discovery"):
        biclusters, run_stats = discover(graph.clone(), params)
        log.info("Found %d biclusters", len(biclusters))

    output_path = Path(args.output or f"{args.file_path}.biclusters")
    with stage_timer("Write Results"):
        biclusters.print_stats(
            params,
            labels_a,
            labels_b,
            output_path=output_path,
            run_stats=run_stats,
        )
        log.info("Biclusters written to %s", output_path)
        if args.json:
            result = build_run_result(
                params, biclusters, run_stats, graph_stats, labels_a, labels_b,
                source=str(args.file_path),
            )
            json_path = write_result(result, args.json)
            log.info("Run result written to %s", json_path)

    print(f"\n{len(biclusters)} biclusters -> {output_path}")
    return output_path


def generate(args: argparse.Namespace) -> list[Path]:
    from clustiflor.experiments import generate_batch

    config = _load_config(args.config)
    seed = config.seed if args.seed is None else args.seed
    with stage_timer("Batch Generation"):
        paths = generate_batch(args.batch_size, args.out_dir, sweep=config.sweep, seed=seed)
    print(f"\n{len(paths)} graphs written to {args.out_dir}")
    return paths


def _parse_references(items: list[str]) -> dict:
    """Turn NAME=COMMAND arguments into ExternalTool instances."""
    from clustiflor.experiments import ExternalTool

    tools = {}
    for item in items:
        name, sep, command = item.partition("=")
        if not sep or not name or not command.strip():
            raise argparse.ArgumentTypeError(
                f"--reference expects NAME=COMMAND, got {item!r}"
            )
        tools[name] = ExternalTool(name=name, command=tuple(shlex.split(command)))
    return tools


def compare(args: argparse.Namespace) -> Path:
    from clustiflor.experiments import run_comparison, write_comparison_table
    from clustiflor.reproducibility import set_seed

    config = _load_config(args.config)
    seed = config.seed if args.seed is None else args.seed
    references = _parse_references(args.reference)
    print(f"Config hash: {config_hash(config)}")
    print(f"Methods:     CF{''.join(' ' + name for name in references)}")

    with stage_timer("Reproducibility Seeding"):
        set_seed(seed)

    with stage_timer("Comparison Sweep"):
        records = run_comparison(
            config.sweep,
            params=config.params,
            seed=seed,
            references=references,
            n_trials=args.trials,
        )

    with stage_timer("Write Table"):
        table_path = write_comparison_table(records, args.output)

    if args.figures:
        from clustiflor.visualization import apply_style, plot_comparison, save_figure

        with stage_timer("Figures"):
            apply_style()
            for metric in ("matching", "accuracy"):
                save_figure(plot_comparison(records, metric), args.figures, f"{metric}_vs_noise")

    print(f"\n{len(records)} trials -> {table_path}")
    return table_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Discover dense biclusters in weighted bipartite graphs"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable DEBUG-level logging",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_solve = sub.add_parser("solve", help="Discover biclusters in an edge-list file")
    p_solve.add_argument("file_path", type=str, help="Edge list: <a> <b> <weight> per line")
    p_solve.add_argument(
        "delimiter", type=str, nargs="?", default=" ",
        help="Field separator (default: whitespace; use '\\t' for tab)",
    )
    p_solve.add_argument("--size-sensitivity", type=float, default=1.0)
    p_solve.add_argument("--split-th", type=float, default=1.0, help="Density contrast threshold")
    p_solve.add_argument("--power", type=int, default=3, help="Power iterations per split")
    p_solve.add_argument("--verbose", type=int, default=0, help="Engine verbosity level")
    p_solve.add_argument(
        "--split-cols", action="store_true",
        help="Load the second column as rows and seed power iteration from a row",
    )
    p_solve.add_argument("--output", type=str, default=None, help="Report path")
    p_solve.add_argument("--json", type=str, default=None, help="Also write a JSON run result")
    p_solve.set_defaults(func=solve)

    p_gen = sub.add_parser("generate", help="Write a batch of test graphs")
    p_gen.add_argument("--batch-size", type=int, default=10)
    p_gen.add_argument("--out-dir", type=str, default="batch")
    p_gen.add_argument("--seed", type=int, default=None)
    p_gen.add_argument("--config", type=str, default=None, help="Experiment config JSON")
    p_gen.set_defaults(func=generate)

    p_cmp = sub.add_parser("compare", help="Run a comparison sweep")
    p_cmp.add_argument("--config", type=str, default=None, help="Experiment config JSON")
    p_cmp.add_argument("--trials", type=int, default=None)
    p_cmp.add_argument("--seed", type=int, default=None)
    p_cmp.add_argument("--output", type=str, default="comparison.csv")
    p_cmp.add_argument("--figures", type=str, default=None, help="Directory for figures")
    p_cmp.add_argument(
        "--reference", action="append", default=[], metavar="NAME=COMMAND",
        help="Reference tool to run on each graph (repeatable)",
    )
    p_cmp.set_defaults(func=compare)
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    log_level = logging.DEBUG if args.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        args.func(args)
    except Exception:
        log.exception("%s failed", args.command)
        sys.exit(1)


if __name__ == "__main__":
    main()
