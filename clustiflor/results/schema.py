"""Run-result JSON: assembly, schema validation, writing and loading.

Uses a Python validation function (not jsonschema) to check required
fields, types, and that every bicluster entry references known labels.
"""

import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from clustiflor.algorithm.engine import RunStatistics
from clustiflor.biclusters.types import Biclustering
from clustiflor.config.experiment import BiclusterParams
from clustiflor.config.hashing import config_hash
from clustiflor.graph.types import GraphStats

SCHEMA_VERSION = "1.0"

REQUIRED_TOP_FIELDS = {
    "schema_version",
    "run_id",
    "timestamp",
    "params",
    "statistics",
    "graph",
    "biclusters",
}

REQUIRED_GRAPH_FIELDS = {"n", "m", "n_edges"}


def generate_run_id(params: BiclusterParams, graph_stats: GraphStats) -> str:
    """Scannable run ID: n{n}_m{m}_z{size}_t{split}_p{power}_{YYYYMMDD}_{HHMMSS}."""
    ts = datetime.now(timezone.utc)
    return (
        f"n{graph_stats.n}"
        f"_m{graph_stats.m}"
        f"_z{params.size_sensitivity:g}"
        f"_t{params.split_threshold:g}"
        f"_p{params.power_iterations}"
        f"_{ts.strftime('%Y%m%d_%H%M%S')}"
    )


def build_run_result(
    params: BiclusterParams,
    biclusters: Biclustering,
    run_stats: RunStatistics,
    graph_stats: GraphStats,
    labels_a: list[str],
    labels_b: list[str],
    source: str = "",
) -> dict[str, Any]:
    """Assemble the result dict of one discovery run.

    Biclusters are stored by label so the file stays meaningful without
    the graph's index order.
    """
    return {
        "schema_version": SCHEMA_VERSION,
        "run_id": generate_run_id(params, graph_stats),
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "source": source,
        "params": asdict(params),
        "params_hash": config_hash(params),
        "statistics": asdict(run_stats),
        "graph": asdict(graph_stats),
        "biclusters": [
            {
                "rows": rows,
                "cols": cols,
                "density": bic.density,
            }
            for bic, (rows, cols) in zip(biclusters, biclusters.to_labels(labels_a, labels_b))
        ],
    }


def validate_result(result: dict[str, Any]) -> list[str]:
    """Validate a run-result dict.

    Returns:
        List of error strings; empty means valid.
    """
    errors: list[str] = []

    missing = REQUIRED_TOP_FIELDS - set(result.keys())
    if missing:
        errors.append(f"Missing required top-level fields: {sorted(missing)}")

    if "schema_version" in result and not isinstance(result["schema_version"], str):
        errors.append("schema_version must be a string")

    if "timestamp" in result:
        ts = result["timestamp"]
        if not isinstance(ts, str):
            errors.append("timestamp must be a string")
        else:
            try:
                datetime.fromisoformat(ts)
            except ValueError:
                errors.append("timestamp must be in ISO 8601 format")

    for block in ("params", "statistics", "graph"):
        if block in result and not isinstance(result[block], dict):
            errors.append(f"{block} must be a dict")

    graph = result.get("graph")
    if isinstance(graph, dict):
        missing_graph = REQUIRED_GRAPH_FIELDS - set(graph.keys())
        if missing_graph:
            errors.append(f"graph missing fields: {sorted(missing_graph)}")

    biclusters = result.get("biclusters")
    if biclusters is not None:
        if not isinstance(biclusters, list):
            errors.append("biclusters must be a list")
        else:
            for i, entry in enumerate(biclusters):
                if not isinstance(entry, dict):
                    errors.append(f"biclusters[{i}] must be a dict")
                    continue
                for side in ("rows", "cols"):
                    labels = entry.get(side)
                    if not isinstance(labels, list) or not labels:
                        errors.append(f"biclusters[{i}].{side} must be a non-empty list")

    return errors


def write_result(result: dict[str, Any], path: str | Path) -> Path:
    """Validate and write a run result as JSON.

    Raises:
        ValueError: If the result fails validation.
    """
    errors = validate_result(result)
    if errors:
        raise ValueError(
            "Result validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        )
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(result, f, indent=2)
    return path


def load_result(path: str | Path) -> dict[str, Any]:
    """Load and validate a run-result JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the loaded result fails validation.
    """
    path = Path(path)
    with open(path) as f:
        result = json.load(f)
    errors = validate_result(result)
    if errors:
        raise ValueError(
            f"Result validation failed for {path}:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )
    return result
