"""Experiment drivers: batch generation, comparison sweeps, reference tools."""

from clustiflor.experiments.batch import generate_batch
from clustiflor.experiments.comparison import (
    DISCOVERY_NAME,
    ComparisonRecord,
    MethodScore,
    ReferenceMethod,
    format_comparison_table,
    method_names,
    run_comparison,
    run_trial,
    score_method,
    write_comparison_table,
)
from clustiflor.experiments.reference import ExternalTool, read_duration_file

__all__ = [
    "generate_batch",
    "DISCOVERY_NAME",
    "ComparisonRecord",
    "MethodScore",
    "ReferenceMethod",
    "format_comparison_table",
    "method_names",
    "run_comparison",
    "run_trial",
    "score_method",
    "write_comparison_table",
    "ExternalTool",
    "read_duration_file",
]
