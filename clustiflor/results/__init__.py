"""Run-result schema and I/O."""

from clustiflor.results.schema import (
    SCHEMA_VERSION,
    build_run_result,
    generate_run_id,
    load_result,
    validate_result,
    write_result,
)

__all__ = [
    "SCHEMA_VERSION",
    "build_run_result",
    "generate_run_id",
    "load_result",
    "validate_result",
    "write_result",
]
