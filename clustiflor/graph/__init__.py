"""Weighted bipartite graph model, planted-block generation, and file I/O."""

from clustiflor.graph.types import GraphStats, WeightedBipartiteGraph, log_graph_stats
from clustiflor.graph.generator import (
    MIN_PLANTED_SIZE,
    assign_row_blocks,
    generate_from_config,
    generate_graph,
    planted_block_count,
    sample_generator_config,
)
from clustiflor.graph.io import (
    format_generation_header,
    load_graph,
    parse_generation_header,
    parse_graph,
    write_graph,
)

__all__ = [
    "GraphStats",
    "WeightedBipartiteGraph",
    "log_graph_stats",
    "MIN_PLANTED_SIZE",
    "assign_row_blocks",
    "generate_from_config",
    "generate_graph",
    "planted_block_count",
    "sample_generator_config",
    "format_generation_header",
    "load_graph",
    "parse_generation_header",
    "parse_graph",
    "write_graph",
]
