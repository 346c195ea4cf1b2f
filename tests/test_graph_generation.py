"""Tests for the planted-block test graph generator."""

import numpy as np
import pytest

from clustiflor.config import GeneratorConfig, SweepConfig
from clustiflor.errors import ConfigurationError
from clustiflor.graph import (
    assign_row_blocks,
    generate_from_config,
    generate_graph,
    planted_block_count,
    sample_generator_config,
)


class TestBlockCount:
    """planted_block_count scales with size and overlap."""

    @pytest.mark.parametrize(
        "n, m, overlap, expected",
        [
            (1, 50, 1.0, 0),
            (50, 1, 1.0, 0),
            (5, 5, 1.0, 1),
            (10, 10, 1.0, 1),
            (40, 40, 1.0, 4),
            (40, 100, 1.0, 4),
            (40, 40, 2.0, 8),
            (3, 3, 20.0, 3),
        ],
    )
    def test_block_count(self, n, m, overlap, expected) -> None:
        assert planted_block_count(n, m, overlap) == expected


class TestRowAssignment:
    """Rows join one primary block plus overlap extras."""

    def test_no_overlap_partitions_rows(self) -> None:
        blocks = assign_row_blocks(20, 4, 1.0, np.random.default_rng(0))
        members = sorted(r for rows in blocks for r in rows)
        assert members == list(range(20))
        assert all(len(rows) == 5 for rows in blocks)

    def test_integer_overlap_is_exact(self) -> None:
        blocks = assign_row_blocks(30, 5, 2.0, np.random.default_rng(1))
        counts = np.zeros(30, dtype=int)
        for rows in blocks:
            counts[rows] += 1
        assert (counts == 2).all()

    def test_overlap_capped_by_block_count(self) -> None:
        blocks = assign_row_blocks(6, 2, 5.0, np.random.default_rng(2))
        for rows in blocks:
            assert rows == list(range(6))


class TestGenerateGraph:
    """Generated graphs carry ground truth and respect their parameters."""

    def test_clean_graph_matches_ground_truth(self) -> None:
        g = generate_graph(40, 40, noise=0.0, row_overlap=1.0, row_separation=1.0, rng=0)
        gt = g.ground_truth
        assert gt is not None
        assert len(gt) == 4
        assert g.n_edges == sum(len(b.rows) * len(b.cols) for b in gt)
        assert all(w == 1.0 for _, _, w in g.edges())
        assert g.compute_noise(gt) == 0.0

    def test_ground_truth_density_is_target(self) -> None:
        g = generate_graph(30, 30, 0.1, 1.5, 0.5, rng=3)
        assert all(b.density == 1.0 for b in g.ground_truth)

    def test_column_blocks_disjoint(self) -> None:
        g = generate_graph(50, 60, 0.05, 1.7, 0.8, rng=4)
        seen: set[int] = set()
        for b in g.ground_truth:
            assert not (b.cols & seen)
            seen |= b.cols
        assert seen == set(range(60))

    def test_weights_in_unit_interval(self) -> None:
        g = generate_graph(30, 40, 0.2, 1.3, 0.3, rng=5)
        weights = np.array([w for _, _, w in g.edges()])
        assert (weights > 0.0).all()
        assert (weights <= 1.0).all()

    def test_separation_lowers_planted_weights(self) -> None:
        g = generate_graph(30, 30, 0.0, 1.0, 0.0, rng=6)
        weights = np.array([w for _, _, w in g.edges()])
        assert weights.min() < 1.0

    def test_tiny_graph_has_no_ground_truth(self) -> None:
        g = generate_graph(1, 10, 0.0, 1.0, 1.0, rng=0)
        assert g.ground_truth is None
        assert g.n_edges == 0

    def test_deterministic_with_seed(self) -> None:
        g1 = generate_graph(25, 35, 0.1, 1.4, 0.7, rng=11)
        g2 = generate_graph(25, 35, 0.1, 1.4, 0.7, rng=11)
        np.testing.assert_array_equal(g1.to_dense(), g2.to_dense())
        assert g1.ground_truth == g2.ground_truth

    def test_params_recorded(self) -> None:
        config = GeneratorConfig(n=20, m=25, noise=0.1, row_overlap=1.2, row_separation=0.9)
        g = generate_from_config(config, np.random.default_rng(0))
        assert g.params == config

    def test_invalid_noise_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            generate_graph(10, 10, noise=1.5, row_overlap=1.0, row_separation=1.0)


class TestSampleConfig:
    """Sweep sampling stays within the inclusive ranges."""

    def test_samples_within_ranges(self) -> None:
        sweep = SweepConfig(n_range=(10, 12), m_range=(20, 20), noise_range=(0.0, 0.1))
        rng = np.random.default_rng(0)
        for _ in range(50):
            cfg = sample_generator_config(sweep, rng)
            assert 10 <= cfg.n <= 12
            assert cfg.m == 20
            assert 0.0 <= cfg.noise <= 0.1
            assert 1.0 <= cfg.row_overlap <= 2.0
