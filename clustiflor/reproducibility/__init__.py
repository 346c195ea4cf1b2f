"""Reproducibility helpers: seeding and per-trial RNG derivation."""

from clustiflor.reproducibility.seed import set_seed, trial_rng, verify_seed_determinism

__all__ = ["set_seed", "trial_rng", "verify_seed_determinism"]
