"""Configuration system with frozen, hashable, serializable dataclasses."""

from clustiflor.config.experiment import (
    BiclusterParams,
    ExperimentConfig,
    GeneratorConfig,
    SweepConfig,
)
from clustiflor.config.defaults import DEFAULT_CONFIG, DEFAULT_PARAMS
from clustiflor.config.hashing import config_hash, params_hash
from clustiflor.config.serialization import config_from_json, config_to_json

__all__ = [
    "BiclusterParams",
    "ExperimentConfig",
    "GeneratorConfig",
    "SweepConfig",
    "DEFAULT_CONFIG",
    "DEFAULT_PARAMS",
    "config_hash",
    "params_hash",
    "config_from_json",
    "config_to_json",
]
