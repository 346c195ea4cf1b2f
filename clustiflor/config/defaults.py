"""Default configuration: single source of truth for default parameters."""

from clustiflor.config.experiment import BiclusterParams, ExperimentConfig

# size_sensitivity=1.0, split_threshold=1.0, power_iterations=3, rows first
DEFAULT_PARAMS = BiclusterParams()

DEFAULT_CONFIG = ExperimentConfig()
