"""Configuration dataclasses: all frozen and slotted for immutability."""

from dataclasses import dataclass, field

from clustiflor.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class BiclusterParams:
    """Parameters of the bicluster discovery algorithm.

    Validation runs in __post_init__ so that an invalid parameter set is
    rejected before any graph is handed to the engine.
    """

    size_sensitivity: float = 1.0  # scales the minimum cluster size
    split_threshold: float = 1.0  # density contrast a split must reach
    power_iterations: int = 3
    split_rows: bool = True  # A is the row side; seed from a column, grow rows
    verbosity: int = 0

    def __post_init__(self) -> None:
        # `not x >= bound` also rejects NaN
        if not self.size_sensitivity >= 0.0:
            raise ConfigurationError(
                f"size_sensitivity must be >= 0, got {self.size_sensitivity}"
            )
        if not self.split_threshold >= 1.0:
            raise ConfigurationError(
                f"split_threshold must be >= 1, got {self.split_threshold}"
            )
        if self.power_iterations < 1:
            raise ConfigurationError(
                f"power_iterations must be >= 1, got {self.power_iterations}"
            )
        if self.verbosity < 0:
            raise ConfigurationError(
                f"verbosity must be >= 0, got {self.verbosity}"
            )


@dataclass(frozen=True, slots=True)
class GeneratorConfig:
    """Planted-block test graph parameters."""

    n: int = 50  # rows (node set A)
    m: int = 50  # columns (node set B)
    noise: float = 0.05  # probability of flipping a cell
    row_overlap: float = 1.0  # expected planted blocks per row
    row_separation: float = 1.0  # 1.0 = planted weights exactly 1

    def __post_init__(self) -> None:
        if self.n < 1 or self.m < 1:
            raise ConfigurationError(
                f"n and m must be >= 1, got n={self.n}, m={self.m}"
            )
        if not 0.0 <= self.noise <= 1.0:
            raise ConfigurationError(f"noise must be in [0, 1], got {self.noise}")
        if not self.row_overlap >= 1.0:
            raise ConfigurationError(
                f"row_overlap must be >= 1, got {self.row_overlap}"
            )
        if not 0.0 <= self.row_separation <= 1.0:
            raise ConfigurationError(
                f"row_separation must be in [0, 1], got {self.row_separation}"
            )


@dataclass(frozen=True, slots=True)
class SweepConfig:
    """Inclusive ranges sampled by comparison sweeps and batch generation."""

    n_range: tuple[int, int] = (10, 140)
    m_range: tuple[int, int] = (10, 140)
    noise_range: tuple[float, float] = (0.0, 0.2)
    row_overlap_range: tuple[float, float] = (1.0, 2.0)
    row_separation_range: tuple[float, float] = (0.0, 1.0)
    n_trials: int = 100

    def __post_init__(self) -> None:
        for name in (
            "n_range",
            "m_range",
            "noise_range",
            "row_overlap_range",
            "row_separation_range",
        ):
            lo, hi = getattr(self, name)
            if lo > hi:
                raise ConfigurationError(f"{name} is empty: ({lo}, {hi})")
        if self.n_range[0] < 1 or self.m_range[0] < 1:
            raise ConfigurationError("n_range and m_range must start at >= 1")
        if self.noise_range[0] < 0.0 or self.noise_range[1] > 1.0:
            raise ConfigurationError("noise_range must lie within [0, 1]")
        if self.row_overlap_range[0] < 1.0:
            raise ConfigurationError("row_overlap_range must start at >= 1")
        if self.row_separation_range[0] < 0.0 or self.row_separation_range[1] > 1.0:
            raise ConfigurationError("row_separation_range must lie within [0, 1]")
        if self.n_trials < 0:
            raise ConfigurationError(f"n_trials must be >= 0, got {self.n_trials}")


@dataclass(frozen=True, slots=True)
class ExperimentConfig:
    """Top-level configuration composing all sub-configs."""

    params: BiclusterParams = field(default_factory=BiclusterParams)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    sweep: SweepConfig = field(default_factory=SweepConfig)
    seed: int = 42
    description: str = ""
    tags: tuple[str, ...] = ()
