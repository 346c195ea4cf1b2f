"""Deterministic config hashing using SHA-256 over sorted JSON."""

import hashlib
import json
from dataclasses import asdict
from typing import Any

from clustiflor.config.experiment import ExperimentConfig


def config_hash(config: Any) -> str:
    """Deterministic SHA-256 hash of a config dataclass.

    Args:
        config: Any dataclass instance (or sub-config).

    Returns:
        First 16 hex characters of the SHA-256 hash.
    """
    serialized = json.dumps(
        asdict(config),
        sort_keys=True,
        ensure_ascii=True,
        separators=(",", ":"),
    )
    return hashlib.sha256(serialized.encode("utf-8")).hexdigest()[:16]


def params_hash(config: ExperimentConfig) -> str:
    """Hash of the algorithm parameters only.

    Two experiments differing only in seed or sweep ranges share this hash,
    so their discovery results are directly comparable.
    """
    return config_hash(config.params)
