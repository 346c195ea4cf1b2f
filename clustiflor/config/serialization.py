"""JSON serialization and deserialization for experiment configs."""

import json
from dataclasses import asdict

from dacite import Config as DaciteConfig
from dacite import from_dict

from clustiflor.config.experiment import ExperimentConfig

_DACITE_CONFIG = DaciteConfig(cast=[tuple], check_types=True, strict=True)


def config_to_json(config: ExperimentConfig) -> str:
    """Serialize an ExperimentConfig with sorted keys and 2-space indent."""
    return json.dumps(asdict(config), indent=2, sort_keys=True)


def config_from_json(json_str: str) -> ExperimentConfig:
    """Deserialize a JSON string to an ExperimentConfig.

    Uses dacite with strict=True to reject unknown keys and cast=[tuple] to
    turn JSON arrays back into the tuple-typed range fields. Range checks
    in the dataclasses raise ConfigurationError for bad values.
    """
    return from_dict(
        data_class=ExperimentConfig,
        data=json.loads(json_str),
        config=_DACITE_CONFIG,
    )
