"""
Configuration management for houghvote
"""

import copy
from pathlib import Path
from typing import Any, Dict, Optional, Union

import numpy as np
import yaml

from houghvote.errors import InvalidParameterError

DEFAULT_CONFIG = {
    "lines": {
        "rho_step": 1.0,
        "angle_min_deg": 0.0,
        "angle_max_deg": 180.0,
        "angle_step_deg": 1.0,
        "threshold": 50,
        "max_lines": 10
    },
    "circles": {
        "scale": 1.0,
        "min_dist": 20.0,
        "canny_upper": 100.0,
        "vote_threshold": 30,
        "min_radius": 5,
        "max_radius": 100,
        "clustering_policy": "skip-and-continue"
    },
    "parallel": {
        "workers": 1
    },
    "logging": {
        "level": "INFO",
        "log_file": None
    }
}


def load_config(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """Return the default config, overridden by a YAML file when given."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    if config_path is None:
        return config

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        user_config = yaml.safe_load(f)

    if user_config is None:
        return config
    if not isinstance(user_config, dict):
        raise InvalidParameterError("config", str(config_path),
                                    "top level of a config file must be a mapping")
    return _deep_merge(config, user_config)


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """Deep merge two dictionaries."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def angles_from_config(lines_config: Dict[str, Any]) -> np.ndarray:
    """Build the angle set (radians) from a ``lines`` config section.

    The upper bound is exclusive, so the default section yields 180
    angles covering [0, pi).
    """
    step = float(lines_config["angle_step_deg"])
    if step <= 0:
        raise InvalidParameterError("angle_step_deg", step, "must be positive")
    degrees = np.arange(float(lines_config["angle_min_deg"]),
                        float(lines_config["angle_max_deg"]), step)
    return np.deg2rad(degrees)
