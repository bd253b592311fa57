"""
Configuration management for robustfit
"""

import copy
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

DEFAULT_CONFIG = {
    "ransac": {
        "threshold": 1.0,
        "max_iterations": 1000,
        "success_probability": 0.8,
        "num_workers": 1,
        "seed": None
    },
    "line": {
        "threshold": 10.0,
        "max_iterations": 1000,
        "success_probability": 0.99
    },
    "plane": {
        "threshold": 0.5,
        "max_iterations": 1000,
        "success_probability": 0.99
    },
    "logging": {
        "level": "INFO",
        "log_file": None
    }
}


def merge_config(base: Dict[str, Any], override: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Recursively merge override into a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def load_config(config_path: Union[str, Path, None] = None) -> Dict[str, Any]:
    """Load a YAML config file on top of DEFAULT_CONFIG."""
    if config_path is None:
        return copy.deepcopy(DEFAULT_CONFIG)

    with open(config_path, 'r') as f:
        user_config = yaml.safe_load(f) or {}

    if not isinstance(user_config, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")
    return merge_config(DEFAULT_CONFIG, user_config)


def estimator_settings(config: Dict[str, Any], model: str) -> Dict[str, Any]:
    """Resolve RANSAC settings for a model kind, model section overriding the ransac section."""
    settings = dict(config.get("ransac", {}))
    settings.update(config.get(model, {}))
    return settings
