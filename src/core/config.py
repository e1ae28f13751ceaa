"""Configuration loading from YAML."""

from pathlib import Path
from typing import Optional

import yaml

from .config_models import AppConfig, default_home


def find_config() -> Optional[Path]:
    """Find config file in standard locations."""
    locations = [
        Path.cwd() / "config.yaml",
        Path.home() / ".mindful" / "config.yaml",
        default_home() / "config.yaml",
    ]
    for loc in locations:
        if loc.exists():
            return loc
    return None


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load configuration as a validated model, falling back to defaults.

    Raises:
        ValueError: on unreadable YAML or invalid values.
    """
    raw = {}

    path = config_path or find_config()
    if path and path.exists():
        try:
            with open(path) as f:
                raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}")
        if not isinstance(raw, dict):
            raise ValueError(f"Config file must contain a mapping, got {type(raw).__name__}")

    try:
        return AppConfig.from_dict(raw)
    except Exception as e:
        raise ValueError(f"Config validation failed: {e}")
