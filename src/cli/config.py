"""Configuration loading."""

from pathlib import Path
from typing import Optional

import yaml

from .config_models import QuietMindConfig


def find_config() -> Optional[Path]:
    """Find config file in standard locations."""
    locations = [
        Path.cwd() / "config.yaml",
        Path.home() / ".quietmind" / "config.yaml",
        Path.home() / "quietmind" / "config.yaml",
    ]
    for loc in locations:
        if loc.exists():
            return loc
    return None


def load_config_model(config_path: Optional[Path] = None) -> QuietMindConfig:
    """Load configuration as a validated Pydantic model.

    Missing file means all defaults. Bad YAML or invalid values raise ValueError.
    """
    base_config = {}

    path = config_path or find_config()
    if path and path.exists():
        try:
            with open(path) as f:
                base_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}")

    try:
        return QuietMindConfig.from_dict(base_config)
    except Exception as e:
        raise ValueError(f"Config validation failed: {e}")
