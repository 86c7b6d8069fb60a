"""Configuration file utilities."""

from pathlib import Path
from typing import Any, Dict, Union

import yaml


def get_package_root() -> Path:
    """Get the installed music_dice package directory."""
    # Assumes this file is at music_dice/utils/config.py
    return Path(__file__).parent.parent


def default_config_path() -> Path:
    """Path of the bundled dice configuration."""
    return get_package_root() / "configs" / "dice.yaml"


def load_config(config_path: Union[str, Path, None] = None) -> Dict[str, Any]:
    """
    Load a configuration dictionary from a YAML file.

    Args:
        config_path: Path to YAML configuration file (defaults to
            the configs/dice.yaml shipped with the package)

    Returns:
        Configuration dictionary (empty for an empty file)
    """
    path = Path(config_path) if config_path is not None else default_config_path()
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        config = yaml.safe_load(f)

    return config or {}
