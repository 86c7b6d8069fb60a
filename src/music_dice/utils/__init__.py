"""Shared utilities."""

from .config import default_config_path, get_package_root, load_config

__all__ = [
    "default_config_path",
    "get_package_root",
    "load_config",
]
