"""YAML Configuration Loader

This module loads defaults.yaml and provides access functions, plus plain
reading and writing of user grid configuration files.
It has no dependencies on other config modules to avoid circular imports.

Usage:
    from ocean_grids.config.yaml_loader import get_default, get_defaults
    size = get_default('grid.size')
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)


def _get_yaml_path() -> Path:
    """Get the path to defaults.yaml.

    The YAML file is searched for in the following order:
    1. Environment variable OCEAN_GRIDS_DEFAULTS_PATH
    2. defaults.yaml relative to this module's directory

    Returns:
        Path to the defaults.yaml file.

    Raises:
        FileNotFoundError: If defaults.yaml cannot be found.
    """
    env_path = os.getenv("OCEAN_GRIDS_DEFAULTS_PATH")
    if env_path and Path(env_path).exists():
        return Path(env_path)

    yaml_path = Path(__file__).parent / "defaults.yaml"
    if not yaml_path.exists():
        raise FileNotFoundError(
            f"Configuration file not found: {yaml_path}\n"
            f"Set OCEAN_GRIDS_DEFAULTS_PATH environment variable if file is relocated."
        )
    return yaml_path


def _load_yaml_config() -> dict[str, Any]:
    """Load defaults.yaml configuration file."""
    return load_yaml(_get_yaml_path())


# Cache the loaded configuration
_CONFIG_CACHE: dict[str, Any] | None = None


def _get_config() -> dict[str, Any]:
    """Get the cached configuration, loading if necessary."""
    global _CONFIG_CACHE
    if _CONFIG_CACHE is None:
        _CONFIG_CACHE = _load_yaml_config()
    return _CONFIG_CACHE


def get_defaults() -> dict[str, Any]:
    """Get the full configuration dictionary from defaults.yaml.

    Example:
        >>> cfg = get_defaults()
        >>> cfg['grid']['kind']
        'regular'
    """
    return _get_config().copy()


def get_default(key_path: str, default: Any = None) -> Any:
    """Get a configuration value by dotted key path from defaults.yaml.

    Args:
        key_path: Dotted path to the value (e.g., 'grid.halo')
        default: Default value if key is not found

    Returns:
        The configuration value or default if not found.

    Example:
        >>> get_default('grid.float_type')
        'float64'
        >>> get_default('nonexistent.key', 'fallback')
        'fallback'
    """
    keys = key_path.split(".")
    value = _get_config()
    for key in keys:
        if isinstance(value, dict):
            value = value.get(key)
            if value is None:
                return default
        else:
            return default
    return value if value is not None else default


def reload_defaults() -> None:
    """Reload defaults.yaml from disk."""
    global _CONFIG_CACHE
    _CONFIG_CACHE = _load_yaml_config()


def load_yaml(path: str | os.PathLike) -> dict[str, Any]:
    """Read a YAML mapping from ``path``.

    An empty file yields an empty dictionary.
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    logger.info(f"Loaded YAML configuration from {path}")
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top of {path}, got {type(data).__name__}")
    return data


def dump_yaml(data: dict[str, Any], path: str | os.PathLike) -> Path:
    """Write ``data`` to ``path`` as block-style YAML."""
    path = Path(path)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
    logger.info(f"Saved YAML configuration to {path}")
    return path
