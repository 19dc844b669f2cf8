"""Configuration Module - Single Source of Truth for Grid Parameters

This module provides the configuration system for ocean_grids: defaults,
the error taxonomy, and the GridConfig reconstruction record.

Default Configuration (loaded from defaults.yaml):
    from ocean_grids.config import get_default, get_defaults

    # Get a specific default value by dotted key path
    size = get_default('grid.size')
    s = get_default('stretching.tanh_stretching')

    # Get the full configuration dictionary
    all_defaults = get_defaults()

Recommended Usage:
    from ocean_grids.config import GridConfig, build_validated_grid, load_grid_config

    # Build a grid from a YAML file, with validation and safety warnings
    grid = build_validated_grid(load_grid_config("grid.yaml"))

    # Or build manually
    config = GridConfig(
        kind="vertically_stretched",
        size=[64, 64, 32],
        x=[0.0, 1000.0], y=[0.0, 1000.0], z=[-200.0, 0.0],
        z_stretching={"rule": "tanh", "stretching": 3.0},
    )
    grid = config.build()

    # Reconstruct a grid from its own record
    same_grid = grid.to_config().build()

Import Policy:
    DO NOT use: from ocean_grids.config import *
    This causes namespace pollution and makes tracking difficult.

Submodules:
    enums: Configuration enumerations (GridKind, StretchingRule)
    yaml_loader: YAML configuration loader (get_default, get_defaults)
    grid_config: GridConfig dataclass and YAML load/save helpers
    validation: Error types and validation utilities (validate_config, warn_if_unsafe)
"""

from ocean_grids.config.enums import GridKind, StretchingRule
# Import YAML loader functions first (no circular dependencies)
from ocean_grids.config.yaml_loader import get_default, get_defaults, reload_defaults
from ocean_grids.config.validation import (
    ConfigurationError,
    ConfigurationWarning,
    StretchingSpecificationError,
    build_validated_grid,
    validate_config,
    warn_if_unsafe,
)
from ocean_grids.config.grid_config import (
    GridConfig,
    create_default_config,
    load_grid_config,
    save_grid_config,
)


__all__ = [
    # Enums
    "GridKind",
    "StretchingRule",
    # Config classes
    "GridConfig",
    # Factory and file helpers
    "create_default_config",
    "load_grid_config",
    "save_grid_config",
    # Errors
    "ConfigurationError",
    "StretchingSpecificationError",
    "ConfigurationWarning",
    # Validation
    "validate_config",
    "warn_if_unsafe",
    "build_validated_grid",
    # YAML defaults access
    "get_default",
    "get_defaults",
    "reload_defaults",
]
