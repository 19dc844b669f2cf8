"""
Configuration Validation Utilities

This module provides the error taxonomy for grid construction together with
validation helpers for grid configurations and safety checks on built grids.

Import Policy:
    from ocean_grids.config.validation import ConfigurationError, validate_config, warn_if_unsafe

DO NOT use: from ocean_grids.config.validation import *
"""

from __future__ import annotations

import warnings
from typing import TYPE_CHECKING, Any, List, Optional, Tuple

import numpy as np

from ocean_grids.config.defaults import DEFAULT_MAX_STRETCHING_RATIO

if TYPE_CHECKING:
    from ocean_grids.config.grid_config import GridConfig
    from ocean_grids.grids.abstract_grid import AbstractGrid


class ConfigurationError(ValueError):
    """Raised when grid configuration validation fails.

    Attributes:
        axis: Offending axis name ('x', 'y' or 'z'), or None if the error
            is not tied to one axis
        value: Offending value as supplied by the caller
    """

    def __init__(self, message: str, axis: Optional[str] = None, value: Any = None):
        super().__init__(message)
        self.axis = axis
        self.value = value


class StretchingSpecificationError(ConfigurationError):
    """Raised when a vertical face-coordinate specification is invalid."""

    pass


class ConfigurationWarning(Warning):
    """Warning for potentially unsafe grid choices."""

    pass


def validate_config(config: "GridConfig", raise_on_error: bool = True) -> Tuple[bool, List[str]]:
    """Validate a grid configuration.

    Args:
        config: GridConfig to validate
        raise_on_error: If True, raise ConfigurationError on validation failure

    Returns:
        Tuple of (is_valid, error_messages)

    Raises:
        ConfigurationError: If validation fails and raise_on_error=True
    """
    errors = config.validate()

    if errors:
        if raise_on_error:
            raise ConfigurationError(
                f"Configuration validation failed with {len(errors)} error(s):\n"
                + "\n".join(f"  - {err}" for err in errors)
            )
        return False, errors

    return True, []


def warn_if_unsafe(grid: "AbstractGrid", max_stretching_ratio: float = DEFAULT_MAX_STRETCHING_RATIO) -> List[str]:
    """Check a constructed grid for legal but risky choices.

    Checks:
        1. Periodic axis with zero halo (wraparound stencils have nowhere to read)
        2. Adjacent vertical cells whose thickness ratio exceeds max_stretching_ratio

    Warnings are issued via Python's warnings module.

    Returns:
        List of warning messages (empty if no warnings)
    """
    warnings_list = []

    for axis, topo, halo in zip("xyz", grid.topology(), grid.halo_size()):
        if topo.is_periodic and halo == 0:
            warnings_list.append(
                f"Periodic axis {axis} has zero halo. Stencils crossing the "
                "periodic boundary will need explicit index wrapping."
            )

    thickness = getattr(grid, "face_spacings", None)
    if thickness is not None:
        interior = np.asarray(thickness, dtype=np.float64)
        if len(interior) > 1:
            ratios = np.maximum(interior[1:] / interior[:-1], interior[:-1] / interior[1:])
            worst = int(np.argmax(ratios))
            if ratios[worst] > max_stretching_ratio:
                warnings_list.append(
                    f"Vertical thickness ratio {ratios[worst]:.3f} between cells "
                    f"{worst + 1} and {worst + 2} exceeds {max_stretching_ratio}. "
                    "Centered differences lose accuracy across abrupt stretching."
                )

    for warning_msg in warnings_list:
        warnings.warn(warning_msg, ConfigurationWarning, stacklevel=2)

    return warnings_list


def build_validated_grid(config: "GridConfig") -> "AbstractGrid":
    """Validate a configuration, build its grid and report unsafe choices.

    This is the recommended entry point for constructing a grid from a
    configuration file in production code.

    Raises:
        ConfigurationError: If the configuration is invalid

    Example:
        >>> config = load_grid_config("grid.yaml")
        >>> grid = build_validated_grid(config)
    """
    validate_config(config)
    grid = config.build()
    warn_if_unsafe(grid)
    return grid
