"""Structured Grids for Finite-Volume Ocean Models

Grid abstraction used by the solvers: logical cell indices, cell-center and
cell-face coordinates, spacings, halo padding and per-axis topology.

Key Principles:
- One Topology tag per axis: Periodic, Bounded or Flat
- Immutable grids, safe to share between readers
- Node coordinates computed from index, never accumulated
- Every grid rebuilds from its own GridConfig record

Version: 0.3
"""

__version__ = "0.3"

# Configuration
from ocean_grids.config import (
    ConfigurationError,
    ConfigurationWarning,
    GridConfig,
    StretchingSpecificationError,
    build_validated_grid,
    load_grid_config,
    save_grid_config,
)

# Grids
from ocean_grids.grids import (
    AbstractGrid,
    Bounded,
    Center,
    Face,
    Flat,
    Location,
    Periodic,
    RegularCartesianGrid,
    Topology,
    VerticallyStretchedCartesianGrid,
    hyperbolic_tangent_faces,
    power_law_faces,
    uniform_faces,
)

__all__ = [
    # Version
    "__version__",
    # Topology
    "Topology",
    "Periodic",
    "Bounded",
    "Flat",
    "Location",
    "Center",
    "Face",
    # Grids
    "AbstractGrid",
    "RegularCartesianGrid",
    "VerticallyStretchedCartesianGrid",
    "uniform_faces",
    "hyperbolic_tangent_faces",
    "power_law_faces",
    # Configuration
    "GridConfig",
    "load_grid_config",
    "save_grid_config",
    "build_validated_grid",
    "ConfigurationError",
    "StretchingSpecificationError",
    "ConfigurationWarning",
]
