"""Structured grids for finite-volume ocean models.

Grid variants:
    RegularCartesianGrid: constant spacing along x, y and z
    VerticallyStretchedCartesianGrid: constant horizontal spacing,
        arbitrary increasing vertical faces

Both implement AbstractGrid and tag each axis with a Topology
(Periodic, Bounded or Flat).
"""

from ocean_grids.grids.topology import (
    Bounded,
    Center,
    Face,
    Flat,
    Location,
    Periodic,
    Topology,
)
from ocean_grids.grids.grid_utils import NodeSequence
from ocean_grids.grids.abstract_grid import AbstractGrid
from ocean_grids.grids.regular_grid import RegularCartesianGrid
from ocean_grids.grids.stretched_grid import (
    VerticallyStretchedCartesianGrid,
    hyperbolic_tangent_faces,
    power_law_faces,
    uniform_faces,
    validate_z_faces,
)

__all__ = [
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
    "NodeSequence",
    # Vertical faces
    "validate_z_faces",
    "uniform_faces",
    "hyperbolic_tangent_faces",
    "power_law_faces",
]
