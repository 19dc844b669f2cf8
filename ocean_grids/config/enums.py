"""
Configuration Enums for ocean_grids

This module defines the enumeration types used in grid configuration files.

Import Policy:
    from ocean_grids.config.enums import GridKind, StretchingRule

DO NOT use: from ocean_grids.config.enums import *
"""

from enum import Enum


class GridKind(Enum):
    """Which grid variant a configuration builds.

    Options:
        REGULAR: Uniform spacing along x, y and z (RegularCartesianGrid)
        VERTICALLY_STRETCHED: Uniform x and y, explicit z faces
            (VerticallyStretchedCartesianGrid)
    """
    REGULAR = "regular"
    VERTICALLY_STRETCHED = "vertically_stretched"


class StretchingRule(Enum):
    """Named generating rules for vertical faces.

    Options:
        UNIFORM: Evenly spaced faces (useful as a stretched-grid baseline)
        HYPERBOLIC_TANGENT: tanh profile refined toward the upper boundary;
            parameter 'stretching'
        POWER_LAW: z_k = upper - L * (1 - k / Nz) ** p; parameter 'exponent'

    Note:
        Rules exist so that a stretched grid can be described in a YAML file.
        In code, any monotonic callable f(k) can be passed as z_faces instead.
    """
    UNIFORM = "uniform"
    HYPERBOLIC_TANGENT = "tanh"
    POWER_LAW = "power_law"
