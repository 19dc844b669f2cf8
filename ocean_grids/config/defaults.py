"""
Default Configuration Constants for ocean_grids

This module contains the default values used by grid construction and
validation. It is the Single Source of Truth (SSOT) for grid defaults.

IMPORTANT Import Policies:
    1. DO NOT use: from ocean_grids.config.defaults import *
       This causes namespace pollution and makes tracking difficult.

    2. DO use explicit imports:
       from ocean_grids.config.defaults import DEFAULT_HALO, DEFAULT_FLOAT_TYPE

    3. DO NOT define defaults elsewhere. All defaults must be in this file.
"""

# =============================================================================
# Topology Defaults
# =============================================================================

# Default topology triple (x, y, z): a horizontally periodic box with a
# bounded vertical axis.
DEFAULT_TOPOLOGY = ("periodic", "periodic", "bounded")

# =============================================================================
# Halo Defaults
# =============================================================================

# Halo width for non-Flat axes when the caller does not specify one.
# One ghost cell is enough for second-order centered stencils.
DEFAULT_HALO = 1

# Flat axes carry no halo padding.
FLAT_HALO = 0

# =============================================================================
# Domain Defaults
# =============================================================================

# Position of a Flat axis when no coordinate is supplied
DEFAULT_FLAT_POSITION = 0.0

# =============================================================================
# Data Type Policies
# =============================================================================

# Element precision of coordinates and spacings
# float64: default, matches the solvers' accumulation precision
# float32: accepted for memory-bound runs
DEFAULT_FLOAT_TYPE = "float64"
SUPPORTED_FLOAT_TYPES = ("float32", "float64")

# =============================================================================
# Stretched Grid Tolerances
# =============================================================================

# Relative tolerance when checking that generated z faces match declared
# vertical bounds (scaled by the vertical domain length)
DEFAULT_BOUNDS_RTOL = 1e-10

# Adjacent cell thickness ratio above which warn_if_unsafe complains.
# Large jumps in thickness degrade the accuracy of centered differences.
DEFAULT_MAX_STRETCHING_RATIO = 1.5
