"""Utilities package."""

from ocean_grids.utils.visualization import (
    plot_grid_nodes,
    plot_vertical_spacing,
)

__all__ = [
    'plot_grid_nodes',
    'plot_vertical_spacing',
]
