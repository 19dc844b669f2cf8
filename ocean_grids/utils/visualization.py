"""Simple visualization utilities for grid inspection."""

import logging

import numpy as np
import matplotlib.pyplot as plt

from ocean_grids.grids.topology import Location

logger = logging.getLogger(__name__)


def _finish(fig, save_path):
    plt.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')
        logger.info(f"Saved: {save_path}")
    else:
        plt.show()

    plt.close(fig)


def plot_vertical_spacing(
    grid,
    title: str = 'Vertical Cell Thickness',
    save_path: str = None,
):
    """Plot cell thickness against depth of the cell center.

    Args:
        grid: Any grid with a non-Flat z axis
        title: Plot title
        save_path: If provided, save to file
    """
    Nz = grid.size()[2]
    centers = grid.node_array('z', Location.CENTER, halo=False)
    thickness = np.array([grid.spacing('z', k, Location.CENTER) for k in range(1, Nz + 1)])

    fig, ax = plt.subplots(figsize=(6, 8))

    ax.plot(thickness, centers, marker='o', linewidth=2)
    ax.set_xlabel('Δz')
    ax.set_ylabel('z')
    ax.set_title(title)
    ax.grid(True, alpha=0.3)

    _finish(fig, save_path)


def plot_grid_nodes(
    grid,
    axes: tuple = ('x', 'z'),
    halo: bool = True,
    title: str = 'Grid Nodes',
    save_path: str = None,
):
    """Draw face lines and cell centers of a 2D slice of the grid.

    Halo faces are drawn dashed when ``halo`` is True.

    Args:
        grid: Grid to draw
        axes: Pair of axis names spanning the slice
        halo: Include halo cells
        title: Plot title
        save_path: If provided, save to file
    """
    a, b = axes
    interior_a = grid.index_range(a, Location.FACE, halo=False)
    interior_b = grid.index_range(b, Location.FACE, halo=False)

    faces_a = grid.nodes(a, Location.FACE, halo)
    faces_b = grid.nodes(b, Location.FACE, halo)
    lo_b, hi_b = min(faces_b), max(faces_b)
    lo_a, hi_a = min(faces_a), max(faces_a)

    fig, ax = plt.subplots(figsize=(8, 8))

    for i, xa in zip(faces_a.indices, faces_a):
        style = '-' if i in interior_a else '--'
        ax.plot([xa, xa], [lo_b, hi_b], style, color='gray', linewidth=0.8)
    for j, xb in zip(faces_b.indices, faces_b):
        style = '-' if j in interior_b else '--'
        ax.plot([lo_a, hi_a], [xb, xb], style, color='gray', linewidth=0.8)

    ca, cb = np.meshgrid(
        grid.node_array(a, Location.CENTER, halo),
        grid.node_array(b, Location.CENTER, halo),
    )
    ax.scatter(ca.ravel(), cb.ravel(), s=6, color='C0')

    ax.set_xlabel(a)
    ax.set_ylabel(b)
    ax.set_title(title)
    ax.set_aspect('auto')

    _finish(fig, save_path)
