"""Tests for grid plotting utilities."""

import matplotlib.pyplot as plt

from ocean_grids.utils import plot_grid_nodes, plot_vertical_spacing


class TestPlots:
    """Plots are written to disk and their figures closed."""

    def test_vertical_spacing(self, tmp_path, stretched_grid):
        path = tmp_path / "spacing.png"
        plot_vertical_spacing(stretched_grid, save_path=str(path))

        assert path.exists()
        assert plt.get_fignums() == []

    def test_grid_nodes(self, tmp_path, stretched_grid):
        path = tmp_path / "nodes.png"
        plot_grid_nodes(stretched_grid, axes=("x", "z"), save_path=str(path))

        assert path.exists()
        assert plt.get_fignums() == []

    def test_grid_nodes_on_flat_axis(self, tmp_path, column_grid):
        path = tmp_path / "column.png"
        plot_grid_nodes(column_grid, axes=("x", "z"), halo=False, save_path=str(path))

        assert path.exists()
