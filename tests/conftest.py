"""Pytest configuration and shared fixtures for ocean_grids tests."""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from ocean_grids.grids import (
    Bounded,
    Flat,
    Periodic,
    RegularCartesianGrid,
    VerticallyStretchedCartesianGrid,
)
from ocean_grids.config import reload_defaults


@pytest.fixture(autouse=True)
def fresh_defaults(monkeypatch):
    """Every test reads the packaged defaults.yaml."""
    monkeypatch.delenv("OCEAN_GRIDS_DEFAULTS_PATH", raising=False)
    reload_defaults()
    yield
    reload_defaults()


@pytest.fixture
def channel_grid():
    """Periodic-in-x channel, the example from the package docs."""
    return RegularCartesianGrid(
        size=(128, 128, 1),
        topology=(Periodic, Bounded, Bounded),
        x=(0, 2 * np.pi),
        y=(0, 20),
        z=(0, 1),
    )


@pytest.fixture
def small_grid():
    """Small 3D grid with distinct sizes and halos per axis."""
    return RegularCartesianGrid(
        size=(4, 5, 6),
        topology=(Periodic, Bounded, Bounded),
        x=(0.0, 1.0),
        y=(-2.0, 3.0),
        z=(-3.0, 0.0),
        halo=(2, 1, 3),
    )


@pytest.fixture
def column_faces():
    return [0.0, 1.0, 3.0, 6.0, 10.0]


@pytest.fixture
def column_grid(column_faces):
    """Single stretched column with thicknesses 1, 2, 3, 4."""
    return VerticallyStretchedCartesianGrid(
        size=(1, 1, 4),
        topology=(Flat, Flat, Bounded),
        z_faces=column_faces,
    )


@pytest.fixture
def stretched_grid():
    """Horizontally periodic box with a tanh-stretched bounded z."""
    from ocean_grids.grids import hyperbolic_tangent_faces

    return VerticallyStretchedCartesianGrid(
        size=(8, 6, 10),
        topology=(Periodic, Periodic, Bounded),
        x=(0.0, 8.0),
        y=(0.0, 3.0),
        z=(-100.0, 0.0),
        z_faces=hyperbolic_tangent_faces(10, (-100.0, 0.0), 2.0),
        halo=(1, 1, 2),
    )
