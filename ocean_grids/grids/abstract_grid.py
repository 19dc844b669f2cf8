"""Abstract grid contract shared by all grid variants.

AbstractGrid declares the queries every grid answers: size, extent, halo
size, topology, precision, node coordinates and cell spacings. It holds no
state of its own; each concrete grid owns its immutable configuration and
caches. Convenience accessors are implemented here in terms of the abstract
queries.
"""

from abc import ABC, abstractmethod

import numpy as np

from ocean_grids.grids.grid_utils import (
    AXES,
    NodeSequence,
    axis_index,
    index_range,
    total_length,
)
from ocean_grids.grids.topology import Location


class AbstractGrid(ABC):
    """Abstract supertype for structured grids on a 3D (x, y, z) lattice.

    Concrete grids are immutable once constructed: attribute assignment after
    ``_freeze()`` raises AttributeError, so one instance can be shared by any
    number of readers without locking.
    """

    # -------------------------------------------------------------------------
    # Contract
    # -------------------------------------------------------------------------

    @abstractmethod
    def size(self) -> tuple:
        """Interior cell counts (Nx, Ny, Nz)."""

    @abstractmethod
    def extent(self) -> tuple:
        """Domain lengths (Lx, Ly, Lz); zero on Flat axes."""

    @abstractmethod
    def halo_size(self) -> tuple:
        """Halo widths (Hx, Hy, Hz)."""

    @abstractmethod
    def topology(self) -> tuple:
        """Topology of each axis as a triple of Topology members."""

    @abstractmethod
    def precision(self) -> np.dtype:
        """Floating-point type of all coordinates and spacings."""

    @abstractmethod
    def domain(self, axis) -> tuple:
        """(lower, upper) bounds of ``axis``; equal on a Flat axis."""

    @abstractmethod
    def node(self, axis, index: int, location=Location.CENTER):
        """Coordinate of logical ``index`` along ``axis`` at ``location``.

        Args:
            axis: 'x', 'y', 'z' or 0, 1, 2
            index: Logical index; interior cells are 1..N, face i is the
                upper face of cell i
            location: Location.CENTER or Location.FACE (or 'center'/'face')

        Raises:
            IndexError: If index lies outside the padded range of the axis
        """

    @abstractmethod
    def spacing(self, axis, index: int, location=Location.CENTER):
        """Grid spacing at logical ``index`` along ``axis``.

        At a center this is the face-to-face thickness of the cell, i.e.
        node(face, i) - node(face, i - 1). At a face it is the center-to-center
        distance across the face, node(center, i + 1) - node(center, i).
        """

    @abstractmethod
    def to_config(self):
        """GridConfig that rebuilds an identical grid."""

    # -------------------------------------------------------------------------
    # Derived accessors
    # -------------------------------------------------------------------------

    def length(self) -> tuple:
        """Alias of extent()."""
        return self.extent()

    def halosize(self) -> tuple:
        """Alias of halo_size()."""
        return self.halo_size()

    def eltype(self) -> np.dtype:
        """Alias of precision()."""
        return self.precision()

    def axis_topology(self, axis):
        return self.topology()[axis_index(axis)]

    def x_topology(self):
        return self.topology()[0]

    def y_topology(self):
        return self.topology()[1]

    def z_topology(self):
        return self.topology()[2]

    def total_size(self, location=Location.CENTER) -> tuple:
        """Padded storage length per axis for arrays at ``location``."""
        location = Location.parse(location)
        return tuple(
            total_length(location, topo, N, H)
            for topo, N, H in zip(self.topology(), self.size(), self.halo_size())
        )

    def index_range(self, axis, location=Location.CENTER, halo: bool = True) -> range:
        """Logical indices of ``axis`` at ``location``, optionally without halos."""
        d = axis_index(axis)
        location = Location.parse(location)
        H = self.halo_size()[d] if halo else 0
        return index_range(location, self.topology()[d], self.size()[d], H)

    def nodes(self, axis, location=Location.CENTER, halo: bool = True) -> NodeSequence:
        """Lazy sequence of node coordinates along ``axis``.

        Covers the padded range (interior and halo) unless ``halo`` is False.
        """
        location = Location.parse(location)
        return NodeSequence(self, axis, location, self.index_range(axis, location, halo))

    def xnodes(self, location=Location.CENTER, halo: bool = True) -> NodeSequence:
        return self.nodes("x", location, halo)

    def ynodes(self, location=Location.CENTER, halo: bool = True) -> NodeSequence:
        return self.nodes("y", location, halo)

    def znodes(self, location=Location.CENTER, halo: bool = True) -> NodeSequence:
        return self.nodes("z", location, halo)

    def node_array(self, axis, location=Location.CENTER, halo: bool = True) -> np.ndarray:
        """Node coordinates along ``axis`` as a numpy array in grid precision."""
        return self.nodes(axis, location, halo).to_array()

    # -------------------------------------------------------------------------
    # Immutability and identity
    # -------------------------------------------------------------------------

    def _freeze(self):
        object.__setattr__(self, "_frozen", True)

    def __setattr__(self, name, value):
        if getattr(self, "_frozen", False):
            raise AttributeError(f"{type(self).__name__} is immutable; cannot set {name!r}")
        object.__setattr__(self, name, value)

    def __delattr__(self, name):
        if getattr(self, "_frozen", False):
            raise AttributeError(f"{type(self).__name__} is immutable; cannot delete {name!r}")
        object.__delattr__(self, name)

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self.to_config() == other.to_config()

    def __hash__(self):
        return hash((
            type(self).__name__,
            self.size(),
            self.topology(),
            self.halo_size(),
            tuple(self.domain(a) for a in AXES),
        ))
