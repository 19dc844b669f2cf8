"""Regular Cartesian grid with uniform spacing along every axis.

Node coordinates are computed independently from the logical index and the
axis spacing, so there is no accumulated drift along long axes:

    center(i) = lower + (i - 0.5) * Δ
    face(i)   = lower + i * Δ
"""

import logging

import numpy as np

from ocean_grids.config.defaults import (
    DEFAULT_FLOAT_TYPE,
    DEFAULT_TOPOLOGY,
)
from ocean_grids.grids.abstract_grid import AbstractGrid
from ocean_grids.grids.grid_utils import (
    AXES,
    axis_index,
    check_index,
    check_integer,
    domain_string,
    index_range,
    interval_entry,
    regular_node,
    spacing_index_range,
    unpack_extent,
    validate_domain,
    validate_float_type,
    validate_halo,
    validate_size,
    validate_topology,
)
from ocean_grids.grids.topology import Location

logger = logging.getLogger(__name__)


class RegularCartesianGrid(AbstractGrid):
    """Rectilinear grid with constant spacing along x, y and z.

    Args:
        size: Interior cell counts (Nx, Ny, Nz)
        topology: Topology per axis, members or names (default periodic,
            periodic, bounded)
        x, y, z: Domain of each axis as a (lower, upper) pair. A Flat axis
            takes a single position instead.
        extent: Domain lengths (Lx, Ly, Lz) used with the implicit origin
            x = (0, Lx), y = (0, Ly), z = (-Lz, 0). Use None for axes given
            by interval or Flat.
        halo: Halo widths (Hx, Hy, Hz). Defaults to 1 on non-Flat axes and 0
            on Flat axes.
        float_type: 'float64' (default) or 'float32'

    Raises:
        ConfigurationError: If any input is invalid. The error names the
            offending axis and value.

    Example:
        >>> grid = RegularCartesianGrid(
        ...     size=(128, 128, 1),
        ...     topology=(Periodic, Bounded, Bounded),
        ...     x=(0, 2 * np.pi), y=(0, 20), z=(0, 1),
        ... )
        >>> float(grid.delta_x) == 2 * np.pi / 128
        True
    """

    def __init__(
        self,
        size,
        topology=DEFAULT_TOPOLOGY,
        x=None,
        y=None,
        z=None,
        extent=None,
        halo=None,
        float_type=DEFAULT_FLOAT_TYPE,
    ):
        float_type = validate_float_type(float_type)
        topology = validate_topology(topology)
        size = validate_size(size, topology)
        halo = validate_halo(halo, topology)

        intervals = (x, y, z)
        lengths = unpack_extent(extent, 3)
        domains = tuple(
            validate_domain(axis, topo, interval, length)
            for axis, topo, interval, length in zip(AXES, topology, intervals, lengths)
        )

        self._float_type = float_type
        self._topology = topology
        self._size = size
        self._halo = halo
        self._domains = domains
        self._lengths = tuple(upper - lower for lower, upper in domains)
        self._spacings = tuple(L / N for L, N in zip(self._lengths, size))
        self._freeze()

        logger.debug(f"Constructed {self!r}")

    # -------------------------------------------------------------------------
    # Contract
    # -------------------------------------------------------------------------

    def size(self) -> tuple:
        return self._size

    def extent(self) -> tuple:
        return tuple(self._cast(L) for L in self._lengths)

    def halo_size(self) -> tuple:
        return self._halo

    def topology(self) -> tuple:
        return self._topology

    def precision(self) -> np.dtype:
        return self._float_type

    def domain(self, axis) -> tuple:
        lower, upper = self._domains[axis_index(axis)]
        return (self._cast(lower), self._cast(upper))

    def node(self, axis, index: int, location=Location.CENTER):
        d = axis_index(axis)
        location = Location.parse(location)
        topo = self._topology[d]
        lower = self._domains[d][0]

        if topo.is_flat:
            check_integer(AXES[d], index)
            return self._cast(lower)

        indices = index_range(location, topo, self._size[d], self._halo[d])
        i = check_index(AXES[d], index, indices, location)
        return self._cast(regular_node(lower, self._spacings[d], i, location))

    def spacing(self, axis, index: int = 1, location=Location.CENTER):
        d = axis_index(axis)
        location = Location.parse(location)
        topo = self._topology[d]
        if not topo.is_flat:
            indices = spacing_index_range(location, topo, self._size[d], self._halo[d])
            check_index(AXES[d], index, indices, location)
        return self._cast(self._spacings[d])

    def to_config(self):
        from ocean_grids.config.enums import GridKind
        from ocean_grids.config.grid_config import GridConfig

        return GridConfig(
            kind=GridKind.REGULAR,
            size=list(self._size),
            topology=[t.value for t in self._topology],
            x=interval_entry(self._topology[0], self._domains[0]),
            y=interval_entry(self._topology[1], self._domains[1]),
            z=interval_entry(self._topology[2], self._domains[2]),
            halo=list(self._halo),
            float_type=self._float_type.name,
        )

    # -------------------------------------------------------------------------
    # Spacing accessors
    # -------------------------------------------------------------------------

    @property
    def delta_x(self):
        """Spacing in x (0 on a Flat axis)."""
        return self._cast(self._spacings[0])

    @property
    def delta_y(self):
        """Spacing in y (0 on a Flat axis)."""
        return self._cast(self._spacings[1])

    @property
    def delta_z(self):
        """Spacing in z (0 on a Flat axis)."""
        return self._cast(self._spacings[2])

    @property
    def spacings(self) -> tuple:
        return tuple(self._cast(s) for s in self._spacings)

    def _cast(self, value):
        return self._float_type.type(value)

    def __repr__(self) -> str:
        topo = ", ".join(str(t) for t in self._topology)
        lines = [f"RegularCartesianGrid{{{self._float_type.name}, {topo}}}"]
        for axis, t, (lower, upper), N, H, dx in zip(
            AXES, self._topology, self._domains, self._size, self._halo, self._spacings
        ):
            line = f"  {axis}: {domain_string(t, lower, upper, H)}, N={N}"
            if not t.is_flat:
                line += f", Δ{axis}={dx:g}"
            lines.append(line)
        return "\n".join(lines)


__all__ = ["RegularCartesianGrid"]
