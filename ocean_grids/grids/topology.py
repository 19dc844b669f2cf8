"""
Axis topologies and cell locations for structured grids.

Each spatial axis of a grid carries one Topology tag. Consumers branch on the
tag to decide whether index arithmetic wraps, whether halo values come from
wraparound or from boundary conditions, and whether the axis contributes to
the computation at all.

Import Policy:
    from ocean_grids.grids.topology import Topology, Location, Periodic, Bounded, Flat
"""

from enum import Enum

from ocean_grids.config.validation import ConfigurationError


class Topology(Enum):
    """Boundary behavior of one spatial axis.

    Options:
        PERIODIC: Indexing wraps; the interior spans exactly one period
        BOUNDED: Indexing stops at the interior edges; halo cells hold ghost
            values supplied by boundary conditions
        FLAT: Degenerate axis with exactly one cell and zero length, used to
            collapse a 3D discretization to fewer dimensions
    """
    PERIODIC = "periodic"
    BOUNDED = "bounded"
    FLAT = "flat"

    @classmethod
    def parse(cls, value, axis: str = None) -> "Topology":
        """Return the Topology named by ``value``.

        Accepts a Topology member or its name/value as a string in any case.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        where = f" on axis {axis}" if axis else ""
        raise ConfigurationError(
            f"Unknown topology{where}: {value!r}. "
            f"Expected one of {[t.value for t in cls]}",
            axis=axis,
            value=value,
        )

    @property
    def is_periodic(self) -> bool:
        return self is Topology.PERIODIC

    @property
    def is_bounded(self) -> bool:
        return self is Topology.BOUNDED

    @property
    def is_flat(self) -> bool:
        return self is Topology.FLAT

    def __str__(self) -> str:
        return self.name.capitalize()


class Location(Enum):
    """Position within a cell at which a quantity is evaluated.

    Options:
        CENTER: Cell midpoint
        FACE: Cell boundary. Face i is the upper face of cell i.
    """
    CENTER = "center"
    FACE = "face"

    @classmethod
    def parse(cls, value) -> "Location":
        """Return the Location named by ``value`` (member or string)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise ValueError(
            f"Unknown location: {value!r}. Expected one of {[loc.value for loc in cls]}"
        )


# Short aliases used in grid construction, e.g. topology=(Periodic, Bounded, Flat)
Periodic = Topology.PERIODIC
Bounded = Topology.BOUNDED
Flat = Topology.FLAT

Center = Location.CENTER
Face = Location.FACE


__all__ = [
    "Topology",
    "Location",
    "Periodic",
    "Bounded",
    "Flat",
    "Center",
    "Face",
]
