"""Shared helpers for grid construction and node queries.

Validation of size, halo, topology, precision and domain inputs, padded index
ranges per topology, and the center/face node formulas used by every grid
variant.

Index convention (all grids):
    - interior cells are numbered 1..N, halo cells 1-H..0 and N+1..N+H
    - face i is the upper face of cell i, so face 0 sits on the lower bound
      and face N on the upper bound
    - center i lies halfway between faces i-1 and i
"""

import math
from collections.abc import Sequence
from numbers import Real
from typing import Optional

import numpy as np

from ocean_grids.config.defaults import (
    DEFAULT_FLAT_POSITION,
    DEFAULT_HALO,
    FLAT_HALO,
    SUPPORTED_FLOAT_TYPES,
)
from ocean_grids.config.validation import ConfigurationError
from ocean_grids.grids.topology import Location, Topology

AXES = ("x", "y", "z")


def axis_index(axis) -> int:
    """Map 'x'/'y'/'z' (or 0/1/2) to a dimension number."""
    if isinstance(axis, str) and axis.lower() in AXES:
        return AXES.index(axis.lower())
    if _is_integer(axis) and 0 <= axis < 3:
        return int(axis)
    raise ValueError(f"Unknown axis: {axis!r}. Expected one of {AXES} or 0, 1, 2")


def axis_name(axis) -> str:
    return AXES[axis_index(axis)]


def _is_integer(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_))


def _is_real(value) -> bool:
    return isinstance(value, (Real, np.floating, np.integer)) and not isinstance(value, (bool, np.bool_))


def _as_triple(value, name: str) -> tuple:
    try:
        triple = tuple(value)
    except TypeError:
        raise ConfigurationError(f"{name} must be a sequence of 3 values, got {value!r}", value=value)
    if len(triple) != 3:
        raise ConfigurationError(
            f"{name} must have exactly 3 entries (x, y, z), got {len(triple)}: {value!r}",
            value=value,
        )
    return triple


# =============================================================================
# Input validation
# =============================================================================


def validate_float_type(float_type) -> np.dtype:
    """Return the numpy dtype for ``float_type`` if it is a supported precision."""
    try:
        dtype = np.dtype(float_type)
    except TypeError:
        raise ConfigurationError(f"Unsupported float_type: {float_type!r}", value=float_type)
    if dtype.name not in SUPPORTED_FLOAT_TYPES:
        raise ConfigurationError(
            f"Unsupported float_type: {dtype.name}. Expected one of {SUPPORTED_FLOAT_TYPES}",
            value=float_type,
        )
    return dtype


def validate_topology(topology) -> tuple:
    """Return a triple of Topology members."""
    triple = _as_triple(topology, "topology")
    return tuple(Topology.parse(t, axis=a) for a, t in zip(AXES, triple))


def validate_size(size, topology: tuple) -> tuple:
    """Check that every axis has a positive integer size and Flat axes have size 1."""
    triple = _as_triple(size, "size")
    for axis, N, topo in zip(AXES, triple, topology):
        if not _is_integer(N) or N < 1:
            raise ConfigurationError(
                f"Size along axis {axis} must be a positive integer, got {N!r}",
                axis=axis,
                value=N,
            )
        if topo.is_flat and N != 1:
            raise ConfigurationError(
                f"Flat axis {axis} must have size 1, got {N}",
                axis=axis,
                value=N,
            )
    return tuple(int(N) for N in triple)


def validate_halo(halo, topology: tuple) -> tuple:
    """Check halo widths, filling defaults when ``halo`` is None.

    Non-Flat axes default to DEFAULT_HALO. Flat axes carry no halo; a nonzero
    halo on a Flat axis is rejected.
    """
    if halo is None:
        return tuple(FLAT_HALO if topo.is_flat else DEFAULT_HALO for topo in topology)

    triple = _as_triple(halo, "halo")
    for axis, H, topo in zip(AXES, triple, topology):
        if not _is_integer(H) or H < 0:
            raise ConfigurationError(
                f"Halo along axis {axis} must be a non-negative integer, got {H!r}",
                axis=axis,
                value=H,
            )
        if topo.is_flat and H != FLAT_HALO:
            raise ConfigurationError(
                f"Flat axis {axis} carries no halo, got halo {H}",
                axis=axis,
                value=H,
            )
    return tuple(int(H) for H in triple)


def validate_domain(axis: str, topology: Topology, interval=None, length=None) -> tuple:
    """Resolve the (lower, upper) bounds of one axis.

    The domain is given either as an ``interval`` pair or as a ``length`` with
    an implicit origin: [0, L] horizontally, [-L, 0] vertically. A Flat axis
    takes a scalar position (or a degenerate pair) and resolves to
    (position, position).
    """
    if topology.is_flat:
        return _validate_flat_domain(axis, interval, length)

    if interval is not None and length is not None:
        raise ConfigurationError(
            f"Axis {axis} was given both an interval {interval!r} and a length {length!r}",
            axis=axis,
            value=interval,
        )

    if interval is None and length is None:
        raise ConfigurationError(
            f"Axis {axis} needs a domain: pass an interval (lower, upper) or a length",
            axis=axis,
        )

    if length is not None:
        if not _is_real(length) or not math.isfinite(length) or length <= 0:
            raise ConfigurationError(
                f"Length along axis {axis} must be a positive finite number, got {length!r}",
                axis=axis,
                value=length,
            )
        if axis == "z":
            return (-float(length), 0.0)
        return (0.0, float(length))

    lower, upper = _as_pair(axis, interval)
    if upper <= lower:
        raise ConfigurationError(
            f"Upper bound along axis {axis} must exceed the lower bound, got {interval!r}",
            axis=axis,
            value=interval,
        )
    return (lower, upper)


def unpack_extent(extent, n_axes: int) -> tuple:
    """Split an ``extent`` of domain lengths into per-axis entries (None if absent)."""
    if extent is None:
        return (None,) * n_axes
    try:
        lengths = tuple(extent)
    except TypeError:
        raise ConfigurationError(f"extent must be a sequence of lengths, got {extent!r}", value=extent)
    if len(lengths) != n_axes:
        raise ConfigurationError(
            f"extent must have {n_axes} entries, got {len(lengths)}: {extent!r}",
            value=extent,
        )
    return lengths


def interval_entry(topology: Topology, domain: tuple):
    """Configuration form of a resolved domain: a position on Flat axes, else a pair."""
    lower, upper = domain
    if topology.is_flat:
        return lower
    return [lower, upper]


def _validate_flat_domain(axis: str, interval, length) -> tuple:
    if length is not None and length != 0:
        raise ConfigurationError(
            f"Flat axis {axis} has zero length, got length {length!r}",
            axis=axis,
            value=length,
        )
    if interval is None:
        position = DEFAULT_FLAT_POSITION
    elif _is_real(interval):
        position = float(interval)
        if not math.isfinite(position):
            raise ConfigurationError(
                f"Position of flat axis {axis} must be finite, got {interval!r}",
                axis=axis,
                value=interval,
            )
    else:
        lower, upper = _as_pair(axis, interval)
        if lower != upper:
            raise ConfigurationError(
                f"Flat axis {axis} has zero length; got interval {interval!r}. "
                "Pass a single position instead",
                axis=axis,
                value=interval,
            )
        position = lower
    return (position, position)


def _as_pair(axis: str, interval) -> tuple:
    try:
        pair = tuple(interval)
    except TypeError:
        raise ConfigurationError(
            f"Domain of axis {axis} must be a (lower, upper) pair, got {interval!r}",
            axis=axis,
            value=interval,
        )
    if len(pair) != 2 or not all(_is_real(v) for v in pair):
        raise ConfigurationError(
            f"Domain of axis {axis} must be a (lower, upper) pair of numbers, got {interval!r}",
            axis=axis,
            value=interval,
        )
    lower, upper = float(pair[0]), float(pair[1])
    if not (math.isfinite(lower) and math.isfinite(upper)):
        raise ConfigurationError(
            f"Domain of axis {axis} must be finite, got {interval!r}",
            axis=axis,
            value=interval,
        )
    return lower, upper


# =============================================================================
# Padded index ranges
# =============================================================================


def total_length(location: Location, topology: Topology, N: int, H: int = 0) -> int:
    """Number of stored values along one axis, halos included.

    Bounded axes store one more face than centers; on Periodic axes face N
    is face 0 and is stored once. Flat axes store a single value.
    """
    if topology.is_flat:
        return 1
    if location is Location.FACE and topology.is_bounded:
        return N + 2 * H + 1
    return N + 2 * H


def index_range(location: Location, topology: Topology, N: int, H: int = 0) -> range:
    """Logical indices covered by the padded storage along one axis."""
    if topology.is_flat:
        return range(1, 2)
    if location is Location.CENTER:
        return range(1 - H, N + H + 1)
    if topology.is_bounded:
        return range(-H, N + H + 1)
    return range(-H, N + H)


def spacing_index_range(location: Location, topology: Topology, N: int, H: int = 0) -> range:
    """Logical indices at which a spacing is defined.

    At centers the spacing is the face-to-face thickness of the cell. At
    faces it is the center-to-center distance across the face, which needs
    a center on both sides.
    """
    if topology.is_flat:
        return range(1, 2)
    if location is Location.CENTER:
        return range(1 - H, N + H + 1)
    return range(1 - H, N + H)


def check_integer(axis: str, index) -> int:
    if not _is_integer(index):
        raise TypeError(f"Index along axis {axis} must be an integer, got {index!r}")
    return int(index)


def check_index(axis: str, index, indices: range, location: Location) -> int:
    index = check_integer(axis, index)
    if index not in indices:
        raise IndexError(
            f"{location.value} index {index} along axis {axis} is outside "
            f"the padded range [{indices.start}, {indices.stop - 1}]"
        )
    return index


# =============================================================================
# Node formulas
# =============================================================================


def center_node(lower: float, spacing: float, i: int) -> float:
    """Cell-center coordinate of cell i on a uniform axis."""
    return lower + (i - 0.5) * spacing


def face_node(lower: float, spacing: float, i: int) -> float:
    """Coordinate of face i (upper face of cell i) on a uniform axis."""
    return lower + i * spacing


def regular_node(lower: float, spacing: float, i: int, location: Location) -> float:
    if location is Location.CENTER:
        return center_node(lower, spacing, i)
    return face_node(lower, spacing, i)


class NodeSequence(Sequence):
    """Lazy, restartable sequence of node coordinates along one axis.

    Nodes are computed on access through ``grid.node``; iterating twice
    yields the same values.
    """

    def __init__(self, grid, axis, location: Location, indices: range):
        self._grid = grid
        self._axis = axis_name(axis)
        self._location = location
        self._indices = indices

    @property
    def indices(self) -> range:
        """Logical indices covered by the sequence, in order."""
        return self._indices

    @property
    def location(self) -> Location:
        return self._location

    def __len__(self) -> int:
        return len(self._indices)

    def __getitem__(self, k):
        if isinstance(k, slice):
            return NodeSequence(self._grid, self._axis, self._location, self._indices[k])
        return self._grid.node(self._axis, self._indices[k], self._location)

    def __iter__(self):
        for i in self._indices:
            yield self._grid.node(self._axis, i, self._location)

    def to_array(self) -> np.ndarray:
        return np.fromiter(iter(self), dtype=self._grid.precision(), count=len(self))

    def __repr__(self) -> str:
        first = self._indices.start
        last = self._indices.stop - 1
        return (
            f"NodeSequence(axis={self._axis!r}, location={self._location.value!r}, "
            f"indices={first}..{last}, length={len(self)})"
        )


def domain_string(topology: Topology, lower: float, upper: float, halo: Optional[int] = None) -> str:
    """One-line description of an axis for grid reprs."""
    if topology.is_flat:
        return f"{topology}, position {lower:g}"
    text = f"{topology}, [{lower:g}, {upper:g}]"
    if halo is not None:
        text += f", halo {halo}"
    return text


__all__ = [
    "AXES",
    "axis_index",
    "axis_name",
    "validate_float_type",
    "validate_topology",
    "validate_size",
    "validate_halo",
    "validate_domain",
    "unpack_extent",
    "interval_entry",
    "total_length",
    "index_range",
    "spacing_index_range",
    "check_integer",
    "check_index",
    "center_node",
    "face_node",
    "regular_node",
    "NodeSequence",
    "domain_string",
]
