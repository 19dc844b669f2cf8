"""Vertically stretched Cartesian grid.

Horizontal axes are uniform, exactly as in RegularCartesianGrid. The vertical
axis is defined by an explicit, strictly increasing sequence of Nz + 1 face
coordinates, from which cell thicknesses and center-to-center spacings are
derived once at construction.

Design Principles:
- Horizontal: uniform spacing, nodes computed from index and spacing
- Vertical: cached face, center and spacing arrays (read-only)
- Invalid stretching is rejected at construction, never at query time
"""

import logging
import math

import numpy as np

from ocean_grids.config import get_default
from ocean_grids.config.defaults import (
    DEFAULT_BOUNDS_RTOL,
    DEFAULT_FLOAT_TYPE,
    DEFAULT_TOPOLOGY,
)
from ocean_grids.config.validation import ConfigurationError, StretchingSpecificationError
from ocean_grids.grids.abstract_grid import AbstractGrid
from ocean_grids.grids.grid_utils import (
    AXES,
    _is_real,
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
from ocean_grids.grids.topology import Location, Topology

logger = logging.getLogger(__name__)


def _read_only(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


# =============================================================================
# Face generation
# =============================================================================


def _evaluate_faces(z_faces, Nz: int) -> np.ndarray:
    """Turn an explicit sequence or a generating callable into a float64 array."""
    if callable(z_faces):
        values = []
        for k in range(Nz + 1):
            try:
                value = z_faces(k)
            except Exception as e:
                raise StretchingSpecificationError(
                    f"z_faces generator failed at k={k}: {e}",
                    axis="z",
                    value=k,
                ) from e
            if np.ndim(value) != 0 or not _is_real(np.asarray(value).item()):
                raise StretchingSpecificationError(
                    f"z_faces generator must return a real scalar, got {value!r} at k={k}",
                    axis="z",
                    value=value,
                )
            values.append(float(np.asarray(value).item()))
        return np.array(values, dtype=np.float64)

    if isinstance(z_faces, (str, bytes)):
        raise StretchingSpecificationError(
            f"z_faces must be a sequence of numbers or a callable, got {z_faces!r}",
            axis="z",
            value=z_faces,
        )
    try:
        faces = np.asarray(z_faces, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise StretchingSpecificationError(
            f"z_faces must be a sequence of numbers or a callable, got {z_faces!r}",
            axis="z",
            value=z_faces,
        ) from e
    if faces.ndim != 1:
        raise StretchingSpecificationError(
            f"z_faces must be one-dimensional, got shape {faces.shape}",
            axis="z",
            value=z_faces,
        )
    return faces.copy()


def validate_z_faces(z_faces, Nz: int, z=None, rtol: float = DEFAULT_BOUNDS_RTOL) -> np.ndarray:
    """Check a vertical stretching specification and return its faces.

    Args:
        z_faces: Sequence of Nz + 1 face coordinates, or a callable f(k)
            evaluated at k = 0..Nz
        Nz: Number of vertical cells
        z: Optional declared (lower, upper) bounds the faces must span
        rtol: Tolerance on the end faces, relative to the vertical length

    Returns:
        Face coordinates as a float64 array of length Nz + 1

    Raises:
        StretchingSpecificationError: On wrong length, non-finite or
            non-increasing faces, or faces not spanning the declared bounds
    """
    if z_faces is None:
        raise StretchingSpecificationError(
            "A vertically stretched grid needs z_faces: a sequence of Nz + 1 "
            "face coordinates or a callable f(k)",
            axis="z",
        )

    faces = _evaluate_faces(z_faces, Nz)

    if len(faces) != Nz + 1:
        raise StretchingSpecificationError(
            f"z_faces must have Nz + 1 = {Nz + 1} entries, got {len(faces)}",
            axis="z",
            value=len(faces),
        )

    if not np.all(np.isfinite(faces)):
        bad = int(np.flatnonzero(~np.isfinite(faces))[0])
        raise StretchingSpecificationError(
            f"z_faces must be finite, face {bad} is {faces[bad]}",
            axis="z",
            value=faces[bad],
        )

    steps = np.diff(faces)
    if np.any(steps <= 0):
        k = int(np.flatnonzero(steps <= 0)[0])
        raise StretchingSpecificationError(
            f"z_faces must be strictly increasing, but face {k} = {faces[k]} "
            f"and face {k + 1} = {faces[k + 1]}",
            axis="z",
            value=(faces[k], faces[k + 1]),
        )

    if z is not None:
        try:
            lower, upper = validate_domain("z", Topology.BOUNDED, interval=z)
        except ConfigurationError as e:
            raise StretchingSpecificationError(str(e), axis="z", value=z) from e
        tolerance = rtol * (upper - lower)
        if abs(faces[0] - lower) > tolerance or abs(faces[-1] - upper) > tolerance:
            raise StretchingSpecificationError(
                f"z_faces span [{faces[0]}, {faces[-1]}] but the declared vertical "
                f"domain is [{lower}, {upper}]",
                axis="z",
                value=(faces[0], faces[-1]),
            )
        faces[0] = lower
        faces[-1] = upper

    return faces


def uniform_faces(Nz: int, z) -> np.ndarray:
    """Evenly spaced faces over z = (lower, upper)."""
    lower, upper = validate_domain("z", Topology.BOUNDED, interval=z)
    return np.linspace(lower, upper, Nz + 1)


def hyperbolic_tangent_faces(Nz: int, z, stretching: float = None) -> np.ndarray:
    """Faces refined toward the upper boundary with a tanh profile.

    z_k = lower + L * tanh(s * k / Nz) / tanh(s)

    Larger ``stretching`` s concentrates more resolution near the surface.
    """
    if stretching is None:
        stretching = get_default("stretching.tanh_stretching", 2.0)
    if not _is_real(stretching) or not math.isfinite(stretching) or stretching <= 0:
        raise StretchingSpecificationError(
            f"tanh stretching must be a positive number, got {stretching!r}",
            axis="z",
            value=stretching,
        )
    lower, upper = validate_domain("z", Topology.BOUNDED, interval=z)
    L = upper - lower
    k = np.arange(Nz + 1)
    faces = lower + L * np.tanh(stretching * k / Nz) / np.tanh(stretching)
    faces[0] = lower
    faces[-1] = upper
    return faces


def power_law_faces(Nz: int, z, exponent: float = None) -> np.ndarray:
    """Faces following z_k = upper - L * (1 - k / Nz) ** exponent.

    An exponent above 1 refines toward the upper boundary, below 1 toward
    the lower boundary, and exactly 1 gives uniform faces.
    """
    if exponent is None:
        exponent = get_default("stretching.power_law_exponent", 2.0)
    if not _is_real(exponent) or not math.isfinite(exponent) or exponent <= 0:
        raise StretchingSpecificationError(
            f"power-law exponent must be a positive number, got {exponent!r}",
            axis="z",
            value=exponent,
        )
    lower, upper = validate_domain("z", Topology.BOUNDED, interval=z)
    L = upper - lower
    k = np.arange(Nz + 1)
    faces = upper - L * (1.0 - k / Nz) ** exponent
    faces[0] = lower
    faces[-1] = upper
    return faces


# =============================================================================
# Grid
# =============================================================================


class VerticallyStretchedCartesianGrid(AbstractGrid):
    """Grid with uniform horizontal spacing and arbitrary vertical faces.

    Args:
        size: Interior cell counts (Nx, Ny, Nz)
        topology: Topology per axis; z must be Bounded or Periodic
        x, y: Horizontal domains as (lower, upper) pairs, or a position for
            a Flat axis
        z: Optional declared vertical bounds; the faces must start and end
            on them
        extent: Horizontal lengths (Lx, Ly) with implicit origin 0
        z_faces: Nz + 1 increasing face coordinates, or a callable f(k)
            returning face k for k = 0..Nz
        halo: Halo widths (Hx, Hy, Hz)
        float_type: 'float64' (default) or 'float32'

    Cached vertical arrays (read-only, halos included):
        z_faces: Faces -Hz..Nz+Hz
        z_centers: Centers 1-Hz..Nz+Hz
        z_face_spacings: Face-to-face cell thickness at centers 1-Hz..Nz+Hz
        z_center_spacings: Center-to-center distance at faces 1-Hz..Nz+Hz-1

    Halo faces extend the interior by repeating the boundary thickness on a
    Bounded z, and by wrapping thicknesses from the opposite end on a
    Periodic z.

    Example:
        >>> grid = VerticallyStretchedCartesianGrid(
        ...     size=(1, 1, 4), topology=(Flat, Flat, Bounded),
        ...     z_faces=[0, 1, 3, 6, 10],
        ... )
        >>> grid.face_spacings.tolist()
        [1.0, 2.0, 3.0, 4.0]
    """

    def __init__(
        self,
        size,
        topology=DEFAULT_TOPOLOGY,
        x=None,
        y=None,
        z=None,
        extent=None,
        z_faces=None,
        halo=None,
        float_type=DEFAULT_FLOAT_TYPE,
    ):
        float_type = validate_float_type(float_type)
        topology = validate_topology(topology)
        if topology[2].is_flat:
            raise ConfigurationError(
                "The stretched axis z cannot be Flat; use RegularCartesianGrid "
                "for a grid without vertical extent",
                axis="z",
                value=topology[2],
            )
        size = validate_size(size, topology)
        halo = validate_halo(halo, topology)

        lengths = unpack_extent(extent, 2)
        horizontal = tuple(
            validate_domain(axis, topo, interval, length)
            for axis, topo, interval, length in zip(AXES[:2], topology[:2], (x, y), lengths)
        )

        Nz, Hz = size[2], halo[2]
        faces = validate_z_faces(z_faces, Nz, z)

        self._float_type = float_type
        self._topology = topology
        self._size = size
        self._halo = halo
        self._domains = horizontal + ((float(faces[0]), float(faces[-1])),)
        self._lengths = tuple(upper - lower for lower, upper in self._domains)
        self._spacings = tuple(L / N for L, N in zip(self._lengths[:2], size[:2]))
        self._interior_faces = _read_only(faces)
        self._build_vertical_cache(faces, Nz, Hz, topology[2])
        self._freeze()

        logger.debug(f"Constructed {self!r}")

    def _build_vertical_cache(self, faces, Nz, Hz, topology):
        thickness = np.diff(faces)

        cells = np.arange(1 - Hz, Nz + Hz + 1)
        if topology.is_periodic:
            source = (cells - 1) % Nz
        else:
            source = np.clip(cells - 1, 0, Nz - 1)
        padded_thickness = thickness[source]

        below = faces[0] - np.cumsum(padded_thickness[:Hz][::-1])[::-1]
        above = faces[-1] + np.cumsum(padded_thickness[Hz + Nz:])
        padded_faces = np.concatenate([below, faces, above])
        padded_centers = 0.5 * (padded_faces[:-1] + padded_faces[1:])
        center_spacings = np.diff(padded_centers)

        dtype = self._float_type
        self.z_faces = _read_only(padded_faces.astype(dtype))
        self.z_centers = _read_only(padded_centers.astype(dtype))
        self.z_face_spacings = _read_only(padded_thickness.astype(dtype))
        self.z_center_spacings = _read_only(center_spacings.astype(dtype))

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

        if topo.is_flat:
            check_integer(AXES[d], index)
            return self._cast(self._domains[d][0])

        N, H = self._size[d], self._halo[d]
        i = check_index(AXES[d], index, index_range(location, topo, N, H), location)

        if d < 2:
            return self._cast(regular_node(self._domains[d][0], self._spacings[d], i, location))
        if location is Location.FACE:
            return self.z_faces[i + H]
        return self.z_centers[i + H - 1]

    def spacing(self, axis, index: int = 1, location=Location.CENTER):
        d = axis_index(axis)
        location = Location.parse(location)
        topo = self._topology[d]

        if topo.is_flat:
            return self._cast(0.0)

        N, H = self._size[d], self._halo[d]
        i = check_index(AXES[d], index, spacing_index_range(location, topo, N, H), location)

        if d < 2:
            return self._cast(self._spacings[d])
        if location is Location.CENTER:
            return self.z_face_spacings[i + H - 1]
        return self.z_center_spacings[i + H - 1]

    def to_config(self):
        from ocean_grids.config.enums import GridKind
        from ocean_grids.config.grid_config import GridConfig

        return GridConfig(
            kind=GridKind.VERTICALLY_STRETCHED,
            size=list(self._size),
            topology=[t.value for t in self._topology],
            x=interval_entry(self._topology[0], self._domains[0]),
            y=interval_entry(self._topology[1], self._domains[1]),
            z=list(self._domains[2]),
            halo=list(self._halo),
            float_type=self._float_type.name,
            z_faces=self._interior_faces.tolist(),
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
    def face_spacings(self) -> np.ndarray:
        """Interior cell thicknesses, cells 1..Nz (length Nz)."""
        Nz, Hz = self._size[2], self._halo[2]
        return self.z_face_spacings[Hz:Hz + Nz]

    @property
    def center_spacings(self) -> np.ndarray:
        """Interior center-to-center distances, faces 1..Nz-1 (length Nz - 1)."""
        Nz, Hz = self._size[2], self._halo[2]
        return self.z_center_spacings[Hz:Hz + Nz - 1]

    def _cast(self, value):
        return self._float_type.type(value)

    def __repr__(self) -> str:
        topo = ", ".join(str(t) for t in self._topology)
        lines = [f"VerticallyStretchedCartesianGrid{{{self._float_type.name}, {topo}}}"]
        for axis, t, (lower, upper), N, H in zip(
            AXES[:2], self._topology[:2], self._domains[:2], self._size[:2], self._halo[:2]
        ):
            line = f"  {axis}: {domain_string(t, lower, upper, H)}, N={N}"
            if not t.is_flat:
                line += f", Δ{axis}={self._spacings[AXES.index(axis)]:g}"
            lines.append(line)
        lower, upper = self._domains[2]
        dz = np.diff(self._interior_faces)
        lines.append(
            f"  z: {domain_string(self._topology[2], lower, upper, self._halo[2])}, "
            f"N={self._size[2]}, Δz ∈ [{dz.min():g}, {dz.max():g}]"
        )
        return "\n".join(lines)


__all__ = [
    "VerticallyStretchedCartesianGrid",
    "validate_z_faces",
    "uniform_faces",
    "hyperbolic_tangent_faces",
    "power_law_faces",
]
