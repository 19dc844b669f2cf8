"""Grid Configuration - reconstruction record for grids

GridConfig holds everything needed to rebuild a grid deterministically:
kind, size, topology, domains, halo, precision and vertical faces. A
checkpoint or restart mechanism stores GridConfig.to_dict() and rebuilds
with GridConfig.from_dict(...).build().

Import Policy:
    from ocean_grids.config.grid_config import GridConfig, load_grid_config, save_grid_config

DO NOT use: from ocean_grids.config.grid_config import *
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

import numpy as np

from ocean_grids.config.defaults import DEFAULT_FLOAT_TYPE, DEFAULT_TOPOLOGY
from ocean_grids.config.enums import GridKind, StretchingRule
from ocean_grids.config.validation import ConfigurationError
from ocean_grids.config.yaml_loader import dump_yaml, get_default, load_yaml

logger = logging.getLogger(__name__)

_DOMAIN_KEYS = ("x", "y", "z", "extent")

# Parameters accepted by each named stretching rule, besides 'rule'
_RULE_PARAMETERS = {
    StretchingRule.UNIFORM: set(),
    StretchingRule.HYPERBOLIC_TANGENT: {"stretching"},
    StretchingRule.POWER_LAW: {"exponent"},
}


def _as_list(value):
    if isinstance(value, np.ndarray):
        return value.tolist()
    if value is None or isinstance(value, (int, float, str)):
        return value
    return list(value)


@dataclass
class GridConfig:
    """Construction record for a grid.

    Attributes:
        kind: Which grid variant to build
        size: Interior cell counts [Nx, Ny, Nz]
        topology: Topology names per axis, e.g. ["periodic", "bounded", "flat"]
        x, y, z: Domain per axis as [lower, upper], or a position on a Flat axis
        extent: Domain lengths used instead of x/y/z intervals (implicit origin)
        halo: Halo widths [Hx, Hy, Hz]; None selects the defaults
        float_type: "float64" or "float32"
        z_faces: Explicit vertical faces (stretched grids)
        z_stretching: Named generating rule for vertical faces (stretched
            grids), e.g. {"rule": "tanh", "stretching": 3.0}
    """

    kind: GridKind = GridKind.REGULAR
    size: list = field(default_factory=lambda: list(get_default("grid.size", [16, 16, 16])))
    topology: list = field(default_factory=lambda: list(DEFAULT_TOPOLOGY))
    x: Any = None
    y: Any = None
    z: Any = None
    extent: Optional[list] = None
    halo: Optional[list] = None
    float_type: str = DEFAULT_FLOAT_TYPE
    z_faces: Optional[list] = None
    z_stretching: Optional[dict] = None

    def __post_init__(self):
        if isinstance(self.kind, str):
            try:
                self.kind = GridKind(self.kind)
            except ValueError:
                raise ConfigurationError(
                    f"Unknown grid kind: {self.kind!r}. Expected one of {[k.value for k in GridKind]}",
                    value=self.kind,
                )
        self.size = _as_list(self.size)
        self.topology = [t.value if hasattr(t, "value") else t for t in self.topology]
        self.x = _as_list(self.x)
        self.y = _as_list(self.y)
        self.z = _as_list(self.z)
        self.extent = _as_list(self.extent)
        self.halo = _as_list(self.halo)
        self.z_faces = _as_list(self.z_faces)

    def validate(self) -> list[str]:
        """Validate the configuration without building the grid.

        Returns:
            List of error messages (empty if valid)
        """
        from ocean_grids.grids.grid_utils import (
            AXES,
            unpack_extent,
            validate_domain,
            validate_float_type,
            validate_halo,
            validate_size,
            validate_topology,
        )

        errors = []

        def collect(check, *args):
            try:
                return check(*args)
            except ConfigurationError as e:
                errors.append(str(e))
                return None

        collect(validate_float_type, self.float_type)

        topology = collect(validate_topology, self.topology)
        if topology is None:
            return errors

        collect(validate_size, self.size, topology)
        collect(validate_halo, self.halo, topology)

        stretched = self.kind is GridKind.VERTICALLY_STRETCHED
        n_extent = 2 if stretched else 3
        lengths = collect(unpack_extent, self.extent, n_extent)
        if lengths is None:
            lengths = (None,) * n_extent
        for axis, topo, interval, length in zip(AXES[:n_extent], topology, (self.x, self.y, self.z), lengths):
            collect(validate_domain, axis, topo, interval, length)

        if stretched:
            errors.extend(self._validate_stretching(topology))
        elif self.z_faces is not None or self.z_stretching is not None:
            errors.append("z_faces and z_stretching apply only to vertically_stretched grids")

        return errors

    def _validate_stretching(self, topology) -> list[str]:
        from ocean_grids.grids.stretched_grid import validate_z_faces

        if topology[2].is_flat:
            return ["The stretched axis z cannot be Flat"]
        if (self.z_faces is None) == (self.z_stretching is None):
            return ["A vertically_stretched grid needs exactly one of z_faces or z_stretching"]
        Nz = self.size[2] if isinstance(self.size, list) and len(self.size) == 3 else None
        if not isinstance(Nz, int) or Nz < 1:
            return []
        try:
            validate_z_faces(self.resolve_z_faces(), Nz, self.z)
        except ConfigurationError as e:
            return [str(e)]
        return []

    def resolve_z_faces(self):
        """Explicit vertical faces, generated from z_stretching if needed."""
        if self.z_faces is not None or self.z_stretching is None:
            return self.z_faces

        from ocean_grids.grids.stretched_grid import (
            hyperbolic_tangent_faces,
            power_law_faces,
            uniform_faces,
        )

        params = dict(self.z_stretching) if isinstance(self.z_stretching, dict) else {}
        try:
            rule = StretchingRule(params.pop("rule"))
        except (KeyError, ValueError):
            raise ConfigurationError(
                f"z_stretching needs a 'rule' in {[r.value for r in StretchingRule]}, "
                f"got {self.z_stretching!r}",
                axis="z",
                value=self.z_stretching,
            )
        unknown = sorted(set(params) - _RULE_PARAMETERS[rule])
        if unknown:
            raise ConfigurationError(
                f"Unknown z_stretching parameter(s) {unknown} for rule {rule.value!r}; "
                f"expected {sorted(_RULE_PARAMETERS[rule])}",
                axis="z",
                value=self.z_stretching,
            )
        if self.z is None:
            raise ConfigurationError(
                "z_stretching needs declared vertical bounds z = [lower, upper]",
                axis="z",
            )

        Nz = self.size[2]
        if rule is StretchingRule.UNIFORM:
            return uniform_faces(Nz, self.z)
        if rule is StretchingRule.HYPERBOLIC_TANGENT:
            return hyperbolic_tangent_faces(Nz, self.z, params.get("stretching"))
        return power_law_faces(Nz, self.z, params.get("exponent"))

    def build(self):
        """Construct the grid described by this configuration.

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        from ocean_grids.grids.regular_grid import RegularCartesianGrid
        from ocean_grids.grids.stretched_grid import VerticallyStretchedCartesianGrid

        logger.debug(f"Building {self.kind.value} grid from configuration")

        if self.kind is GridKind.REGULAR:
            if self.z_faces is not None or self.z_stretching is not None:
                raise ConfigurationError("z_faces and z_stretching apply only to vertically_stretched grids")
            return RegularCartesianGrid(
                size=self.size,
                topology=self.topology,
                x=self.x,
                y=self.y,
                z=self.z,
                extent=self.extent,
                halo=self.halo,
                float_type=self.float_type,
            )

        if self.z_faces is not None and self.z_stretching is not None:
            raise ConfigurationError(
                "A vertically_stretched grid needs exactly one of z_faces or z_stretching",
                axis="z",
            )
        return VerticallyStretchedCartesianGrid(
            size=self.size,
            topology=self.topology,
            x=self.x,
            y=self.y,
            z=self.z,
            extent=self.extent,
            z_faces=self.resolve_z_faces(),
            halo=self.halo,
            float_type=self.float_type,
        )

    def to_dict(self) -> dict:
        """Convert configuration to a plain dictionary for serialization."""
        config_dict = asdict(self)
        config_dict["kind"] = self.kind.value
        return config_dict

    @classmethod
    def from_dict(cls, data: dict) -> "GridConfig":
        """Create configuration from a dictionary.

        Keys missing from ``data`` are taken from the 'grid' section of
        defaults.yaml. Default domains are only used when ``data`` gives no
        domain and no z_faces, and never for an axis declared Flat.
        """
        base = dict(get_default("grid", {}))
        if any(data.get(key) is not None for key in _DOMAIN_KEYS + ("z_faces",)):
            for key in _DOMAIN_KEYS:
                base.pop(key, None)

        merged = {**base, **data}
        topology = merged.get("topology") or ()
        for key, topo in zip(_DOMAIN_KEYS[:3], topology):
            if key not in data and str(topo).lower() == "flat":
                merged.pop(key, None)

        unknown = set(merged) - {f for f in cls.__dataclass_fields__}
        if unknown:
            raise ConfigurationError(f"Unknown grid configuration keys: {sorted(unknown)}")

        return cls(**merged)


def create_default_config() -> GridConfig:
    """GridConfig built entirely from defaults.yaml."""
    return GridConfig.from_dict({})


def load_grid_config(path) -> GridConfig:
    """Read a GridConfig from a YAML file.

    The file may hold the grid mapping at the top level or under a 'grid' key.
    """
    data = load_yaml(path)
    section = data.get("grid", data)
    if not isinstance(section, dict):
        raise ConfigurationError(f"Expected a grid mapping in {path}, got {type(section).__name__}")
    return GridConfig.from_dict(section)


def save_grid_config(config: GridConfig, path) -> Path:
    """Write ``config`` to a YAML file under a 'grid' key."""
    return dump_yaml({"grid": config.to_dict()}, path)
