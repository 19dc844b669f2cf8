"""Tests for defaults, GridConfig, YAML files and validation helpers."""

import warnings

import numpy as np
import pytest
from numpy.testing import assert_allclose

from ocean_grids.config import (
    ConfigurationError,
    ConfigurationWarning,
    GridConfig,
    GridKind,
    StretchingSpecificationError,
    build_validated_grid,
    create_default_config,
    get_default,
    get_defaults,
    load_grid_config,
    reload_defaults,
    save_grid_config,
    validate_config,
    warn_if_unsafe,
)
from ocean_grids.grids import (
    Bounded,
    Flat,
    Periodic,
    RegularCartesianGrid,
    VerticallyStretchedCartesianGrid,
)


class TestDefaults:
    """Tests for defaults.yaml access."""

    def test_get_default(self):
        assert get_default("grid.kind") == "regular"
        assert get_default("grid.size") == [16, 16, 16]
        assert get_default("stretching.tanh_stretching") == 2.0

    def test_missing_key(self):
        assert get_default("grid.nonexistent", "fallback") == "fallback"
        assert get_default("nonexistent.key") is None

    def test_get_defaults(self):
        defaults = get_defaults()
        assert set(defaults) == {"grid", "stretching"}

    def test_thresholds_come_from_python_defaults(self):
        assert get_default("validation.bounds_rtol") is None
        assert get_default("validation.max_stretching_ratio") is None

    def test_environment_override(self, tmp_path, monkeypatch):
        path = tmp_path / "defaults.yaml"
        path.write_text("grid:\n  size: [2, 3, 4]\n")
        monkeypatch.setenv("OCEAN_GRIDS_DEFAULTS_PATH", str(path))
        reload_defaults()

        assert get_default("grid.size") == [2, 3, 4]


class TestGridConfig:
    """Tests for GridConfig construction and validation."""

    def test_default_config_builds(self):
        grid = create_default_config().build()
        assert isinstance(grid, RegularCartesianGrid)
        assert grid.size() == (16, 16, 16)
        assert grid.topology() == (Periodic, Periodic, Bounded)
        assert grid.domain("z") == (-1.0, 0.0)

    def test_kind_from_string(self):
        config = GridConfig(kind="vertically_stretched")
        assert config.kind is GridKind.VERTICALLY_STRETCHED

    def test_unknown_kind(self):
        with pytest.raises(ConfigurationError, match="curvilinear"):
            GridConfig(kind="curvilinear")

    def test_tuples_become_lists(self):
        config = GridConfig(size=(2, 2, 2), topology=(Periodic, Bounded, Flat), x=(0, 1))
        assert config.size == [2, 2, 2]
        assert config.topology == ["periodic", "bounded", "flat"]
        assert config.x == [0, 1]

    def test_validate_collects_errors(self):
        config = GridConfig(size=[4, 0, 4], x=[1.0, 0.0], y=[0.0, 1.0], z=[-1.0, 0.0], halo=[1, 1, -1])
        errors = config.validate()

        assert len(errors) == 3
        assert any("axis y" in e for e in errors)
        assert any("axis x" in e for e in errors)
        assert any("axis z" in e for e in errors)

    def test_validate_clean_config(self):
        assert create_default_config().validate() == []

    def test_from_dict_overlays_defaults(self):
        config = GridConfig.from_dict({"size": [8, 8, 4], "extent": [2.0, 2.0, 1.0]})
        assert config.size == [8, 8, 4]
        assert config.x is None
        assert config.topology == ["periodic", "periodic", "bounded"]

        grid = config.build()
        assert grid.domain("z") == (-1.0, 0.0)
        assert_allclose(grid.spacings, (0.25, 0.25, 0.25))

    def test_from_dict_skips_default_domain_on_flat_axes(self):
        config = GridConfig.from_dict({"size": [8, 1, 4], "topology": ["periodic", "flat", "bounded"]})
        assert config.y is None
        grid = config.build()
        assert grid.extent()[1] == 0.0

    def test_from_dict_unknown_key(self):
        with pytest.raises(ConfigurationError, match="colour"):
            GridConfig.from_dict({"colour": "blue"})

    def test_regular_rejects_vertical_faces(self):
        config = GridConfig.from_dict({"z_faces": [-1.0, -0.5, 0.0], "size": [2, 2, 2], "extent": [1.0, 1.0, 1.0]})
        assert any("vertically_stretched" in e for e in config.validate())
        with pytest.raises(ConfigurationError):
            config.build()


class TestStretchedConfig:
    """Tests for vertically stretched configurations."""

    def test_explicit_faces(self):
        config = GridConfig(
            kind="vertically_stretched", size=[1, 1, 4], topology=["flat", "flat", "bounded"],
            z_faces=np.array([0.0, 1.0, 3.0, 6.0, 10.0]),
        )
        assert config.z_faces == [0.0, 1.0, 3.0, 6.0, 10.0]
        assert config.validate() == []

        grid = config.build()
        assert isinstance(grid, VerticallyStretchedCartesianGrid)
        assert_allclose(grid.face_spacings, [1.0, 2.0, 3.0, 4.0])

    @pytest.mark.parametrize("stretching", [
        {"rule": "uniform"},
        {"rule": "tanh", "stretching": 3.0},
        {"rule": "tanh"},
        {"rule": "power_law", "exponent": 1.5},
    ])
    def test_named_rules(self, stretching):
        config = GridConfig.from_dict({
            "kind": "vertically_stretched",
            "size": [4, 4, 8],
            "x": [0.0, 1.0],
            "y": [0.0, 1.0],
            "z": [-50.0, 0.0],
            "z_stretching": stretching,
        })
        assert config.validate() == []

        grid = config.build()
        assert_allclose(np.sum(grid.face_spacings), 50.0)
        assert grid.node("z", 0, "face") == -50.0

    def test_unknown_rule(self):
        config = GridConfig(kind="vertically_stretched", size=[2, 2, 4], x=[0, 1], y=[0, 1],
                            z=[-1.0, 0.0], z_stretching={"rule": "cubic"})
        assert any("cubic" in e for e in config.validate())

    @pytest.mark.parametrize("stretching", [
        {"rule": "tanh", "stretching": "3"},
        {"rule": "power_law", "exponent": True},
    ])
    def test_non_numeric_rule_parameter(self, stretching):
        config = GridConfig(kind="vertically_stretched", size=[2, 2, 4], x=[0, 1], y=[0, 1],
                            z=[-1.0, 0.0], z_stretching=stretching)

        errors = config.validate()
        assert len(errors) == 1
        assert "positive number" in errors[0]
        with pytest.raises(ConfigurationError):
            validate_config(config)
        with pytest.raises(StretchingSpecificationError) as exc_info:
            config.build()
        assert exc_info.value.axis == "z"

    @pytest.mark.parametrize("stretching,key", [
        ({"rule": "tanh", "strech": 9.0}, "strech"),
        ({"rule": "tanh", "exponent": 2.0}, "exponent"),
        ({"rule": "power_law", "stretching": 2.0}, "stretching"),
        ({"rule": "uniform", "stretching": 2.0}, "stretching"),
    ])
    def test_unknown_rule_parameter(self, stretching, key):
        config = GridConfig(kind="vertically_stretched", size=[2, 2, 4], x=[0, 1], y=[0, 1],
                            z=[-1.0, 0.0], z_stretching=stretching)

        errors = config.validate()
        assert len(errors) == 1
        assert key in errors[0]
        with pytest.raises(ConfigurationError) as exc_info:
            config.build()
        assert exc_info.value.axis == "z"
        assert exc_info.value.value == stretching

    def test_needs_exactly_one_face_source(self):
        config = GridConfig(kind="vertically_stretched", size=[2, 2, 2], x=[0, 1], y=[0, 1])
        assert any("exactly one" in e for e in config.validate())

    def test_invalid_faces_reported(self):
        config = GridConfig(kind="vertically_stretched", size=[1, 1, 3], topology=["flat", "flat", "bounded"],
                            z_faces=[0, 2, 1, 4])
        errors = config.validate()
        assert len(errors) == 1
        assert "strictly increasing" in errors[0]

        with pytest.raises(StretchingSpecificationError):
            config.build()

    def test_resolved_config_round_trip(self):
        config = GridConfig(kind="vertically_stretched", size=[2, 2, 6], x=[0, 1], y=[0, 1],
                            z=[-10.0, 0.0], z_stretching={"rule": "power_law", "exponent": 2.0})
        grid = config.build()
        rebuilt = grid.to_config()

        assert rebuilt.z_stretching is None
        assert len(rebuilt.z_faces) == 7
        assert rebuilt.build() == grid


class TestYamlFiles:
    """Tests for saving and loading grid configuration files."""

    def test_save_and_load(self, tmp_path, stretched_grid):
        path = save_grid_config(stretched_grid.to_config(), tmp_path / "grid.yaml")
        assert path.exists()

        loaded = load_grid_config(path)
        assert loaded == stretched_grid.to_config()
        assert loaded.build() == stretched_grid

    def test_dict_round_trip(self, small_grid, column_grid):
        for grid in (small_grid, column_grid):
            assert GridConfig.from_dict(grid.to_config().to_dict()).build() == grid

    def test_saved_file_is_plain_yaml(self, tmp_path, small_grid):
        path = save_grid_config(small_grid.to_config(), tmp_path / "grid.yaml")
        text = path.read_text()

        assert text.startswith("grid:")
        assert "kind: regular" in text
        assert "!!" not in text

    def test_load_flat_mapping(self, tmp_path):
        path = tmp_path / "grid.yaml"
        path.write_text(
            "size: [10, 1, 5]\n"
            "topology: [bounded, flat, bounded]\n"
            "x: [0.0, 100.0]\n"
            "z: [-20.0, 0.0]\n"
        )
        grid = load_grid_config(path).build()
        assert grid.topology() == (Bounded, Flat, Bounded)
        assert_allclose(grid.delta_x, 10.0)
        assert_allclose(grid.delta_z, 4.0)

    def test_load_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_grid_config(path) == create_default_config()

    def test_load_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ValueError):
            load_grid_config(path)


class TestValidationHelpers:
    """Tests for validate_config, warn_if_unsafe and build_validated_grid."""

    def test_validate_config_raises(self):
        config = GridConfig(size=[4, 0, 4], x=[0, 1], y=[0, 1], z=[-1, 0])
        with pytest.raises(ConfigurationError, match="1 error"):
            validate_config(config)

    def test_validate_config_without_raising(self):
        config = GridConfig(size=[4, 0, 4], x=[0, 1], y=[0, 1], z=[-1, 0])
        is_valid, errors = validate_config(config, raise_on_error=False)
        assert not is_valid
        assert len(errors) == 1

    def test_validate_config_accepts_valid(self):
        assert validate_config(create_default_config()) == (True, [])

    def test_warns_on_periodic_axis_without_halo(self):
        grid = RegularCartesianGrid(size=(4, 4, 4), extent=(1.0, 1.0, 1.0), halo=(0, 1, 1))
        with pytest.warns(ConfigurationWarning, match="Periodic axis x"):
            messages = warn_if_unsafe(grid)
        assert len(messages) == 1

    def test_warns_on_abrupt_stretching(self, column_grid):
        with pytest.warns(ConfigurationWarning, match="thickness ratio 2.000"):
            warn_if_unsafe(column_grid)

    def test_no_warning_for_safe_grid(self, small_grid):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert warn_if_unsafe(small_grid) == []

    def test_build_validated_grid(self):
        grid = build_validated_grid(GridConfig(size=[2, 2, 2], x=[0, 1], y=[0, 1], z=[-1, 0]))
        assert isinstance(grid, RegularCartesianGrid)

    def test_build_validated_grid_rejects_invalid(self):
        with pytest.raises(ConfigurationError):
            build_validated_grid(GridConfig(size=[2, 2, 2], x=[0, 1], y=[0, 1]))
