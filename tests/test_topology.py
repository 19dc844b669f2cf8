"""Tests for axis topologies and cell locations."""

import pytest

from ocean_grids.config import ConfigurationError
from ocean_grids.grids.topology import (
    Bounded,
    Center,
    Face,
    Flat,
    Location,
    Periodic,
    Topology,
)


class TestTopology:
    """Tests for the Topology tag."""

    def test_aliases(self):
        assert Periodic is Topology.PERIODIC
        assert Bounded is Topology.BOUNDED
        assert Flat is Topology.FLAT

    def test_exactly_one_predicate_holds(self):
        for topo in Topology:
            flags = [topo.is_periodic, topo.is_bounded, topo.is_flat]
            assert flags.count(True) == 1

    @pytest.mark.parametrize("name,expected", [
        ("periodic", Periodic),
        ("Bounded", Bounded),
        (" FLAT ", Flat),
        (Periodic, Periodic),
    ])
    def test_parse(self, name, expected):
        assert Topology.parse(name) is expected

    def test_parse_unknown_names_axis(self):
        with pytest.raises(ConfigurationError) as exc_info:
            Topology.parse("wrapped", axis="y")

        assert exc_info.value.axis == "y"
        assert exc_info.value.value == "wrapped"
        assert "wrapped" in str(exc_info.value)

    def test_parse_rejects_non_string(self):
        with pytest.raises(ConfigurationError):
            Topology.parse(3)

    def test_str(self):
        assert str(Periodic) == "Periodic"
        assert str(Flat) == "Flat"


class TestLocation:
    """Tests for the Location tag."""

    def test_aliases(self):
        assert Center is Location.CENTER
        assert Face is Location.FACE

    def test_parse(self):
        assert Location.parse("face") is Face
        assert Location.parse("CENTER") is Center
        assert Location.parse(Face) is Face

    def test_parse_unknown(self):
        with pytest.raises(ValueError, match="corner"):
            Location.parse("corner")
