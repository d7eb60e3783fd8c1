"""
Unit tests for hydrocore geometry data model.
"""

import pytest
import numpy as np

from hydrocore.geometry import (
    HullGeometry,
    Station,
    Waterline,
    LoadingCondition,
    PrincipalDimensions,
)
from hydrocore.errors import ErrorCode


# =============================================================================
# HULL GEOMETRY
# =============================================================================

class TestHullGeometry:
    """Test HullGeometry construction and grid access."""

    def test_from_grid_assigns_indices(self):
        """Test from_grid numbers stations and waterlines from zero."""
        geometry = HullGeometry.from_grid([0.0, 5.0, 10.0], [0.0, 1.0, 2.0], np.ones((3, 3)))

        assert [s.index for s in geometry.stations] == [0, 1, 2]
        assert [w.index for w in geometry.waterlines] == [0, 1, 2]
        assert geometry.xs == (0.0, 5.0, 10.0)
        assert geometry.zs == (0.0, 1.0, 2.0)
        assert len(geometry.offsets) == 9

    def test_from_grid_shape_mismatch(self):
        """Test from_grid rejects a grid that does not match the axes."""
        with pytest.raises(ValueError):
            HullGeometry.from_grid([0.0, 1.0, 2.0], [0.0, 1.0], np.ones((3, 3)))

    def test_grid_follows_station_order(self):
        """Test dense grid rows follow stations, columns follow waterlines."""
        geometry = HullGeometry(
            stations=(Station(10, 0.0), Station(20, 1.0)),
            waterlines=(Waterline(7, 0.0), Waterline(8, 1.0)),
            offsets={(10, 7): 1.0, (10, 8): 2.0, (20, 7): 3.0, (20, 8): 4.0},
        )

        assert geometry.grid.shape == (2, 2)
        assert geometry.grid[0, 1] == 2.0
        assert geometry.grid[1, 0] == 3.0
        assert geometry.rows == ((1.0, 2.0), (3.0, 4.0))

    def test_grid_is_read_only(self):
        """Test the dense grid cannot be written."""
        geometry = HullGeometry.from_grid([0.0, 1.0, 2.0], [0.0, 1.0, 2.0], np.ones((3, 3)))

        with pytest.raises(ValueError):
            geometry.grid[0, 0] = 5.0

    def test_offsets_are_immutable(self):
        """Test offsets mapping rejects assignment."""
        geometry = HullGeometry.from_grid([0.0, 1.0, 2.0], [0.0, 1.0, 2.0], np.ones((3, 3)))

        with pytest.raises(TypeError):
            geometry.offsets[(0, 0)] = 2.0

    def test_caller_dict_changes_do_not_leak(self):
        """Test the geometry copies the caller's offset mapping."""
        offsets = {(0, 0): 1.0}
        geometry = HullGeometry(
            stations=(Station(0, 0.0),),
            waterlines=(Waterline(0, 0.0),),
            offsets=offsets,
        )
        offsets[(0, 0)] = 9.0

        assert geometry.offsets[(0, 0)] == 1.0

    def test_station_position(self):
        """Test station index lookup."""
        geometry = HullGeometry(
            stations=(Station(5, 0.0), Station(6, 1.0), Station(9, 2.0)),
            waterlines=(),
            offsets={},
        )

        assert geometry.station_position(9) == 2
        with pytest.raises(ValueError):
            geometry.station_position(7)

    def test_length_and_breadth(self, barge):
        """Test derived dimensions."""
        assert barge.length == 100.0
        assert barge.max_half_breadth == 10.0
        assert barge.n_points == 21 * 11

    def test_dict_roundtrip(self, wigley):
        """Test to_dict/from_dict preserves the grid."""
        restored = HullGeometry.from_dict(wigley.to_dict())

        assert restored.name == wigley.name
        assert restored.xs == wigley.xs
        assert restored.zs == wigley.zs
        assert np.array_equal(restored.grid, wigley.grid)


# =============================================================================
# LOADING CONDITION / DIMENSIONS
# =============================================================================

class TestLoadingCondition:
    """Test LoadingCondition."""

    def test_defaults(self):
        """Test default density is seawater and KG is unknown."""
        loadcase = LoadingCondition()

        assert loadcase.rho == 1025.0
        assert loadcase.kg is None
        assert loadcase.lcg is None

    def test_rejects_non_positive_density(self):
        """Test rho must be positive."""
        with pytest.raises(ValueError):
            LoadingCondition(rho=0.0)
        with pytest.raises(ValueError):
            LoadingCondition(rho=-1.0)

    def test_from_dict(self):
        """Test deserialization."""
        loadcase = LoadingCondition.from_dict({"rho": 1000.0, "kg": 3.2, "name": "fresh"})

        assert loadcase.rho == 1000.0
        assert loadcase.kg == 3.2
        assert loadcase.to_dict()["name"] == "fresh"


class TestPrincipalDimensions:
    """Test PrincipalDimensions.validate."""

    def test_valid(self, barge_dimensions):
        """Test sensible dimensions produce no issues."""
        assert barge_dimensions.validate() == []

    def test_non_positive_values(self):
        """Test every non-positive dimension is reported."""
        issues = PrincipalDimensions(lpp=0.0, beam=-1.0, design_draft=0.0).validate()

        fields = {issue.field for issue in issues}
        assert fields == {"lpp", "beam", "design_draft"}
        assert all(issue.code == ErrorCode.VAL_DIMENSIONS for issue in issues)

    def test_proportions(self):
        """Test beam > lpp and draft > beam are rejected."""
        issues = PrincipalDimensions(lpp=10.0, beam=12.0, design_draft=13.0).validate()

        fields = {issue.field for issue in issues}
        assert "beam" in fields
        assert "design_draft" in fields

    def test_length_limit(self):
        """Test Lpp above 500 m is rejected."""
        issues = PrincipalDimensions(lpp=600.0, beam=50.0).validate()

        assert len(issues) == 1
        assert issues[0].field == "lpp"
