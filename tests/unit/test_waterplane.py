"""
Unit tests for hydrocore WaterplaneAnalyzer.
"""

import pytest

from hydrocore.physics.waterplane import waterplane, waterplane_trimmed


class TestWaterplane:
    """Test waterplane area and second moments."""

    def test_barge_waterplane(self, barge):
        """Test rectangle: A = LB, LCF = L/2, It = B^3 L / 12."""
        result = waterplane(barge, 5.0)

        assert result.area == pytest.approx(2000.0)
        assert result.lcf == pytest.approx(50.0)
        assert result.i_transverse == pytest.approx(20.0 ** 3 * 100.0 / 12.0)

    def test_barge_longitudinal_moment(self, barge):
        """Test Il = B L^3 / 12 within trapezoidal accuracy."""
        result = waterplane(barge, 5.0)

        assert result.i_longitudinal == pytest.approx(20.0 * 100.0 ** 3 / 12.0, rel=0.01)

    def test_dry_waterplane(self, barge):
        """Test a draft below the keel has no waterplane and no LCF."""
        result = waterplane(barge, -1.0)

        assert result.area == 0.0
        assert result.lcf is None
        assert result.i_longitudinal == 0.0

    def test_wigley_waterplane(self, wigley):
        """Test Awp = 2LB/3 for the Wigley hull."""
        result = waterplane(wigley, 6.25)

        assert result.area == pytest.approx(2.0 * 100.0 * 10.0 / 3.0, rel=0.01)
        assert result.lcf == pytest.approx(50.0)

    def test_trimmed_waterplane_projects_local_breadths(self, barge):
        """Test a wall-sided hull keeps its waterplane when trimmed."""
        drafts = [4.0 + 0.02 * x for x in barge.xs]

        result = waterplane_trimmed(barge, drafts)

        assert result.area == pytest.approx(2000.0)
        assert len(result.half_breadths) == 21

    def test_trimmed_requires_one_draft_per_station(self, barge):
        """Test station draft count is checked."""
        with pytest.raises(ValueError):
            waterplane_trimmed(barge, [5.0])
