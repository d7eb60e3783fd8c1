"""
Unit tests for hydrocore HydrostaticCalculator.
"""

import pytest
import numpy as np

from hydrocore.core.cancellation import CancellationToken
from hydrocore.core.enums import IntegrationMethod, FallbackReason
from hydrocore.errors import GeometryValidationError
from hydrocore.geometry import HullGeometry
from hydrocore.physics import (
    HydrostaticCalculator,
    HydrostaticSample,
    midship_position,
    station_drafts_for_trim,
)


# =============================================================================
# SAMPLE VALUES
# =============================================================================

class TestEvaluate:
    """Test single-draft evaluation on the box barge."""

    def test_barge_particulars(self, barge, barge_calculator, seawater):
        """Test volume, centres and metacentric radius."""
        sample = barge_calculator.evaluate(barge, seawater, 5.0)

        assert sample.draft == 5.0
        assert sample.volume == pytest.approx(10000.0)
        assert sample.displacement == pytest.approx(10_250_000.0)
        assert sample.kb == pytest.approx(2.5)
        assert sample.lcb == pytest.approx(50.0)
        assert sample.tcb == 0.0
        assert sample.bmt == pytest.approx(20.0 ** 2 / (12.0 * 5.0))
        assert sample.kmt == pytest.approx(2.5 + 20.0 ** 2 / 60.0)
        assert sample.kml == pytest.approx(sample.kb + sample.bml)

    def test_barge_coefficients(self, barge, barge_calculator, seawater):
        """Test a box has unit form coefficients."""
        sample = barge_calculator.evaluate(barge, seawater, 5.0)

        assert sample.cb == pytest.approx(1.0)
        assert sample.cm == pytest.approx(1.0)
        assert sample.cp == pytest.approx(1.0)
        assert sample.cwp == pytest.approx(1.0)
        assert sample.midship_area == pytest.approx(100.0)

    def test_tpc_and_mct(self, barge, barge_calculator, seawater):
        """Test TPC = rho*Awp/1e5 and MCT = disp*BMl/(100*Lpp)."""
        sample = barge_calculator.evaluate(barge, seawater, 5.0)

        assert sample.tpc == pytest.approx(20.5)
        assert sample.mct == pytest.approx(10250.0 * sample.bml / (100.0 * 100.0))

    def test_gm_unknown_without_kg(self, barge, barge_calculator, seawater):
        """Test GM is None, not zero, without KG and is not flagged undefined."""
        sample = barge_calculator.evaluate(barge, seawater, 5.0)

        assert sample.gmt is None
        assert sample.gml is None
        assert "gmt" not in sample.undefined_fields

    def test_gm_with_kg(self, barge, barge_calculator, seawater_with_kg):
        """Test GM = KM - KG."""
        sample = barge_calculator.evaluate(barge, seawater_with_kg, 5.0)

        assert sample.gmt == pytest.approx(sample.kmt - 4.0)
        assert sample.gml == pytest.approx(sample.kml - 4.0)

    def test_zero_draft_fields_undefined(self, barge, barge_calculator, seawater_with_kg):
        """Test zero volume leaves dependent fields undefined, not NaN."""
        sample = barge_calculator.evaluate(barge, seawater_with_kg, 0.0)

        assert sample.volume == 0.0
        for name in ("kb", "lcb", "bmt", "bml", "kmt", "gmt", "cb", "cm", "cp", "mct"):
            assert getattr(sample, name) is None
            assert name in sample.undefined_fields
        assert sample.awp == pytest.approx(2000.0)
        assert sample.cwp == pytest.approx(1.0)
        assert sample.is_defined("cwp")

    def test_draft_above_ladder_warns(self, barge, barge_calculator, seawater):
        """Test drafts above the top waterline are flagged, not extrapolated."""
        sample = barge_calculator.evaluate(barge, seawater, 12.0)

        assert len(sample.warnings) == 1
        assert sample.volume == pytest.approx(20000.0)

    def test_records_integration_method(self, engine_config, seawater):
        """Test the quadrature rule and fallback reason reach the sample."""
        geometry = HullGeometry.from_grid(
            [0.0, 10.0, 30.0, 60.0, 100.0], [0.0, 5.0, 10.0], np.full((5, 3), 10.0),
        )
        calculator = HydrostaticCalculator(config=engine_config)

        sample = calculator.evaluate(geometry, seawater, 5.0)

        assert sample.integration_method == IntegrationMethod.TRAPEZOIDAL
        assert sample.fallback_reason == FallbackReason.IRREGULAR_SPACING

    def test_default_dimensions_from_geometry(self, barge, engine_config, seawater):
        """Test Lpp and B default to the geometry extent."""
        calculator = HydrostaticCalculator(config=engine_config)

        sample = calculator.evaluate(barge, seawater, 5.0)

        assert sample.cb == pytest.approx(1.0)
        assert sample.cwp == pytest.approx(1.0)

    def test_default_loadcase(self, barge, barge_calculator):
        """Test a missing loadcase uses the configured density."""
        sample = barge_calculator.evaluate(barge, None, 5.0)

        assert sample.displacement == pytest.approx(1025.0 * 10000.0)

    def test_deterministic(self, wigley, wigley_calculator, seawater_with_kg):
        """Test repeated evaluations are bit-identical."""
        first = wigley_calculator.evaluate(wigley, seawater_with_kg, 3.3)
        second = wigley_calculator.evaluate(wigley, seawater_with_kg, 3.3)

        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_rejects_invalid_geometry(self, barge_calculator, seawater):
        """Test the geometry gate runs before computation."""
        grid = np.ones((3, 3))
        grid[1, 1] = -1.0
        geometry = HullGeometry.from_grid([0.0, 1.0, 2.0], [0.0, 1.0, 2.0], grid)

        with pytest.raises(GeometryValidationError):
            barge_calculator.evaluate(geometry, seawater, 1.0)

    def test_to_dict(self, barge, barge_calculator, seawater):
        """Test serialization includes provenance."""
        data = barge_calculator.evaluate(barge, seawater, 5.0).to_dict()

        assert data["integration_method"] == "simpson"
        assert data["gmt"] is None
        assert data["undefined_fields"] == []


# =============================================================================
# TRIMMED EVALUATION
# =============================================================================

class TestEvaluateTrimmed:
    """Test trimmed-waterline evaluation."""

    def test_station_drafts(self, barge):
        """Test drafts vary linearly from AP (x=0) to FP (x=Lpp)."""
        drafts = station_drafts_for_trim(barge, 6.0, 4.0, 100.0)

        assert drafts[0] == pytest.approx(6.0)
        assert drafts[10] == pytest.approx(5.0)
        assert drafts[-1] == pytest.approx(4.0)

    def test_station_drafts_need_positive_lpp(self, barge):
        """Test Lpp must be positive."""
        with pytest.raises(ValueError):
            station_drafts_for_trim(barge, 5.0, 5.0, 0.0)

    def test_trim_by_stern_moves_lcb_aft(self, barge, barge_calculator, seawater):
        """Test a 2 m stern trim on the barge."""
        sample = barge_calculator.evaluate_trimmed(barge, seawater, 6.0, 4.0)

        assert sample.draft == pytest.approx(5.0)
        assert sample.trim == pytest.approx(2.0)
        assert sample.volume == pytest.approx(10000.0)
        assert sample.lcb == pytest.approx(140.0 / 3.0)

    def test_level_trim_matches_evaluate(self, wigley, wigley_calculator, seawater):
        """Test zero trim reproduces the level evaluation."""
        level = wigley_calculator.evaluate(wigley, seawater, 4.0)
        trimmed = wigley_calculator.evaluate_trimmed(wigley, seawater, 4.0, 4.0)

        assert trimmed.volume == level.volume
        assert trimmed.lcb == level.lcb


# =============================================================================
# MIDSHIP / TABLE
# =============================================================================

class TestMidship:
    """Test midship station selection."""

    def test_nearest_station(self, barge):
        """Test the station at Lpp/2 is chosen."""
        assert midship_position(barge, 100.0) == 10

    def test_tie_goes_to_lower_index(self):
        """Test equidistant stations resolve to the lower one."""
        geometry = HullGeometry.from_grid(
            [0.0, 40.0, 60.0, 100.0], [0.0, 1.0, 2.0], np.ones((4, 3)),
        )

        assert midship_position(geometry, 100.0) == 1


class TestEvaluateTable:
    """Test batch evaluation with cancellation."""

    def test_table_in_order(self, barge, barge_calculator, seawater):
        """Test one sample per draft in request order."""
        table = barge_calculator.evaluate_table(barge, seawater, [3.0, 1.0, 2.0])

        assert len(table) == 3
        assert [s.draft for s in table] == [3.0, 1.0, 2.0]
        assert table.partial is False
        assert all(isinstance(s, HydrostaticSample) for s in table)

    def test_cancelled_table_is_partial(self, barge, barge_calculator, seawater):
        """Test a cancelled token yields a flagged partial table."""
        token = CancellationToken()
        token.cancel("user abort")

        table = barge_calculator.evaluate_table(barge, seawater, [1.0, 2.0, 3.0], cancel=token)

        assert table.partial is True
        assert table.requested == 3
        assert len(table) == 0
        assert table.to_dict()["partial"] is True
