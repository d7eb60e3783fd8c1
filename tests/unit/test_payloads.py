"""
Unit tests for hydrocore boundary payloads.
"""

import pytest
import numpy as np
from pydantic import ValidationError

from hydrocore.contracts import (
    CurveRequestPayload,
    GeometryPayload,
    LoadingConditionPayload,
    PrincipalDimensionsPayload,
    TrimRequestPayload,
)
from hydrocore.core.enums import CurveKind


class TestGeometryPayload:
    """Test offset table payloads."""

    def test_to_model(self, barge):
        """Test a serialized geometry converts back to the same grid."""
        payload = GeometryPayload(**barge.to_dict())

        geometry = payload.to_model()

        assert geometry.xs == barge.xs
        assert geometry.zs == barge.zs
        assert np.array_equal(geometry.grid, barge.grid)

    def test_rejects_malformed_offset(self):
        """Test missing fields are rejected by the payload."""
        with pytest.raises(ValidationError):
            GeometryPayload(offsets=[{"station_index": 0, "y": 1.0}])


class TestLoadingConditionPayload:
    """Test loading condition payloads."""

    def test_defaults(self):
        """Test seawater default."""
        loadcase = LoadingConditionPayload().to_model()

        assert loadcase.rho == 1025.0
        assert loadcase.kg is None

    def test_rejects_non_positive_density(self):
        """Test rho > 0 is enforced at the boundary."""
        with pytest.raises(ValidationError):
            LoadingConditionPayload(rho=0.0)


class TestPrincipalDimensionsPayload:
    """Test dimension payloads."""

    def test_to_model(self):
        dims = PrincipalDimensionsPayload(lpp=100.0, beam=20.0, design_draft=5.0).to_model()

        assert dims.lpp == 100.0
        assert dims.design_draft == 5.0

    def test_rejects_zero_beam(self):
        with pytest.raises(ValidationError):
            PrincipalDimensionsPayload(lpp=100.0, beam=0.0)


class TestCurveRequestPayload:
    """Test curve requests."""

    def test_execute(self, barge):
        """Test a request runs end to end."""
        payload = CurveRequestPayload(
            geometry=GeometryPayload(**barge.to_dict()),
            dimensions=PrincipalDimensionsPayload(lpp=100.0, beam=20.0),
            kinds=["volume", "kb"],
            draft_min=1.0,
            draft_max=5.0,
            n_points=5,
        )

        curves = payload.to_model().execute()

        assert [c.kind for c in curves] == [CurveKind.VOLUME, CurveKind.KB]
        assert curves[0].ys[-1] == pytest.approx(10000.0)

    def test_rejects_inverted_range(self, barge):
        """Test draft_max must exceed draft_min."""
        with pytest.raises(ValidationError):
            CurveRequestPayload(
                geometry=GeometryPayload(**barge.to_dict()),
                kinds=["volume"],
                draft_min=5.0,
                draft_max=1.0,
            )

    def test_rejects_single_point(self, barge):
        """Test n_points >= 2."""
        with pytest.raises(ValidationError):
            CurveRequestPayload(
                geometry=GeometryPayload(**barge.to_dict()),
                kinds=["volume"],
                draft_min=1.0,
                draft_max=5.0,
                n_points=1,
            )

    def test_rejects_unknown_kind(self, barge):
        with pytest.raises(ValidationError):
            CurveRequestPayload(
                geometry=GeometryPayload(**barge.to_dict()),
                kinds=["freeboard"],
                draft_min=1.0,
                draft_max=5.0,
            )


class TestTrimRequestPayload:
    """Test trim requests."""

    def test_execute(self, barge):
        """Test a trim request converges on the barge."""
        payload = TrimRequestPayload(
            geometry=GeometryPayload(**barge.to_dict()),
            dimensions=PrincipalDimensionsPayload(lpp=100.0, beam=20.0, design_draft=4.0),
            target_displacement=1025.0 * 10000.0,
        )

        result = payload.to_model().execute()

        assert result.converged is True
        assert result.mean_draft == pytest.approx(5.0, abs=1e-4)

    def test_rejects_non_positive_target(self, barge):
        with pytest.raises(ValidationError):
            TrimRequestPayload(
                geometry=GeometryPayload(**barge.to_dict()),
                target_displacement=0.0,
            )

    def test_rejects_negative_initial_draft(self, barge):
        with pytest.raises(ValidationError):
            TrimRequestPayload(
                geometry=GeometryPayload(**barge.to_dict()),
                target_displacement=1.0e6,
                initial_draft=-1.0,
            )
