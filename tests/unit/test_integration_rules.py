"""
Unit tests for hydrocore quadrature rules and method selection.
"""

import pytest

from hydrocore.core.enums import IntegrationMethod, FallbackReason
from hydrocore.physics.integration import (
    select_method,
    simpson,
    simpson_weights,
    trapezoid,
    trapezoid_weights,
)


class TestSelectMethod:
    """Test Simpson/trapezoid decision function."""

    def test_equal_spacing_even_intervals(self):
        """Test Simpson is chosen for equally spaced odd point counts."""
        assert select_method([0.0, 1.0, 2.0, 3.0, 4.0]) == (
            IntegrationMethod.SIMPSON, FallbackReason.NONE,
        )

    def test_odd_interval_count(self):
        """Test an odd number of intervals falls back."""
        assert select_method([0.0, 1.0, 2.0, 3.0]) == (
            IntegrationMethod.TRAPEZOIDAL, FallbackReason.ODD_INTERVAL_COUNT,
        )

    def test_too_few_stations(self):
        """Test two points cannot use Simpson."""
        assert select_method([0.0, 1.0]) == (
            IntegrationMethod.TRAPEZOIDAL, FallbackReason.TOO_FEW_STATIONS,
        )

    def test_irregular_spacing(self):
        """Test uneven spacing falls back."""
        assert select_method([0.0, 1.0, 3.0, 4.0, 5.0]) == (
            IntegrationMethod.TRAPEZOIDAL, FallbackReason.IRREGULAR_SPACING,
        )

    def test_spacing_within_tolerance(self):
        """Test sub-millimetre jitter still counts as equal spacing."""
        method, reason = select_method([0.0, 1.0004, 2.0, 3.0, 4.0])

        assert method == IntegrationMethod.SIMPSON
        assert reason == FallbackReason.NONE

    def test_trapezoid_requested(self):
        """Test prefer_simpson=False is not a fallback."""
        assert select_method([0.0, 1.0, 2.0], prefer_simpson=False) == (
            IntegrationMethod.TRAPEZOIDAL, FallbackReason.NONE,
        )


class TestQuadrature:
    """Test quadrature weights."""

    def test_simpson_exact_for_cubic(self):
        """Test Simpson integrates x^3 exactly."""
        xs = [0.0, 1.0, 2.0]

        assert simpson(xs, [x ** 3 for x in xs]) == pytest.approx(4.0)

    def test_trapezoid_exact_for_linear_uneven(self):
        """Test trapezoid integrates a line exactly on uneven points."""
        xs = [0.0, 1.0, 3.0]

        assert trapezoid(xs, [2 * x + 1 for x in xs]) == pytest.approx(12.0)

    def test_weights_sum_to_length(self):
        """Test both weight sets integrate a constant exactly."""
        xs = [0.0, 2.5, 5.0, 7.5, 10.0]

        assert sum(trapezoid_weights(xs)) == pytest.approx(10.0)
        assert sum(simpson_weights(xs)) == pytest.approx(10.0)

    def test_simpson_pattern(self):
        """Test the 1-4-2-4-1 pattern."""
        weights = simpson_weights([0.0, 3.0, 6.0, 9.0, 12.0])

        assert weights == pytest.approx((1.0, 4.0, 2.0, 4.0, 1.0))

    def test_simpson_rejects_even_point_count(self):
        """Test Simpson weights need an even interval count."""
        with pytest.raises(ValueError):
            simpson_weights([0.0, 1.0, 2.0, 3.0])
