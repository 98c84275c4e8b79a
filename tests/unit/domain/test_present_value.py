"""Unit tests for the present-value functional."""

import pytest

from apr_service.domain.services.present_value import PresentValueFunctional
from apr_service.domain.value_objects.cashflow import Cashflow


class TestPresentValueFunctional:
    """Test cases for PresentValueFunctional."""

    def setup_method(self) -> None:
        """Set up test fixtures."""
        self.functional = PresentValueFunctional.build(
            [Cashflow(1000.0, 0)],
            [Cashflow(1100.0, 1)],
        )

    def test_value_at_zero_rate_is_undiscounted_difference(self) -> None:
        """Test that NPV(0) is advances minus payments."""
        assert self.functional.value(0.0) == pytest.approx(-100.0)

    def test_value_at_root(self) -> None:
        """Test that NPV vanishes at the single-period rate."""
        assert self.functional.value(0.10) == pytest.approx(0.0, abs=1e-9)

    def test_derivative_matches_closed_form(self) -> None:
        """Test NPV'(i) = P / (1+i)^2 for one payment at t=1."""
        assert self.functional.derivative(0.10) == pytest.approx(1100.0 / 1.1**2)

    def test_derivative_matches_finite_difference(self) -> None:
        """Test the derivative against a central difference."""
        functional = PresentValueFunctional.build(
            [Cashflow(975.0, 0), Cashflow(50.0, 1, 0.5)],
            [Cashflow(340.0, 1, 0.25), Cashflow(340.0, 2), Cashflow(340.0, 3)],
        )
        h = 1e-6
        rate = 0.03

        numeric = (functional.value(rate + h) - functional.value(rate - h)) / (2 * h)

        assert functional.derivative(rate) == pytest.approx(numeric, rel=1e-6)

    def test_fractional_time_discounts(self) -> None:
        """Test that the odd-days fraction is part of the exponent."""
        functional = PresentValueFunctional.build([Cashflow(1000.0, 0)], [Cashflow(1000.0, 0, 0.5)])

        assert functional.value(0.21) == pytest.approx(1000.0 - 1000.0 / 1.1)

    @pytest.mark.parametrize("rate", [-1.0, -1.5])
    def test_value_rejects_rates_outside_domain(self, rate) -> None:
        """Test that 1 + i <= 0 is rejected."""
        with pytest.raises(ValueError, match="outside the domain"):
            self.functional.value(rate)

    def test_derivative_rejects_rates_outside_domain(self) -> None:
        """Test that the derivative rejects 1 + i <= 0 too."""
        with pytest.raises(ValueError):
            self.functional.derivative(-1.0)

    def test_totals_and_mean_times(self) -> None:
        """Test undiscounted totals and weighted-average times."""
        functional = PresentValueFunctional.build(
            [Cashflow(975.0, 0)],
            [Cashflow(340.0, 1), Cashflow(340.0, 2), Cashflow(340.0, 3)],
        )

        assert functional.total_advances == 975.0
        assert functional.total_payments == 1020.0
        assert functional.advances_mean_time == 0.0
        assert functional.payments_mean_time == pytest.approx(2.0)

    def test_value_sums_without_cancellation_error(self) -> None:
        """Test that a small flow survives next to much larger flows."""
        functional = PresentValueFunctional.build(
            [Cashflow(1e16, 0), Cashflow(1.0, 0)],
            [Cashflow(1e16, 0)],
        )

        assert functional.value(0.0) == 1.0

    def test_scale_is_undiscounted_size(self) -> None:
        """Test that the scale adds advances and payments."""
        functional = PresentValueFunctional.build(
            [Cashflow(975.0, 0)],
            [Cashflow(340.0, 1), Cashflow(340.0, 2), Cashflow(340.0, 3)],
        )

        assert functional.scale == 1995.0
