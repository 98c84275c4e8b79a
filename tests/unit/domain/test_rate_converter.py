"""Unit tests for rate conversion and rounding."""

import pytest

from apr_service.domain.services.rate_converter import annualize, convert_rate, round_apr


class TestAnnualize:
    """Test cases for annualize."""

    def test_monthly_rate(self) -> None:
        """Test that a monthly rate is multiplied by 12 and expressed in percent."""
        assert annualize(0.01, 12) == pytest.approx(12.0)

    def test_fractional_units_per_year(self) -> None:
        """Test actual-day schedules with fractional unit counts."""
        assert annualize(0.001, 365 / 7) == pytest.approx(0.1 * 365 / 7)

    def test_negative_rate(self) -> None:
        """Test that negative periodic rates stay negative."""
        assert annualize(-0.5, 1) == pytest.approx(-50.0)


class TestRoundApr:
    """Test cases for round_apr."""

    def test_no_rounding_when_absent(self) -> None:
        """Test that a missing resolution leaves the rate unrounded."""
        assert round_apr(27.4849123, None) == 27.4849123

    def test_no_rounding_when_zero(self) -> None:
        """Test that a zero resolution leaves the rate unrounded."""
        assert round_apr(27.4849123, 0) == 27.4849123

    def test_ten_basis_points(self) -> None:
        """Test snapping to steps of 0.10 percentage points."""
        assert round_apr(27.483, 10) == 27.5

    def test_rounding_is_idempotent(self) -> None:
        """Test that rounding a rounded rate returns it unchanged."""
        once = round_apr(27.483, 10)

        assert round_apr(once, 10) == once == 27.5

    def test_one_basis_point(self) -> None:
        """Test snapping to steps of 0.01 percentage points."""
        assert round_apr(27.4849, 1) == 27.48

    def test_quarter_point(self) -> None:
        """Test snapping to steps of 0.25 percentage points."""
        assert round_apr(27.4849, 25) == 27.5
        assert round_apr(27.37, 25) == 27.25

    def test_half_rounds_away_from_zero(self) -> None:
        """Test tie-breaking away from zero for both signs."""
        assert round_apr(27.45, 10) == 27.5
        assert round_apr(-27.45, 10) == -27.5

    def test_whole_percent(self) -> None:
        """Test snapping to whole percentage points."""
        assert round_apr(12.5, 100) == 13.0
        assert round_apr(12.49, 100) == 12.0


class TestConvertRate:
    """Test cases for convert_rate."""

    def test_annualizes_then_rounds(self) -> None:
        """Test the combined conversion."""
        assert convert_rate(0.0229034, 12, 10) == 27.5

    def test_unrounded(self) -> None:
        """Test the combined conversion without rounding."""
        assert convert_rate(0.0229034, 12) == pytest.approx(27.48408)
