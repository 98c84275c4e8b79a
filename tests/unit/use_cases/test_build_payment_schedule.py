"""Unit tests for BuildPaymentSchedule use case."""

import pytest

from apr_service.application.dtos.schedule import PaymentStreamPayload, ScheduleRequest
from apr_service.application.use_cases.build_payment_schedule import BuildPaymentSchedule
from apr_service.application.use_cases.compute_apr import ComputeApr
from apr_service.domain.errors import ValidationError
from apr_service.domain.value_objects.cashflow import Cashflow
from apr_service.domain.value_objects.payment_stream import Frequency


class TestBuildPaymentSchedule:
    """Test cases for BuildPaymentSchedule."""

    def setup_method(self) -> None:
        """Set up test fixtures."""
        self.use_case = BuildPaymentSchedule(ComputeApr())

    def test_to_apr_input_single_advance(self) -> None:
        """Test that the amount financed becomes one advance at t=0."""
        request = ScheduleRequest(
            amount_financed=975.0,
            streams=[PaymentStreamPayload(amount=340.0, count=3)],
        )

        apr_input = self.use_case.to_apr_input(request)

        assert apr_input.advances == (Cashflow(975.0, 0, 0.0),)
        assert len(apr_input.payments) == 3
        assert apr_input.units_per_year == 12

    def test_to_apr_input_actual_days(self) -> None:
        """Test weekly actual-day schedules."""
        request = ScheduleRequest(
            amount_financed=1000.0,
            frequency=Frequency.ACTUAL_DAYS,
            days_in_unit=7,
            streams=[PaymentStreamPayload(amount=30.0, count=40, odd_days=3)],
        )

        apr_input = self.use_case.to_apr_input(request)

        assert apr_input.units_per_year == 52
        assert apr_input.payments[0].f == pytest.approx(3 / 7)

    def test_to_apr_input_accepts_camel_case(self) -> None:
        """Test that wire names populate the request."""
        request = ScheduleRequest.model_validate(
            {
                "amountFinanced": 975,
                "frequency": "multiple_months",
                "monthsPerUnit": 3,
                "streams": [{"amount": 340, "count": 3, "unitPeriods": 1, "oddDays": 0}],
            }
        )

        assert self.use_case.to_apr_input(request).units_per_year == 4

    def test_malformed_stream_raises_validation_error(self) -> None:
        """Test that a negative count names the stream."""
        request = ScheduleRequest(
            amount_financed=975.0,
            streams=[
                PaymentStreamPayload(amount=340.0, count=3),
                PaymentStreamPayload(amount=340.0, count=-1),
            ],
        )

        with pytest.raises(ValidationError) as exc_info:
            self.use_case.to_apr_input(request)

        assert exc_info.value.field == "streams[1]"

    def test_oversized_stream_rejected(self) -> None:
        """Test that a huge payment count is rejected before expansion."""
        request = ScheduleRequest(
            amount_financed=975.0,
            streams=[PaymentStreamPayload(amount=1.0, count=20_000_000)],
        )

        with pytest.raises(ValidationError) as exc_info:
            self.use_case.to_apr_input(request)

        assert exc_info.value.field == "streams[0].count"
        assert "3660" in exc_info.value.reason

    def test_payment_limit_counts_all_streams(self) -> None:
        """Test that the limit names the stream that crosses it."""
        use_case = BuildPaymentSchedule(ComputeApr(), max_payments=24)
        request = ScheduleRequest(
            amount_financed=975.0,
            streams=[
                PaymentStreamPayload(amount=50.0, count=12),
                PaymentStreamPayload(amount=50.0, count=12),
                PaymentStreamPayload(amount=50.0, count=1),
            ],
        )

        with pytest.raises(ValidationError) as exc_info:
            use_case.to_apr_input(request)

        assert exc_info.value.field == "streams[2].count"

    def test_payment_limit_allows_thirty_year_monthly_loan(self) -> None:
        """Test that a 360-payment mortgage stays within the limit."""
        request = ScheduleRequest(
            amount_financed=250_000.0,
            streams=[PaymentStreamPayload(amount=1580.17, count=360)],
        )

        assert len(self.use_case.to_apr_input(request).payments) == 360

    def test_execute_reference_scenario(self) -> None:
        """Test APR and disclosure figures of the reference loan."""
        request = ScheduleRequest(
            amount_financed=975.0,
            streams=[PaymentStreamPayload(amount=340.0, count=3)],
            rounding_bps=10,
        )

        response = self.use_case.execute(request)

        assert response.data.apr_pct == 27.5
        assert response.figures.amount_financed == 975.0
        assert response.figures.total_of_payments == 1020.0
        assert response.figures.finance_charge == 45.0
        assert [payment.t for payment in response.payments] == [1, 2, 3]
        assert response.debug is None

    def test_execute_with_debug(self) -> None:
        """Test that the solver trace is attached on request."""
        request = ScheduleRequest(
            amount_financed=975.0,
            streams=[PaymentStreamPayload(amount=340.0, count=3)],
        )

        response = self.use_case.execute(request, request_id="req-9", include_debug=True)

        assert response.debug.request_id == "req-9"
        assert response.debug.phase == "newton"

    def test_odd_days_lower_apr(self) -> None:
        """Test that a longer first period lowers the APR."""
        streams = [PaymentStreamPayload(amount=340.0, count=3)]
        odd_streams = [PaymentStreamPayload(amount=340.0, count=3, odd_days=15)]

        regular = self.use_case.execute(ScheduleRequest(amount_financed=975.0, streams=streams))
        odd = self.use_case.execute(ScheduleRequest(amount_financed=975.0, streams=odd_streams))

        assert odd.data.apr_pct < regular.data.apr_pct

    def test_no_payments_rejected(self) -> None:
        """Test that streams expanding to no payments are rejected."""
        request = ScheduleRequest(
            amount_financed=975.0,
            streams=[PaymentStreamPayload(amount=340.0, count=0)],
        )

        with pytest.raises(ValidationError) as exc_info:
            self.use_case.execute(request)

        assert exc_info.value.field == "payments"
