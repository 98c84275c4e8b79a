"""Build payment schedule use case."""

from typing import Optional

from apr_service.application.dtos.apr import AprData, CashflowPayload, SolverDebug
from apr_service.application.dtos.schedule import (
    DisclosureFiguresPayload,
    ScheduleRequest,
    ScheduleResponse,
)
from apr_service.application.use_cases.compute_apr import ComputeApr
from apr_service.domain.errors import ValidationError
from apr_service.domain.services.payment_schedule import (
    MAX_SCHEDULE_PAYMENTS,
    build_payment_cashflows,
    units_per_year,
)
from apr_service.domain.value_objects.apr_input import AprInput
from apr_service.domain.value_objects.cashflow import Cashflow
from apr_service.domain.value_objects.disclosure_figures import DisclosureFigures
from apr_service.domain.value_objects.payment_stream import PaymentStream


class BuildPaymentSchedule:
    """Use case turning a single-advance loan with payment streams into an APR."""

    def __init__(self, compute_apr: ComputeApr, max_payments: int = MAX_SCHEDULE_PAYMENTS) -> None:
        """
        Initialize build payment schedule use case.

        Args:
            compute_apr: APR pipeline to run on the generated schedule
            max_payments: Most payments the streams of one request may expand to
        """
        self._compute_apr = compute_apr
        self._max_payments = max_payments

    def to_apr_input(self, request: ScheduleRequest) -> AprInput:
        """
        Expand a schedule request into an APR input.

        The amount financed becomes a single advance at t=0 and every
        payment stream is expanded into dated payments.

        Args:
            request: Schedule request DTO

        Returns:
            APR input (not yet validated)

        Raises:
            ValidationError: If a payment stream is malformed or the streams
                expand to more payments than the limit
        """
        streams = []
        total_payments = 0
        for index, payload in enumerate(request.streams):
            try:
                streams.append(
                    PaymentStream(
                        amount=payload.amount,
                        count=payload.count,
                        unit_periods=payload.unit_periods,
                        odd_days=payload.odd_days,
                    )
                )
            except ValueError as err:
                raise ValidationError(f"streams[{index}]", str(err)) from err

            total_payments += payload.count
            if total_payments > self._max_payments:
                raise ValidationError(
                    f"streams[{index}].count",
                    f"schedule cannot have more than {self._max_payments} payments",
                )

        payments = build_payment_cashflows(
            streams,
            request.frequency,
            request.days_in_unit,
            max_payments=self._max_payments,
        )
        return AprInput(
            advances=(Cashflow(amount=request.amount_financed, t=0, f=0.0),),
            payments=tuple(payments),
            units_per_year=units_per_year(
                request.frequency,
                months_per_unit=request.months_per_unit,
                days_in_unit=request.days_in_unit,
            ),
            rounding_bps=request.rounding_bps,
        )

    def execute(
        self,
        request: ScheduleRequest,
        request_id: Optional[str] = None,
        include_debug: bool = False,
    ) -> ScheduleResponse:
        """
        Compute the APR and disclosure figures of a payment-stream schedule.

        Args:
            request: Schedule request DTO
            request_id: Optional request identifier for logging
            include_debug: Whether to attach the root finder trace

        Returns:
            APR, generated cashflows and disclosure figures

        Raises:
            ValidationError: If the schedule is malformed
            NonConvergenceError: If the root finder cannot solve the schedule
        """
        apr_input = self.to_apr_input(request)
        result = self._compute_apr.execute(apr_input, request_id=request_id)
        figures = DisclosureFigures.from_totals(apr_input.amount_financed, apr_input.total_of_payments)

        return ScheduleResponse(
            data=AprData(i=result.i, apr_pct=result.apr_pct),
            units_per_year=apr_input.units_per_year,
            advances=[CashflowPayload.from_domain(cashflow) for cashflow in apr_input.advances],
            payments=[CashflowPayload.from_domain(cashflow) for cashflow in apr_input.payments],
            figures=DisclosureFiguresPayload(
                amount_financed=figures.amount_financed,
                finance_charge=figures.finance_charge,
                total_of_payments=figures.total_of_payments,
            ),
            debug=SolverDebug.from_trace(result.trace, request_id) if include_debug else None,
        )
