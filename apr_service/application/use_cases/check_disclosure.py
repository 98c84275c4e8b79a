"""Check disclosed figures use case."""

from typing import Optional

from apr_service.application.dtos.disclosure import (
    AmountCheck,
    AprToleranceCheck,
    DisclosureCheckRequest,
    DisclosureCheckResponse,
)
from apr_service.application.use_cases.build_payment_schedule import BuildPaymentSchedule
from apr_service.domain.value_objects.disclosure_figures import LoanType


class CheckDisclosure:
    """Use case comparing disclosed APR and dollar figures with calculated ones."""

    # Disclosed APR tolerance in percentage points
    REGULAR_LOAN_TOLERANCE = 0.125
    IRREGULAR_LOAN_TOLERANCE = 0.25
    # An installment loan with more payment streams is irregular
    REGULAR_LOAN_MAX_STREAMS = 3

    def __init__(
        self,
        schedule_builder: BuildPaymentSchedule,
        regular_tolerance: float = REGULAR_LOAN_TOLERANCE,
        irregular_tolerance: float = IRREGULAR_LOAN_TOLERANCE,
        regular_max_streams: int = REGULAR_LOAN_MAX_STREAMS,
    ) -> None:
        """
        Initialize check disclosure use case.

        Args:
            schedule_builder: Use case computing APR and figures of a schedule
            regular_tolerance: APR tolerance for regular loans
            irregular_tolerance: APR tolerance for irregular loans
            regular_max_streams: Most payment streams a regular loan can have
        """
        self._schedule_builder = schedule_builder
        self._regular_tolerance = regular_tolerance
        self._irregular_tolerance = irregular_tolerance
        self._regular_max_streams = regular_max_streams

    def is_regular_loan(self, loan_type: LoanType, streams_count: int) -> bool:
        """Whether a loan is regular (installment loan with few payment streams)."""
        return loan_type is LoanType.INSTALLMENT and streams_count <= self._regular_max_streams

    def tolerance_for(self, regular_loan: bool) -> float:
        """Get the disclosed APR tolerance in percentage points."""
        return self._regular_tolerance if regular_loan else self._irregular_tolerance

    def check_apr(self, disclosed: float, calculated: float, regular_loan: bool) -> AprToleranceCheck:
        """
        Compare a disclosed APR with the calculated one.

        Args:
            disclosed: Disclosed APR in percent
            calculated: Calculated APR in percent
            regular_loan: Whether the regular-loan tolerance applies

        Returns:
            Tolerance check
        """
        tolerance = self.tolerance_for(regular_loan)
        difference = disclosed - calculated
        return AprToleranceCheck(
            disclosed=disclosed,
            calculated=calculated,
            difference=round(difference, 6),
            tolerance=tolerance,
            within_tolerance=abs(difference) <= tolerance,
        )

    @staticmethod
    def check_amount(disclosed: float, calculated: float) -> AmountCheck:
        """Compare a disclosed dollar figure with the calculated one."""
        return AmountCheck(
            disclosed=disclosed,
            calculated=calculated,
            difference=round(disclosed - calculated, 2),
        )

    def execute(
        self, request: DisclosureCheckRequest, request_id: Optional[str] = None
    ) -> DisclosureCheckResponse:
        """
        Check disclosed figures against the schedule they describe.

        Args:
            request: Disclosure check request DTO
            request_id: Optional request identifier for logging

        Returns:
            Calculated figures and one check per disclosed figure

        Raises:
            ValidationError: If the schedule is malformed
            NonConvergenceError: If the root finder cannot solve the schedule
        """
        schedule = self._schedule_builder.execute(request, request_id=request_id)
        figures = schedule.figures
        regular_loan = self.is_regular_loan(request.loan_type, len(request.streams))

        apr_check = None
        if request.disclosed_apr is not None:
            apr_check = self.check_apr(request.disclosed_apr, schedule.data.apr_pct, regular_loan)

        finance_charge_check = None
        if request.disclosed_finance_charge is not None:
            finance_charge_check = self.check_amount(
                request.disclosed_finance_charge, figures.finance_charge
            )

        total_of_payments_check = None
        if request.disclosed_total_of_payments is not None:
            total_of_payments_check = self.check_amount(
                request.disclosed_total_of_payments, figures.total_of_payments
            )

        return DisclosureCheckResponse(
            apr_pct=schedule.data.apr_pct,
            periodic_rate=schedule.data.i,
            regular_loan=regular_loan,
            figures=figures,
            apr_check=apr_check,
            finance_charge_check=finance_charge_check,
            total_of_payments_check=total_of_payments_check,
        )
