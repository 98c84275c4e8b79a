"""Disclosure check DTOs."""

from typing import Optional

from pydantic import ConfigDict

from apr_service.application.dtos.base import DTO
from apr_service.application.dtos.schedule import DisclosureFiguresPayload, ScheduleRequest
from apr_service.domain.value_objects.disclosure_figures import LoanType


class DisclosureCheckRequest(ScheduleRequest):
    """Schedule plus the figures a lender intends to disclose."""

    loan_type: LoanType = LoanType.INSTALLMENT
    disclosed_apr: Optional[float] = None
    disclosed_finance_charge: Optional[float] = None
    disclosed_total_of_payments: Optional[float] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "amountFinanced": 975,
                "frequency": "monthly",
                "streams": [{"amount": 340, "count": 3}],
                "roundingBps": 10,
                "loanType": "installment",
                "disclosedApr": 27.5,
                "disclosedFinanceCharge": 45.0,
                "disclosedTotalOfPayments": 1020.0,
            }
        }
    )


class AprToleranceCheck(DTO):
    """Disclosed APR compared with the calculated APR."""

    disclosed: float
    calculated: float
    difference: float
    tolerance: float
    within_tolerance: bool


class AmountCheck(DTO):
    """Disclosed dollar figure compared with the calculated one."""

    disclosed: float
    calculated: float
    difference: float


class DisclosureCheckResponse(DTO):
    """Disclosure check result DTO."""

    ok: bool = True
    apr_pct: float
    periodic_rate: float
    regular_loan: bool
    figures: DisclosureFiguresPayload
    apr_check: Optional[AprToleranceCheck] = None
    finance_charge_check: Optional[AmountCheck] = None
    total_of_payments_check: Optional[AmountCheck] = None
