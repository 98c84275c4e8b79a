"""Payment schedule DTOs."""

from typing import Optional, Union

from pydantic import ConfigDict

from apr_service.application.dtos.apr import AprData, CashflowPayload, SolverDebug
from apr_service.application.dtos.base import DTO
from apr_service.domain.value_objects.payment_stream import Frequency


class PaymentStreamPayload(DTO):
    """Payment stream as received on the wire."""

    amount: float
    count: int
    unit_periods: int = 1
    odd_days: float = 0.0


class ScheduleRequest(DTO):
    """Single-advance loan described by payment streams."""

    amount_financed: float
    frequency: Frequency = Frequency.MONTHLY
    months_per_unit: float = 1
    days_in_unit: float = 30
    streams: list[PaymentStreamPayload]
    rounding_bps: Optional[Union[int, float]] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "amountFinanced": 975,
                "frequency": "monthly",
                "streams": [{"amount": 340, "count": 3, "unitPeriods": 1, "oddDays": 0}],
                "roundingBps": 10,
            }
        }
    )


class DisclosureFiguresPayload(DTO):
    """Amount financed, finance charge and total of payments."""

    amount_financed: float
    finance_charge: float
    total_of_payments: float


class ScheduleResponse(DTO):
    """APR of a payment-stream schedule with its cashflows and figures."""

    ok: bool = True
    data: AprData
    units_per_year: float
    advances: list[CashflowPayload]
    payments: list[CashflowPayload]
    figures: DisclosureFiguresPayload
    debug: Optional[SolverDebug] = None
