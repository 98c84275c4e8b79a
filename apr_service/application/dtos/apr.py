"""APR calculation DTOs."""

from typing import Optional, Union

from pydantic import ConfigDict

from apr_service.application.dtos.base import DTO
from apr_service.domain.value_objects.apr_input import AprInput
from apr_service.domain.value_objects.apr_result import SolverTrace
from apr_service.domain.value_objects.cashflow import Cashflow


class CashflowPayload(DTO):
    """Cashflow as received on the wire."""

    amount: float
    t: Union[int, float]
    f: float

    def to_domain(self) -> Cashflow:
        """Convert to a domain cashflow."""
        return Cashflow(amount=self.amount, t=self.t, f=self.f)

    @classmethod
    def from_domain(cls, cashflow: Cashflow) -> "CashflowPayload":
        """Build from a domain cashflow."""
        return cls(amount=cashflow.amount, t=cashflow.t, f=cashflow.f)


class AprRequest(DTO):
    """APR calculation request DTO."""

    advances: list[CashflowPayload]
    payments: list[CashflowPayload]
    units_per_year: float
    rounding_bps: Optional[Union[int, float]] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "advances": [{"amount": 975, "t": 0, "f": 0}],
                "payments": [
                    {"amount": 340, "t": 1, "f": 0},
                    {"amount": 340, "t": 2, "f": 0},
                    {"amount": 340, "t": 3, "f": 0},
                ],
                "unitsPerYear": 12,
                "roundingBps": 10,
            }
        }
    )

    def to_domain(self) -> AprInput:
        """Convert to a domain APR input."""
        return AprInput(
            advances=tuple(cashflow.to_domain() for cashflow in self.advances),
            payments=tuple(cashflow.to_domain() for cashflow in self.payments),
            units_per_year=self.units_per_year,
            rounding_bps=self.rounding_bps,
        )


class AprData(DTO):
    """Periodic rate and annual percentage rate."""

    i: float
    apr_pct: float


class AprAudit(DTO):
    """Echo of the inputs a rate was computed from."""

    units_per_year: float
    rounding_bps: Optional[Union[int, float]] = None
    advances: list[CashflowPayload]
    payments: list[CashflowPayload]


class SolverDebug(DTO):
    """Root finder trace, returned only in debug mode."""

    request_id: str
    phase: str
    newton_iterations: int
    bracket_expansions: int
    bisection_iterations: int

    @classmethod
    def from_trace(cls, trace: SolverTrace, request_id: Optional[str] = None) -> "SolverDebug":
        """Build from a root finder trace."""
        return cls(
            request_id=request_id or "unknown",
            phase=trace.phase,
            newton_iterations=trace.newton_iterations,
            bracket_expansions=trace.bracket_expansions,
            bisection_iterations=trace.bisection_iterations,
        )


class AprResponse(DTO):
    """APR calculation response DTO."""

    ok: bool = True
    data: AprData
    audit: AprAudit
    debug: Optional[SolverDebug] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "ok": True,
                "data": {"i": 0.0229041, "aprPct": 27.5},
                "audit": {
                    "unitsPerYear": 12,
                    "roundingBps": 10,
                    "advances": [{"amount": 975, "t": 0, "f": 0}],
                    "payments": [
                        {"amount": 340, "t": 1, "f": 0},
                        {"amount": 340, "t": 2, "f": 0},
                        {"amount": 340, "t": 3, "f": 0},
                    ],
                },
                "debug": None,
            }
        }
    )
