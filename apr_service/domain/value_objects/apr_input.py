"""APR computation request value object."""

from dataclasses import dataclass
from typing import Optional

from apr_service.domain.value_objects.cashflow import Cashflow


@dataclass(frozen=True)
class AprInput:
    """APR computation request."""

    advances: tuple[Cashflow, ...]
    payments: tuple[Cashflow, ...]
    units_per_year: float
    rounding_bps: Optional[int] = None

    @property
    def amount_financed(self) -> float:
        """Get the undiscounted sum of advances."""
        return sum(cashflow.amount for cashflow in self.advances)

    @property
    def total_of_payments(self) -> float:
        """Get the undiscounted sum of payments."""
        return sum(cashflow.amount for cashflow in self.payments)
