"""Disclosure figures value object."""

from dataclasses import dataclass
from enum import Enum


class LoanType(str, Enum):
    """Loan structure used to pick the disclosed APR tolerance."""

    INSTALLMENT = "installment"
    SINGLE_ADVANCE_SINGLE_PAYMENT = "single_advance_single_payment"


@dataclass(frozen=True)
class DisclosureFigures:
    """Amount financed, finance charge and total of payments of a schedule."""

    amount_financed: float
    finance_charge: float
    total_of_payments: float

    @classmethod
    def from_totals(cls, amount_financed: float, total_of_payments: float) -> "DisclosureFigures":
        """Build figures from undiscounted totals, rounded to cents."""
        finance_charge = max(0.0, total_of_payments - amount_financed)
        return cls(
            amount_financed=round(amount_financed, 2),
            finance_charge=round(finance_charge, 2),
            total_of_payments=round(total_of_payments, 2),
        )
