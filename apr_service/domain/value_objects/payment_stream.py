"""Payment stream value objects."""

from dataclasses import dataclass
from enum import Enum


class Frequency(str, Enum):
    """Unit period of a payment schedule."""

    MONTHLY = "monthly"
    MULTIPLE_MONTHS = "multiple_months"
    SEMI_MONTHLY = "semi_monthly"
    ACTUAL_DAYS = "actual_days"

    @property
    def is_month_based(self) -> bool:
        """Whether odd days are measured against a 30-day month."""
        return self is not Frequency.ACTUAL_DAYS


@dataclass(frozen=True)
class PaymentStream:
    """Run of equal payments at a fixed spacing of unit periods."""

    amount: float
    count: int
    unit_periods: int = 1  # Unit periods between payments (3 for quarterly on a monthly unit)
    odd_days: float = 0.0  # Extra days before the first payment

    def __post_init__(self) -> None:
        """Validate payment stream."""
        if self.count < 0:
            raise ValueError("Payment count cannot be negative")
        if self.odd_days < 0:
            raise ValueError("Odd days cannot be negative")
