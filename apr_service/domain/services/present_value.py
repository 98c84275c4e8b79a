"""Present-value functional of an APR schedule."""

import math
from collections.abc import Sequence
from dataclasses import dataclass

from apr_service.domain.value_objects.cashflow import Cashflow


@dataclass(frozen=True)
class PresentValueFunctional:
    """
    Net present value of advances minus payments as a function of the periodic rate.

        NPV(i)  = sum_adv A / (1+i)^(t+f) - sum_pay P / (1+i)^(t+f)
        NPV'(i) = -sum_adv (t+f) A / (1+i)^(t+f+1) + sum_pay (t+f) P / (1+i)^(t+f+1)

    NPV(i) == 0 is the equality of discounted advances and discounted payments.
    Both methods reject rates with 1 + i <= 0. Terms are summed with math.fsum,
    so the rounding error of a sum stays proportional to the size of its
    terms rather than to their count. A discount factor too large for a float
    raises OverflowError, which callers treat as an unusable rate.
    """

    advances: tuple[Cashflow, ...]
    payments: tuple[Cashflow, ...]

    @classmethod
    def build(
        cls, advances: Sequence[Cashflow], payments: Sequence[Cashflow]
    ) -> "PresentValueFunctional":
        """Build the functional from validated schedules."""
        return cls(advances=tuple(advances), payments=tuple(payments))

    @staticmethod
    def _check_domain(rate: float) -> float:
        base = 1.0 + rate
        if not base > 0:
            raise ValueError(f"Rate {rate!r} is outside the domain 1 + i > 0")
        return base

    def value(self, rate: float) -> float:
        """Evaluate NPV(i)."""
        base = self._check_domain(rate)
        terms = [cashflow.amount * base ** -cashflow.time for cashflow in self.advances]
        terms.extend(-cashflow.amount * base ** -cashflow.time for cashflow in self.payments)
        return math.fsum(terms)

    def derivative(self, rate: float) -> float:
        """Evaluate NPV'(i)."""
        base = self._check_domain(rate)
        terms = [
            -cashflow.time * cashflow.amount * base ** -(cashflow.time + 1)
            for cashflow in self.advances
        ]
        terms.extend(
            cashflow.time * cashflow.amount * base ** -(cashflow.time + 1)
            for cashflow in self.payments
        )
        return math.fsum(terms)

    @property
    def total_advances(self) -> float:
        return math.fsum(cashflow.amount for cashflow in self.advances)

    @property
    def total_payments(self) -> float:
        return math.fsum(cashflow.amount for cashflow in self.payments)

    @property
    def scale(self) -> float:
        """Get the undiscounted size of the schedule (advances plus payments)."""
        return self.total_advances + self.total_payments

    @staticmethod
    def _weighted_time(cashflows: tuple[Cashflow, ...]) -> float:
        total = math.fsum(cashflow.amount for cashflow in cashflows)
        return math.fsum(cashflow.amount * cashflow.time for cashflow in cashflows) / total

    @property
    def advances_mean_time(self) -> float:
        """Get the amount-weighted average time of the advances."""
        return self._weighted_time(self.advances)

    @property
    def payments_mean_time(self) -> float:
        """Get the amount-weighted average time of the payments."""
        return self._weighted_time(self.payments)
