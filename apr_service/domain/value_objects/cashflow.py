"""Cashflow value object."""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Cashflow:
    """One dated monetary movement of an APR schedule."""

    amount: float
    t: Union[int, float]  # Whole unit periods from the reference date
    f: float = 0.0  # Fractional unit period added to t (odd days)

    @property
    def time(self) -> float:
        """Get the effective time in unit periods (t + f)."""
        return self.t + self.f
