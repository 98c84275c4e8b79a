"""APR computation result value objects."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SolverTrace:
    """Record of how the root finder reached its root."""

    phase: str  # Phase that produced the root
    newton_iterations: int = 0
    bracket_expansions: int = 0
    bisection_iterations: int = 0


@dataclass(frozen=True)
class RootResult:
    """Periodic rate found by the root finder."""

    rate: float
    residual: float  # NPV at the returned rate
    trace: SolverTrace


@dataclass(frozen=True)
class AprResult:
    """APR computation output."""

    i: float  # Periodic rate
    apr_pct: float  # Annual percentage rate, optionally rounded
    trace: SolverTrace
    rounding_bps: Optional[int] = None  # Resolution actually applied

    @property
    def apr_decimal(self) -> float:
        """Get APR as decimal (e.g., 0.10 for 10%)."""
        return self.apr_pct / 100
