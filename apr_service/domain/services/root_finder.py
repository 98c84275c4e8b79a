"""Periodic-rate root finder: Newton-Raphson with a bisection fallback."""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from apr_service.domain.errors import NonConvergenceError
from apr_service.domain.services.present_value import PresentValueFunctional
from apr_service.domain.value_objects.apr_result import RootResult, SolverTrace


class SolverPhase(str, Enum):
    """States of the root finder."""

    NEWTON = "newton"
    BRACKETING = "bisection_bracketing"
    NARROWING = "bisection_narrowing"


@dataclass(frozen=True)
class NewtonOutcome:
    """Exit of the Newton phase."""

    converged: bool
    rate: float  # Root if converged, otherwise the best rate seen
    residual: Optional[float]
    iterations: int


@dataclass(frozen=True)
class Bracket:
    """Rate interval whose endpoints have NPV of opposite sign."""

    lo: float
    hi: float
    f_lo: float
    f_hi: float
    expansions: int


@dataclass(frozen=True)
class RootFinderConfig:
    """Tolerance and iteration budgets of the root finder."""

    tolerance: float = 1e-9  # |NPV| in currency units
    relative_tolerance: float = 1e-13  # |NPV| per unit of undiscounted schedule size
    newton_max_iterations: int = 100
    bracket_max_expansions: int = 60
    bisection_max_iterations: int = 200
    rate_floor: float = -0.99  # Lowest admissible periodic rate
    rate_ceiling: float = 10.0  # Upper clamp of the initial guess
    min_derivative: float = 1e-12
    initial_half_width: float = 0.01

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.tolerance <= 0:
            raise ValueError("Solver tolerance must be positive")
        if self.relative_tolerance < 0:
            raise ValueError("Solver relative tolerance cannot be negative")
        if not -1 < self.rate_floor < self.rate_ceiling:
            raise ValueError("Solver rate floor must be above -1 and below the ceiling")
        budgets = (self.newton_max_iterations, self.bracket_max_expansions, self.bisection_max_iterations)
        if min(budgets) < 1:
            raise ValueError("Solver iteration budgets must be positive")


class RootFinder:
    """
    Find the periodic rate i with |NPV(i)| below the tolerance of the schedule.

    The search runs as a three-state machine: NEWTON hands over to
    BRACKETING when a step leaves the admissible domain, the derivative
    vanishes, a step fails to shrink |NPV| or the budget runs out.
    BRACKETING widens an interval around the best Newton rate until NPV
    changes sign, and NARROWING bisects it. Every state has its own
    iteration budget; exhausting one raises NonConvergenceError.
    """

    def __init__(self, config: Optional[RootFinderConfig] = None) -> None:
        """
        Initialize root finder.

        Args:
            config: Tolerance and budgets (default: RootFinderConfig())
        """
        self._config = config or RootFinderConfig()

    @property
    def config(self) -> RootFinderConfig:
        """Get root finder configuration."""
        return self._config

    def _evaluate(self, functional: PresentValueFunctional, rate: float) -> Optional[float]:
        # None marks a rate whose NPV cannot be represented as a finite float
        if rate < self._config.rate_floor:
            return None
        try:
            value = functional.value(rate)
        except (OverflowError, ValueError):
            # ValueError: fsum met +inf and -inf terms
            return None
        return value if math.isfinite(value) else None

    @staticmethod
    def _converged(residual: Optional[float], tolerance: float) -> bool:
        return residual is not None and abs(residual) < tolerance

    def tolerance_for(self, functional: PresentValueFunctional) -> float:
        """
        Get the |NPV| threshold that counts as a root for a schedule.

        The absolute tolerance applies to ordinary balances. For large
        balances the float rounding of NPV itself exceeds it, so the
        threshold grows with the undiscounted size of the schedule.
        """
        return max(self._config.tolerance, self._config.relative_tolerance * functional.scale)

    def initial_guess(self, functional: PresentValueFunctional) -> float:
        """
        Estimate a starting rate from undiscounted totals.

        Solves (1 + i)^dt = total_payments / total_advances, where dt is the
        gap between the amount-weighted average times of payments and
        advances, and clamps the result to [rate_floor, rate_ceiling].
        """
        ratio = functional.total_payments / functional.total_advances
        gap = functional.payments_mean_time - functional.advances_mean_time
        if abs(gap) < 1e-12:
            guess = ratio - 1.0
        else:
            growth = math.log(ratio) / gap
            guess = math.expm1(min(growth, math.log1p(self._config.rate_ceiling)))
        return max(self._config.rate_floor, min(self._config.rate_ceiling, guess))

    def newton(self, functional: PresentValueFunctional, guess: float) -> NewtonOutcome:
        """
        Run the Newton-Raphson phase from a starting rate.

        Returns:
            Outcome with converged=True and the root, or converged=False and
            the rate with the smallest |NPV| seen
        """
        tolerance = self.tolerance_for(functional)
        rate = guess
        residual = self._evaluate(functional, rate)
        iterations = 0

        while iterations < self._config.newton_max_iterations:
            if residual is None:
                break
            if self._converged(residual, tolerance):
                return NewtonOutcome(True, rate, residual, iterations)

            try:
                slope = functional.derivative(rate)
            except (OverflowError, ValueError):
                break
            if not math.isfinite(slope) or abs(slope) < self._config.min_derivative:
                break

            iterations += 1
            candidate = rate - residual / slope
            candidate_residual = self._evaluate(functional, candidate)
            if candidate_residual is None:
                break
            if abs(candidate_residual) >= abs(residual):
                # Divergence guard
                break
            rate, residual = candidate, candidate_residual

        if self._converged(residual, tolerance):
            return NewtonOutcome(True, rate, residual, iterations)
        return NewtonOutcome(False, rate, residual, iterations)

    def bracket(self, functional: PresentValueFunctional, center: float) -> Optional[Bracket]:
        """
        Widen an interval around a rate until NPV changes sign.

        The half-width starts at initial_half_width and doubles on every
        expansion. The upper end moves outward without limit and the lower
        end moves toward -1 but stops at rate_floor. When NPV overflows at a
        lower candidate, the lower end moves up to the lowest rate whose NPV
        is finite and stays there.

        Returns:
            Bracket with a sign change, or None when the expansion budget is
            exhausted
        """
        config = self._config
        center = max(config.rate_floor, center)
        low_limit = config.rate_floor
        half_width = config.initial_half_width
        lo = hi = center
        f_lo = f_hi = self._evaluate(functional, center)

        for expansion in range(1, config.bracket_max_expansions + 1):
            candidate_hi = center + half_width
            value = self._evaluate(functional, candidate_hi)
            if value is not None:
                hi, f_hi = candidate_hi, value

            candidate_lo = max(low_limit, center - half_width)
            value = self._evaluate(functional, candidate_lo)
            if value is None and f_hi is not None and candidate_lo < hi:
                candidate_lo, value = self._lowest_finite(functional, candidate_lo, hi, f_hi)
                low_limit = candidate_lo
            if value is not None:
                lo, f_lo = candidate_lo, value

            if f_lo is not None and f_hi is not None and lo < hi:
                if f_lo == 0.0 or f_hi == 0.0 or (f_lo < 0) != (f_hi < 0):
                    return Bracket(lo, hi, f_lo, f_hi, expansion)

            half_width *= 2.0

        return None

    def _lowest_finite(
        self,
        functional: PresentValueFunctional,
        overflowing: float,
        finite: float,
        f_finite: float,
    ) -> tuple[float, float]:
        # Bisect the boundary between a rate whose NPV overflows and a higher
        # rate whose NPV is finite; returns the lowest finite rate found
        for _ in range(self._config.bisection_max_iterations):
            mid = (overflowing + finite) / 2.0
            if mid <= overflowing or mid >= finite:
                break
            value = self._evaluate(functional, mid)
            if value is None:
                overflowing = mid
            else:
                finite, f_finite = mid, value
        return finite, f_finite

    def narrow(self, functional: PresentValueFunctional, bracket: Bracket) -> tuple[float, float, int]:
        """
        Bisect a bracket until |NPV(mid)| is below the tolerance of the schedule.

        Returns:
            Tuple of (rate, residual, iterations)

        Raises:
            NonConvergenceError: If the budget runs out or the bracket
                collapses to adjacent floats first
        """
        tolerance = self.tolerance_for(functional)
        lo, hi, f_lo = bracket.lo, bracket.hi, bracket.f_lo
        if self._converged(f_lo, tolerance):
            return lo, f_lo, 0
        if self._converged(bracket.f_hi, tolerance):
            return hi, bracket.f_hi, 0

        for iteration in range(1, self._config.bisection_max_iterations + 1):
            mid = (lo + hi) / 2.0
            if mid <= lo or mid >= hi:
                break
            f_mid = self._evaluate(functional, mid)
            if f_mid is None:
                break
            if self._converged(f_mid, tolerance):
                return mid, f_mid, iteration
            if (f_lo < 0) == (f_mid < 0):
                lo, f_lo = mid, f_mid
            else:
                hi = mid

        raise NonConvergenceError(
            "Bisection did not reach the tolerance within its iteration budget",
            phase=SolverPhase.NARROWING.value,
        )

    def solve(self, functional: PresentValueFunctional) -> RootResult:
        """
        Find the periodic rate that zeroes the functional.

        Args:
            functional: Present-value functional of a validated schedule

        Returns:
            Root with its residual and a trace of the phases that ran

        Raises:
            NonConvergenceError: If no phase reaches the tolerance
        """
        phase = SolverPhase.NEWTON
        rate = self.initial_guess(functional)
        newton_iterations = 0
        found: Optional[Bracket] = None

        while True:
            if phase is SolverPhase.NEWTON:
                outcome = self.newton(functional, rate)
                newton_iterations = outcome.iterations
                if outcome.converged:
                    trace = SolverTrace(phase.value, newton_iterations=newton_iterations)
                    return RootResult(outcome.rate, outcome.residual, trace)
                rate = outcome.rate
                phase = SolverPhase.BRACKETING

            elif phase is SolverPhase.BRACKETING:
                found = self.bracket(functional, rate)
                if found is None:
                    raise NonConvergenceError(
                        f"No root at or above the admissible rate floor {self._config.rate_floor}",
                        phase=phase.value,
                    )
                phase = SolverPhase.NARROWING

            else:
                root, residual, iterations = self.narrow(functional, found)
                trace = SolverTrace(
                    phase.value,
                    newton_iterations=newton_iterations,
                    bracket_expansions=found.expansions,
                    bisection_iterations=iterations,
                )
                return RootResult(root, residual, trace)
