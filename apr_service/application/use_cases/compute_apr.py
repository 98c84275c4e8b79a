"""Compute APR use case."""

import logging
from typing import Any, Callable, Optional

from apr_service.domain.errors import NonConvergenceError, ValidationError
from apr_service.domain.services.input_validator import validate_apr_input
from apr_service.domain.services.present_value import PresentValueFunctional
from apr_service.domain.services.rate_converter import convert_rate
from apr_service.domain.services.root_finder import RootFinder
from apr_service.domain.value_objects.apr_input import AprInput
from apr_service.domain.value_objects.apr_result import AprResult


class ComputeApr:
    """Use case running the validate, build, solve and convert pipeline."""

    def __init__(
        self,
        root_finder: Optional[RootFinder] = None,
        default_rounding_bps: Optional[int] = None,
        logger: Optional[Callable[..., None]] = None,
    ) -> None:
        """
        Initialize compute APR use case.

        Args:
            root_finder: Root finder to solve with (default: RootFinder())
            default_rounding_bps: Rounding applied when a request carries none
            logger: Optional logger function (request_id, component, **kwargs)
        """
        self._root_finder = root_finder or RootFinder()
        self._default_rounding_bps = default_rounding_bps
        self._logger = logger

    def _log(self, request_id: str, component: str, **kwargs: Any) -> None:
        if self._logger:
            self._logger(request_id, component, **kwargs)

    def execute(self, apr_input: AprInput, request_id: Optional[str] = None) -> AprResult:
        """
        Compute the APR of a cash-flow schedule.

        Args:
            apr_input: Advances, payments, unit periods per year and rounding
            request_id: Optional request identifier for logging

        Returns:
            Periodic rate and annual percentage rate

        Raises:
            ValidationError: If the input violates an invariant
            NonConvergenceError: If the root finder cannot solve the schedule
        """
        request_id = request_id or "unknown"

        validation = validate_apr_input(apr_input)
        if not validation:
            error: ValidationError = validation.error
            self._log(request_id, "validator", field=error.field, validation_message=error.reason)
            raise error
        apr_input = validation.value

        functional = PresentValueFunctional.build(apr_input.advances, apr_input.payments)
        try:
            root = self._root_finder.solve(functional)
        except NonConvergenceError as err:
            self._log(
                request_id,
                "solver",
                level=logging.WARNING,
                solver_phase=err.phase,
                failure=err.message,
            )
            raise

        rounding_bps = apr_input.rounding_bps
        if rounding_bps is None:
            rounding_bps = self._default_rounding_bps
        if rounding_bps is not None:
            rounding_bps = int(rounding_bps)

        apr_pct = convert_rate(root.rate, apr_input.units_per_year, rounding_bps)
        self._log(
            request_id,
            "solver",
            solver_phase=root.trace.phase,
            periodic_rate=root.rate,
            apr_pct=apr_pct,
            newton_iterations=root.trace.newton_iterations,
            bracket_expansions=root.trace.bracket_expansions,
            bisection_iterations=root.trace.bisection_iterations,
        )

        return AprResult(i=root.rate, apr_pct=apr_pct, trace=root.trace, rounding_bps=rounding_bps)
