"""Input validation for APR requests."""

import math
from collections.abc import Sequence
from typing import Optional

from apr_service.domain.errors import ValidationError
from apr_service.domain.result import Result
from apr_service.domain.value_objects.apr_input import AprInput
from apr_service.domain.value_objects.cashflow import Cashflow


def _is_integer(value: object) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value) and value.is_integer()


def _check_cashflow(cashflow: Cashflow, field: str) -> Optional[ValidationError]:
    amount = cashflow.amount
    if not isinstance(amount, (int, float)) or not math.isfinite(amount) or amount <= 0:
        return ValidationError(f"{field}.amount", "must be a finite number greater than 0")
    if not _is_integer(cashflow.t) or cashflow.t < 0:
        return ValidationError(f"{field}.t", "must be a non-negative integer")
    f = cashflow.f
    if not isinstance(f, (int, float)) or not math.isfinite(f) or not 0 <= f < 1:
        return ValidationError(f"{field}.f", "must be in [0, 1)")
    return None


def _check_schedule(cashflows: Sequence[Cashflow], name: str) -> Optional[ValidationError]:
    for index, cashflow in enumerate(cashflows):
        error = _check_cashflow(cashflow, f"{name}[{index}]")
        if error is not None:
            return error
    return None


def validate_apr_input(apr_input: AprInput) -> Result[AprInput]:
    """
    Validate an APR request without raising.

    Checks run in a fixed order and stop at the first offending field:
    non-empty schedules, then every advance and payment (amount, t, f),
    then units per year, then rounding resolution.

    Args:
        apr_input: Request to validate

    Returns:
        Result carrying the unchanged input, or the first ValidationError
    """
    if not apr_input.advances:
        return Result.fail(ValidationError("advances", "must contain at least one cashflow"))
    if not apr_input.payments:
        return Result.fail(ValidationError("payments", "must contain at least one cashflow"))

    for cashflows, name in ((apr_input.advances, "advances"), (apr_input.payments, "payments")):
        error = _check_schedule(cashflows, name)
        if error is not None:
            return Result.fail(error)

    units = apr_input.units_per_year
    if (
        isinstance(units, bool)
        or not isinstance(units, (int, float))
        or not math.isfinite(units)
        or units <= 0
    ):
        return Result.fail(ValidationError("unitsPerYear", "must be a finite number greater than 0"))

    if apr_input.rounding_bps is not None:
        if not _is_integer(apr_input.rounding_bps) or apr_input.rounding_bps < 0:
            return Result.fail(ValidationError("roundingBps", "must be a non-negative integer"))

    return Result.ok(apr_input)


def ensure_valid(apr_input: AprInput) -> AprInput:
    """
    Validate an APR request, raising on the first offending field.

    Raises:
        ValidationError: If any invariant is violated
    """
    return validate_apr_input(apr_input).unwrap()
