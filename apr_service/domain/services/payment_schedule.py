"""Expansion of payment streams into APR cashflows."""

import math
from collections.abc import Sequence

from apr_service.domain.value_objects.cashflow import Cashflow
from apr_service.domain.value_objects.payment_stream import Frequency, PaymentStream

# Appendix J treats every month as 30 days when measuring odd days
DAYS_PER_MONTH = 30
DAYS_PER_YEAR = 365
# Largest fraction of a unit period accepted as odd days
MAX_PERIOD_FRACTION = 0.9999999999
# Most payments one schedule may expand to (daily payments for ten years)
MAX_SCHEDULE_PAYMENTS = 3660


def units_per_year(
    frequency: Frequency,
    months_per_unit: float = 1,
    days_in_unit: float = DAYS_PER_MONTH,
) -> int:
    """
    Get the number of unit periods in one year for a payment frequency.

    Args:
        frequency: Unit period of the schedule
        months_per_unit: Months per unit period (MULTIPLE_MONTHS only)
        days_in_unit: Days per unit period (ACTUAL_DAYS only)

    Returns:
        Unit periods per year (12, 24, 12 / months or 365 / days)
    """
    if frequency is Frequency.MULTIPLE_MONTHS:
        months = max(1.0, months_per_unit or 1)
        return max(1, math.floor(12 / months))
    if frequency is Frequency.SEMI_MONTHLY:
        return 24
    if frequency is Frequency.ACTUAL_DAYS:
        days = max(1.0, days_in_unit or 1)
        units = math.floor(DAYS_PER_YEAR / days)
        return units if units > 0 else DAYS_PER_YEAR
    return 12


def odd_days_fraction(odd_days: float, frequency: Frequency, days_in_unit: float = DAYS_PER_MONTH) -> float:
    """Convert odd days into a fraction of a unit period in [0, 1)."""
    denominator = DAYS_PER_MONTH if frequency.is_month_based else max(1.0, days_in_unit or 1)
    return min(MAX_PERIOD_FRACTION, max(0.0, odd_days / denominator))


def build_payment_cashflows(
    streams: Sequence[PaymentStream],
    frequency: Frequency,
    days_in_unit: float = DAYS_PER_MONTH,
    max_payments: int = MAX_SCHEDULE_PAYMENTS,
) -> list[Cashflow]:
    """
    Expand payment streams into dated payment cashflows.

    Payment k of a stream (k = 1..count) falls at t = unit_periods * k. Only
    the first payment of each stream carries the odd-days fraction.

    Args:
        streams: Payment streams in schedule order
        frequency: Unit period of the schedule
        days_in_unit: Days per unit period (ACTUAL_DAYS only)
        max_payments: Most payments the streams may expand to

    Returns:
        Payment cashflows in stream order

    Raises:
        ValueError: If the streams hold more than max_payments payments
    """
    total = sum(stream.count for stream in streams)
    if total > max_payments:
        raise ValueError(f"Schedule has {total} payments, more than the limit of {max_payments}")

    cashflows = []
    for stream in streams:
        spacing = max(1, int(stream.unit_periods or 1))
        first_fraction = odd_days_fraction(stream.odd_days, frequency, days_in_unit)
        for k in range(1, stream.count + 1):
            cashflows.append(
                Cashflow(
                    amount=stream.amount,
                    t=spacing * k,
                    f=first_fraction if k == 1 else 0.0,
                )
            )
    return cashflows
