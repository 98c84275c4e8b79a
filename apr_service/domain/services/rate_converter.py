"""Periodic-to-annual rate conversion and rounding."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional


def annualize(periodic_rate: float, units_per_year: float) -> float:
    """Convert a periodic rate to an annual percentage rate (e.g., 27.48 for 27.48%)."""
    return periodic_rate * units_per_year * 100


def round_apr(apr_pct: float, rounding_bps: Optional[int]) -> float:
    """
    Snap an annual percentage rate to the nearest multiple of rounding_bps / 100.

    Ties round away from zero. Decimal arithmetic keeps the snapped value the
    closest float to the exact multiple, so rounding twice changes nothing.
    A missing or zero resolution returns the rate unrounded.

    Args:
        apr_pct: Annual percentage rate
        rounding_bps: Resolution in basis points (10 -> steps of 0.10 points)

    Returns:
        Rounded annual percentage rate
    """
    if not rounding_bps:
        return apr_pct
    step = Decimal(int(rounding_bps)) / Decimal(100)
    steps = (Decimal(repr(apr_pct)) / step).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return float(steps * step)


def convert_rate(periodic_rate: float, units_per_year: float, rounding_bps: Optional[int] = None) -> float:
    """Annualize a periodic rate and apply the optional rounding resolution."""
    return round_apr(annualize(periodic_rate, units_per_year), rounding_bps)
