"""Structured logger for observability."""

import logging
from typing import Any, Optional

from apr_service.infrastructure.config.settings import settings

# Configure package logger with key=value structured format
_logger = logging.getLogger("apr_service")
_logger.setLevel(settings.log_level.upper())

# Create console handler if not exists
if not _logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    _logger.addHandler(handler)


def log_event(
    request_id: str,
    component: str,
    level: int = logging.INFO,
    **kwargs: Any,
) -> None:
    """
    Log structured event for a calculation request.

    Args:
        request_id: Request identifier (UUID string)
        component: Component name (e.g., 'http', 'validator', 'solver')
        level: Log level (default: INFO)
        **kwargs: Additional structured fields to log
    """
    fields = {
        "request_id": request_id,
        "component": component,
    }
    fields.update(kwargs)

    # Format as key=value pairs for readability
    log_parts = [f"{k}={v!r}" for k, v in fields.items()]
    _logger.log(level, " | ".join(log_parts))


def log_apr_request(
    request_id: str,
    advances_count: int,
    payments_count: int,
    units_per_year: float,
    rounding_bps: Optional[int] = None,
    **kwargs: Any,
) -> None:
    """
    Log incoming APR calculation request.

    Args:
        request_id: Request identifier
        advances_count: Number of advances in the schedule
        payments_count: Number of payments in the schedule
        units_per_year: Unit periods per year
        rounding_bps: Rounding resolution in basis points
        **kwargs: Additional fields
    """
    log_event(
        request_id=request_id,
        component="http",
        advances_count=advances_count,
        payments_count=payments_count,
        units_per_year=units_per_year,
        rounding_bps=rounding_bps,
        **kwargs,
    )


def log_schedule_request(
    request_id: str,
    frequency: str,
    streams_count: int,
    amount_financed: float,
    **kwargs: Any,
) -> None:
    """
    Log incoming payment-stream schedule request.

    Args:
        request_id: Request identifier
        frequency: Unit period of the schedule
        streams_count: Number of payment streams
        amount_financed: Single advance at t=0
        **kwargs: Additional fields
    """
    log_event(
        request_id=request_id,
        component="schedule",
        frequency=frequency,
        streams_count=streams_count,
        amount_financed=amount_financed,
        **kwargs,
    )


def log_disclosure_check(
    request_id: str,
    regular_loan: bool,
    within_tolerance: Optional[bool] = None,
    **kwargs: Any,
) -> None:
    """Log the outcome of a disclosed APR tolerance check."""
    log_event(
        request_id=request_id,
        component="disclosure",
        regular_loan=regular_loan,
        apr_within_tolerance=within_tolerance,
        **kwargs,
    )


# Export logger instance
logger = _logger
