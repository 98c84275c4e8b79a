"""HTTP routes."""

from uuid import uuid4

from fastapi import APIRouter, HTTPException, status

from apr_service.application.dtos.apr import (
    AprAudit,
    AprData,
    AprRequest,
    AprResponse,
    SolverDebug,
)
from apr_service.application.dtos.disclosure import DisclosureCheckRequest, DisclosureCheckResponse
from apr_service.application.dtos.schedule import ScheduleRequest, ScheduleResponse
from apr_service.domain.errors import AprCalculationError, NonConvergenceError, ValidationError
from apr_service.domain.services.root_finder import SolverPhase
from apr_service.infrastructure.config.settings import settings
from apr_service.infrastructure.logging.logger import (
    log_apr_request,
    log_disclosure_check,
    log_event,
    log_schedule_request,
)
from apr_service.infrastructure.wiring.dependencies import (
    create_build_schedule_use_case,
    create_compute_apr_use_case,
    create_disclosure_check_use_case,
)

router = APIRouter()

# Create use case instances (wired with dependencies)
_compute_apr_use_case = create_compute_apr_use_case()
_build_schedule_use_case = create_build_schedule_use_case()
_disclosure_check_use_case = create_disclosure_check_use_case()

# A bracketing failure means no root exists at or above the rate floor;
# a narrowing failure means a root was bracketed but not reached
_NON_CONVERGENCE_MESSAGES = {
    SolverPhase.BRACKETING.value: (
        f"No APR root at or above the admissible periodic rate floor {settings.solver_rate_floor}"
    ),
    SolverPhase.NARROWING.value: "APR calculation did not converge",
}


def _to_http_error(err: AprCalculationError) -> HTTPException:
    """
    Map a calculation error to an HTTP error.

    Validation errors are the caller's to fix (400); a schedule the solver
    cannot solve is a server-side computation failure (500).
    """
    if isinstance(err, ValidationError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"field": err.field, "message": err.reason},
        )
    if isinstance(err, NonConvergenceError):
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "message": _NON_CONVERGENCE_MESSAGES.get(err.phase, "APR calculation did not converge"),
                "phase": err.phase,
            },
        )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"message": err.message},
    )


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check() -> dict[str, str]:
    """
    Health check endpoint for liveness/readiness.

    Returns:
        Health status
    """
    return {"status": "ok"}


@router.post("/calc/apr", status_code=status.HTTP_200_OK, response_model=AprResponse)
async def calculate_apr(request: AprRequest) -> AprResponse:
    """
    Compute the APR of a schedule of advances and payments.

    Args:
        request: Advances, payments, unit periods per year and optional rounding

    Returns:
        Periodic rate and APR, with an audit echo of the inputs

    Raises:
        HTTPException: 400 on invalid input, 500 if no root is found
    """
    # Generate request_id for correlation
    request_id = str(uuid4())

    log_apr_request(
        request_id=request_id,
        advances_count=len(request.advances),
        payments_count=len(request.payments),
        units_per_year=request.units_per_year,
        rounding_bps=request.rounding_bps,
    )

    try:
        result = _compute_apr_use_case.execute(request.to_domain(), request_id=request_id)
    except AprCalculationError as err:
        raise _to_http_error(err) from err

    debug = SolverDebug.from_trace(result.trace, request_id) if settings.debug_mode else None

    return AprResponse(
        data=AprData(i=result.i, apr_pct=result.apr_pct),
        audit=AprAudit(
            units_per_year=request.units_per_year,
            rounding_bps=result.rounding_bps,
            advances=request.advances,
            payments=request.payments,
        ),
        debug=debug,
    )


@router.post("/calc/schedule", status_code=status.HTTP_200_OK, response_model=ScheduleResponse)
async def calculate_schedule(request: ScheduleRequest) -> ScheduleResponse:
    """
    Compute the APR of a single-advance loan described by payment streams.

    Args:
        request: Amount financed, frequency and payment streams

    Returns:
        APR, generated cashflows and disclosure figures

    Raises:
        HTTPException: 400 on invalid input, 500 if no root is found
    """
    request_id = str(uuid4())

    log_schedule_request(
        request_id=request_id,
        frequency=request.frequency.value,
        streams_count=len(request.streams),
        amount_financed=request.amount_financed,
    )

    try:
        return _build_schedule_use_case.execute(
            request,
            request_id=request_id,
            include_debug=settings.debug_mode,
        )
    except AprCalculationError as err:
        raise _to_http_error(err) from err


@router.post(
    "/calc/disclosure-check",
    status_code=status.HTTP_200_OK,
    response_model=DisclosureCheckResponse,
)
async def check_disclosure(request: DisclosureCheckRequest) -> DisclosureCheckResponse:
    """
    Check disclosed APR, finance charge and total of payments against a schedule.

    Args:
        request: Schedule plus the disclosed figures

    Returns:
        Calculated figures and tolerance checks

    Raises:
        HTTPException: 400 on invalid input, 500 if no root is found
    """
    request_id = str(uuid4())

    log_event(
        request_id=request_id,
        component="http",
        endpoint="disclosure_check",
        loan_type=request.loan_type.value,
        streams_count=len(request.streams),
    )

    try:
        response = _disclosure_check_use_case.execute(request, request_id=request_id)
    except AprCalculationError as err:
        raise _to_http_error(err) from err

    log_disclosure_check(
        request_id=request_id,
        regular_loan=response.regular_loan,
        within_tolerance=response.apr_check.within_tolerance if response.apr_check else None,
    )

    return response
