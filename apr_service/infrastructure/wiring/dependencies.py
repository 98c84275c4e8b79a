"""Dependency injection factory functions."""

from apr_service.application.use_cases.build_payment_schedule import BuildPaymentSchedule
from apr_service.application.use_cases.check_disclosure import CheckDisclosure
from apr_service.application.use_cases.compute_apr import ComputeApr
from apr_service.domain.services.root_finder import RootFinder, RootFinderConfig
from apr_service.infrastructure.config.settings import settings
from apr_service.infrastructure.logging.logger import log_event


def create_root_finder() -> RootFinder:
    """
    Factory function to create root finder.

    Returns:
        RootFinder configured from settings
    """
    config = RootFinderConfig(
        tolerance=settings.solver_tolerance,
        relative_tolerance=settings.solver_relative_tolerance,
        newton_max_iterations=settings.solver_newton_max_iterations,
        bracket_max_expansions=settings.solver_bracket_max_expansions,
        bisection_max_iterations=settings.solver_bisection_max_iterations,
        rate_floor=settings.solver_rate_floor,
        rate_ceiling=settings.solver_rate_ceiling,
    )
    return RootFinder(config)


def create_compute_apr_use_case() -> ComputeApr:
    """
    Factory function to create ComputeApr with dependencies.

    Returns:
        ComputeApr instance
    """

    # Wire logger function
    def _logger_func(request_id, component, **kwargs):
        log_event(request_id, component, **kwargs)

    return ComputeApr(
        create_root_finder(),
        default_rounding_bps=settings.default_rounding_bps,
        logger=_logger_func,
    )


def create_build_schedule_use_case() -> BuildPaymentSchedule:
    """
    Factory function to create BuildPaymentSchedule with dependencies.

    Returns:
        BuildPaymentSchedule instance
    """
    return BuildPaymentSchedule(
        create_compute_apr_use_case(),
        max_payments=settings.max_schedule_payments,
    )


def create_disclosure_check_use_case() -> CheckDisclosure:
    """
    Factory function to create CheckDisclosure with dependencies.

    Returns:
        CheckDisclosure instance
    """
    return CheckDisclosure(
        create_build_schedule_use_case(),
        regular_tolerance=settings.regular_loan_apr_tolerance,
        irregular_tolerance=settings.irregular_loan_apr_tolerance,
        regular_max_streams=settings.regular_loan_max_streams,
    )
