"""Unit tests for dependency factories and settings."""

from unittest.mock import patch

import pytest

from apr_service.application.dtos.schedule import PaymentStreamPayload, ScheduleRequest
from apr_service.application.use_cases.check_disclosure import CheckDisclosure
from apr_service.domain.errors import ValidationError
from apr_service.domain.value_objects.apr_input import AprInput
from apr_service.domain.value_objects.cashflow import Cashflow
from apr_service.infrastructure.config.settings import Settings, settings
from apr_service.infrastructure.wiring.dependencies import (
    create_build_schedule_use_case,
    create_compute_apr_use_case,
    create_disclosure_check_use_case,
    create_root_finder,
)


def test_settings_defaults():
    """Test default solver settings."""
    defaults = Settings(_env_file=None)

    assert defaults.debug_mode is False
    assert defaults.solver_tolerance == 1e-9
    assert defaults.solver_newton_max_iterations == 100
    assert defaults.solver_rate_floor == -0.99
    assert defaults.default_rounding_bps is None
    assert defaults.solver_relative_tolerance == 1e-13
    assert defaults.max_schedule_payments == 3660


def test_settings_read_environment(monkeypatch):
    """Test that settings are read case-insensitively from the environment."""
    monkeypatch.setenv("SOLVER_TOLERANCE", "1e-7")
    monkeypatch.setenv("default_rounding_bps", "10")

    configured = Settings(_env_file=None)

    assert configured.solver_tolerance == 1e-7
    assert configured.default_rounding_bps == 10


def test_create_root_finder_uses_settings():
    """Test that the root finder is configured from settings."""
    with patch.object(settings, "solver_tolerance", 1e-6), patch.object(
        settings, "solver_bisection_max_iterations", 50
    ):
        finder = create_root_finder()

    assert finder.config.tolerance == 1e-6
    assert finder.config.bisection_max_iterations == 50


def test_create_compute_apr_use_case_applies_default_rounding():
    """Test that the default rounding from settings is wired in."""
    with patch.object(settings, "default_rounding_bps", 10):
        use_case = create_compute_apr_use_case()

    apr_input = AprInput(
        advances=(Cashflow(975.0, 0),),
        payments=tuple(Cashflow(340.0, t) for t in (1, 2, 3)),
        units_per_year=12,
    )
    assert use_case.execute(apr_input).apr_pct == 27.5


def test_create_disclosure_check_use_case_uses_tolerances():
    """Test that disclosure tolerances come from settings."""
    with patch.object(settings, "regular_loan_apr_tolerance", 0.05):
        use_case = create_disclosure_check_use_case()

    assert isinstance(use_case, CheckDisclosure)
    assert use_case.tolerance_for(True) == 0.05
    assert use_case.tolerance_for(False) == 0.25


def test_create_root_finder_uses_relative_tolerance():
    """Test that the relative tolerance is configured from settings."""
    with patch.object(settings, "solver_relative_tolerance", 1e-11):
        finder = create_root_finder()

    assert finder.config.relative_tolerance == 1e-11


def test_create_build_schedule_use_case_limits_payments():
    """Test that the payment limit comes from settings."""
    with patch.object(settings, "max_schedule_payments", 12):
        use_case = create_build_schedule_use_case()

    request = ScheduleRequest(
        amount_financed=1000.0,
        streams=[PaymentStreamPayload(amount=100.0, count=13)],
    )
    with pytest.raises(ValidationError) as exc_info:
        use_case.to_apr_input(request)

    assert exc_info.value.field == "streams[0].count"
