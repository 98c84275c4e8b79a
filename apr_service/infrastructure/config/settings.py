"""Application settings."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings."""

    debug_mode: bool = False
    log_level: str = "INFO"

    # Root finder
    solver_tolerance: float = 1e-9  # |NPV| in currency units
    solver_relative_tolerance: float = 1e-13  # |NPV| per unit of schedule size
    solver_newton_max_iterations: int = 100
    solver_bracket_max_expansions: int = 60
    solver_bisection_max_iterations: int = 200
    solver_rate_floor: float = -0.99
    solver_rate_ceiling: float = 10.0

    # Applied when a request omits roundingBps
    default_rounding_bps: Optional[int] = None

    # Payment streams
    max_schedule_payments: int = 3660

    # Disclosed APR tolerance in percentage points
    regular_loan_apr_tolerance: float = 0.125
    irregular_loan_apr_tolerance: float = 0.25
    regular_loan_max_streams: int = 3

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
    )


settings = Settings()
