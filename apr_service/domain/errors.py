"""Domain errors raised by the APR pipeline."""

from typing import Any, Optional


class AprCalculationError(Exception):
    """Base exception for all APR calculation errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class ValidationError(AprCalculationError, ValueError):
    """Raised when an APR request violates an input invariant."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}", {"field": field})
        self.field = field
        self.reason = message


class NonConvergenceError(AprCalculationError, ArithmeticError):
    """Raised when the root finder exhausts its budget without a root."""

    def __init__(self, message: str, phase: Optional[str] = None) -> None:
        details = {"phase": phase} if phase else None
        super().__init__(message, details)
        self.phase = phase
