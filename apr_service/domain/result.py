"""Tagged success/failure result."""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from apr_service.domain.errors import ValidationError

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a validation step.

    Exactly one of ``value`` and ``error`` is set. Use ``Result.ok`` and
    ``Result.fail`` to build one, and ``unwrap`` to get the value or raise
    the carried error.
    """

    success: bool
    value: Optional[T] = None
    error: Optional[ValidationError] = None

    @classmethod
    def ok(cls, value: T) -> "Result[T]":
        """Create a successful result."""
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: ValidationError) -> "Result[T]":
        """Create a failed result."""
        return cls(success=False, error=error)

    def __bool__(self) -> bool:
        return self.success

    def unwrap(self) -> T:
        """
        Get the value, raising the carried error if the result failed.

        Raises:
            ValidationError: If the result is a failure
        """
        if not self.success:
            raise self.error
        return self.value
