"""
Result type returned by the team generation service.

Generation failures (nothing selected, unsupported team size) are expected,
user-facing outcomes rather than crashes, so they are returned as values:

    result = service.generate_teams(roster, selection, team_size=2)
    if result:
        show(result.value)
    elif result.error_code == UNSUPPORTED_TEAM_SIZE:
        ...
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Success/failure outcome of a service call.

    Attributes:
        success: Whether the operation succeeded
        value: Payload on success (None on failure)
        error: Human-readable failure message
        error_code: Stable code from services.error_codes
    """

    success: bool
    value: T | None = None
    error: str | None = None
    error_code: str | None = None

    @classmethod
    def ok(cls, value: T | None = None) -> "Result[T]":
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: str, code: str | None = None) -> "Result[T]":
        return cls(success=False, error=error, error_code=code)

    def __bool__(self) -> bool:
        return self.success

    def unwrap(self) -> T:
        """
        Return the value of a successful result.

        Raises:
            ValueError: If the result is a failure
        """
        if not self.success:
            raise ValueError(f"Cannot unwrap failed result ({self.error_code}): {self.error}")
        return self.value  # type: ignore[return-value]

    def unwrap_or(self, default: T) -> T:
        return self.value if self.success else default  # type: ignore[return-value]

    def map(self, fn: Callable[[T], U]) -> "Result[U]":
        """Transform the value of a success; failures pass through unchanged."""
        if not self.success:
            return Result(success=False, error=self.error, error_code=self.error_code)
        return Result.ok(fn(self.value))  # type: ignore[arg-type]
