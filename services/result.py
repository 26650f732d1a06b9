"""
Result type for wheel operations that may be declined without raising.

Spin and edit requests are resolved by policy rather than exceptions: a spin
while the wheel is already turning, or on a wheel with fewer than two
segments, simply does not start. Result carries that outcome back to callers.

Usage:
    result = controller.spin()
    if result:
        plan = result.value
    elif result.error_code == error_codes.SPIN_IN_PROGRESS:
        ...
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a wheel operation.

    Attributes:
        success: Whether the operation took effect
        value: Payload on success (None for void operations)
        error: Human-readable reason when declined
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
