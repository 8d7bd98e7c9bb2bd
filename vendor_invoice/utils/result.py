"""Explicit success/failure return values."""
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Result(Generic[T, E]):
    """
    Outcome of an operation that can fail without raising.

    Exactly one of ``value`` and ``error`` is set.
    """
    value: Optional[T] = None
    error: Optional[E] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T, E]":
        """Factory for successful results."""
        return cls(value=value)

    @classmethod
    def failure(cls, error: E) -> "Result[T, E]":
        """Factory for failed results."""
        return cls(error=error)
