"""Success/failure value returned across the caller boundary."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from smartcart.domain.exceptions import DomainException, ErrorKind

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a value or the DomainException that prevented it."""

    value: T | None = None
    error: DomainException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> ErrorKind | None:
        return self.error.kind if self.error is not None else None

    def unwrap(self) -> T:
        """Return the value or re-raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    @staticmethod
    def success(value: T) -> Result[T]:
        return Result(value=value)

    @staticmethod
    def failure(error: DomainException) -> Result[T]:
        return Result(error=error)
