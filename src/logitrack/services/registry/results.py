"""Outcome values returned by registry operations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    NOT_FOUND = "NotFound"
    CAPACITY_EXCEEDED = "CapacityExceeded"
    DRIVER_OCCUPIED = "DriverOccupied"
    INVALID_STATE = "InvalidState"
    NO_ROUTE = "NoRoute"


@dataclass(slots=True, frozen=True)
class RegistryError:
    kind: ErrorKind
    message: str

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


class RegistryOperationError(Exception):
    """Raised by `Result.unwrap()` when the operation failed."""

    def __init__(self, error: RegistryError) -> None:
        super().__init__(str(error))
        self.error = error

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind


@dataclass(slots=True, frozen=True)
class Result(Generic[T]):
    """Either a value or a `RegistryError`, never both.

    Registry operations report domain failures through this container so
    callers can branch per call without exception handling.
    """

    value: Optional[T] = None
    error: Optional[RegistryError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "Result[T]":
        return cls(error=RegistryError(kind=kind, message=message))

    def unwrap(self) -> Optional[T]:
        if self.error is not None:
            raise RegistryOperationError(self.error)
        return self.value
