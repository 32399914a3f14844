# src/core/results.py

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class FailureReason(str, Enum):
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    OTHER = "other"


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """
    Outcome of an external call: either a value or a tagged failure.
    Callers branch on `failure` instead of inspecting transport errors.
    """

    value: Optional[T] = None
    failure: Optional[FailureReason] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, value: T) -> "FetchResult[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, reason: FailureReason, message: Optional[str] = None) -> "FetchResult[T]":
        return cls(failure=reason, message=message)
