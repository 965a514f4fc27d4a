"""Result types returned by the service layer.

Expected outcomes (bad input, unknown short url, no free alias) come back as
a ``ServiceResult`` carrying a ``ServiceError``. Anything raised is unexpected.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Kinds of expected service failures."""

    INVALID_URL = "invalid_url"
    NOT_FOUND = "not_found"
    ALIAS_UNAVAILABLE = "alias_unavailable"
    ATTEMPTS_EXHAUSTED = "attempts_exhausted"


@dataclass(frozen=True)
class ServiceError:
    """An expected failure.

    ``http_status`` is set by the service for failures that reach the API.
    """

    kind: ErrorKind
    message: str
    http_status: Optional[int] = None
    details: tuple[str, ...] = ()


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """Either a value or a ServiceError."""

    value: Optional[T] = None
    error: Optional[ServiceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "ServiceResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ServiceError) -> "ServiceResult[T]":
        return cls(error=error)
