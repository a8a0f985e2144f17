from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Awaitable, Generic, Optional, TypeVar

import httpx

from .errors import CatalogUnavailableError, ClassifierUnavailableError

T = TypeVar("T")

logger = logging.getLogger(__name__)

# Failures an external call is allowed to produce. Anything else is a bug and
# propagates.
EXPECTED_FAILURES = (
    httpx.HTTPError,
    CatalogUnavailableError,
    ClassifierUnavailableError,
    ValueError,
)


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of one external call: either a value or the error it raised."""

    value: Optional[T] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: BaseException) -> "Outcome[T]":
        return cls(error=error)


async def capture(call: Awaitable[T], *, stage: str) -> Outcome[T]:
    try:
        value = await call
    except EXPECTED_FAILURES as exc:
        logger.warning("%s call failed: %s", stage, exc)
        return Outcome.failure(exc)
    return Outcome.success(value)
