"""Degrade failed contract calls into optional values at explicit boundaries."""

from __future__ import annotations

import logging
from collections.abc import Awaitable
from dataclasses import dataclass
from typing import Generic, TypeVar

from .exceptions import ContractCallError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CallOutcome(Generic[T]):
    """Success-with-value or the call error that replaced it."""

    value: T | None = None
    error: ContractCallError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def value_or_none(self) -> T | None:
        return self.value if self.error is None else None


async def attempt(call: Awaitable[T], *, label: str) -> CallOutcome[T]:
    """
    Await a contract call, absorbing only ContractCallError.

    Anything else (programming errors, cancellation) still propagates.
    The absorbed failure is logged at DEBUG under ``label``.
    """
    try:
        return CallOutcome(value=await call)
    except ContractCallError as e:
        logger.debug(f"{label} failed: {e.message}")
        return CallOutcome(error=e)
