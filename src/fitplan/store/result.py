"""Explicit success/failure wrapper for store calls.

Degradable operations wrap store calls in ``try_store`` and pick a fallback
with ``or_else``; non-degradable ones call ``unwrap`` and let the error
propagate.
"""

from __future__ import annotations

from collections.abc import Awaitable
from dataclasses import dataclass
from typing import Generic, TypeVar

from fitplan.errors import StoreError

T = TypeVar("T")


@dataclass(frozen=True)
class StoreResult(Generic[T]):
    value: T | None = None
    error: StoreError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def or_else(self, fallback: T) -> T:
        """Return the value, or ``fallback`` when the call failed."""
        if self.error is not None:
            return fallback
        return self.value  # type: ignore[return-value]

    def unwrap(self) -> T:
        """Return the value or re-raise the captured store error."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


async def try_store(call: Awaitable[T]) -> StoreResult[T]:
    """Await a store call, capturing ``StoreError`` only."""
    try:
        return StoreResult(value=await call)
    except StoreError as exc:
        return StoreResult(error=exc)
