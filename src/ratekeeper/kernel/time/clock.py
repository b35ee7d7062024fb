"""Kernel time – Clock protocol + implementations."""
from __future__ import annotations

import time
from datetime import UTC, datetime, timedelta
from typing import Protocol

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


class Clock(Protocol):
    """Port: abstract clock for deterministic testing.

    ``monotonic()`` drives local refill arithmetic; ``millis()`` is the wall
    clock reading sent to the shared store.
    """

    def monotonic(self) -> float: ...
    def millis(self) -> int: ...


class SystemClock:
    """Production clock backed by ``time.monotonic`` and ``time.time_ns``."""

    def monotonic(self) -> float:
        return time.monotonic()

    def millis(self) -> int:
        return time.time_ns() // 1_000_000


class FrozenClock:
    """Test clock pinned to a fixed point in time.

    Both the wall and the monotonic readings move only through
    :meth:`advance`, so elapsed time is exact.
    """

    def __init__(self, fixed: datetime) -> None:
        self._fixed = fixed
        self._origin = fixed

    def monotonic(self) -> float:
        return (self._fixed - self._origin).total_seconds()

    def millis(self) -> int:
        return (self._fixed - _EPOCH) // timedelta(milliseconds=1)

    def advance(self, **kwargs: int | float) -> None:
        """Advance the frozen time by the given ``timedelta`` kwargs."""
        self._fixed += timedelta(**kwargs)


__all__ = ["Clock", "FrozenClock", "SystemClock"]
