"""Application rate limiting – thread-safe in-process token bucket."""
from __future__ import annotations

import threading

from ratekeeper.kernel.time import Clock, SystemClock


class LocalTokenBucket:
    """Single-key token bucket with lazy time-based refill.

    *capacity* – maximum tokens; the bucket starts full.
    *refill_rate_per_second* – tokens added per elapsed second.

    Refill and consume happen under one per-bucket lock, so concurrent
    callers never observe the same pre-consume token count.  Parameters are
    not validated here; reject non-positive values where configuration is
    loaded.
    """

    __slots__ = ("capacity", "refill_rate_per_second", "_tokens", "_last_refill", "_clock", "_lock")

    def __init__(
        self,
        capacity: int,
        refill_rate_per_second: float,
        *,
        clock: Clock | None = None,
    ) -> None:
        self.capacity = capacity
        self.refill_rate_per_second = refill_rate_per_second
        self._clock: Clock = clock or SystemClock()
        self._tokens = float(capacity)
        self._last_refill = self._clock.monotonic()
        self._lock = threading.Lock()

    def try_consume(self) -> bool:
        """Take one token if available; never blocks on I/O and never raises."""
        with self._lock:
            now = self._clock.monotonic()
            elapsed = now - self._last_refill
            if elapsed > 0:
                self._tokens = min(
                    float(self.capacity),
                    self._tokens + elapsed * self.refill_rate_per_second,
                )
                self._last_refill = now
            if self._tokens >= 1.0:
                self._tokens -= 1.0
                return True
            return False

    @property
    def tokens(self) -> float:
        """Token count as of the last refill (no refill is applied here)."""
        with self._lock:
            return self._tokens

    def __repr__(self) -> str:
        return (
            f"LocalTokenBucket(capacity={self.capacity!r}, "
            f"refill_rate_per_second={self.refill_rate_per_second!r}, tokens={self._tokens:.3f})"
        )


__all__ = ["LocalTokenBucket"]
