"""Application rate limiting – per-limiter map of fallback buckets."""
from __future__ import annotations

import threading

from ratekeeper.application.rate_limit.bucket import LocalTokenBucket
from ratekeeper.kernel.time import Clock


class LocalBucketRegistry:
    """Concurrent ``identity -> LocalTokenBucket`` map with insert-if-absent.

    Buckets are never evicted; the map grows with the number of distinct
    identities seen while the shared store is unreachable.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock
        self._buckets: dict[str, LocalTokenBucket] = {}
        self._lock = threading.Lock()

    def get(self, identity: str) -> LocalTokenBucket | None:
        return self._buckets.get(identity)

    def get_or_create(
        self,
        identity: str,
        capacity: int,
        refill_rate_per_second: float,
    ) -> tuple[LocalTokenBucket, bool]:
        """Return ``(bucket, created)``; the first caller's parameters win."""
        bucket = self._buckets.get(identity)
        if bucket is not None:
            return bucket, False
        with self._lock:
            bucket = self._buckets.get(identity)
            if bucket is not None:
                return bucket, False
            bucket = LocalTokenBucket(capacity, refill_rate_per_second, clock=self._clock)
            self._buckets[identity] = bucket
            return bucket, True

    def clear(self) -> None:
        with self._lock:
            self._buckets.clear()

    def __contains__(self, identity: object) -> bool:
        return identity in self._buckets

    def __len__(self) -> int:
        return len(self._buckets)


__all__ = ["LocalBucketRegistry"]
