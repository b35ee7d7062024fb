"""Application rate limiting – shared-store limiter with local fallback."""
from __future__ import annotations

from typing import Any

from ratekeeper.application.rate_limit.atomic import (
    ALLOW,
    DEFAULT_KEY_PREFIX,
    DENY,
    TOKEN_BUCKET_OP,
    AtomicStore,
    local_identity,
)
from ratekeeper.application.rate_limit.decision import Decision, DecisionSource
from ratekeeper.application.rate_limit.registry import LocalBucketRegistry
from ratekeeper.kernel.errors import BaseError, MalformedResultError
from ratekeeper.kernel.time import Clock, SystemClock
from ratekeeper.observability.logging import get_logger


def _parse_result(result: Any) -> bool:
    if isinstance(result, (bytes, str)):
        text = result.decode("ascii", "replace") if isinstance(result, bytes) else result
        if text.strip() in ("0", "1"):
            return text.strip() == "1"
        raise MalformedResultError(result)
    if isinstance(result, int) and not isinstance(result, bool) and result in (ALLOW, DENY):
        return result == ALLOW
    raise MalformedResultError(result)


class DistributedRateLimiter:
    """Token-bucket admission against a shared store, degrading to local buckets.

    Each call makes exactly one round-trip to *store*.  If that round-trip
    fails for any reason (unreachable store, timeout, error reply, malformed
    result) the call is decided by a :class:`LocalTokenBucket` kept in this
    limiter's own registry, keyed by the identity left after stripping
    *key_prefix*.  The next call tries the store again; there is no retry and
    no sticky degraded mode.

    While degraded, every process enforces its own quota, so the aggregate
    limit across ``N`` processes becomes ``N`` times the configured one.
    """

    def __init__(
        self,
        store: AtomicStore,
        *,
        key_prefix: str = DEFAULT_KEY_PREFIX,
        clock: Clock | None = None,
        registry: LocalBucketRegistry | None = None,
    ) -> None:
        self._store = store
        self._key_prefix = key_prefix
        self._clock: Clock = clock or SystemClock()
        self._registry = registry if registry is not None else LocalBucketRegistry(self._clock)
        self._logger = get_logger(__name__)

    @property
    def fallback_buckets(self) -> LocalBucketRegistry:
        return self._registry

    def allow(self, key: str, capacity: int, refill_rate_per_second: float) -> bool:
        """Return ``True`` when the request identified by *key* is admitted."""
        return self.decide(key, capacity, refill_rate_per_second).allowed

    def decide(self, key: str, capacity: int, refill_rate_per_second: float) -> Decision:
        """Like :meth:`allow`, but report which path made the decision."""
        try:
            allowed = self._remote(key, capacity, refill_rate_per_second)
        except Exception as exc:  # noqa: BLE001 – every remote failure degrades
            return self._fallback(key, capacity, refill_rate_per_second, exc)
        return Decision(allowed=allowed, source=DecisionSource.REMOTE, key=key)

    def _remote(self, key: str, capacity: int, refill_rate_per_second: float) -> bool:
        result = self._store.run_atomic(
            TOKEN_BUCKET_OP,
            key,
            [capacity, refill_rate_per_second, self._clock.millis()],
        )
        return _parse_result(result)

    def _fallback(
        self,
        key: str,
        capacity: int,
        refill_rate_per_second: float,
        exc: Exception,
    ) -> Decision:
        identity = local_identity(key, self._key_prefix)
        self._logger.warning(
            "rate_limit.remote_failed",
            key=key,
            identity=identity,
            error_type=type(exc).__name__,
            error_code=exc.code if isinstance(exc, BaseError) else None,
            error=repr(exc),
        )
        bucket, created = self._registry.get_or_create(identity, capacity, refill_rate_per_second)
        if created:
            self._logger.info(
                "rate_limit.fallback_bucket_created",
                identity=identity,
                capacity=capacity,
                refill_rate_per_second=refill_rate_per_second,
            )
        return Decision(
            allowed=bucket.try_consume(),
            source=DecisionSource.FALLBACK,
            key=key,
            error=exc,
        )


__all__ = ["DistributedRateLimiter"]
