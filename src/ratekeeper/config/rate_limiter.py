"""Config – RateLimiterSettings and limiter wiring."""
from __future__ import annotations

import dataclasses
import logging
from typing import ClassVar

from ratekeeper.adapters.redis import RedisAtomicStore
from ratekeeper.application.rate_limit import (
    DEFAULT_KEY_PREFIX,
    DEFAULT_STATE_TTL_SECONDS,
    AtomicStore,
    DistributedRateLimiter,
)
from ratekeeper.config.settings import Settings
from ratekeeper.config.validation import InvalidSettingValueError
from ratekeeper.kernel.time import Clock
from ratekeeper.observability.logging import JsonLoggerFactory


@dataclasses.dataclass
class RateLimiterSettings(Settings):
    """Process-wide limiter tunables, read from ``RATEKEEPER_*`` variables.

    The limiter never validates its parameters; non-positive values are
    rejected here.
    """

    _prefix: ClassVar[str] = "RATEKEEPER"

    redis_url: str = "redis://localhost:6379/0"
    capacity: int = 100
    refill_rate_per_second: float = 10.0
    key_prefix: str = DEFAULT_KEY_PREFIX
    state_ttl_seconds: int = DEFAULT_STATE_TTL_SECONDS
    socket_timeout_seconds: float = 0.5
    log_level: str = "INFO"

    def _validate(self) -> None:
        self._require_positive(
            "capacity",
            "refill_rate_per_second",
            "state_ttl_seconds",
            "socket_timeout_seconds",
        )
        if not isinstance(self.capacity, int):
            raise InvalidSettingValueError("capacity", self.capacity, "must be an integer")
        if not isinstance(logging.getLevelName(str(self.log_level).upper()), int):
            raise InvalidSettingValueError("log_level", self.log_level, "unknown logging level")


def configure_logging(settings: RateLimiterSettings) -> None:
    """Route structlog output through the JSON root handler at ``settings.log_level``."""
    JsonLoggerFactory.configure(settings.log_level)


def build_rate_limiter(
    settings: RateLimiterSettings,
    store: AtomicStore | None = None,
    *,
    clock: Clock | None = None,
    setup_logging: bool = True,
) -> DistributedRateLimiter:
    """Wire a :class:`DistributedRateLimiter` from *settings*.

    A :class:`RedisAtomicStore` is built from ``settings.redis_url`` unless
    *store* is given.  Creating the client does not connect.  Unless
    *setup_logging* is false, logging is configured first via
    :func:`configure_logging`; pass ``False`` when the host application owns
    the logging setup.
    """
    if setup_logging:
        configure_logging(settings)
    if store is None:
        store = RedisAtomicStore(
            settings.redis_url,
            ttl_seconds=settings.state_ttl_seconds,
            socket_timeout=settings.socket_timeout_seconds,
        )
    return DistributedRateLimiter(store, key_prefix=settings.key_prefix, clock=clock)


__all__ = ["RateLimiterSettings", "build_rate_limiter", "configure_logging"]
