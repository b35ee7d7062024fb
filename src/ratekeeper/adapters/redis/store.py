"""Redis adapter – RedisAtomicStore."""
from __future__ import annotations

from typing import Any, Sequence

import redis
from redis import exceptions as redis_exceptions

from ratekeeper.adapters.redis.scripts import TOKEN_BUCKET_LUA
from ratekeeper.application.rate_limit.atomic import DEFAULT_STATE_TTL_SECONDS, TOKEN_BUCKET_OP
from ratekeeper.kernel.errors import (
    ExternalServiceError,
    StoreConnectionError,
    StoreTimeoutError,
    UnknownOperationError,
)
from ratekeeper.observability.logging import get_logger

DEFAULT_SOCKET_TIMEOUT_SECONDS = 0.5


class RedisAtomicStore:
    """:class:`AtomicStore` backed by Lua scripts on a synchronous Redis client.

    Scripts are registered with ``register_script``, so calls go out as
    ``EVALSHA`` and fall back to ``EVAL`` when the server has not cached the
    script yet.  Redis runs each script without interleaving other commands,
    which is what makes the bucket update atomic per key.

    The client's socket timeout is the only bound on a call; a timeout
    surfaces as :class:`StoreTimeoutError`.
    """

    def __init__(
        self,
        url: str | None = None,
        *,
        client: redis.Redis | None = None,
        ttl_seconds: int = DEFAULT_STATE_TTL_SECONDS,
        socket_timeout: float = DEFAULT_SOCKET_TIMEOUT_SECONDS,
        **kwargs: Any,
    ) -> None:
        if client is None:
            if url is None:
                raise ValueError("RedisAtomicStore needs either a url or a client")
            client = redis.Redis.from_url(
                url,
                socket_timeout=socket_timeout,
                socket_connect_timeout=socket_timeout,
                **kwargs,
            )
        self._client = client
        self._scripts: dict[str, tuple[Any, tuple[str, ...]]] = {}
        self._logger = get_logger(__name__)
        self.register(TOKEN_BUCKET_OP, TOKEN_BUCKET_LUA, ttl_seconds)

    def register(self, op_name: str, source: str, *bound_args: str | int | float) -> None:
        """Register *source* under *op_name*; *bound_args* are appended to every call."""
        script = self._client.register_script(source)
        self._scripts[op_name] = (script, tuple(str(a) for a in bound_args))

    def run_atomic(self, op_name: str, key: str, args: Sequence[str | int | float]) -> Any:
        try:
            script, bound_args = self._scripts[op_name]
        except KeyError:
            raise UnknownOperationError(op_name) from None

        argv = [str(a) for a in args]
        argv.extend(bound_args)
        try:
            return script(keys=[key], args=argv)
        except redis_exceptions.TimeoutError as exc:
            raise StoreTimeoutError(
                f"Redis timed out running '{op_name}'",
                detail={"key": key},
                cause=exc,
            ) from exc
        except redis_exceptions.ConnectionError as exc:
            raise StoreConnectionError("redis", detail={"key": key}, cause=exc) from exc
        except redis_exceptions.RedisError as exc:
            raise ExternalServiceError(
                "redis",
                f"Redis rejected '{op_name}': {exc}",
                detail={"key": key},
                cause=exc,
            ) from exc

    def ping(self) -> bool:
        try:
            return bool(self._client.ping())
        except redis_exceptions.RedisError as exc:
            self._logger.warning("redis.ping_failed", error=repr(exc))
            return False

    def close(self) -> None:
        self._client.close()


__all__ = ["DEFAULT_SOCKET_TIMEOUT_SECONDS", "RedisAtomicStore"]
