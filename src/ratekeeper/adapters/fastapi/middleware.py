"""FastAPI adapter – ASGI rate-limit middleware.

Turns each HTTP request into a rate-limit key and rejects it with 429 when
the :class:`DistributedRateLimiter` says no.
"""
from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Callable

from starlette.concurrency import run_in_threadpool

from ratekeeper.application.rate_limit import DEFAULT_KEY_PREFIX, make_key
from ratekeeper.kernel.errors import RateLimitError

if TYPE_CHECKING:
    from starlette.types import ASGIApp, Receive, Scope, Send

    from ratekeeper.application.rate_limit import DistributedRateLimiter


class RateLimitMiddleware:
    """Enforce a per-identity token bucket on every HTTP request.

    Parameters
    ----------
    app:
        The inner ASGI application.
    limiter:
        The limiter deciding admission.  Its ``allow`` may block on the
        shared store, so it runs in the threadpool.
    capacity, refill_rate_per_second:
        Bucket parameters applied to every identity.
    identifier_fn:
        ``(scope) -> str`` returning the caller identity.  Defaults to
        :func:`default_identifier`.
    """

    def __init__(
        self,
        app: "ASGIApp",
        limiter: "DistributedRateLimiter",
        capacity: int,
        refill_rate_per_second: float,
        key_prefix: str = DEFAULT_KEY_PREFIX,
        identifier_fn: Callable[["Scope"], str] | None = None,
    ) -> None:
        self.app = app
        self._limiter = limiter
        self._capacity = capacity
        self._refill_rate = refill_rate_per_second
        self._key_prefix = key_prefix
        self._identifier_fn = identifier_fn or default_identifier

    async def __call__(self, scope: "Scope", receive: "Receive", send: "Send") -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        key = make_key(self._identifier_fn(scope), self._key_prefix)
        allowed = await run_in_threadpool(
            self._limiter.allow, key, self._capacity, self._refill_rate
        )

        if not allowed:
            error = RateLimitError(key=key)
            body = json.dumps({"code": error.code, "message": error.message}).encode()
            headers = [
                (b"content-type", b"application/json"),
                (b"content-length", str(len(body)).encode()),
            ]
            await send({"type": "http.response.start", "status": 429, "headers": headers})
            await send({"type": "http.response.body", "body": body})
            return

        await self.app(scope, receive, send)


def _header(headers: dict[bytes, bytes], name: bytes) -> str:
    # ASGI header values are raw bytes; latin-1 maps every byte.
    return headers.get(name, b"").decode("latin-1")


def default_identifier(scope: Any) -> str:
    """``X-User-Id``, then the first ``X-Forwarded-For`` hop, then ``X-Real-IP``, then the peer address."""
    headers = dict(scope.get("headers", []))

    user_id = _header(headers, b"x-user-id").strip()
    if user_id:
        return user_id

    forwarded_for = _header(headers, b"x-forwarded-for")
    if forwarded_for.strip():
        return forwarded_for.split(",")[0].strip()

    real_ip = _header(headers, b"x-real-ip").strip()
    if real_ip:
        return real_ip

    client = scope.get("client")
    if client and isinstance(client, (tuple, list)):
        return str(client[0])
    return "unknown"


__all__ = ["RateLimitMiddleware", "default_identifier"]
