"""Application rate limiting – shared-store port and the atomic bucket update.

The shared store runs the token-bucket update as one indivisible unit per
key.  :func:`apply_token_bucket` states that update in Python; the Redis
adapter ships the equivalent Lua script, and
:class:`~ratekeeper.testing.fakes.InMemoryAtomicStore` executes this function
under a lock to simulate the store in-process.
"""
from __future__ import annotations

import dataclasses
from typing import Any, Protocol, Sequence, runtime_checkable

TOKEN_BUCKET_OP = "token_bucket"
DEFAULT_KEY_PREFIX = "rate-limit:"
DEFAULT_STATE_TTL_SECONDS = 3600

ALLOW = 1
DENY = 0


@runtime_checkable
class AtomicStore(Protocol):
    """Port: run a named server-side operation against one key.

    Implementations must make the whole read-compute-write sequence
    linearizable per key.  Any exception raised is treated by the caller as
    the store being unavailable.
    """

    def run_atomic(self, op_name: str, key: str, args: Sequence[str | int | float]) -> Any: ...


@dataclasses.dataclass(frozen=True)
class StoredBucket:
    """Persisted bucket record: hash fields ``tokens`` and ``last_refill_time``."""

    tokens: float
    last_refill_time: int  # epoch milliseconds


def apply_token_bucket(
    stored: StoredBucket | None,
    capacity: float,
    refill_rate_per_second: float,
    now_ms: int,
) -> tuple[StoredBucket, int]:
    """Refill then consume one token; return the record to persist and ``1``/``0``.

    A key with no stored record starts empty at *now_ms*, unlike
    :class:`LocalTokenBucket`, which starts full.
    """
    if stored is None:
        tokens, last_refill = 0.0, now_ms
    else:
        tokens, last_refill = stored.tokens, stored.last_refill_time

    elapsed = now_ms - last_refill
    if elapsed > 0:
        tokens = min(float(capacity), tokens + (elapsed / 1000.0) * refill_rate_per_second)

    if tokens < 1:
        return StoredBucket(tokens, now_ms), DENY
    return StoredBucket(tokens - 1, now_ms), ALLOW


def make_key(identity: str, prefix: str = DEFAULT_KEY_PREFIX) -> str:
    """Namespace a caller identity into a shared-store key."""
    return f"{prefix}{identity}"


def local_identity(key: str, prefix: str = DEFAULT_KEY_PREFIX) -> str:
    """Strip *prefix* from *key* when present, else return *key* verbatim."""
    if prefix and key.startswith(prefix):
        return key[len(prefix):]
    return key


__all__ = [
    "ALLOW",
    "DEFAULT_KEY_PREFIX",
    "DEFAULT_STATE_TTL_SECONDS",
    "DENY",
    "TOKEN_BUCKET_OP",
    "AtomicStore",
    "StoredBucket",
    "apply_token_bucket",
    "local_identity",
    "make_key",
]
