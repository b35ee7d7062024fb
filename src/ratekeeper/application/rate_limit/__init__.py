"""Application rate limiting – token buckets, shared-store port, distributed limiter."""
from ratekeeper.application.rate_limit.atomic import (
    DEFAULT_KEY_PREFIX,
    DEFAULT_STATE_TTL_SECONDS,
    TOKEN_BUCKET_OP,
    AtomicStore,
    StoredBucket,
    apply_token_bucket,
    local_identity,
    make_key,
)
from ratekeeper.application.rate_limit.bucket import LocalTokenBucket
from ratekeeper.application.rate_limit.decision import Decision, DecisionSource
from ratekeeper.application.rate_limit.distributed import DistributedRateLimiter
from ratekeeper.application.rate_limit.registry import LocalBucketRegistry

__all__ = [
    "DEFAULT_KEY_PREFIX",
    "DEFAULT_STATE_TTL_SECONDS",
    "TOKEN_BUCKET_OP",
    "AtomicStore",
    "Decision",
    "DecisionSource",
    "DistributedRateLimiter",
    "LocalBucketRegistry",
    "LocalTokenBucket",
    "StoredBucket",
    "apply_token_bucket",
    "local_identity",
    "make_key",
]
