"""
ratekeeper – distributed token-bucket rate limiting with local fallback.

Import path convention::

    from ratekeeper.application.rate_limit import DistributedRateLimiter, LocalTokenBucket
    from ratekeeper.adapters.redis import RedisAtomicStore
    from ratekeeper.config import RateLimiterSettings, build_rate_limiter
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
