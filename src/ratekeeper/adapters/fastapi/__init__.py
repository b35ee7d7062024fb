"""FastAPI adapter – rate-limit middleware (install ``ratekeeper[fastapi]``)."""
from ratekeeper.adapters.fastapi.middleware import RateLimitMiddleware, default_identifier

__all__ = ["RateLimitMiddleware", "default_identifier"]
