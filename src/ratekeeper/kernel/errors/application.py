"""Application-layer errors."""

from __future__ import annotations

from typing import Any

from ratekeeper.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class RateLimitError(ApplicationError):
    """Request quota exceeded.

    The limiter itself only ever answers ``True``/``False``.  The HTTP
    adapter renders this error's ``code`` and ``message`` as the 429 body.
    """

    default_code = "rate_limit_exceeded"

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        *,
        key: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.key = key


__all__ = ["ApplicationError", "RateLimitError"]
