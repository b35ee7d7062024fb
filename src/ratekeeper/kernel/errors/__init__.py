"""Kernel error hierarchy — public re-export surface.

Hierarchy::

    BaseError
    ├── ApplicationError     (application.py)
    │   └── RateLimitError
    └── InfrastructureError  (infrastructure.py)
        ├── StoreConnectionError
        ├── StoreTimeoutError
        ├── MalformedResultError
        ├── UnknownOperationError
        └── ExternalServiceError

``ConfigError`` and its subclasses live in :mod:`ratekeeper.config.validation`.
"""

from ratekeeper.kernel.errors.application import ApplicationError, RateLimitError
from ratekeeper.kernel.errors.base import BaseError
from ratekeeper.kernel.errors.infrastructure import (
    ExternalServiceError,
    InfrastructureError,
    MalformedResultError,
    StoreConnectionError,
    StoreTimeoutError,
    UnknownOperationError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "ExternalServiceError",
    "InfrastructureError",
    "MalformedResultError",
    "RateLimitError",
    "StoreConnectionError",
    "StoreTimeoutError",
    "UnknownOperationError",
]
