"""Infrastructure errors — shared-store failures."""

from __future__ import annotations

from typing import Any

from ratekeeper.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a business rule violation."""

    default_code = "infrastructure_error"


class StoreConnectionError(InfrastructureError):
    """Could not reach the shared store."""

    default_code = "store_connection_error"

    def __init__(
        self,
        resource: str,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"Could not connect to '{resource}'", **kwargs)
        self.resource = resource


class StoreTimeoutError(InfrastructureError):
    """A shared-store round-trip exceeded the client's socket timeout."""

    default_code = "store_timeout"


class MalformedResultError(InfrastructureError):
    """The atomic operation returned something other than ``0`` or ``1``."""

    default_code = "malformed_result"

    def __init__(self, result: object, message: str | None = None, **kwargs: Any) -> None:
        super().__init__(
            message or f"Unexpected atomic operation result {result!r}",
            **kwargs,
        )
        self.result = result


class UnknownOperationError(InfrastructureError):
    """No atomic operation is registered under the requested name."""

    default_code = "unknown_operation"

    def __init__(self, op_name: str, **kwargs: Any) -> None:
        super().__init__(f"No atomic operation registered as '{op_name}'", **kwargs)
        self.op_name = op_name


class ExternalServiceError(InfrastructureError):
    """The shared store answered with an error reply."""

    default_code = "external_service_error"

    def __init__(
        self,
        service: str,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"External service '{service}' error", **kwargs)
        self.service = service


__all__ = [
    "ExternalServiceError",
    "InfrastructureError",
    "MalformedResultError",
    "StoreConnectionError",
    "StoreTimeoutError",
    "UnknownOperationError",
]
