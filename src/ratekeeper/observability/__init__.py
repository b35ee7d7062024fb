"""Observability – structured logging."""
from ratekeeper.observability.logging import JsonLoggerFactory, get_logger

__all__ = ["JsonLoggerFactory", "get_logger"]
