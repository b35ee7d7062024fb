"""Observability – structlog configuration and logger helper."""
from ratekeeper.observability.logging.factory import JsonLoggerFactory
from ratekeeper.observability.logging.processors import get_logger

__all__ = ["JsonLoggerFactory", "get_logger"]
