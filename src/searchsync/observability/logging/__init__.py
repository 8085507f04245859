"""Observability – structlog configuration and logger helper."""
from searchsync.observability.logging.factory import JsonLoggerFactory
from searchsync.observability.logging.processors import get_logger

__all__ = ["JsonLoggerFactory", "get_logger"]
