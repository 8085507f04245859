"""Observability – structured logging and events."""
from searchsync.observability.logging import JsonLoggerFactory, get_logger
from searchsync.observability.events import MODELS_IMPORTED, EventEmitter, StructuredEvent

__all__ = ["MODELS_IMPORTED", "EventEmitter", "JsonLoggerFactory", "StructuredEvent", "get_logger"]
