"""Observability – Structured Events."""
from searchsync.observability.events.emitter import (
    MODELS_IMPORTED,
    EventEmitter,
    StructuredEvent,
)

__all__ = ["MODELS_IMPORTED", "EventEmitter", "StructuredEvent"]
