from __future__ import annotations

import json
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable

from searchsync.observability.logging import get_logger

__all__ = [
    "DEFAULT_BUFFER_SIZE",
    "MODELS_IMPORTED",
    "EventEmitter",
    "StructuredEvent",
]

MODELS_IMPORTED = "search.models_imported"
DEFAULT_BUFFER_SIZE = 100

logger = get_logger(__name__)

Listener = Callable[["StructuredEvent"], None]


def _default_serializer(obj: Any) -> Any:
    if isinstance(obj, datetime):
        return obj.isoformat()
    return str(obj)


@dataclass
class StructuredEvent:
    name: str
    service: str = "searchsync"
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    fields: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "service": self.service,
            "timestamp": self.timestamp.isoformat(),
            **self.fields,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=_default_serializer)


class EventEmitter:
    """Fire-and-forget notification channel.

    Events are handed to every listener registered for their name and kept
    in a buffer for inspection.  The buffer holds the latest *maxsize* events;
    older ones are dropped as new ones arrive.  A failing listener is logged
    and skipped so that observers never interrupt the operation that raised
    the event.
    """

    def __init__(self, maxsize: int = DEFAULT_BUFFER_SIZE) -> None:
        if maxsize < 1:
            raise ValueError(f"maxsize must be positive, got {maxsize}")
        self._buffer: deque[StructuredEvent] = deque(maxlen=maxsize)
        self._listeners: dict[str, list[Listener]] = {}

    def listen(self, name: str, listener: Listener) -> None:
        self._listeners.setdefault(name, []).append(listener)

    def publish(self, name: str, **fields: Any) -> StructuredEvent:
        event = StructuredEvent(name=name, fields=fields)
        self.emit(event)
        return event

    def emit(self, event: StructuredEvent) -> None:
        self._buffer.append(event)
        for listener in self._listeners.get(event.name, []):
            try:
                listener(event)
            except Exception:  # noqa: BLE001
                logger.exception("event.listener_failed", event_name=event.name)

    def flush(self) -> int:
        count = len(self._buffer)
        self._buffer.clear()
        return count

    @property
    def buffered(self) -> list[StructuredEvent]:
        return list(self._buffer)
