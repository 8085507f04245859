"""Redis adapter – RedisTaskQueue."""
from __future__ import annotations

from typing import Any, Mapping

import redis.asyncio as aioredis
from elasticsearch.exceptions import SerializationError as ClientSerializationError
from elasticsearch.serializer import JsonSerializer

from searchsync.kernel.errors import NotFoundError, SerializationError
from searchsync.observability.logging import get_logger

__all__ = ["RedisTaskQueue"]

logger = get_logger(__name__)


class RedisTaskQueue:
    """``TaskQueue`` on Redis lists: ``LPUSH`` to submit, ``BRPOP`` to reserve.

    Each named connection maps to one Redis URL and queue ``name`` lives
    under the key ``<prefix>:<name>``.  Payloads are JSON written by the
    search client's serializer, so dates, decimals and UUIDs take the same
    form as in a direct write.  Delivery is at-least-once from the
    consumer's point of view, so handlers must be idempotent.
    """

    def __init__(
        self,
        connections: Mapping[str, str] | str,
        *,
        default_connection: str = "default",
        default_queue: str = "default",
        prefix: str = "queues",
        **kwargs: Any,
    ) -> None:
        urls = {default_connection: connections} if isinstance(connections, str) else dict(connections)
        self._clients = {name: aioredis.from_url(url, **kwargs) for name, url in urls.items()}
        self._default_connection = default_connection
        self._default_queue = default_queue
        self._prefix = prefix
        self._serializer = JsonSerializer()

    def _client(self, connection: str | None) -> Any:
        name = connection or self._default_connection
        try:
            return self._clients[name]
        except KeyError:
            raise NotFoundError("queue connection", name) from None

    def _key(self, queue: str | None) -> str:
        return f"{self._prefix}:{queue or self._default_queue}"

    async def submit(
        self,
        payload: Mapping[str, Any],
        queue: str | None = None,
        connection: str | None = None,
    ) -> None:
        try:
            data = self._serializer.dumps(dict(payload))
        except (ClientSerializationError, TypeError, ValueError) as exc:
            raise SerializationError(f"Task payload is not JSON serialisable: {exc}", cause=exc) from exc
        await self._client(connection).lpush(self._key(queue), data)
        logger.debug("queue.task_submitted", queue=self._key(queue), connection=connection or self._default_connection)

    async def pop(
        self,
        queue: str | None = None,
        connection: str | None = None,
        timeout: float = 0,
    ) -> dict[str, Any] | None:
        """Reserve the oldest task, waiting up to *timeout* seconds (0 = forever)."""
        item = await self._client(connection).brpop([self._key(queue)], timeout=timeout)
        if item is None:
            return None
        _, raw = item
        try:
            return self._serializer.loads(raw)
        except (ClientSerializationError, ValueError) as exc:
            raise SerializationError(f"Malformed task payload: {exc}", payload_type="json", cause=exc) from exc

    async def close(self) -> None:
        for client in self._clients.values():
            await client.aclose()
