"""Application sync – SyncDispatcher."""
from __future__ import annotations

import contextlib
from collections import Counter
from typing import Any, Iterable, Iterator, Mapping, Protocol, runtime_checkable

from searchsync.application.search.searchable import SearchableModel
from searchsync.application.sync.jobs import MAKE_SEARCHABLE, REMOVE_FROM_SEARCH, SearchableJob
from searchsync.config import ConfigError, SearchSettings
from searchsync.observability.events import MODELS_IMPORTED, EventEmitter
from searchsync.observability.logging import get_logger

__all__ = ["SyncDispatcher", "TaskQueue"]

logger = get_logger(__name__)


@runtime_checkable
class TaskQueue(Protocol):
    """Port: deferred job queue with at-least-once delivery."""

    async def submit(
        self,
        payload: Mapping[str, Any],
        queue: str | None = None,
        connection: str | None = None,
    ) -> None: ...


class SyncDispatcher:
    """Writes record changes to the search index, now or through the queue.

    With ``settings.queue`` off every batch goes straight to the model's
    engine before the call returns.  With it on, the batch is projected into
    a :class:`SearchableJob` and submitted to *queue* on the model's queue and
    connection (falling back to the settings).

    Whole-table operations walk the store in chunks of ``settings.chunk_size``
    records, so a failure only affects the chunk being written, and publish
    a ``search.models_imported`` event after each imported chunk.
    """

    def __init__(
        self,
        settings: SearchSettings | None = None,
        queue: TaskQueue | None = None,
        events: EventEmitter | None = None,
    ) -> None:
        self._settings = settings or SearchSettings()
        if self._settings.queue and queue is None:
            raise ConfigError("Queued search sync is enabled but no task queue was given")
        self._queue = queue
        self._events = events or EventEmitter()
        self._suppressed: Counter[str | None] = Counter()

    @property
    def events(self) -> EventEmitter:
        return self._events

    # -- suppression ---------------------------------------------------

    def is_syncing(self, model: SearchableModel[Any]) -> bool:
        return not self._suppressed[None] and not self._suppressed[model.name]

    @contextlib.contextmanager
    def without_syncing(self, model: SearchableModel[Any] | None = None) -> Iterator[None]:
        """Suspend dispatch for *model* (or every model) inside the block.

        Engine calls already in flight are not affected.
        """
        key = model.name if model is not None else None
        self._suppressed[key] += 1
        try:
            yield
        finally:
            self._suppressed[key] -= 1

    # -- batches -------------------------------------------------------

    async def make_searchable(
        self,
        model: SearchableModel[Any],
        records: Iterable[Any],
        index: str | None = None,
    ) -> None:
        batch = list(records)
        if not batch or not self.is_syncing(model):
            return
        if self._queue is None or not self._settings.queue:
            await model.engine.update(model, batch, index)
            return
        await self._enqueue(self._queue, MAKE_SEARCHABLE, model, batch, index)

    async def remove_from_search(
        self,
        model: SearchableModel[Any],
        records: Iterable[Any],
        index: str | None = None,
    ) -> None:
        batch = list(records)
        if not batch or not self.is_syncing(model):
            return
        if self._queue is None or not self._settings.queue:
            await model.engine.delete(model, batch, index)
            return
        await self._enqueue(self._queue, REMOVE_FROM_SEARCH, model, batch, index)

    async def _enqueue(
        self,
        queue: TaskQueue,
        action: str,
        model: SearchableModel[Any],
        batch: list[Any],
        index: str | None,
    ) -> None:
        job = SearchableJob.create(action, model, batch, index)
        await queue.submit(
            job.to_payload(),
            queue=model.queue or self._settings.queue_name,
            connection=model.connection or self._settings.queue_connection,
        )
        logger.debug("search.job_enqueued", action=action, model=model.name, documents=len(batch))

    # -- single records ------------------------------------------------

    async def searchable(self, model: SearchableModel[Any], record: Any) -> None:
        await self.make_searchable(model, [record])

    async def unsearchable(self, model: SearchableModel[Any], record: Any) -> None:
        await self.remove_from_search(model, [record])

    # -- whole table ---------------------------------------------------

    async def make_all_searchable(self, model: SearchableModel[Any]) -> int:
        """Index every record of *model*; returns the number of records sent."""
        if not self.is_syncing(model):
            return 0
        index = model.searchable_as()
        total = 0
        async for chunk in model.store.chunks(self._settings.chunk_size):
            await self.make_searchable(model, chunk, index)
            total += len(chunk)
            last_key = model.store.key_of(chunk[-1])
            self._events.publish(MODELS_IMPORTED, model=model.name, count=len(chunk), last_key=last_key)
            logger.info("search.import.progress", model=model.name, last_key=last_key, imported=total)
        logger.info("search.import.completed", model=model.name, imported=total)
        return total

    async def remove_all_from_search(self, model: SearchableModel[Any]) -> int:
        """Delete every record of *model* from its index."""
        if not self.is_syncing(model):
            return 0
        index = model.searchable_as()
        total = 0
        async for chunk in model.store.chunks(self._settings.chunk_size):
            await self.remove_from_search(model, chunk, index)
            total += len(chunk)
        logger.info("search.remove_all.completed", model=model.name, removed=total)
        return total
