"""Unit tests for SyncDispatcher – direct and queued writes, chunked imports, suppression."""
from __future__ import annotations

import asyncio
from typing import Any
from unittest.mock import AsyncMock

import pytest

from searchsync.adapters.elasticsearch import ElasticsearchEngine
from searchsync.application.search import SearchableModel
from searchsync.application.sync import (
    MAKE_SEARCHABLE,
    REMOVE_FROM_SEARCH,
    SearchableJobHandler,
    SyncDispatcher,
)
from searchsync.config import ConfigError, SearchSettings
from searchsync.observability.events import MODELS_IMPORTED, EventEmitter
from searchsync.testing.fakes import FakeSearchClient, InMemoryRecordStore, InMemoryTaskQueue


def _model(count: int = 3, **kwargs: Any) -> tuple[SearchableModel[dict[str, Any]], FakeSearchClient]:
    client = FakeSearchClient()
    store = InMemoryRecordStore("products", [{"id": i, "name": f"p{i}"} for i in range(1, count + 1)])
    return SearchableModel(store=store, engine=ElasticsearchEngine(client), **kwargs), client


def _records(model: SearchableModel[Any]) -> list[dict[str, Any]]:
    return [{"id": i, "name": f"p{i}"} for i in range(1, len(model.store) + 1)]  # type: ignore[arg-type]


class TestDirectSync:
    def test_make_searchable_writes_before_returning(self) -> None:
        model, client = _model()
        asyncio.run(SyncDispatcher().make_searchable(model, _records(model)))
        assert set(client.documents["products"]) == {"1", "2", "3"}
        assert client.bulk_calls[0]["refresh"] is True

    def test_index_override(self) -> None:
        model, client = _model()
        asyncio.run(SyncDispatcher().make_searchable(model, _records(model), index="products_v2"))
        assert set(client.documents) == {"products_v2"}

    def test_remove_from_search(self) -> None:
        model, client = _model()
        dispatcher = SyncDispatcher()
        asyncio.run(dispatcher.make_searchable(model, _records(model)))
        asyncio.run(dispatcher.remove_from_search(model, _records(model)[:2]))
        assert set(client.documents["products"]) == {"3"}

    def test_single_record_helpers(self) -> None:
        model, client = _model()
        dispatcher = SyncDispatcher()
        asyncio.run(dispatcher.searchable(model, {"id": 7, "name": "seven"}))
        assert client.documents["products"] == {"7": {"id": 7, "name": "seven"}}
        asyncio.run(dispatcher.unsearchable(model, {"id": 7, "name": "seven"}))
        assert client.documents["products"] == {}

    def test_empty_batches_make_no_call(self) -> None:
        model, client = _model()
        dispatcher = SyncDispatcher()
        asyncio.run(dispatcher.make_searchable(model, []))
        asyncio.run(dispatcher.remove_from_search(model, []))
        assert client.bulk_calls == []

    def test_all_empty_projections_make_no_call(self) -> None:
        client = FakeSearchClient()
        store = InMemoryRecordStore("empties")
        store.to_document = lambda record: {}  # type: ignore[method-assign]
        model = SearchableModel(store=store, engine=ElasticsearchEngine(client))
        asyncio.run(SyncDispatcher().make_searchable(model, [{"id": 1}, {"id": 2}]))
        assert client.bulk_calls == []


class TestQueuedSync:
    def _dispatcher(self, **settings: Any) -> tuple[SyncDispatcher, InMemoryTaskQueue]:
        queue = InMemoryTaskQueue()
        return SyncDispatcher(SearchSettings(queue=True, **settings), queue=queue), queue

    def test_queue_required_when_enabled(self) -> None:
        with pytest.raises(ConfigError):
            SyncDispatcher(SearchSettings(queue=True))

    def test_make_searchable_enqueues_projections(self) -> None:
        model, client = _model()
        dispatcher, queue = self._dispatcher(queue_name="search", queue_connection="redis")
        asyncio.run(dispatcher.make_searchable(model, _records(model), index="products_v2"))
        assert client.bulk_calls == []
        (task,) = queue.tasks
        assert task.queue == "search"
        assert task.connection == "redis"
        assert task.payload["action"] == MAKE_SEARCHABLE
        assert task.payload["model"] == "products"
        assert [d["index"] for d in task.payload["documents"]] == ["products_v2"] * 3
        assert task.payload["documents"][0] == {"key": 1, "index": "products_v2", "body": {"id": 1, "name": "p1"}}

    def test_model_queue_and_connection_win(self) -> None:
        model, _ = _model(queue="priority", connection="secondary")
        dispatcher, queue = self._dispatcher(queue_name="search")
        asyncio.run(dispatcher.make_searchable(model, _records(model)))
        assert (queue.tasks[0].queue, queue.tasks[0].connection) == ("priority", "secondary")

    def test_remove_from_search_enqueues(self) -> None:
        model, _ = _model()
        dispatcher, queue = self._dispatcher()
        asyncio.run(dispatcher.remove_from_search(model, _records(model)))
        assert queue.tasks[0].payload["action"] == REMOVE_FROM_SEARCH

    def test_queued_job_runs_against_engine(self) -> None:
        model, client = _model()
        dispatcher, queue = self._dispatcher()
        asyncio.run(dispatcher.make_searchable(model, _records(model), index="products_v2"))
        handler = SearchableJobHandler([model])
        asyncio.run(handler.handle(queue.tasks[0].payload))
        assert set(client.documents["products_v2"]) == {"1", "2", "3"}

    def test_queued_job_is_idempotent(self) -> None:
        model, client = _model()
        dispatcher, queue = self._dispatcher()
        asyncio.run(dispatcher.make_searchable(model, _records(model)))
        handler = SearchableJobHandler([model])
        asyncio.run(handler.handle(queue.tasks[0].payload))
        asyncio.run(handler.handle(queue.tasks[0].payload))
        assert len(client.documents["products"]) == 3


class TestChunkedImport:
    def test_progress_event_per_chunk(self) -> None:
        model, client = _model(count=1201)
        events = EventEmitter()
        seen: list[Any] = []
        events.listen(MODELS_IMPORTED, lambda event: seen.append(event.fields["last_key"]))
        dispatcher = SyncDispatcher(events=events)

        total = asyncio.run(dispatcher.make_all_searchable(model))

        assert total == 1201
        assert seen == [500, 1000, 1201]
        assert len(client.bulk_calls) == 3
        assert all(len(call["operations"]) <= 1000 for call in client.bulk_calls)
        assert len(client.documents["products"]) == 1201

    def test_import_uses_prefixed_index(self) -> None:
        model, client = _model(count=2, prefix="dev_")
        asyncio.run(SyncDispatcher().make_all_searchable(model))
        assert set(client.documents) == {"dev_products"}

    def test_custom_chunk_size(self) -> None:
        model, client = _model(count=5)
        dispatcher = SyncDispatcher(SearchSettings(chunk_size=2))
        asyncio.run(dispatcher.make_all_searchable(model))
        assert [len(c["operations"]) // 2 for c in client.bulk_calls] == [2, 2, 1]
        assert [e.fields["count"] for e in dispatcher.events.buffered] == [2, 2, 1]

    def test_failure_stops_at_current_chunk(self) -> None:
        model, client = _model(count=5)
        client.bulk = AsyncMock(side_effect=[{"errors": False, "items": []}, RuntimeError("boom")])  # type: ignore[method-assign]
        dispatcher = SyncDispatcher(SearchSettings(chunk_size=2))
        with pytest.raises(RuntimeError):
            asyncio.run(dispatcher.make_all_searchable(model))
        assert client.bulk.await_count == 2
        assert len(dispatcher.events.buffered) == 1

    def test_repeated_imports_keep_event_buffer_bounded(self) -> None:
        model, _ = _model(count=10)
        dispatcher = SyncDispatcher(SearchSettings(chunk_size=1), events=EventEmitter(maxsize=25))
        for _ in range(5):
            asyncio.run(dispatcher.make_all_searchable(model))
        buffered = dispatcher.events.buffered
        assert len(buffered) == 25
        assert [e.fields["last_key"] for e in buffered[-10:]] == list(range(1, 11))

    def test_remove_all_from_search(self) -> None:
        model, client = _model(count=4)
        dispatcher = SyncDispatcher(SearchSettings(chunk_size=3))
        asyncio.run(dispatcher.make_all_searchable(model))
        removed = asyncio.run(dispatcher.remove_all_from_search(model))
        assert removed == 4
        assert client.documents["products"] == {}


class TestWithoutSyncing:
    def test_suppressed_inside_block(self) -> None:
        model, client = _model()
        dispatcher = SyncDispatcher()
        with dispatcher.without_syncing():
            asyncio.run(dispatcher.make_searchable(model, _records(model)))
            assert asyncio.run(dispatcher.make_all_searchable(model)) == 0
        assert client.bulk_calls == []
        asyncio.run(dispatcher.make_searchable(model, _records(model)))
        assert len(client.bulk_calls) == 1

    def test_per_model_suppression(self) -> None:
        model, client = _model()
        other = SearchableModel(store=InMemoryRecordStore("orders", [{"id": 1}]), engine=model.engine)
        dispatcher = SyncDispatcher()
        with dispatcher.without_syncing(model):
            assert dispatcher.is_syncing(model) is False
            assert dispatcher.is_syncing(other) is True
            asyncio.run(dispatcher.make_searchable(other, [{"id": 1}]))
        assert set(client.documents) == {"orders"}

    def test_reenabled_after_exception(self) -> None:
        model, _ = _model()
        dispatcher = SyncDispatcher()
        with pytest.raises(ValueError):
            with dispatcher.without_syncing(model):
                raise ValueError("fail inside block")
        assert dispatcher.is_syncing(model) is True

    def test_nested_blocks(self) -> None:
        model, _ = _model()
        dispatcher = SyncDispatcher()
        with dispatcher.without_syncing():
            with dispatcher.without_syncing():
                pass
            assert dispatcher.is_syncing(model) is False
        assert dispatcher.is_syncing(model) is True
