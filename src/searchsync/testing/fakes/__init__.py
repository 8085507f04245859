"""Testing fakes – in-memory doubles for the ports."""
from searchsync.testing.fakes.record_store import InMemoryRecordStore
from searchsync.testing.fakes.search_client import FakeSearchClient
from searchsync.testing.fakes.task_queue import InMemoryTaskQueue

__all__ = ["FakeSearchClient", "InMemoryRecordStore", "InMemoryTaskQueue"]
