"""Testing – in-memory doubles for the store, queue and search client."""
from searchsync.testing.fakes import FakeSearchClient, InMemoryRecordStore, InMemoryTaskQueue

__all__ = ["FakeSearchClient", "InMemoryRecordStore", "InMemoryTaskQueue"]
