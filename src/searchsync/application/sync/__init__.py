"""Application sync – keep the search index in step with the record store."""
from searchsync.application.sync.dispatcher import SyncDispatcher, TaskQueue
from searchsync.application.sync.jobs import (
    MAKE_SEARCHABLE,
    REMOVE_FROM_SEARCH,
    SearchableJob,
    SearchableJobHandler,
)

__all__ = [
    "MAKE_SEARCHABLE",
    "REMOVE_FROM_SEARCH",
    "SearchableJob",
    "SearchableJobHandler",
    "SyncDispatcher",
    "TaskQueue",
]
