"""Application search – predicate builder, query compiler, bulk writes, reconciliation."""
from searchsync.application.search.builder import SearchBuilder
from searchsync.application.search.bulk import build_delete_operations, build_index_operations
from searchsync.application.search.compiler import DEFAULT_SIZE, compile_query, is_numeric
from searchsync.application.search.engine import SearchEngine
from searchsync.application.search.query import (
    OPERATORS,
    Order,
    Predicate,
    SetPredicate,
    normalize_direction,
    normalize_operator,
)
from searchsync.application.search.reconciler import reconcile_hits
from searchsync.application.search.result import Hit, SearchResults
from searchsync.application.search.searchable import RecordStore, SearchableDocument, SearchableModel

__all__ = [
    "DEFAULT_SIZE",
    "OPERATORS",
    "Hit",
    "Order",
    "Predicate",
    "RecordStore",
    "SearchBuilder",
    "SearchEngine",
    "SearchResults",
    "SearchableDocument",
    "SearchableModel",
    "SetPredicate",
    "build_delete_operations",
    "build_index_operations",
    "compile_query",
    "is_numeric",
    "normalize_direction",
    "normalize_operator",
    "reconcile_hits",
]
