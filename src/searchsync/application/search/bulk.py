"""Application search – bulk operation assembly."""
from __future__ import annotations

from typing import Any, Iterable

from searchsync.application.search.searchable import SearchableDocument
from searchsync.observability.logging import get_logger

__all__ = ["build_delete_operations", "build_index_operations"]

logger = get_logger(__name__)


def build_index_operations(
    documents: Iterable[SearchableDocument],
    index: str | None = None,
) -> list[dict[str, Any]]:
    """Header/body pairs for every document with a non-empty body, in order."""
    operations: list[dict[str, Any]] = []
    for doc in documents:
        if not doc.body:
            logger.debug("search.bulk.empty_document_skipped", key=doc.key)
            continue
        operations.append({"index": {"_index": index or doc.index, "_id": str(doc.key)}})
        operations.append(dict(doc.body))
    return operations


def build_delete_operations(
    documents: Iterable[SearchableDocument],
    index: str | None = None,
) -> list[dict[str, Any]]:
    return [
        {"delete": {"_index": index or doc.index, "_id": str(doc.key)}}
        for doc in documents
    ]
