"""Application search – map raw hits back onto canonical records."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from searchsync.application.search.result import SearchResults
from searchsync.observability.logging import get_logger

if TYPE_CHECKING:
    from searchsync.application.search.searchable import SearchableModel

__all__ = ["reconcile_hits"]

logger = get_logger(__name__)


async def reconcile_hits(results: SearchResults, model: "SearchableModel[Any]") -> list[Any]:
    """Return the records behind *results*, in hit order.

    Virtual indexes are authoritative for their documents, so their
    ``_source`` payloads are returned and the store is never queried.
    Otherwise the records are fetched in one batch and re-ordered by hit,
    since the store does not return them in relevance order.  Hits whose
    record is gone (the index is stale) are dropped.
    """
    if not results.hits:
        return []
    if model.is_virtual_index:
        return [hit.source for hit in results.hits]

    records = await model.store.find_by_keys(results.ids)
    mapped = [records[hit.id] for hit in results.hits if hit.id in records]
    if len(mapped) < len(results.hits):
        logger.debug(
            "search.stale_hits_dropped",
            model=model.name,
            dropped=len(results.hits) - len(mapped),
        )
    return mapped
