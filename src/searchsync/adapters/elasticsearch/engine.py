"""Elasticsearch adapter – ElasticsearchEngine."""
from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, Any, Sequence

from elasticsearch import AsyncElasticsearch

from searchsync.application.pagination import PageRequest
from searchsync.application.pagination.page import page_count
from searchsync.application.search.bulk import build_delete_operations, build_index_operations
from searchsync.application.search.compiler import DEFAULT_SIZE, compile_query
from searchsync.application.search.reconciler import reconcile_hits
from searchsync.application.search.result import SearchResults
from searchsync.kernel.errors import BulkWriteError
from searchsync.observability.logging import get_logger

if TYPE_CHECKING:
    from searchsync.application.search.builder import SearchBuilder
    from searchsync.application.search.searchable import SearchableModel
    from searchsync.config import SearchSettings

__all__ = ["IGNORE_MALFORMED", "ElasticsearchEngine"]

IGNORE_MALFORMED = {"index.mapping.ignore_malformed": True}

logger = get_logger(__name__)


def _body(response: Any) -> Any:
    """Plain body of a client response (``ObjectApiResponse`` or dict)."""
    return getattr(response, "body", response)


class ElasticsearchEngine:
    """``SearchEngine`` backed by :class:`elasticsearch.AsyncElasticsearch`.

    Client errors (transport, bad request, missing index) are not caught;
    they reach the caller unchanged.
    """

    def __init__(
        self,
        client: AsyncElasticsearch,
        *,
        max_results: int = DEFAULT_SIZE,
    ) -> None:
        self._client = client
        self._max_results = max_results

    @classmethod
    def from_settings(cls, settings: "SearchSettings", **client_kwargs: Any) -> "ElasticsearchEngine":
        client = AsyncElasticsearch(hosts=settings.hosts, **client_kwargs)
        return cls(client, max_results=settings.max_results)

    @property
    def client(self) -> AsyncElasticsearch:
        return self._client

    async def close(self) -> None:
        await self._client.close()

    # -- writes --------------------------------------------------------

    async def update(
        self,
        model: "SearchableModel[Any]",
        records: Sequence[Any],
        index: str | None = None,
    ) -> None:
        documents = [model.document(record) for record in records]
        await self._bulk(build_index_operations(documents, index), model=model.name)

    async def delete(
        self,
        model: "SearchableModel[Any]",
        records: Sequence[Any],
        index: str | None = None,
    ) -> None:
        documents = [model.document(record) for record in records]
        await self._bulk(build_delete_operations(documents, index), model=model.name)

    async def _bulk(self, operations: list[dict[str, Any]], *, model: str) -> None:
        if not operations:
            logger.debug("search.bulk.nothing_to_write", model=model)
            return
        response = _body(await self._client.bulk(operations=operations, refresh=True))
        logger.debug("search.bulk.submitted", model=model, operations=len(operations))
        if not response.get("errors"):
            return
        failed = [
            {"action": action, **result}
            for item in response.get("items", [])
            for action, result in item.items()
            if "error" in result
        ]
        logger.error("search.bulk.items_failed", model=model, failed=len(failed))
        raise BulkWriteError(failed, detail={"model": model})

    # -- reads ---------------------------------------------------------

    def compile_query(
        self,
        builder: "SearchBuilder[Any]",
        *,
        size: int | None = None,
        from_: int | None = None,
    ) -> dict[str, Any]:
        return compile_query(builder, size=size, from_=from_, default_size=self._max_results)

    async def search(self, builder: "SearchBuilder[Any]") -> Any:
        return await self._perform(builder, self.compile_query(builder))

    async def paginate(self, builder: "SearchBuilder[Any]", per_page: int, page: int) -> Any:
        request = PageRequest(page=page, per_page=per_page)
        document = self.compile_query(builder, size=request.size, from_=request.offset)
        results = await self._perform(builder, document)
        if isinstance(results, SearchResults):
            results.page_count = page_count(results.total, request.per_page)
        return results

    async def _perform(self, builder: "SearchBuilder[Any]", document: dict[str, Any]) -> Any:
        index = builder.target.searchable_as()
        if builder.callback is not None:
            result = builder.callback(self._client, {"index": index, "body": document})
            if inspect.isawaitable(result):
                result = await result
            return result

        params: dict[str, Any] = {
            "query": document["query"],
            "sort": document["sort"] or None,
            "size": document.get("size"),
            "from_": document.get("from"),
        }
        response = await self._client.search(
            index=index, **{k: v for k, v in params.items() if v is not None}
        )
        return SearchResults.from_response(_body(response))

    @staticmethod
    def _results(results: Any) -> SearchResults:
        if isinstance(results, SearchResults):
            return results
        return SearchResults.from_response(_body(results))

    async def reconcile(self, results: Any, model: "SearchableModel[Any]") -> list[Any]:
        return await reconcile_hits(self._results(results), model)

    def map_ids(self, results: Any) -> list[str]:
        return self._results(results).ids

    def total_count(self, results: Any) -> int:
        return self._results(results).total

    # -- settings ------------------------------------------------------

    async def apply_settings(self, model: "SearchableModel[Any]") -> None:
        """Close the model's index, allow malformed field values, reopen it.

        Targets ``model.searchable_as()``, the index that writes and searches
        for *model* use.

        Not transactional: if the update or the reopen fails the index stays
        closed until someone opens it again.
        """
        index = model.searchable_as()
        indices = self._client.indices
        await indices.close(index=index)
        logger.info("search.settings.index_closed", index=index)
        try:
            await indices.put_settings(index=index, settings=IGNORE_MALFORMED)
        except Exception:
            logger.error("search.settings.update_failed", index=index, index_state="closed")
            raise
        try:
            await indices.open(index=index)
        except Exception:
            logger.error("search.settings.reopen_failed", index=index, index_state="closed")
            raise
        logger.info("search.settings.applied", index=index, settings=IGNORE_MALFORMED)
