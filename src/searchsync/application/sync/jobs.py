"""Application sync – queued index/delete tasks and their handler."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from searchsync.application.search.searchable import SearchableDocument, SearchableModel
from searchsync.kernel.errors import NotFoundError, SerializationError
from searchsync.observability.logging import get_logger

__all__ = ["MAKE_SEARCHABLE", "REMOVE_FROM_SEARCH", "SearchableJob", "SearchableJobHandler"]

MAKE_SEARCHABLE = "make_searchable"
REMOVE_FROM_SEARCH = "remove_from_search"
ACTIONS = frozenset({MAKE_SEARCHABLE, REMOVE_FROM_SEARCH})

logger = get_logger(__name__)


@dataclass(frozen=True)
class SearchableJob:
    """A batch of detached documents to index or delete later.

    Documents are projected when the job is created, so the worker needs
    neither the records nor the index override that was active then.
    """

    action: str
    model: str
    documents: tuple[SearchableDocument, ...]
    index: str | None = None

    @classmethod
    def create(
        cls,
        action: str,
        model: SearchableModel[Any],
        records: Iterable[Any],
        index: str | None = None,
    ) -> "SearchableJob":
        return cls(
            action=action,
            model=model.name,
            documents=tuple(model.document(record, index) for record in records),
            index=index,
        )

    def to_payload(self) -> dict[str, Any]:
        return {
            "action": self.action,
            "model": self.model,
            "index": self.index,
            "documents": [doc.to_payload() for doc in self.documents],
        }

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "SearchableJob":
        try:
            action = payload["action"]
            model = payload["model"]
            documents = tuple(SearchableDocument.from_payload(d) for d in payload.get("documents") or [])
        except (KeyError, TypeError) as exc:
            raise SerializationError(
                f"Malformed searchable job payload: {exc!r}", payload_type="SearchableJob", cause=exc
            ) from exc
        if action not in ACTIONS:
            raise SerializationError(f"Unknown searchable job action {action!r}", payload_type="SearchableJob")
        return cls(action=action, model=model, documents=documents, index=payload.get("index"))


class SearchableJobHandler:
    """Runs queued :class:`SearchableJob` payloads against the model's engine."""

    def __init__(self, models: Iterable[SearchableModel[Any]] = ()) -> None:
        self._models: dict[str, SearchableModel[Any]] = {}
        for model in models:
            self.register(model)

    def register(self, model: SearchableModel[Any]) -> None:
        self._models[model.name] = model

    async def handle(self, payload: Mapping[str, Any]) -> None:
        job = SearchableJob.from_payload(payload)
        if not job.documents:
            return
        model = self._models.get(job.model)
        if model is None:
            raise NotFoundError("searchable model", job.model)
        if job.action == MAKE_SEARCHABLE:
            await model.engine.update(model, list(job.documents), job.index)
        else:
            await model.engine.delete(model, list(job.documents), job.index)
        logger.debug("search.job_handled", action=job.action, model=job.model, documents=len(job.documents))
