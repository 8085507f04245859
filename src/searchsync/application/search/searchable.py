"""Application search – searchable records, record store port, model binding.

A :class:`SearchableModel` ties one record type to the store that owns its
rows and to the engine that indexes them.  It is passed explicitly to the
builder, the engine and the dispatcher; nothing is resolved from process
state.
"""
from __future__ import annotations

import dataclasses
from typing import (
    TYPE_CHECKING,
    Any,
    AsyncIterator,
    Awaitable,
    Callable,
    Generic,
    Mapping,
    Protocol,
    TypeVar,
    runtime_checkable,
)

if TYPE_CHECKING:
    from searchsync.application.search.builder import SearchBuilder
    from searchsync.application.search.engine import SearchEngine

T = TypeVar("T")

__all__ = ["RecordStore", "SearchableDocument", "SearchableModel"]


@dataclasses.dataclass(frozen=True)
class SearchableDocument:
    """Detached projection of a record: key, target index and indexed body.

    The index is fixed at dispatch time; deferred work writes to it as
    captured.
    """

    key: Any
    index: str
    body: Mapping[str, Any]

    def to_payload(self) -> dict[str, Any]:
        return {"key": self.key, "index": self.index, "body": dict(self.body)}

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "SearchableDocument":
        return cls(key=payload["key"], index=payload["index"], body=dict(payload.get("body") or {}))


@runtime_checkable
class RecordStore(Protocol[T]):
    """Port: the backing record store for one record type."""

    @property
    def table(self) -> str: ...

    @property
    def key_name(self) -> str: ...

    def key_of(self, record: T) -> Any: ...

    def to_document(self, record: T) -> dict[str, Any]: ...

    async def find_by_keys(self, keys: list[Any]) -> dict[str, T]:
        """Return the records whose key is in *keys*, addressed by ``str(key)``."""
        ...

    def chunks(self, size: int) -> AsyncIterator[list[T]]:
        """Yield every record in key order, *size* records at a time."""
        ...


@dataclasses.dataclass(frozen=True)
class SearchableModel(Generic[T]):
    """Search binding of one record type."""

    store: RecordStore[T]
    engine: "SearchEngine"
    prefix: str = ""
    search_index: str | None = None
    per_page: int = 15
    queue: str | None = None
    connection: str | None = None

    @property
    def name(self) -> str:
        return self.store.table

    @property
    def index_name(self) -> str:
        return self.search_index or self.store.table

    @property
    def is_virtual_index(self) -> bool:
        """``True`` when documents live outside the record type's own table."""
        return self.index_name != self.store.table

    def searchable_as(self) -> str:
        return f"{self.prefix}{self.index_name}"

    def within(self, index: str) -> "SearchableModel[T]":
        """Return a copy of the binding that targets *index*."""
        return dataclasses.replace(self, search_index=index)

    def document(self, record: T | SearchableDocument, index: str | None = None) -> SearchableDocument:
        if isinstance(record, SearchableDocument):
            if index is None or index == record.index:
                return record
            return dataclasses.replace(record, index=index)
        return SearchableDocument(
            key=self.store.key_of(record),
            index=index or self.searchable_as(),
            body=self.store.to_document(record),
        )

    def search(
        self,
        query: str = "",
        callback: Callable[[Any, dict[str, Any]], Any | Awaitable[Any]] | None = None,
    ) -> "SearchBuilder[T]":
        from searchsync.application.search.builder import SearchBuilder

        return SearchBuilder(self, query, callback)
