"""Application search – SearchEngine capability protocol."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from searchsync.application.search.builder import SearchBuilder
    from searchsync.application.search.searchable import SearchableModel

__all__ = ["SearchEngine"]


@runtime_checkable
class SearchEngine(Protocol):
    """What the builder and the dispatcher need from a search backend.

    A backend is picked when the :class:`SearchableModel` is wired, never
    looked up at call time.
    """

    def compile_query(
        self,
        builder: "SearchBuilder[Any]",
        *,
        size: int | None = None,
        from_: int | None = None,
    ) -> dict[str, Any]: ...

    async def update(
        self,
        model: "SearchableModel[Any]",
        records: Sequence[Any],
        index: str | None = None,
    ) -> None: ...

    async def delete(
        self,
        model: "SearchableModel[Any]",
        records: Sequence[Any],
        index: str | None = None,
    ) -> None: ...

    async def search(self, builder: "SearchBuilder[Any]") -> Any: ...

    async def paginate(self, builder: "SearchBuilder[Any]", per_page: int, page: int) -> Any: ...

    async def reconcile(self, results: Any, model: "SearchableModel[Any]") -> list[Any]: ...

    def map_ids(self, results: Any) -> list[str]: ...

    def total_count(self, results: Any) -> int: ...

    async def apply_settings(self, model: "SearchableModel[Any]") -> None: ...
