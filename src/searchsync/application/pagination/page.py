"""Application pagination – Page."""
from __future__ import annotations

import dataclasses
import math
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")


def page_count(total: int, per_page: int) -> int:
    """Number of pages needed to show *total* items, *per_page* at a time."""
    if per_page <= 0 or total <= 0:
        return 0
    return math.ceil(total / per_page)


@dataclasses.dataclass
class Page(Generic[T]):
    """One page of reconciled search results plus navigation metadata."""

    items: list[T]
    total: int
    per_page: int
    page: int
    query: str = ""

    @property
    def page_count(self) -> int:
        return page_count(self.total, self.per_page)

    @property
    def has_next(self) -> bool:
        return self.page < self.page_count

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    def map(self, fn: Callable[[T], Any]) -> "Page[Any]":
        """Return a new :class:`Page` with each item transformed by *fn*."""
        return Page(
            items=[fn(item) for item in self.items],
            total=self.total,
            per_page=self.per_page,
            page=self.page,
            query=self.query,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": self.items,
            "total": self.total,
            "per_page": self.per_page,
            "page": self.page,
            "page_count": self.page_count,
        }


__all__ = ["Page", "page_count"]
