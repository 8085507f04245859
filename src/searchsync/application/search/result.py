"""Application search – parsed engine responses."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

__all__ = ["Hit", "SearchResults"]


@dataclass(frozen=True)
class Hit:
    id: str
    source: dict[str, Any] = field(default_factory=dict)
    score: float | None = None


@dataclass
class SearchResults:
    """Hits in relevance order plus the engine-reported total.

    ``page_count`` is only set for paginated searches.
    """

    hits: list[Hit]
    total: int
    page_count: int | None = None
    raw: Any = None

    @classmethod
    def from_response(cls, response: Mapping[str, Any]) -> "SearchResults":
        """Parse a search response.

        Accepts both the legacy integer total and the
        ``{"value": n, "relation": "eq"}`` form.
        """
        section = response.get("hits") or {}
        total = section.get("total", 0)
        if isinstance(total, Mapping):
            total = total.get("value", 0)
        hits = [
            Hit(id=str(h["_id"]), source=dict(h.get("_source") or {}), score=h.get("_score"))
            for h in section.get("hits") or []
        ]
        return cls(hits=hits, total=int(total or 0), raw=response)

    @property
    def ids(self) -> list[str]:
        return [hit.id for hit in self.hits]

    def __len__(self) -> int:
        return len(self.hits)
