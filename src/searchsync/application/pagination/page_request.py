"""Application pagination – PageRequest."""
from __future__ import annotations

import dataclasses

from searchsync.kernel.errors import ValidationError


@dataclasses.dataclass(frozen=True)
class PageRequest:
    """Offset-based pagination parameters; pages are 1-indexed."""
    page: int = 1
    per_page: int = 15

    def __post_init__(self) -> None:
        errors = []
        if self.page < 1:
            errors.append({"field": "page", "value": self.page, "reason": "must be >= 1"})
        if self.per_page < 1:
            errors.append({"field": "per_page", "value": self.per_page, "reason": "must be >= 1"})
        if errors:
            raise ValidationError("Invalid page request", errors=errors)

    @property
    def offset(self) -> int:
        return (self.page * self.per_page) - self.per_page

    @property
    def size(self) -> int:
        return self.per_page


__all__ = ["PageRequest"]
