"""Infrastructure errors – queue payloads and bulk write results."""

from __future__ import annotations

from typing import Any

from searchsync.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """I/O or integration failure that is not a domain rule violation."""

    default_code = "infrastructure_error"


class SerializationError(InfrastructureError):
    """Failed to serialize or deserialize a payload."""

    default_code = "serialization_error"

    def __init__(
        self,
        message: str,
        *,
        payload_type: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.payload_type = payload_type


class BulkWriteError(InfrastructureError):
    """The engine accepted a bulk request but rejected some of its items.

    ``items`` holds the per-item responses that carried an ``error`` key.
    """

    default_code = "bulk_write_error"

    def __init__(
        self,
        items: list[dict[str, Any]],
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"{len(items)} bulk operation(s) failed", **kwargs)
        self.items = items

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["items"] = self.items
        return base


__all__ = ["BulkWriteError", "InfrastructureError", "SerializationError"]
