"""Config settings – SearchSettings."""
from __future__ import annotations

import dataclasses

from searchsync.config.settings.base import Settings
from searchsync.config.validation import InvalidSettingValueError

MAX_CHUNK_SIZE = 500


@dataclasses.dataclass
class SearchSettings(Settings):
    """Settings for the search engine, the deferred queue and bulk imports.

    Read from ``SEARCH_*`` environment variables by
    :class:`~searchsync.config.settings.loaders.EnvSettingsLoader`, e.g.
    ``SEARCH_HOSTS=http://es1:9200,http://es2:9200`` or ``SEARCH_QUEUE=true``.
    """

    _prefix = "SEARCH"

    hosts: list[str] = dataclasses.field(default_factory=lambda: ["http://localhost:9200"])
    prefix: str = ""
    queue: bool = False
    queue_name: str | None = None
    queue_connection: str = "default"
    chunk_size: int = MAX_CHUNK_SIZE
    max_results: int = 10000
    per_page: int = 15

    def _validate(self) -> None:
        if not self.hosts:
            raise InvalidSettingValueError("hosts", self.hosts, "at least one host is required")
        if not 1 <= self.chunk_size <= MAX_CHUNK_SIZE:
            raise InvalidSettingValueError(
                "chunk_size", self.chunk_size, f"must be between 1 and {MAX_CHUNK_SIZE}"
            )
        if self.max_results < 1:
            raise InvalidSettingValueError("max_results", self.max_results, "must be >= 1")
        if self.per_page < 1:
            raise InvalidSettingValueError("per_page", self.per_page, "must be >= 1")


__all__ = ["MAX_CHUNK_SIZE", "SearchSettings"]
