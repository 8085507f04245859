"""Testing fakes – InMemoryRecordStore."""
from __future__ import annotations

import dataclasses
from typing import Any, AsyncIterator, Generic, Iterable, TypeVar

T = TypeVar("T")


class InMemoryRecordStore(Generic[T]):
    """Dict-backed ``RecordStore``; records are dicts or dataclasses."""

    def __init__(self, table: str, records: Iterable[T] = (), key_name: str = "id") -> None:
        self._table = table
        self._key_name = key_name
        self._records: dict[str, T] = {}
        self.lookups: list[list[Any]] = []
        for record in records:
            self.add(record)

    @property
    def table(self) -> str:
        return self._table

    @property
    def key_name(self) -> str:
        return self._key_name

    def add(self, record: T) -> None:
        self._records[str(self.key_of(record))] = record

    def remove(self, key: Any) -> None:
        self._records.pop(str(key), None)

    def key_of(self, record: T) -> Any:
        if isinstance(record, dict):
            return record[self._key_name]
        return getattr(record, self._key_name)

    def to_document(self, record: T) -> dict[str, Any]:
        if isinstance(record, dict):
            return dict(record)
        if dataclasses.is_dataclass(record):
            return dataclasses.asdict(record)  # type: ignore[arg-type]
        return dict(vars(record))

    async def find_by_keys(self, keys: list[Any]) -> dict[str, T]:
        self.lookups.append(list(keys))
        # deliberately unordered relative to *keys*
        wanted = {str(k) for k in keys}
        return {k: r for k, r in sorted(self._records.items()) if k in wanted}

    async def chunks(self, size: int) -> AsyncIterator[list[T]]:
        ordered = sorted(self._records.values(), key=self.key_of)
        for start in range(0, len(ordered), size):
            yield ordered[start:start + size]

    def __len__(self) -> int:
        return len(self._records)


__all__ = ["InMemoryRecordStore"]
