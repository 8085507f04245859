"""SQLAlchemy adapter – SqlAlchemyRecordStore."""
from __future__ import annotations

from typing import Any, AsyncIterator, Callable, Generic, TypeVar

from sqlalchemy import inspect, select
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")

__all__ = ["SqlAlchemyRecordStore"]


class SqlAlchemyRecordStore(Generic[T]):
    """``RecordStore`` over one mapped ORM class with a single-column primary key.

    Documents default to the mapped column values; a model may override this
    by defining ``to_searchable_dict()``.
    """

    def __init__(self, session_factory: Callable[[], AsyncSession], model_class: type[T]) -> None:
        self._session_factory = session_factory
        self._model = model_class
        mapper = inspect(model_class)
        if len(mapper.primary_key) != 1:
            raise ValueError(f"{model_class.__name__} must have exactly one primary key column")
        self._pk = mapper.primary_key[0]
        self._pk_attr = mapper.get_property_by_column(self._pk).key
        self._columns = [attr.key for attr in mapper.column_attrs]

    @property
    def table(self) -> str:
        return self._model.__table__.name  # type: ignore[attr-defined]

    @property
    def key_name(self) -> str:
        return self._pk_attr

    def key_of(self, record: T) -> Any:
        return getattr(record, self._pk_attr)

    def to_document(self, record: T) -> dict[str, Any]:
        custom = getattr(record, "to_searchable_dict", None)
        if callable(custom):
            return dict(custom())
        return {name: getattr(record, name) for name in self._columns}

    def _coerce_key(self, key: Any) -> Any:
        # hit ids come back as strings
        try:
            python_type = self._pk.type.python_type
        except NotImplementedError:
            return key
        if isinstance(key, python_type):
            return key
        return python_type(key)

    async def find_by_keys(self, keys: list[Any]) -> dict[str, T]:
        if not keys:
            return {}
        column = getattr(self._model, self._pk_attr)
        stmt = select(self._model).where(column.in_([self._coerce_key(k) for k in keys]))
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            records = list(result.scalars().all())
        return {str(self.key_of(record)): record for record in records}

    async def chunks(self, size: int) -> AsyncIterator[list[T]]:
        """Keyset-paginated iteration in primary key order."""
        column = getattr(self._model, self._pk_attr)
        last_key: Any = None
        while True:
            stmt = select(self._model).order_by(column).limit(size)
            if last_key is not None:
                stmt = stmt.where(column > last_key)
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                batch = list(result.scalars().all())
            if not batch:
                return
            yield batch
            if len(batch) < size:
                return
            last_key = self.key_of(batch[-1])
