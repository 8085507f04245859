"""Application search – SearchBuilder, the fluent predicate accumulator."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Awaitable, Callable, Generic, Iterable, TypeVar

from searchsync.application.pagination import Page, PageRequest
from searchsync.application.search.query import (
    Order,
    Predicate,
    SetPredicate,
    normalize_direction,
    normalize_operator,
)
from searchsync.observability.logging import get_logger

if TYPE_CHECKING:
    from searchsync.application.search.engine import SearchEngine
    from searchsync.application.search.searchable import SearchableModel

T = TypeVar("T")

RawCallback = Callable[[Any, dict[str, Any]], Any | Awaitable[Any]]

__all__ = ["SearchBuilder"]

logger = get_logger(__name__)


class SearchBuilder(Generic[T]):
    """Collects predicates for one search and runs it against the model's engine.

    Every mutator returns the builder so calls chain::

        page = await (
            products.search("shoes")
            .where("brand_id", 7)
            .where_operator("price", "<", 100)
            .order_by("price", "desc")
            .paginate(per_page=20, page=2)
        )

    Unsupported operators and empty ``where_in`` sets are dropped (and logged
    at debug level) instead of raising, so a predicate the engine cannot
    express narrows nothing.
    """

    def __init__(
        self,
        model: "SearchableModel[T]",
        query: str = "",
        callback: RawCallback | None = None,
    ) -> None:
        self.model = model
        self.query = query or ""
        self.callback = callback
        self.index: str | None = None
        self.wheres: dict[str, Any] = {}
        self.where_operators: list[Predicate] = []
        self.or_wheres: list[Predicate] = []
        self.where_ins: list[SetPredicate] = []
        self.orders: list[Order] = []
        self.limit: int | None = None

    # -- predicates ----------------------------------------------------

    def within(self, index: str) -> "SearchBuilder[T]":
        """Search *index* instead of the model's own index."""
        self.index = index
        return self

    def where(self, column: str, value: Any) -> "SearchBuilder[T]":
        self.wheres[column] = value
        return self

    def where_operator(self, column: str, operator: str, value: Any) -> "SearchBuilder[T]":
        op = normalize_operator(operator)
        if op is None:
            logger.debug("search.operator_dropped", column=column, operator=operator)
            return self
        self.where_operators.append(Predicate(column, op, value))
        return self

    def where_all(self, predicates: Iterable[tuple[str, str, Any]]) -> "SearchBuilder[T]":
        for column, operator, value in predicates:
            self.where_operator(column, operator, value)
        return self

    def where_group(self, callback: Callable[["SearchBuilder[T]"], Any]) -> "SearchBuilder[T]":
        callback(self)
        return self

    def or_where(self, column: str, operator: str, value: Any) -> "SearchBuilder[T]":
        op = normalize_operator(operator)
        if op is None:
            logger.debug("search.operator_dropped", column=column, operator=operator, group="or")
            return self
        self.or_wheres.append(Predicate(column, op, value))
        return self

    def where_in(self, column: str, values: Any) -> "SearchBuilder[T]":
        """Require *column* to match one of *values*; an empty set is dropped."""
        predicate = SetPredicate.of(column, values)
        if not predicate.values:
            logger.debug("search.empty_set_dropped", column=column)
            return self
        self.where_ins.append(predicate)
        return self

    def order_by(self, column: str, direction: str = "asc") -> "SearchBuilder[T]":
        self.orders.append(Order(column, normalize_direction(direction)))
        return self

    def take(self, limit: int) -> "SearchBuilder[T]":
        self.limit = limit
        return self

    # -- execution -----------------------------------------------------

    @property
    def engine(self) -> "SearchEngine":
        return self.model.engine

    @property
    def target(self) -> "SearchableModel[T]":
        """The model binding this search runs against, override applied."""
        if self.index is None:
            return self.model
        return self.model.within(self.index)

    async def raw(self) -> Any:
        """Engine response for this search, not reconciled."""
        return await self.engine.search(self)

    async def get(self) -> list[Any]:
        results = await self.engine.search(self)
        return await self.engine.reconcile(results, self.target)

    async def first(self) -> Any | None:
        items = await self.get()
        return items[0] if items else None

    async def keys(self) -> list[str]:
        return self.engine.map_ids(await self.engine.search(self))

    async def paginate(self, per_page: int | None = None, page: int = 1) -> Page[Any]:
        request = PageRequest(page=page, per_page=self.model.per_page if per_page is None else per_page)
        results = await self.engine.paginate(self, request.per_page, request.page)
        items = await self.engine.reconcile(results, self.target)
        return Page(
            items=items,
            total=self.engine.total_count(results),
            per_page=request.per_page,
            page=request.page,
            query=self.query,
        )
