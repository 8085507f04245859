"""Application search – predicate to Elasticsearch bool-query compiler.

Pure translation: a :class:`SearchBuilder` goes in, the request document
goes out::

    {
        "sort": [{"price": "desc"}],
        "query": {"bool": {"filter": [...], "must": [...], "must_not": [...],
                           "should": [...], "minimum_should_match": 1}},
        "size": 20,
        "from": 40,
    }

Equality on numbers, booleans and numeric strings goes to ``filter``;
equality on other strings goes to ``must``.  OR predicates and set
membership land in ``should``, which then requires at least one match.
"""
from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any

from searchsync.application.search.query import COMPARATORS, Predicate, SetPredicate

if TYPE_CHECKING:
    from searchsync.application.search.builder import SearchBuilder

__all__ = ["DEFAULT_SIZE", "compile_query", "is_numeric"]

DEFAULT_SIZE = 10000


def is_numeric(value: Any) -> bool:
    """Numbers, booleans and strings that parse as a number."""
    if isinstance(value, (bool, int, float)):
        return True
    if isinstance(value, str):
        try:
            return math.isfinite(float(value))
        except ValueError:
            return False
    return False


def column_clause(column: str, value: Any) -> dict[str, Any]:
    if isinstance(value, (list, tuple, set, frozenset)):
        return {"terms": {column: list(value)}}
    return {"match_phrase": {column: value}}


def _equality(column: str, value: Any, filters: list[dict[str, Any]], must: list[dict[str, Any]]) -> None:
    if is_numeric(value):
        filters.append(column_clause(column, value))
    elif isinstance(value, str):
        must.append(column_clause(column, value))


def _or_clause(predicate: Predicate) -> dict[str, Any] | None:
    if predicate.operator in ("=", "like"):
        return {"match": {predicate.column: predicate.value}}
    bound = COMPARATORS.get(predicate.operator)
    if bound is not None:
        return {"range": {predicate.column: {bound: predicate.value}}}
    return None


def _set_clause(predicate: SetPredicate) -> dict[str, Any]:
    return {"terms": {predicate.column: list(predicate.values)}}


def compile_query(
    builder: "SearchBuilder[Any]",
    *,
    size: int | None = None,
    from_: int | None = None,
    default_size: int = DEFAULT_SIZE,
) -> dict[str, Any]:
    """Compile *builder* into a search request document.

    ``size`` falls back to the builder's limit, then to *default_size*.
    ``from`` is only emitted when given (paginated searches).
    """
    filters: list[dict[str, Any]] = []
    must: list[dict[str, Any]] = []
    must_not: list[dict[str, Any]] = []
    should: list[dict[str, Any]] = []
    ranges: dict[str, dict[str, Any]] = {}

    if builder.query:
        must.append({"query_string": {"query": builder.query}})

    for column, value in builder.wheres.items():
        _equality(column, value, filters, must)

    for predicate in builder.where_operators:
        column, value = predicate.column, predicate.value
        if predicate.operator == "=":
            _equality(column, value, filters, must)
        elif predicate.operator == "!=":
            must_not.append(column_clause(column, value))
        elif predicate.operator in COMPARATORS:
            ranges.setdefault(column, {})[COMPARATORS[predicate.operator]] = value
        elif predicate.operator == "like":
            must.append({"match": {column: {"query": value, "operator": "and"}}})

    # Elasticsearch rejects a range query naming several fields
    for column, bounds in ranges.items():
        must.append({"range": {column: bounds}})

    for predicate in builder.or_wheres:
        clause = _or_clause(predicate)
        if clause is not None:
            should.append(clause)

    for set_predicate in builder.where_ins:
        should.append(_set_clause(set_predicate))

    bool_query: dict[str, Any] = {
        "filter": filters,
        "must": must,
        "must_not": must_not,
        "should": should,
    }
    if should:
        bool_query["minimum_should_match"] = 1

    document: dict[str, Any] = {
        "sort": [{order.column: order.direction} for order in builder.orders],
        "query": {"bool": bool_query},
        "size": size if size is not None else (builder.limit or default_size),
    }
    if from_ is not None:
        document["from"] = from_
    return document
