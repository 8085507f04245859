"""Application search – predicate value objects and operator normalisation."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

__all__ = [
    "COMPARATORS",
    "OPERATORS",
    "Order",
    "Predicate",
    "SetPredicate",
    "normalize_direction",
    "normalize_operator",
]

OPERATORS: frozenset[str] = frozenset({"=", "<", ">", "<=", ">=", "<>", "!=", "like"})

# comparator -> range boundary key
COMPARATORS: dict[str, str] = {">": "gt", ">=": "gte", "<": "lt", "<=": "lte"}


def normalize_operator(operator: str) -> str | None:
    """Return the canonical form of *operator*, or ``None`` if unsupported.

    Matching is case-insensitive and ``<>`` is folded into ``!=``.
    """
    op = str(operator).strip().lower()
    if op not in OPERATORS:
        return None
    return "!=" if op == "<>" else op


def normalize_direction(direction: str) -> Literal["asc", "desc"]:
    return "asc" if str(direction).lower() == "asc" else "desc"


@dataclass(frozen=True)
class Predicate:
    """``column <operator> value`` with an already-normalised operator."""
    column: str
    operator: str
    value: Any


@dataclass(frozen=True)
class SetPredicate:
    """``column IN values``."""
    column: str
    values: tuple[Any, ...]

    @classmethod
    def of(cls, column: str, values: Any) -> "SetPredicate":
        """Build from a list/tuple or a comma-delimited string."""
        if isinstance(values, str):
            items = tuple(v.strip() for v in values.split(",") if v.strip())
        elif isinstance(values, (list, tuple, set, frozenset)):
            items = tuple(values)
        else:
            items = (values,)
        return cls(column=column, values=items)


@dataclass(frozen=True)
class Order:
    column: str
    direction: Literal["asc", "desc"] = "asc"
