"""
SQL construction for list queries.

Values are always bound as `?` parameters. Column names cannot be bound, so
the only identifiers ever concatenated into a statement come from the
EntityKind itself: filter columns are fixed in the descriptor and ORDER BY
columns must pass `is_valid_column` against the kind's whitelist first.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional, Tuple

from pydantic import BaseModel

from raceday.domain.models import OrderParam
from raceday.repositories.abstract import EntityKind

_DIRECTIONS = ("ASC", "DESC")
_LIKE_ESCAPE = "\\"


def _match_column(column: str, valid_columns: Iterable[str]) -> Optional[str]:
    wanted = column.casefold()
    for valid in valid_columns:
        if wanted == valid.casefold():
            return valid
    return None


def is_valid_column(column: str, valid_columns: Iterable[str]) -> bool:
    """Case-insensitive membership check against a closed column whitelist."""
    return _match_column(column, valid_columns) is not None


def _placeholders(count: int) -> str:
    return ",".join(["?"] * count)


def _escape_like(value: str) -> str:
    """Make `%`, `_` and the escape character itself match literally."""
    for char in (_LIKE_ESCAPE, "%", "_"):
        value = value.replace(char, _LIKE_ESCAPE + char)
    return value


def apply_filter(
    query: str, filter: Optional[BaseModel], kind: EntityKind
) -> Tuple[str, List[Any]]:
    """
    Append a WHERE clause for every predicate set on `filter`.

    Identifier sets expand to `IN (?,...)`, name-like attributes to a
    wrapped `LIKE`, everything else to equality. Predicates are ANDed; when
    none is set the query is returned unchanged.

    Raises
    ------
    TypeError
        If `filter` is not the kind's filter model.
    """
    clauses: List[str] = []
    args: List[Any] = []

    if filter is None:
        return query, args
    if not isinstance(filter, kind.filter_type):
        raise TypeError(
            f"{kind.name} filter must be {kind.filter_type.__name__}, "
            f"got {type(filter).__name__}"
        )

    for attr, column in kind.set_filters.items():
        values = list(getattr(filter, attr, None) or [])
        if values:
            clauses.append(f"{column} IN ({_placeholders(len(values))})")
            args.extend(values)

    for attr, column in kind.contains_filters.items():
        value = getattr(filter, attr, None)
        if value is not None:
            clauses.append(f"{column} LIKE ? ESCAPE '{_LIKE_ESCAPE}'")
            args.append(f"%{_escape_like(value)}%")

    for attr, column in kind.equality_filters.items():
        value = getattr(filter, attr, None)
        if value is not None:
            clauses.append(f"{column} = ?")
            args.append(value)

    if clauses:
        query += " WHERE " + " AND ".join(clauses)

    return query, args


def apply_order(query: str, order: Optional[OrderParam], kind: EntityKind) -> str:
    """
    Append an ORDER BY clause built from `order`.

    No order at all sorts by the kind's default column. A column outside the
    whitelist drops ordering entirely. An unrecognised direction is ignored,
    leaving the database default (ascending).
    """
    if order is None:
        return f"{query} ORDER BY {kind.default_order_column}"

    if order.field is None:
        column = kind.default_order_column
    else:
        column = _match_column(order.field, kind.order_columns)
        if column is None:
            return query

    query += f" ORDER BY {column}"

    direction = (order.direction or "").upper()
    if direction in _DIRECTIONS:
        query += f" {direction}"

    return query


def build_list_query(
    kind: EntityKind,
    filter: Optional[BaseModel] = None,
    order: Optional[OrderParam] = None,
) -> Tuple[str, List[Any]]:
    """Compose the full parameterized list statement for `kind`."""
    query, args = apply_filter(kind.select_all(), filter, kind)
    return apply_order(query, order, kind), args


__all__ = [
    "apply_filter",
    "apply_order",
    "build_list_query",
    "is_valid_column",
]
