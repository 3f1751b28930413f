"""
Entity-kind descriptors for raceday.

Races and sports events are read through one generic repository. Everything
that differs between the two kinds (table, columns, which filter attribute
maps to which predicate, the ORDER BY whitelist, the record type) lives in an
EntityKind so the query builder and materializer stay kind-agnostic.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Generic, Tuple, Type, TypeVar

from pydantic import BaseModel

RecordT = TypeVar("RecordT", bound=BaseModel)
FilterT = TypeVar("FilterT", bound=BaseModel)

TIMESTAMP_COLUMN = "advertised_start_time"


@dataclass(frozen=True)
class EntityKind(Generic[RecordT, FilterT]):
    """
    Describes one table and how its rows are filtered, ordered and materialized.

    Attributes
    ----------
    name : str
        Short machine-friendly identifier ("race", "event").
    table : str
        Table holding the rows.
    columns : tuple[str, ...]
        Selected columns, in SELECT order. Must include `timestamp_column`.
    record_type : type
        Pydantic model each row is materialized into.
    filter_type : type
        Filter model accepted by `list()`; any other filter is rejected.
    order_columns : tuple[str, ...]
        Closed whitelist of columns allowed in ORDER BY.
    set_filters : dict[str, str]
        Filter attribute -> column, matched with `IN (...)`.
    contains_filters : dict[str, str]
        Filter attribute -> column, matched with `LIKE %value%`, wildcards escaped.
    equality_filters : dict[str, str]
        Filter attribute -> column, matched with `=`.
    bool_columns : tuple[str, ...]
        Integer 0/1 columns exposed as booleans.
    """

    name: str
    table: str
    columns: Tuple[str, ...]
    record_type: Type[RecordT]
    filter_type: Type[FilterT]
    order_columns: Tuple[str, ...]
    default_order_column: str = TIMESTAMP_COLUMN
    timestamp_column: str = TIMESTAMP_COLUMN
    set_filters: Dict[str, str] = field(default_factory=dict)
    contains_filters: Dict[str, str] = field(default_factory=dict)
    equality_filters: Dict[str, str] = field(default_factory=dict)
    bool_columns: Tuple[str, ...] = ("visible",)

    def select_all(self) -> str:
        return f"SELECT {', '.join(self.columns)} FROM {self.table}"


__all__ = [
    "TIMESTAMP_COLUMN",
    "EntityKind",
]
