"""
Row materialization: raw SQLite rows -> typed, status-augmented records.
"""

from __future__ import annotations

import sqlite3
import time
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, List, Mapping, Union

from raceday.domain.errors import TimestampDecodeError
from raceday.domain.models import Status, Timestamp
from raceday.repositories.abstract import EntityKind, RecordT

Row = Union[sqlite3.Row, Mapping[str, object]]
Clock = Callable[[], float]


def decode_timestamp(value: object) -> Timestamp:
    """
    Parse a stored ISO-8601 start time into a Timestamp.

    Accepts a trailing `Z` or an explicit UTC offset; values without an
    offset are taken as UTC.

    Raises
    ------
    TimestampDecodeError
        If `value` is not text or is not a valid ISO-8601 timestamp.
    """
    if not isinstance(value, str):
        raise TimestampDecodeError(value)
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise TimestampDecodeError(value) from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return Timestamp.from_datetime(parsed)


def derive_status(start: Timestamp, now_seconds: int) -> Status:
    """CLOSED once `now` is strictly past the advertised start second, else OPEN."""
    if now_seconds > start.seconds:
        return Status.CLOSED
    return Status.OPEN


def materialize_row(row: Row, kind: EntityKind[RecordT, Any], now_seconds: int) -> RecordT:
    fields = {column: row[column] for column in kind.columns}
    start = decode_timestamp(fields[kind.timestamp_column])
    for column in kind.bool_columns:
        fields[column] = bool(fields[column])
    fields[kind.timestamp_column] = start
    fields["status"] = derive_status(start, now_seconds)
    return kind.record_type(**fields)


def materialize(
    rows: Iterable[Row],
    kind: EntityKind[RecordT, Any],
    clock: Clock = time.time,
) -> List[RecordT]:
    """
    Convert every row yielded by `rows` into a record, preserving row order.

    `now` is sampled once so every record in one result set is judged against
    the same instant. An empty cursor yields an empty list. Errors raised
    while iterating the cursor propagate unchanged.
    """
    now_seconds = int(clock())
    return [materialize_row(row, kind, now_seconds) for row in rows]


__all__ = [
    "decode_timestamp",
    "derive_status",
    "materialize",
    "materialize_row",
]
