"""
Exception taxonomy for raceday.

Query execution failures are not wrapped: `sqlite3.Error` propagates to the
caller unchanged.
"""
from __future__ import annotations


class RacedayError(Exception):
    """Base class for errors raised by raceday itself."""


class InvalidRequestError(RacedayError, ValueError):
    """A request message failed validation before reaching the store."""


class NotFoundError(RacedayError, LookupError):
    """A lookup by identifier matched no row."""


class RaceNotFoundError(NotFoundError):
    def __init__(self, race_id: int) -> None:
        super().__init__(f"race {race_id} not found")
        self.race_id = race_id


class TimestampDecodeError(RacedayError, ValueError):
    """A stored advertised_start_time could not be parsed."""

    def __init__(self, value: object) -> None:
        super().__init__(f"cannot decode timestamp {value!r}")
        self.value = value


__all__ = [
    "InvalidRequestError",
    "NotFoundError",
    "RaceNotFoundError",
    "RacedayError",
    "TimestampDecodeError",
]
