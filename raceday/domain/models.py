"""
Domain models for raceday.

Defines the entity records read from the `races` and `sport_events` tables,
the filter/order parameters accepted by the repositories, and the request and
response messages exchanged with the service facades. All models are frozen:
records are only ever read, never mutated.
"""
from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

_FROZEN = {
    "frozen": True,
    "populate_by_name": True,
    "arbitrary_types_allowed": False,
}


class Status(str, Enum):
    """Derived state of a race or event relative to the current time."""

    OPEN = "OPEN"
    CLOSED = "CLOSED"


class Timestamp(BaseModel):
    """
    A point in time as whole seconds since the Unix epoch plus a nanosecond remainder.
    """

    seconds: int = Field(..., description="Seconds since 1970-01-01T00:00:00Z.")
    nanos: int = Field(0, ge=0, le=999_999_999, description="Non-negative nanosecond fraction.")

    model_config = _FROZEN

    @classmethod
    def from_datetime(cls, value: datetime) -> "Timestamp":
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        delta = value - datetime(1970, 1, 1, tzinfo=timezone.utc)
        seconds = delta.days * 86_400 + delta.seconds
        return cls(seconds=seconds, nanos=delta.microseconds * 1_000)

    def to_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.seconds, tz=timezone.utc).replace(
            microsecond=self.nanos // 1_000
        )


class Race(BaseModel):
    """
    Representation of a single row in the `races` table.
    """

    id: int = Field(..., description="Primary key.")
    meeting_id: int = Field(..., description="Meeting the race belongs to.")
    name: str = Field(..., description="Race name.")
    number: int = Field(..., description="Race number within its meeting.")
    visible: bool = Field(..., description="Whether the race is visible.")
    advertised_start_time: Timestamp = Field(..., description="Advertised start.")
    status: Status = Field(..., description="OPEN until the advertised start has passed.")

    model_config = _FROZEN


class Event(BaseModel):
    """
    Representation of a single row in the `sport_events` table.
    """

    id: int = Field(..., description="Primary key.")
    name: str = Field(..., description="Event name.")
    type: str = Field(..., description="Sport the event belongs to.")
    location: str = Field(..., description="Venue city.")
    visible: bool = Field(..., description="Whether the event is visible.")
    advertised_start_time: Timestamp = Field(..., description="Advertised start.")
    status: Status = Field(..., description="OPEN until the advertised start has passed.")

    model_config = _FROZEN


class RaceFilter(BaseModel):
    """Optional predicates narrowing a race listing. Unset predicates match everything."""

    ids: List[int] = Field(default_factory=list)
    meeting_ids: List[int] = Field(default_factory=list)
    name: Optional[str] = None
    visible: Optional[bool] = None

    model_config = _FROZEN


class EventFilter(BaseModel):
    """Optional predicates narrowing an event listing. Unset predicates match everything."""

    ids: List[int] = Field(default_factory=list)
    name: Optional[str] = None
    type: Optional[str] = None
    location: Optional[str] = None
    visible: Optional[bool] = None

    model_config = _FROZEN


class OrderParam(BaseModel):
    """Requested sort column and direction (ASC/DESC, case-insensitive)."""

    field: Optional[str] = None
    direction: Optional[str] = None

    model_config = _FROZEN


class ListRacesRequest(BaseModel):
    filter: Optional[RaceFilter] = None
    order: Optional[OrderParam] = None

    model_config = _FROZEN


class ListRacesResponse(BaseModel):
    races: List[Race] = Field(default_factory=list)

    model_config = _FROZEN


class GetRaceRequest(BaseModel):
    id: int

    model_config = _FROZEN


class ListEventsRequest(BaseModel):
    filter: Optional[EventFilter] = None
    order: Optional[OrderParam] = None

    model_config = _FROZEN


class ListEventsResponse(BaseModel):
    events: List[Event] = Field(default_factory=list)

    model_config = _FROZEN


__all__ = [
    "Event",
    "EventFilter",
    "GetRaceRequest",
    "ListEventsRequest",
    "ListEventsResponse",
    "ListRacesRequest",
    "ListRacesResponse",
    "OrderParam",
    "Race",
    "RaceFilter",
    "Status",
    "Timestamp",
]
