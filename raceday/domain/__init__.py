"""
Domain package for raceday.

Exports the entity records, filter/order parameters, facade messages and the
error taxonomy. Keep this package focused on data definitions and validation
concerns.
"""

from raceday.domain.errors import (
    InvalidRequestError,
    NotFoundError,
    RaceNotFoundError,
    RacedayError,
    TimestampDecodeError,
)
from raceday.domain.models import (
    Event,
    EventFilter,
    GetRaceRequest,
    ListEventsRequest,
    ListEventsResponse,
    ListRacesRequest,
    ListRacesResponse,
    OrderParam,
    Race,
    RaceFilter,
    Status,
    Timestamp,
)

__all__ = [
    # Records
    "Event",
    "Race",
    "Status",
    "Timestamp",
    # Parameters
    "EventFilter",
    "OrderParam",
    "RaceFilter",
    # Messages
    "GetRaceRequest",
    "ListEventsRequest",
    "ListEventsResponse",
    "ListRacesRequest",
    "ListRacesResponse",
    # Errors
    "InvalidRequestError",
    "NotFoundError",
    "RaceNotFoundError",
    "RacedayError",
    "TimestampDecodeError",
]
