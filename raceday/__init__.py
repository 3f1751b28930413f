"""
raceday - read-only query services for races and sports events.

This package exposes two parallel services over a SQLite store:

- Racing: list races (filter by meeting, id, name, visibility) and fetch a race by id
- Sports: list sports events (filter by id, name, type, location, visibility)

Both sort by a whitelisted column and derive an OPEN/CLOSED status from the
advertised start time at read time.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from raceday.config import Settings, get_settings
from raceday.domain import (
    Event,
    EventFilter,
    GetRaceRequest,
    InvalidRequestError,
    ListEventsRequest,
    ListEventsResponse,
    ListRacesRequest,
    ListRacesResponse,
    NotFoundError,
    OrderParam,
    Race,
    RaceFilter,
    RaceNotFoundError,
    RacedayError,
    Status,
    Timestamp,
    TimestampDecodeError,
)
from raceday.repositories import EventsRepo, RacesRepo
from raceday.services import RacingService, SportsService
from raceday.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Records and messages
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
    # Errors
    "InvalidRequestError",
    "NotFoundError",
    "RaceNotFoundError",
    "RacedayError",
    "TimestampDecodeError",
    # Repositories and services
    "EventsRepo",
    "RacesRepo",
    "RacingService",
    "SportsService",
    # Logging
    "configure_logging",
    "get_logger",
]
