"""
Repositories package for raceday.

Re-exports the generic building blocks (entity kinds, query builder,
materializer) and the two concrete repositories so callers can import from
`raceday.repositories` directly.
"""

from raceday.repositories.abstract import EntityKind
from raceday.repositories.base import SqlRepository
from raceday.repositories.events import EVENT_KIND, EventsRepo
from raceday.repositories.materializer import decode_timestamp, derive_status, materialize
from raceday.repositories.query import apply_filter, apply_order, build_list_query, is_valid_column
from raceday.repositories.races import RACE_KIND, RacesRepo

__all__ = [
    # Abstracts
    "EntityKind",
    "SqlRepository",
    # Query building and materialization
    "apply_filter",
    "apply_order",
    "build_list_query",
    "decode_timestamp",
    "derive_status",
    "is_valid_column",
    "materialize",
    # Concrete repositories
    "EVENT_KIND",
    "EventsRepo",
    "RACE_KIND",
    "RacesRepo",
]
