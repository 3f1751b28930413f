"""
Sports events repository: the `sport_events` table.
"""

from __future__ import annotations

from typing import Iterator

from raceday.domain.models import Event, EventFilter
from raceday.repositories.abstract import EntityKind
from raceday.repositories.base import SqlRepository
from raceday.repositories.seeding import EventRow, generate_event_rows

EVENT_KIND: EntityKind[Event, EventFilter] = EntityKind(
    name="event",
    table="sport_events",
    columns=("id", "name", "type", "location", "visible", "advertised_start_time"),
    record_type=Event,
    filter_type=EventFilter,
    order_columns=("id", "name", "type", "advertised_start_time"),
    set_filters={"ids": "id"},
    contains_filters={"name": "name"},
    equality_filters={"type": "type", "location": "location", "visible": "visible"},
)


class EventsRepo(SqlRepository[Event, EventFilter]):
    kind = EVENT_KIND
    create_table_sql = (
        "CREATE TABLE IF NOT EXISTS sport_events ("
        "id INTEGER PRIMARY KEY, name TEXT, type TEXT, location TEXT, "
        "visible INTEGER, advertised_start_time TEXT)"
    )

    def seed_values(self) -> Iterator[EventRow]:
        return generate_event_rows(self.seed_rows, seed=self.seed)


__all__ = ["EVENT_KIND", "EventsRepo"]
