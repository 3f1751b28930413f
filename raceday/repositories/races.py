"""
Races repository: the `races` table.
"""

from __future__ import annotations

from typing import Iterator

from raceday.domain.errors import RaceNotFoundError
from raceday.domain.models import Race, RaceFilter
from raceday.repositories.abstract import EntityKind
from raceday.repositories.base import SqlRepository
from raceday.repositories.seeding import RaceRow, generate_race_rows
from raceday.utils.logging import get_logger

log = get_logger(__name__)

RACE_KIND: EntityKind[Race, RaceFilter] = EntityKind(
    name="race",
    table="races",
    columns=("id", "meeting_id", "name", "number", "visible", "advertised_start_time"),
    record_type=Race,
    filter_type=RaceFilter,
    order_columns=("id", "name", "meeting_id", "advertised_start_time"),
    set_filters={"ids": "id", "meeting_ids": "meeting_id"},
    contains_filters={"name": "name"},
    equality_filters={"visible": "visible"},
)


class RacesRepo(SqlRepository[Race, RaceFilter]):
    """Read access to races, plus lookup of a single race by id."""

    kind = RACE_KIND
    create_table_sql = (
        "CREATE TABLE IF NOT EXISTS races ("
        "id INTEGER PRIMARY KEY, meeting_id INTEGER, name TEXT, number INTEGER, "
        "visible INTEGER, advertised_start_time TEXT)"
    )

    def seed_values(self) -> Iterator[RaceRow]:
        return generate_race_rows(self.seed_rows, seed=self.seed)

    def get_by_id(self, race_id: int) -> Race:
        """
        Return the race with `race_id`.

        Raises
        ------
        RaceNotFoundError
            If `race_id` is not positive or no race has that id.
        """
        if race_id <= 0:
            raise RaceNotFoundError(race_id)
        races = self.list(RaceFilter(ids=[race_id]))
        if not races:
            log.info("Race not found", extra={"race_id": race_id})
            raise RaceNotFoundError(race_id)
        return races[0]


__all__ = ["RACE_KIND", "RacesRepo"]
