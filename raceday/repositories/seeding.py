"""
Synthetic seed rows for the races and sport_events tables.

Rows are generated with a `random.Random`, so passing a seed makes a store
reproducible. Start times are spread uniformly from one day in the past to
two days in the future, which guarantees both OPEN and CLOSED rows.
"""

from __future__ import annotations

import random
from datetime import datetime, timedelta, timezone
from typing import Iterator, Optional, Tuple

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
WINDOW_PAST = timedelta(days=1)
WINDOW_FUTURE = timedelta(days=2)

_PLACES = [
    "Ascot", "Flemington", "Randwick", "Caulfield", "Eagle Farm", "Morphettville",
    "Rosehill", "Moonee Valley", "Doomben", "Ellerslie", "Riccarton", "Sandown",
    "Cheltenham", "Epsom", "Goodwood", "Longchamp", "Sha Tin", "Happy Valley",
]
_NOUNS = [
    "Cup", "Plate", "Stakes", "Handicap", "Guineas", "Classic", "Mile", "Sprint",
    "Derby", "Oaks", "Quality", "Trophy", "Maiden", "Showcase",
]
_TEAMS = [
    "Lions", "Tigers", "Eagles", "Sharks", "Bulldogs", "Storm", "Raiders", "Titans",
    "Giants", "Swans", "Hawks", "Magpies", "Dragons", "Knights", "Panthers", "Warriors",
]
_SPORTS = [
    "Football", "Tennis", "Basketball", "Cricket", "Rugby League", "Rugby Union",
    "Baseball", "Ice Hockey", "Golf", "Boxing",
]
_CITIES = [
    "Sydney", "Melbourne", "Brisbane", "Perth", "Adelaide", "Auckland", "London",
    "Manchester", "Dublin", "Paris", "Tokyo", "New York",
]

RaceRow = Tuple[int, int, str, int, int, str]
EventRow = Tuple[int, str, str, str, int, str]


def format_timestamp(value: datetime) -> str:
    return value.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def _start_time(rng: random.Random, now: datetime) -> str:
    earliest = now - WINDOW_PAST
    span = (WINDOW_PAST + WINDOW_FUTURE).total_seconds()
    return format_timestamp(earliest + timedelta(seconds=rng.uniform(0, span)))


def generate_race_rows(
    rows: int, seed: Optional[int] = None, now: Optional[datetime] = None
) -> Iterator[RaceRow]:
    """Yield `(id, meeting_id, name, number, visible, advertised_start_time)` tuples."""
    rng = random.Random(seed)
    now = now or datetime.now(timezone.utc)
    for race_id in range(1, rows + 1):
        yield (
            race_id,
            rng.randint(1, 10),
            f"{rng.choice(_PLACES)} {rng.choice(_NOUNS)}",
            rng.randint(1, 12),
            rng.randint(0, 1),
            _start_time(rng, now),
        )


def generate_event_rows(
    rows: int, seed: Optional[int] = None, now: Optional[datetime] = None
) -> Iterator[EventRow]:
    """Yield `(id, name, type, location, visible, advertised_start_time)` tuples."""
    rng = random.Random(seed)
    now = now or datetime.now(timezone.utc)
    for event_id in range(1, rows + 1):
        home, away = rng.sample(_TEAMS, 2)
        yield (
            event_id,
            f"{home} v {away}",
            rng.choice(_SPORTS),
            rng.choice(_CITIES),
            rng.randint(0, 1),
            _start_time(rng, now),
        )


__all__ = [
    "TIMESTAMP_FORMAT",
    "format_timestamp",
    "generate_event_rows",
    "generate_race_rows",
]
