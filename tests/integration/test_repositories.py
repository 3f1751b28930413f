"""
Integration tests for the races and sport_events repositories.

Each test runs against a fresh in-memory SQLite store seeded through
`init()`, so every store holds exactly 100 rows per table.
"""

from __future__ import annotations

import sqlite3
import threading
import time
from typing import Callable, List

import pytest

from raceday.domain.errors import RaceNotFoundError, TimestampDecodeError
from raceday.domain.models import EventFilter, OrderParam, RaceFilter, Status
from raceday.repositories.events import EventsRepo
from raceday.repositories.races import RacesRepo

pytestmark = pytest.mark.integration

SEEDED_ROWS = 100
PRIME_MEETING_IDS = [2, 3, 5, 7, 11, 13]
DIRECTIONS = ["ASC", "DESC"]
CONCURRENT_CALLERS = 8


def _assert_monotonic(values: List, direction: str) -> None:
    for previous, current in zip(values, values[1:]):
        if direction == "ASC":
            assert current >= previous
        else:
            assert current <= previous


def _assert_status_consistent(records) -> None:
    now = int(time.time())
    for record in records:
        if record.status is Status.CLOSED:
            assert now > record.advertised_start_time.seconds, f"{record.id} should not be CLOSED"
        else:
            assert record.status is Status.OPEN
            # Allow for the clock ticking between materialization and this check.
            assert now - 1 <= record.advertised_start_time.seconds, f"{record.id} should not be OPEN"


class TestRacesRepo:
    def test_list_all_returns_every_seeded_row(self, races_repo: RacesRepo):
        races = races_repo.list()
        assert len(races) == SEEDED_ROWS
        assert sorted(race.id for race in races) == list(range(1, SEEDED_ROWS + 1))

    def test_default_order_is_by_start_time(self, races_repo: RacesRepo):
        races = races_repo.list(RaceFilter())
        _assert_monotonic([race.advertised_start_time.seconds for race in races], "ASC")

    def test_filter_by_meeting_ids(self, races_repo: RacesRepo):
        races = races_repo.list(RaceFilter(meeting_ids=PRIME_MEETING_IDS))
        assert races
        assert all(race.meeting_id in PRIME_MEETING_IDS for race in races)
        expected = sum(1 for race in races_repo.list() if race.meeting_id in PRIME_MEETING_IDS)
        assert len(races) == expected

    def test_filter_by_ids(self, races_repo: RacesRepo):
        races = races_repo.list(RaceFilter(ids=PRIME_MEETING_IDS))
        assert sorted(race.id for race in races) == PRIME_MEETING_IDS

    def test_filter_by_visibility(self, races_repo: RacesRepo):
        visible = races_repo.list(RaceFilter(visible=True))
        hidden = races_repo.list(RaceFilter(visible=False))
        assert all(race.visible for race in visible)
        assert not any(race.visible for race in hidden)
        assert len(visible) + len(hidden) == SEEDED_ROWS

    def test_filter_by_name_substring(self, races_repo: RacesRepo):
        name = races_repo.list()[0].name
        fragment = name[1:-2]
        races = races_repo.list(RaceFilter(name=fragment))
        assert races
        assert all(fragment.lower() in race.name.lower() for race in races)

    @pytest.mark.parametrize("fragment", ["_", "%", "a_c"])
    def test_name_wildcards_are_not_patterns(self, races_repo: RacesRepo, fragment: str):
        assert races_repo.list(RaceFilter(name=fragment)) == []

    def test_event_filter_is_rejected(self, races_repo: RacesRepo):
        with pytest.raises(TypeError):
            races_repo.list(EventFilter(visible=True))

    @pytest.mark.parametrize("field", ["id", "name", "meeting_id", "advertised_start_time"])
    @pytest.mark.parametrize("direction", DIRECTIONS)
    def test_sort(self, races_repo: RacesRepo, field: str, direction: str):
        races = races_repo.list(RaceFilter(), OrderParam(field=field, direction=direction))
        assert len(races) == SEEDED_ROWS
        key: Callable = {
            "id": lambda r: r.id,
            "name": lambda r: r.name,
            "meeting_id": lambda r: r.meeting_id,
            "advertised_start_time": lambda r: r.advertised_start_time.seconds,
        }[field]
        _assert_monotonic([key(race) for race in races], direction)

    def test_unknown_sort_column_still_returns_everything(self, races_repo: RacesRepo):
        races = races_repo.list(None, OrderParam(field="number; DROP TABLE races", direction="DESC"))
        assert len(races) == SEEDED_ROWS
        assert len(races_repo.list()) == SEEDED_ROWS

    def test_status_field(self, races_repo: RacesRepo):
        races = races_repo.list()
        _assert_status_consistent(races)
        assert {race.status for race in races} <= {Status.OPEN, Status.CLOSED}

    def test_get_by_id(self, races_repo: RacesRepo):
        race = races_repo.get_by_id(35)
        assert race.id == 35

    @pytest.mark.parametrize("race_id", [-1, 0, SEEDED_ROWS + 1])
    def test_get_by_invalid_id(self, races_repo: RacesRepo, race_id: int):
        with pytest.raises(RaceNotFoundError) as exc_info:
            races_repo.get_by_id(race_id)
        assert exc_info.value.race_id == race_id


class TestEventsRepo:
    def test_list_all_returns_every_seeded_row(self, events_repo: EventsRepo):
        assert len(events_repo.list(EventFilter(), OrderParam())) == SEEDED_ROWS

    def test_default_order_is_by_start_time(self, events_repo: EventsRepo):
        events = events_repo.list()
        _assert_monotonic([event.advertised_start_time.seconds for event in events], "ASC")

    def test_filter_by_visibility(self, events_repo: EventsRepo):
        events = events_repo.list(EventFilter(visible=True))
        assert all(event.visible for event in events)

    def test_filter_by_name_substring(self, events_repo: EventsRepo):
        name = next(event.name for event in events_repo.list() if len(event.name) > 2)
        fragment = name[1:-2]
        events = events_repo.list(EventFilter(name=fragment))
        assert events
        assert all(fragment.lower() in event.name.lower() for event in events)

    @pytest.mark.parametrize("fragment", ["_", "%", "a_c"])
    def test_name_wildcards_are_not_patterns(self, events_repo: EventsRepo, fragment: str):
        assert events_repo.list(EventFilter(name=fragment)) == []

    def test_race_filter_is_rejected(self, events_repo: EventsRepo):
        with pytest.raises(TypeError, match="event filter must be EventFilter"):
            events_repo.list(RaceFilter(meeting_ids=[1]))

    def test_filter_by_type(self, events_repo: EventsRepo):
        sport = events_repo.list()[0].type
        events = events_repo.list(EventFilter(type=sport))
        assert events
        assert all(event.type == sport for event in events)

    def test_filter_by_location_and_visibility(self, events_repo: EventsRepo):
        location = events_repo.list()[0].location
        events = events_repo.list(EventFilter(location=location, visible=False))
        assert all(event.location == location and not event.visible for event in events)

    def test_filter_by_ids(self, events_repo: EventsRepo):
        events = events_repo.list(EventFilter(ids=[13, 2, 7]))
        assert sorted(event.id for event in events) == [2, 7, 13]

    def test_unmatched_filter_returns_empty_list(self, events_repo: EventsRepo):
        assert events_repo.list(EventFilter(type="Quidditch")) == []

    @pytest.mark.parametrize("field", ["id", "name", "type", "advertised_start_time"])
    @pytest.mark.parametrize("direction", DIRECTIONS)
    def test_sort(self, events_repo: EventsRepo, field: str, direction: str):
        events = events_repo.list(None, OrderParam(field=field, direction=direction.lower()))
        assert len(events) == SEEDED_ROWS
        key: Callable = {
            "id": lambda e: e.id,
            "name": lambda e: e.name,
            "type": lambda e: e.type,
            "advertised_start_time": lambda e: e.advertised_start_time.seconds,
        }[field]
        _assert_monotonic([key(event) for event in events], direction)

    def test_status_field(self, events_repo: EventsRepo):
        _assert_status_consistent(events_repo.list())


class TestInit:
    def test_repeated_init_does_not_reseed(self, races_repo: RacesRepo):
        races_repo.init()
        races_repo.init()
        assert len(races_repo.list()) == SEEDED_ROWS

    def test_second_repository_on_same_store_does_not_add_rows(self, memory_conn: sqlite3.Connection):
        RacesRepo(memory_conn).init()
        RacesRepo(memory_conn, seed=99).init()
        assert memory_conn.execute("SELECT COUNT(*) FROM races").fetchone()[0] == SEEDED_ROWS

    def test_concurrent_init_seeds_exactly_once(self, memory_conn: sqlite3.Connection, monkeypatch):
        repo = EventsRepo(memory_conn)
        calls = []
        original_seed = repo._seed

        def counting_seed() -> None:
            calls.append(threading.get_ident())
            time.sleep(0.05)
            original_seed()

        monkeypatch.setattr(repo, "_seed", counting_seed)

        barrier = threading.Barrier(CONCURRENT_CALLERS)
        errors: List[BaseException] = []

        def call_init() -> None:
            barrier.wait()
            try:
                repo.init()
            except BaseException as exc:  # noqa: BLE001 - collected for assertion
                errors.append(exc)

        threads = [threading.Thread(target=call_init) for _ in range(CONCURRENT_CALLERS)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert len(calls) == 1
        assert len(repo.list()) == SEEDED_ROWS

    def test_init_failure_is_shared_by_every_caller(self, memory_conn: sqlite3.Connection, monkeypatch):
        repo = RacesRepo(memory_conn)
        calls = []

        def failing_seed() -> None:
            calls.append(1)
            raise sqlite3.OperationalError("database is locked")

        monkeypatch.setattr(repo, "_seed", failing_seed)

        for _ in range(3):
            with pytest.raises(sqlite3.OperationalError, match="database is locked"):
                repo.init()
        assert calls == [1]

    def test_seed_rows_setting_controls_row_count(self, memory_conn: sqlite3.Connection):
        repo = RacesRepo(memory_conn, seed_rows=12, seed=1)
        repo.init()
        assert len(repo.list()) == 12


class TestErrors:
    def test_undecodable_stored_timestamp_fails_the_list(self, races_repo: RacesRepo, memory_conn):
        with memory_conn:
            memory_conn.execute("UPDATE races SET advertised_start_time = 'soon' WHERE id = 10")
        with pytest.raises(TimestampDecodeError):
            races_repo.list()

    def test_execution_errors_propagate(self, memory_conn: sqlite3.Connection):
        repo = EventsRepo(memory_conn)
        with pytest.raises(sqlite3.OperationalError, match="no such table"):
            repo.list()
