"""
Pytest configuration for raceday.

Provides fixtures for:
- Settings isolation from the developer's environment
- In-memory SQLite connections
- Freshly seeded repositories and service facades
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Generator

import pytest

from raceday.config import get_settings
from raceday.infrastructure.db_factory import MEMORY_PATH, get_sync_connection
from raceday.repositories.events import EventsRepo
from raceday.repositories.races import RacesRepo
from raceday.services.racing import RacingService
from raceday.services.sports import SportsService


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch) -> Generator[None, None, None]:
    """
    Clear cached settings and pin env vars that would change defaults.
    """
    for name in ("DB_PATH", "SEED_ROWS", "SEED_RANDOM_SEED", "LOG_LEVEL", "JSON_LOGS", "APP_ENV"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def restore_root_logger() -> Generator[logging.Logger, None, None]:
    """
    Undo configure_logging() calls made by a test.
    """
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


@pytest.fixture
def memory_conn() -> Generator[sqlite3.Connection, None, None]:
    """
    A dedicated in-memory connection; every test gets an empty store.
    """
    conn = get_sync_connection(MEMORY_PATH)
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture
def races_repo(memory_conn: sqlite3.Connection) -> RacesRepo:
    repo = RacesRepo(memory_conn)
    repo.init()
    return repo


@pytest.fixture
def events_repo(memory_conn: sqlite3.Connection) -> EventsRepo:
    repo = EventsRepo(memory_conn)
    repo.init()
    return repo


@pytest.fixture
def racing_service(races_repo: RacesRepo) -> RacingService:
    return RacingService(races_repo)


@pytest.fixture
def sports_service(events_repo: EventsRepo) -> SportsService:
    return SportsService(events_repo)
