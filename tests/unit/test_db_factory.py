from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest

from raceday.infrastructure import db_factory
from raceday.infrastructure.db_factory import ConnectionManager, get_shared_connection, get_sync_connection


def test_sync_connection_returns_named_rows(tmp_path: Path):
    conn = get_sync_connection(str(tmp_path / "rows.db"))
    try:
        row = conn.execute("SELECT 1 AS one").fetchone()
    finally:
        conn.close()
    assert row["one"] == 1


def test_manager_is_a_singleton():
    assert ConnectionManager() is ConnectionManager()


def test_shared_connection_is_reused_per_path(tmp_path: Path):
    first = get_shared_connection(str(tmp_path / "a.db"))
    again = get_shared_connection(str(tmp_path / "a.db"))
    other = get_shared_connection(str(tmp_path / "b.db"))
    assert first is again
    assert first is not other


def test_close_all_closes_and_forgets_connections(tmp_path: Path):
    path = str(tmp_path / "closing.db")
    conn = get_shared_connection(path)
    ConnectionManager().close_all()
    with pytest.raises(sqlite3.ProgrammingError):
        conn.execute("SELECT 1")
    assert get_shared_connection(path) is not conn


def test_open_is_retried_on_operational_error(monkeypatch, tmp_path: Path):
    attempts = []
    real_connect = sqlite3.connect

    def flaky_connect(*args, **kwargs):
        attempts.append(1)
        if len(attempts) < 2:
            raise sqlite3.OperationalError("unable to open database file")
        return real_connect(*args, **kwargs)

    monkeypatch.setattr(db_factory.sqlite3, "connect", flaky_connect)
    monkeypatch.setattr(get_sync_connection.retry, "sleep", lambda _seconds: None)

    conn = get_sync_connection(str(tmp_path / "retry.db"))
    conn.close()
    assert len(attempts) == 2


def test_connection_is_opened_without_holding_the_manager_lock(monkeypatch, tmp_path: Path):
    lock_held = []
    real_open = db_factory.get_sync_connection

    def observed_open(path):
        lock_held.append(ConnectionManager._lock.locked())
        return real_open(path)

    monkeypatch.setattr(db_factory, "get_sync_connection", observed_open)

    get_shared_connection(str(tmp_path / "unlocked.db"))
    assert lock_held == [False]


def test_losing_an_open_race_keeps_the_first_connection(monkeypatch, tmp_path: Path):
    path = str(tmp_path / "race.db")
    manager = ConnectionManager()
    winner = get_sync_connection(path)
    opened = []
    real_open = db_factory.get_sync_connection

    def open_after_another_thread(db_path):
        conn = real_open(db_path)
        opened.append(conn)
        with ConnectionManager._lock:
            manager._connections[db_path] = winner
        return conn

    monkeypatch.setattr(db_factory, "get_sync_connection", open_after_another_thread)

    assert manager.get_connection(path) is winner
    with pytest.raises(sqlite3.ProgrammingError):
        opened[0].execute("SELECT 1")
