"""
Database connection factory utilities for raceday.

Provides centralized management of SQLite connections with proper lifecycle
management. The ConnectionManager singleton hands out one shared connection
per database path and closes them all on application exit.

Opening a connection is retried for transient failures using tenacity.
Queries themselves are never retried.
"""

from __future__ import annotations

import atexit
import sqlite3
import threading
from typing import Dict, Optional

from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from raceday.config import get_settings
from raceday.utils.logging import get_logger

log = get_logger(__name__)

MEMORY_PATH = ":memory:"


class ConnectionManager:
    """
    Thread-safe singleton for managing shared SQLite connections.

    Handles lifecycle management with automatic cleanup via atexit hook.
    """

    _instance: Optional["ConnectionManager"] = None
    _lock = threading.Lock()

    def __new__(cls) -> "ConnectionManager":
        """Create or return the singleton instance."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._connections: Dict[str, sqlite3.Connection] = {}
                # Register cleanup on exit
                atexit.register(cls._instance.close_all)
            return cls._instance

    def get_connection(self, db_path: Optional[str] = None) -> sqlite3.Connection:
        """
        Get or create the shared connection for a database path.

        Parameters
        ----------
        db_path : str | None
            SQLite file path. Defaults to settings.db_path.

        Returns
        -------
        sqlite3.Connection
            The managed connection instance.
        """
        path = db_path or get_settings().db_path
        with self._lock:
            conn = self._connections.get(path)
        if conn is not None:
            return conn

        # Opening may retry with backoff; keep other threads unblocked meanwhile.
        opened = get_sync_connection(path)
        with self._lock:
            conn = self._connections.setdefault(path, opened)
        if conn is not opened:
            opened.close()
        return conn

    def close_all(self) -> None:
        """
        Close all managed connections and release resources.

        This is called automatically on exit via atexit hook.
        """
        with self._lock:
            for path, conn in list(self._connections.items()):
                try:
                    conn.close()
                except sqlite3.Error:
                    log.warning("Failed to close connection", extra={"db_path": path})
                finally:
                    del self._connections[path]


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type(sqlite3.OperationalError),
    reraise=True,
)
def get_sync_connection(db_path: Optional[str] = None) -> sqlite3.Connection:
    """
    Open a dedicated SQLite connection with automatic retry.

    Retries up to 3 times with exponential backoff for transient errors such
    as a locked database file. The connection may be shared between threads
    and uses `sqlite3.Row` rows so columns can be read by name.

    Returns
    -------
    sqlite3.Connection
        A new connection instance.

    Raises
    ------
    sqlite3.OperationalError
        If opening fails after all retry attempts.
    """
    settings = get_settings()
    path = db_path or settings.db_path
    conn = sqlite3.connect(
        path,
        timeout=settings.db_connect_timeout,
        check_same_thread=False,
    )
    conn.row_factory = sqlite3.Row
    log.debug("Opened SQLite connection", extra={"db_path": path})
    return conn


def get_shared_connection(db_path: Optional[str] = None) -> sqlite3.Connection:
    """
    Get the shared connection for a database path via ConnectionManager.
    """
    manager = ConnectionManager()
    return manager.get_connection(db_path)


__all__ = [
    "MEMORY_PATH",
    "ConnectionManager",
    "get_shared_connection",
    "get_sync_connection",
]
