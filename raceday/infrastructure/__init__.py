"""
Infrastructure package for raceday.

Centralizes database connectivity concerns (connection factory and the shared
connection manager). Keep this layer focused on I/O and resource management,
decoupled from query-building and materialization logic.
"""

from raceday.infrastructure.db_factory import (
    ConnectionManager,
    get_shared_connection,
    get_sync_connection,
)

__all__ = [
    "ConnectionManager",
    "get_shared_connection",
    "get_sync_connection",
]
