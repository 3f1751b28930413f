"""
Generic SQLite-backed read repository shared by races and sports events.
"""

from __future__ import annotations

import abc
import sqlite3
import threading
import time
from typing import Any, Generic, Iterable, List, Optional, Sequence

from raceday.config import get_settings
from raceday.domain.models import OrderParam
from raceday.repositories.abstract import EntityKind, FilterT, RecordT
from raceday.repositories.materializer import Clock, materialize
from raceday.repositories.query import build_list_query
from raceday.utils.logging import get_logger

log = get_logger(__name__)


class SqlRepository(abc.ABC, Generic[RecordT, FilterT]):
    """
    Read-only repository over one table described by an EntityKind.

    Subclasses supply the DDL and the seed rows; listing, filtering, ordering
    and materialization are shared.
    """

    kind: EntityKind[RecordT, FilterT]

    def __init__(
        self,
        conn: sqlite3.Connection,
        seed_rows: Optional[int] = None,
        seed: Optional[int] = None,
        clock: Clock = time.time,
    ) -> None:
        settings = get_settings()
        self._conn = conn
        self.seed_rows = settings.seed_rows if seed_rows is None else seed_rows
        self.seed = settings.seed_random_seed if seed is None else seed
        self._clock = clock
        self._init_lock = threading.Lock()
        self._init_done = False
        self._init_error: Optional[Exception] = None

    @property
    @abc.abstractmethod
    def create_table_sql(self) -> str:  # pragma: no cover - interface only
        raise NotImplementedError

    @abc.abstractmethod
    def seed_values(self) -> Iterable[Sequence[Any]]:  # pragma: no cover - interface only
        """Rows to insert on first initialisation, in `kind.columns` order."""
        raise NotImplementedError

    def init(self) -> None:
        """
        Create and seed the table exactly once.

        Concurrent callers block until the first call finishes; every caller
        sees its outcome, including a seeding failure.
        """
        with self._init_lock:
            if not self._init_done:
                try:
                    self._seed()
                except Exception as exc:
                    self._init_error = exc
                    log.exception(
                        f"[INIT FAILED] {self.kind.table}", extra={"table": self.kind.table}
                    )
                self._init_done = True
            if self._init_error is not None:
                raise self._init_error

    def _seed(self) -> None:
        insert_sql = "INSERT OR IGNORE INTO {table}({columns}) VALUES ({params})".format(
            table=self.kind.table,
            columns=", ".join(self.kind.columns),
            params=",".join(["?"] * len(self.kind.columns)),
        )
        with self._conn:
            self._conn.execute(self.create_table_sql)
            self._conn.executemany(insert_sql, self.seed_values())
        log.info(
            f"[INIT] {self.kind.table} seeded",
            extra={"table": self.kind.table, "rows": self.seed_rows},
        )

    def list(
        self,
        filter: Optional[FilterT] = None,
        order: Optional[OrderParam] = None,
    ) -> List[RecordT]:
        """
        Return every row matching `filter`, sequenced by `order`.

        A filter of the wrong model raises TypeError. Execution and cursor
        errors propagate unchanged.
        """
        query, args = build_list_query(self.kind, filter, order)
        log.debug("Executing list query", extra={"sql": query, "params": args})
        cursor = self._conn.execute(query, args)
        try:
            records = materialize(cursor, self.kind, clock=self._clock)
        finally:
            cursor.close()
        log.debug(
            f"[LIST] {self.kind.table}", extra={"table": self.kind.table, "rows": len(records)}
        )
        return records


__all__ = ["SqlRepository"]
