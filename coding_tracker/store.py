from __future__ import annotations

import logging
import random
import sqlite3
from typing import Callable, Optional, TypeVar

from .config import TrackerConfig
from .db import get_conn
from .errors import StoreError, StoreErrorKind, StoreResult
from .models import Session, SessionFilter, Stats
from .repository import session_repo
from .services.utils import random_sessions

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SessionStore:
    """Sole gateway to the codingTracker table.

    Every call opens its own connection, runs one statement and closes the
    connection again. Database errors are logged and returned inside the
    StoreResult together with the default value; they are never raised.
    """

    def __init__(self, cfg: TrackerConfig | str, rng: random.Random | None = None) -> None:
        if isinstance(cfg, str):
            cfg = TrackerConfig(db_path=cfg)
        self.cfg = cfg
        self._rng = rng
        try:
            self.db_path = cfg.resolved_db_path()
        except OSError as e:
            # later calls report STORAGE_UNAVAILABLE from sqlite3.connect
            logger.error("Unable to create coding tracker database. %s", e)
            self.db_path = cfg.db_path
            return
        self._initialize()

    # ---------------- schema & seed ----------------

    def _initialize(self) -> None:
        try:
            with get_conn(self.db_path) as conn:
                session_repo.ensure_schema(conn)
                conn.commit()
                empty = session_repo.count_all(conn) == 0
        except sqlite3.Error as e:
            logger.error("Unable to create coding tracker database. %s", e)
            return
        if empty and self.cfg.seed_on_empty:
            self._seed()

    def _seed(self) -> None:
        rows = [s.to_params() for s in random_sessions(self.cfg.seed_count, self._rng)]
        try:
            with get_conn(self.db_path) as conn:
                session_repo.insert_many(conn, rows)
                conn.commit()
        except sqlite3.Error as e:
            logger.error("Unable to seed coding tracker database. %s", e)
            return
        logger.info("Seeded %d coding session(s).", len(rows))

    # ---------------- operations ----------------

    def _run(self, op: Callable[[sqlite3.Connection], T], default: T, failure: str, write: bool = False) -> StoreResult[T]:
        try:
            with get_conn(self.db_path) as conn:
                value = op(conn)
                if write:
                    conn.commit()
                return StoreResult(value)
        except sqlite3.Error as e:
            logger.error("%s %s", failure, e)
            return StoreResult(default, StoreError.from_sqlite(e))
        except ValueError as e:
            # stored text that does not parse as a timestamp
            logger.error("%s %s", failure, e)
            return StoreResult(default, StoreError(StoreErrorKind.INVALID_ROW, str(e)))

    def insert(self, session: Session) -> StoreResult[int]:
        res = self._run(
            lambda conn: session_repo.insert(conn, session.to_params()),
            0, "Unable to insert into database.", write=True,
        )
        if res.ok:
            logger.info("%d row(s) inserted.", res.value)
        return res

    def get_by_id(self, session_id: int) -> StoreResult[Optional[Session]]:
        def op(conn):
            row = session_repo.get_one(conn, session_id)
            return Session.from_row(row) if row is not None else None

        res = self._run(
            op,
            None, f"Unable to retrieve coding session record with ID: {session_id}.",
        )
        if not res.ok:
            return res
        if res.value is None:
            return StoreResult(None, StoreError(StoreErrorKind.NOT_FOUND, f"No coding session with ID: {session_id}"))
        return res

    def list_all(self, session_filter: SessionFilter | None = None) -> StoreResult[list[Session]]:
        params = session_filter.to_params() if session_filter is not None and session_filter.is_complete() else None
        return self._run(
            lambda conn: [Session.from_row(r) for r in session_repo.list_all(conn, params)],
            [], "Unable to retrieve all coding session records.",
        )

    def sum_duration(self, session_filter: SessionFilter | None = None) -> StoreResult[Optional[Stats]]:
        if session_filter is not None and session_filter.is_partial():
            return StoreResult(None, StoreError(StoreErrorKind.INVALID_FILTER, "Both start and end bounds are required."))
        params = session_filter.to_params() if session_filter is not None and session_filter.is_complete() else None

        def op(conn):
            row = session_repo.sum_duration(conn, params)
            return Stats(TotalHours=row["TotalHours"], RecordCount=row["RecordCount"])

        return self._run(op, None, "Unable to sum coding session durations.")

    def update(self, session: Session) -> StoreResult[int]:
        if session.id is None:
            return StoreResult(0, StoreError(StoreErrorKind.NOT_FOUND, "Session has no ID."))
        res = self._run(
            lambda conn: session_repo.update(conn, session.to_params()),
            0, f"Unable to update coding session record with ID: {session.id}.", write=True,
        )
        if res.ok:
            logger.info("%d row(s) updated.", res.value)
        return res

    def delete(self, session_id: int) -> StoreResult[int]:
        res = self._run(
            lambda conn: session_repo.delete(conn, session_id),
            0, f"Unable to delete coding session record with ID: {session_id}.", write=True,
        )
        if res.ok:
            logger.info("%d row(s) deleted.", res.value)
        return res

    def count(self) -> StoreResult[int]:
        return self._run(session_repo.count_all, 0, "Unable to count coding session records.")
