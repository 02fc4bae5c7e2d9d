from __future__ import annotations

# coding_tracker/db.py
import sqlite3
from contextlib import contextmanager
from typing import Iterator

from .config import TrackerConfig, load_config


def get_db_path(cfg: TrackerConfig | None = None) -> str:
    """Return the configured database path, creating its directory if needed."""
    cfg = cfg or load_config()
    return cfg.resolved_db_path()


@contextmanager
def get_conn(db_path: str | None = None) -> Iterator[sqlite3.Connection]:
    """
    Open a SQLite connection for the duration of one operation.
    An explicit db_path wins over get_db_path(). Rows come back as sqlite3.Row.
    The connection is closed on every exit path.
    """
    path = db_path or get_db_path()
    conn = sqlite3.connect(path, check_same_thread=False)
    try:
        conn.row_factory = sqlite3.Row
        yield conn
    finally:
        conn.close()
