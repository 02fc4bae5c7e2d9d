from __future__ import annotations

from sqlite3 import Connection

TABLE = "codingTracker"

DDL = f"""
CREATE TABLE IF NOT EXISTS {TABLE} (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    startTime TEXT NOT NULL,
    endTime TEXT NOT NULL,
    duration TEXT NOT NULL DEFAULT '0.00'
)
"""

RANGE_WHERE = " WHERE DATETIME(startTime) >= DATETIME(:start_time) AND DATETIME(endTime) <= DATETIME(:end_time)"


def ensure_schema(conn: Connection) -> None:
    conn.execute(DDL)


def insert(conn: Connection, params: dict) -> int:
    cur = conn.execute(
        f"INSERT INTO {TABLE}(startTime, endTime, duration) VALUES(:start_time, :end_time, :duration)",
        params,
    )
    return cur.rowcount


def insert_many(conn: Connection, rows: list[dict]) -> int:
    cur = conn.executemany(
        f"INSERT INTO {TABLE}(startTime, endTime, duration) VALUES(:start_time, :end_time, :duration)",
        rows,
    )
    return cur.rowcount


def get_one(conn: Connection, session_id: int):
    return conn.execute(
        f"SELECT id, startTime, endTime, duration FROM {TABLE} WHERE id=?", (session_id,)
    ).fetchone()


def list_all(conn: Connection, range_params: dict | None = None):
    sql = f"SELECT id, startTime, endTime, duration FROM {TABLE}"
    if range_params:
        sql += RANGE_WHERE
    sql += " ORDER BY id"
    return conn.execute(sql, range_params or {}).fetchall()


def sum_duration(conn: Connection, range_params: dict | None = None):
    sql = (
        "SELECT printf('%.2f', COALESCE(SUM(duration), 0)) AS TotalHours, COUNT(*) AS RecordCount "
        f"FROM {TABLE}"
    )
    if range_params:
        sql += RANGE_WHERE
    return conn.execute(sql, range_params or {}).fetchone()


def update(conn: Connection, params: dict) -> int:
    cur = conn.execute(
        f"UPDATE {TABLE} SET startTime=:start_time, endTime=:end_time, duration=:duration WHERE id=:id",
        params,
    )
    return cur.rowcount


def delete(conn: Connection, session_id: int) -> int:
    cur = conn.execute(f"DELETE FROM {TABLE} WHERE id=?", (session_id,))
    return cur.rowcount


def count_all(conn: Connection) -> int:
    return int(conn.execute(f"SELECT COUNT(1) AS c FROM {TABLE}").fetchone()["c"])
