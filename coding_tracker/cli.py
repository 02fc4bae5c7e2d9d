#!/usr/bin/env python3
"""
Coding Tracker (SQLite)

Commands:
  init        Create the session table; seed demo sessions when it is empty
  add         Record a coding session from --start/--end
  show        Print one session by id
  list        Print sessions, optionally within --from/--to
  update      Replace the times of an existing session
  delete      Remove a session by id
  count       Print the number of recorded sessions
  stats       Print total hours and session count, optionally within --from/--to
  report      Export sessions (optionally within --from/--to) to CSV
"""
from __future__ import annotations

import argparse
import datetime as dt
import logging
import os
import sys

import pandas as pd
from pydantic import ValidationError

from .config import load_config
from .errors import StoreResult
from .models import Session, SessionFilter
from .services.report_svc import export_csv, sessions_frame
from .services.utils import parse_ts
from .store import SessionStore


def _store(args) -> SessionStore:
    try:
        cfg = load_config(args.config, args.db)
    except ValidationError as e:
        raise SystemExit(f"[ERROR] invalid config: {e}")
    logging.basicConfig(level=cfg.log_level, format="%(levelname)s %(message)s")
    return SessionStore(cfg)


def _check(res: StoreResult):
    if not res.ok:
        raise SystemExit(f"[ERROR] {res.error.kind.value}: {res.error.message}")
    return res.value


def _times(args) -> tuple[dt.datetime, dt.datetime]:
    try:
        start, end = parse_ts(args.start), parse_ts(args.end)
    except ValueError as e:
        raise SystemExit(f"[ERROR] invalid time: {e}")
    if end < start:
        raise SystemExit("[ERROR] end time must not be before start time")
    return start, end


def _filter(args) -> SessionFilter:
    try:
        return SessionFilter(
            start_time=parse_ts(args.date_from) if args.date_from else None,
            end_time=parse_ts(args.date_to) if args.date_to else None,
        )
    except ValueError as e:
        raise SystemExit(f"[ERROR] invalid time: {e}")


def _print_sessions(sessions: list[Session]):
    if not sessions:
        print("(empty)")
        return
    pd.set_option("display.max_rows", 200)
    pd.set_option("display.width", 160)
    print(sessions_frame(sessions).to_string(index=False))


# ---------------- Commands ----------------

def cmd_init(args):
    store = _store(args)
    print(f"DB ready at {store.db_path}: {_check(store.count())} session(s).")


def cmd_add(args):
    start, end = _times(args)
    n = _check(_store(args).insert(Session.from_times(start, end)))
    print(f"{n} row(s) inserted.")


def cmd_show(args):
    _print_sessions([_check(_store(args).get_by_id(args.id))])


def cmd_list(args):
    _print_sessions(_check(_store(args).list_all(_filter(args))))


def cmd_update(args):
    start, end = _times(args)
    n = _check(_store(args).update(Session.from_times(start, end, id=args.id)))
    print(f"{n} row(s) updated.")


def cmd_delete(args):
    n = _check(_store(args).delete(args.id))
    print(f"{n} row(s) deleted.")


def cmd_count(args):
    print(_check(_store(args).count()))


def cmd_stats(args):
    stats = _check(_store(args).sum_duration(_filter(args)))
    print(f"Total hours: {stats.total_hours}  Sessions: {stats.record_count}")


def cmd_report(args):
    sessions = _check(_store(args).list_all(_filter(args)))
    _print_sessions(sessions)
    stamp = dt.datetime.now().strftime("%Y%m%d%H%M%S")
    path = export_csv(sessions, args.out, stamp)
    print(f"\nCSV exported to {path}")


# ---------------- Entry ----------------

def _add_range(p):
    p.add_argument("--from", dest="date_from", required=False, help="YYYY-MM-DD HH:MM")
    p.add_argument("--to", dest="date_to", required=False, help="YYYY-MM-DD HH:MM")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Coding tracker (SQLite)")
    parser.add_argument("--config", default=None, help="YAML config (default config.yaml)")
    parser.add_argument("--db", default=None, help="database file, overrides config")
    sub = parser.add_subparsers()

    p_init = sub.add_parser("init", help="create table and seed demo data")
    p_init.set_defaults(func=cmd_init)

    p_add = sub.add_parser("add", help="record a coding session")
    p_add.add_argument("--start", required=True, help="YYYY-MM-DD HH:MM")
    p_add.add_argument("--end", required=True, help="YYYY-MM-DD HH:MM")
    p_add.set_defaults(func=cmd_add)

    p_show = sub.add_parser("show", help="show one session")
    p_show.add_argument("id", type=int)
    p_show.set_defaults(func=cmd_show)

    p_list = sub.add_parser("list", help="list sessions")
    _add_range(p_list)
    p_list.set_defaults(func=cmd_list)

    p_upd = sub.add_parser("update", help="update a session")
    p_upd.add_argument("id", type=int)
    p_upd.add_argument("--start", required=True, help="YYYY-MM-DD HH:MM")
    p_upd.add_argument("--end", required=True, help="YYYY-MM-DD HH:MM")
    p_upd.set_defaults(func=cmd_update)

    p_del = sub.add_parser("delete", help="delete a session")
    p_del.add_argument("id", type=int)
    p_del.set_defaults(func=cmd_delete)

    p_cnt = sub.add_parser("count", help="count sessions")
    p_cnt.set_defaults(func=cmd_count)

    p_stats = sub.add_parser("stats", help="total hours over sessions")
    _add_range(p_stats)
    p_stats.set_defaults(func=cmd_stats)

    p_rep = sub.add_parser("report", help="export sessions to CSV")
    _add_range(p_rep)
    p_rep.add_argument("--out", default=os.path.join(os.getcwd(), "exports"))
    p_rep.set_defaults(func=cmd_report)
    return parser


def main(argv: list[str] | None = None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if hasattr(args, "func"):
        args.func(args)
    else:
        parser.print_help(sys.stdout)


if __name__ == "__main__":
    main()
