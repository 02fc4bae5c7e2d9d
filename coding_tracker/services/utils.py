from __future__ import annotations

# coding_tracker/services/utils.py
import random
from datetime import datetime, timedelta

from ..models import Session

LOOKBACK_MINUTES = 365 * 24 * 60
MIN_SESSION_MINUTES = 15
MAX_SESSION_MINUTES = 8 * 60

INPUT_FORMATS = ("%Y-%m-%d %H:%M", "%Y-%m-%d %H:%M:%S", "%Y-%m-%d")


def random_datetime(rng: random.Random, after: datetime | None = None, now: datetime | None = None) -> datetime:
    """Random whole-minute timestamp in the past year, or strictly later than `after`."""
    if after is not None:
        return after + timedelta(minutes=rng.randint(MIN_SESSION_MINUTES, MAX_SESSION_MINUTES))
    base = (now or datetime.now()).replace(second=0, microsecond=0)
    return base - timedelta(minutes=rng.randint(0, LOOKBACK_MINUTES))


def random_sessions(count: int, rng: random.Random | None = None) -> list[Session]:
    rng = rng or random.Random()
    out = []
    for _ in range(count):
        start = random_datetime(rng)
        end = random_datetime(rng, after=start)
        out.append(Session.from_times(start, end))
    return out


def parse_ts(s: str) -> datetime:
    """Accept 'YYYY-MM-DD HH:MM' style input or anything datetime.fromisoformat takes."""
    s = s.strip()
    for fmt in INPUT_FORMATS:
        try:
            return datetime.strptime(s, fmt)
        except ValueError:
            continue
    return datetime.fromisoformat(s)
