import random
from datetime import datetime, timedelta

import pytest

from coding_tracker.models import Session
from coding_tracker.services.utils import parse_ts, random_datetime, random_sessions


def test_random_datetime_within_last_year():
    now = datetime(2024, 6, 1, 12, 0)
    rng = random.Random(1)
    for _ in range(50):
        ts = random_datetime(rng, now=now)
        assert now - timedelta(days=365) <= ts <= now
        assert ts.second == 0


def test_random_datetime_after_is_strictly_later():
    rng = random.Random(2)
    start = datetime(2024, 1, 1, 9, 0)
    for _ in range(50):
        end = random_datetime(rng, after=start)
        assert timedelta(minutes=15) <= end - start <= timedelta(hours=8)


def test_random_sessions_compute_duration():
    sessions = random_sessions(5, random.Random(3))
    assert len(sessions) == 5
    for s in sessions:
        expected = (s.end_time - s.start_time).total_seconds() / 3600
        assert s.duration == f"{expected:.2f}"


def test_from_times_duration():
    s = Session.from_times(datetime(2024, 1, 1, 9, 0), datetime(2024, 1, 1, 10, 20))
    assert s.duration == "1.33"


@pytest.mark.parametrize("text", ["2024-01-01 09:30", "2024-01-01T09:30", "2024-01-01 09:30:00"])
def test_parse_ts_formats(text):
    assert parse_ts(text) == datetime(2024, 1, 1, 9, 30)


def test_parse_ts_rejects_garbage():
    with pytest.raises(ValueError):
        parse_ts("yesterday")
