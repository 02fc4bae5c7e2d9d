from __future__ import annotations

import os

import pandas as pd

from ..models import Session

COLUMNS = ["id", "start_time", "end_time", "duration"]


def sessions_frame(sessions: list[Session]) -> pd.DataFrame:
    if not sessions:
        return pd.DataFrame(columns=COLUMNS)
    df = pd.DataFrame([s.model_dump() for s in sessions], columns=COLUMNS)
    df["duration"] = df["duration"].astype(float)
    return df


def export_csv(sessions: list[Session], out_dir: str, stamp: str) -> str:
    """Write sessions_<stamp>.csv into out_dir and return its path."""
    os.makedirs(out_dir, exist_ok=True)
    path = os.path.join(out_dir, f"sessions_{stamp}.csv")
    sessions_frame(sessions).to_csv(path, index=False, encoding="utf-8-sig")
    return path
