from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

TS_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_ts(value: datetime) -> str:
    """Text form stored in the startTime/endTime columns."""
    return value.strftime(TS_FORMAT)


def to_naive(value: datetime | None) -> datetime | None:
    """Aware timestamps become naive local time; stored text carries no offset."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def hours_between(start: datetime, end: datetime) -> str:
    return f"{(end - start).total_seconds() / 3600:.2f}"


class Session(BaseModel):
    """One recorded coding interval."""

    id: Optional[int] = None
    start_time: datetime
    end_time: datetime
    duration: str = "0.00"

    @field_validator("start_time", "end_time")
    @classmethod
    def naive_times(cls, v):
        return to_naive(v)

    @classmethod
    def from_times(cls, start: datetime, end: datetime, id: Optional[int] = None) -> "Session":
        return cls(id=id, start_time=start, end_time=end, duration=hours_between(start, end))

    @classmethod
    def from_row(cls, row) -> "Session":
        return cls(
            id=row["id"],
            start_time=datetime.fromisoformat(row["startTime"]),
            end_time=datetime.fromisoformat(row["endTime"]),
            duration=row["duration"],
        )

    def to_params(self) -> dict:
        return {
            "id": self.id,
            "start_time": format_ts(self.start_time),
            "end_time": format_ts(self.end_time),
            "duration": self.duration,
        }


class SessionFilter(BaseModel):
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def naive_times(cls, v):
        return to_naive(v)

    def is_complete(self) -> bool:
        return self.start_time is not None and self.end_time is not None

    def is_partial(self) -> bool:
        return (self.start_time is None) != (self.end_time is None)

    def to_params(self) -> dict:
        return {"start_time": format_ts(self.start_time), "end_time": format_ts(self.end_time)}


class Stats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_hours: str = Field("0.00", alias="TotalHours")
    record_count: int = Field(0, alias="RecordCount")
