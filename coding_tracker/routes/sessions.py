from __future__ import annotations

from datetime import datetime
from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, field_validator

from ..config import load_config
from ..errors import StoreError, StoreErrorKind, StoreResult
from ..models import Session, SessionFilter, hours_between, to_naive
from ..store import SessionStore

router = APIRouter()

_STATUS = {
    StoreErrorKind.NOT_FOUND: 404,
    StoreErrorKind.INVALID_FILTER: 400,
    StoreErrorKind.CONSTRAINT_VIOLATION: 409,
    StoreErrorKind.STORAGE_UNAVAILABLE: 503,
    StoreErrorKind.INVALID_ROW: 500,
}


class SessionBody(BaseModel):
    start_time: datetime
    end_time: datetime
    duration: Optional[str] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def naive_times(cls, v):
        return to_naive(v)

    def to_session(self, session_id: int | None = None) -> Session:
        if self.end_time < self.start_time:
            raise HTTPException(status_code=400, detail="end_time must not be before start_time")
        duration = self.duration or hours_between(self.start_time, self.end_time)
        return Session(id=session_id, start_time=self.start_time, end_time=self.end_time, duration=duration)


@lru_cache
def get_store() -> SessionStore:
    """One store per process, so seeding only happens the first time the table is empty."""
    return SessionStore(load_config())


def _unwrap(res: StoreResult):
    try:
        return res.unwrap()
    except StoreError as e:
        raise HTTPException(status_code=_STATUS[e.kind], detail=e.message)


@router.get("/api/sessions")
def api_sessions_list(start: datetime | None = None, end: datetime | None = None,
                      store: SessionStore = Depends(get_store)):
    items = _unwrap(store.list_all(SessionFilter(start_time=start, end_time=end)))
    return {"items": [s.model_dump() for s in items]}


@router.get("/api/sessions/count")
def api_sessions_count(store: SessionStore = Depends(get_store)):
    return {"count": _unwrap(store.count())}


@router.get("/api/sessions/stats")
def api_sessions_stats(start: datetime | None = None, end: datetime | None = None,
                       store: SessionStore = Depends(get_store)):
    stats = _unwrap(store.sum_duration(SessionFilter(start_time=start, end_time=end)))
    return stats.model_dump(by_alias=True)


@router.get("/api/sessions/{session_id}")
def api_session_get(session_id: int, store: SessionStore = Depends(get_store)):
    return _unwrap(store.get_by_id(session_id)).model_dump()


@router.post("/api/sessions", status_code=201)
def api_session_create(body: SessionBody, store: SessionStore = Depends(get_store)):
    return {"inserted": _unwrap(store.insert(body.to_session()))}


@router.put("/api/sessions/{session_id}")
def api_session_update(session_id: int, body: SessionBody, store: SessionStore = Depends(get_store)):
    return {"updated": _unwrap(store.update(body.to_session(session_id)))}


@router.delete("/api/sessions/{session_id}")
def api_session_delete(session_id: int, store: SessionStore = Depends(get_store)):
    return {"deleted": _unwrap(store.delete(session_id))}
