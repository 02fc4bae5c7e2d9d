from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class StoreErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    STORAGE_UNAVAILABLE = "storage_unavailable"
    CONSTRAINT_VIOLATION = "constraint_violation"
    INVALID_FILTER = "invalid_filter"
    INVALID_ROW = "invalid_row"


class StoreError(Exception):
    def __init__(self, kind: StoreErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @classmethod
    def from_sqlite(cls, exc: sqlite3.Error) -> "StoreError":
        if isinstance(exc, sqlite3.IntegrityError):
            return cls(StoreErrorKind.CONSTRAINT_VIOLATION, str(exc))
        return cls(StoreErrorKind.STORAGE_UNAVAILABLE, str(exc))


@dataclass
class StoreResult(Generic[T]):
    """Value of a store call plus the error that produced it, if any.

    On failure ``value`` still holds the benign default (0, None, []),
    so callers that only care about data can ignore ``error``.
    """

    value: T
    error: Optional[StoreError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value
