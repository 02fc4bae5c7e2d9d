"""SQL for the codingTracker table, one function per statement.

Every function takes an open Connection; callers own commit and close.
"""
from __future__ import annotations
