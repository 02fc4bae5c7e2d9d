"""
FastAPI app entry point aggregating the routers under coding_tracker/routes.
Keep as `uvicorn coding_tracker.api:app`.
"""
from __future__ import annotations

from fastapi import FastAPI

from . import __version__
from .routes import base as base_routes
from .routes import sessions as sessions_routes

app = FastAPI(title="coding-tracker-api", version=__version__)

app.include_router(base_routes.router)
app.include_router(sessions_routes.router)
