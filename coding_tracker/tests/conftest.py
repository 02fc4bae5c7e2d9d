import sys
from pathlib import Path

import pytest

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from coding_tracker.config import TrackerConfig  # noqa: E402


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch):
    # Never pick up a developer's config.yaml or database
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CODING_TRACKER_DB", raising=False)
    monkeypatch.setenv("CODING_TRACKER_CONFIG", str(tmp_path / "missing.yaml"))
    yield


@pytest.fixture()
def tmp_db_path(tmp_path):
    (tmp_path / "db").mkdir()
    return str(tmp_path / "db" / "coding_tracker_test.db")


@pytest.fixture()
def store(tmp_db_path):
    from coding_tracker.store import SessionStore
    return SessionStore(TrackerConfig(db_path=tmp_db_path, seed_on_empty=False))


@pytest.fixture()
def client(tmp_db_path):
    from fastapi.testclient import TestClient
    from coding_tracker.api import app
    from coding_tracker.routes.sessions import get_store
    from coding_tracker.store import SessionStore

    cfg = TrackerConfig(db_path=tmp_db_path, seed_on_empty=False)
    store = SessionStore(cfg)
    app.dependency_overrides[get_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
