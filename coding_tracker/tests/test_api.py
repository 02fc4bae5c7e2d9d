def test_health_and_version(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json().get("status") == "ok"

    v = client.get("/version")
    assert v.status_code == 200
    assert v.json().get("app") == "coding-tracker-api"


def test_session_crud(client):
    res = client.post("/api/sessions", json={"start_time": "2024-01-01T09:00:00", "end_time": "2024-01-01T11:00:00"})
    assert res.status_code == 201
    assert res.json() == {"inserted": 1}

    items = client.get("/api/sessions").json()["items"]
    assert len(items) == 1
    sid = items[0]["id"]
    assert items[0]["duration"] == "2.00"

    got = client.get(f"/api/sessions/{sid}")
    assert got.status_code == 200
    assert got.json()["start_time"] == "2024-01-01T09:00:00"

    upd = client.put(f"/api/sessions/{sid}", json={"start_time": "2024-01-01T09:00:00", "end_time": "2024-01-01T09:45:00"})
    assert upd.json() == {"updated": 1}
    assert client.get(f"/api/sessions/{sid}").json()["duration"] == "0.75"

    assert client.delete(f"/api/sessions/{sid}").json() == {"deleted": 1}
    assert client.delete(f"/api/sessions/{sid}").json() == {"deleted": 0}
    assert client.get("/api/sessions/count").json() == {"count": 0}


def test_missing_session_is_404(client):
    assert client.get("/api/sessions/42").status_code == 404


def test_end_before_start_is_400(client):
    res = client.post("/api/sessions", json={"start_time": "2024-01-01T11:00:00", "end_time": "2024-01-01T09:00:00"})
    assert res.status_code == 400


def test_stats_and_filtered_list(client):
    client.post("/api/sessions", json={"start_time": "2024-01-01T09:00:00", "end_time": "2024-01-01T11:00:00", "duration": "2.00"})
    client.post("/api/sessions", json={"start_time": "2024-01-03T09:00:00", "end_time": "2024-01-03T10:00:00"})

    params = {"start": "2024-01-01T00:00:00", "end": "2024-01-01T23:59:59"}
    stats = client.get("/api/sessions/stats", params=params).json()
    assert stats == {"TotalHours": "2.00", "RecordCount": 1}

    items = client.get("/api/sessions", params=params).json()["items"]
    assert len(items) == 1

    all_stats = client.get("/api/sessions/stats").json()
    assert all_stats == {"TotalHours": "3.00", "RecordCount": 2}


def test_stats_with_lone_bound_is_400(client):
    res = client.get("/api/sessions/stats", params={"start": "2024-01-01T00:00:00"})
    assert res.status_code == 400


def test_aware_and_naive_times_in_one_body(client):
    res = client.post("/api/sessions", json={"start_time": "2024-01-01T09:00:00Z", "end_time": "2024-01-02T11:00:00"})
    assert res.status_code == 201

    stored = client.get("/api/sessions").json()["items"][0]["start_time"]
    assert not stored.endswith("Z")
    assert "+" not in stored


def test_deleting_everything_does_not_reseed(tmp_db_path, monkeypatch):
    from fastapi.testclient import TestClient
    from coding_tracker.api import app
    from coding_tracker.routes.sessions import get_store

    monkeypatch.setenv("CODING_TRACKER_DB", tmp_db_path)
    get_store.cache_clear()
    try:
        client = TestClient(app)
        items = client.get("/api/sessions").json()["items"]
        assert len(items) == 15

        for it in items:
            assert client.delete(f"/api/sessions/{it['id']}").json() == {"deleted": 1}
        assert client.get("/api/sessions/count").json() == {"count": 0}
        assert client.get("/api/sessions").json()["items"] == []
    finally:
        get_store.cache_clear()
