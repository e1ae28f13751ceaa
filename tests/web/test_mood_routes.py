"""Tests for mood API routes."""

from unittest.mock import patch

from moods.storage import MoodStore, MoodStoreError
from web.user_store import count_events


def _log(client, headers, mood="good", date="2024-06-05", notes=None):
    body = {"mood": mood, "date": date}
    if notes is not None:
        body["notes"] = notes
    return client.post("/api/moods", headers=headers, json=body)


def test_requires_auth(client):
    res = client.get("/api/moods")
    assert res.status_code in (401, 403)


def test_invalid_token(client):
    res = client.get("/api/moods", headers={"Authorization": "Bearer not-a-jwt"})
    assert res.status_code == 401


def test_list_empty(client, auth_headers):
    res = client.get("/api/moods", headers=auth_headers)
    assert res.status_code == 200
    assert res.json() == []


def test_create_and_list(client, auth_headers, app_config):
    res = _log(client, auth_headers, "great", "2024-06-05", "good day")
    assert res.status_code == 201
    data = res.json()
    assert data["success"] is True
    assert data["message"] == "Mood logged successfully!"
    assert data["entry_id"]

    res = client.get("/api/moods", headers=auth_headers)
    (entry,) = res.json()
    assert entry["mood"] == "great"
    assert entry["label"] == "Great"
    assert entry["score"] == 5
    assert entry["icon"] == "laugh"
    assert entry["color"].startswith("#")
    assert entry["notes"] == "good day"
    assert entry["date"] == "2024-06-05"
    assert entry["timestamp"].startswith("2024-06-05T12:00:00")
    assert count_events("mood_logged", app_config.paths.db_path, "user-123") == 1


def test_list_newest_first_with_limit(client, auth_headers):
    for day in ("2024-06-01", "2024-06-03", "2024-06-02"):
        _log(client, auth_headers, date=day)
    res = client.get("/api/moods?limit=2", headers=auth_headers)
    assert [e["date"] for e in res.json()] == ["2024-06-03", "2024-06-02"]


def test_create_invalid_mood(client, auth_headers):
    res = _log(client, auth_headers, mood="ecstatic")
    assert res.status_code == 400
    assert "Invalid mood" in res.json()["detail"]


def test_create_invalid_date(client, auth_headers):
    res = _log(client, auth_headers, date="June 5th")
    assert res.status_code == 400
    assert res.json()["detail"] == "Invalid date format."


def test_create_store_failure(client, auth_headers):
    with patch.object(MoodStore, "insert", side_effect=MoodStoreError("disk full")):
        res = _log(client, auth_headers)
    assert res.status_code == 500


def test_delete_entry(client, auth_headers):
    entry_id = _log(client, auth_headers).json()["entry_id"]
    res = client.delete(f"/api/moods/{entry_id}", headers=auth_headers)
    assert res.status_code == 204
    assert client.get("/api/moods", headers=auth_headers).json() == []


def test_delete_missing_entry(client, auth_headers):
    res = client.delete("/api/moods/nope", headers=auth_headers)
    assert res.status_code == 404


def test_delete_all(client, auth_headers, auth_headers_b):
    _log(client, auth_headers, date="2024-06-01")
    _log(client, auth_headers, date="2024-06-02")
    _log(client, auth_headers_b, date="2024-06-02")

    res = client.delete("/api/moods", headers=auth_headers)
    assert res.status_code == 200
    assert res.json()["deleted"] == 2
    assert client.get("/api/moods", headers=auth_headers).json() == []
    assert len(client.get("/api/moods", headers=auth_headers_b).json()) == 1


def test_delete_all_when_empty(client, auth_headers):
    res = client.delete("/api/moods", headers=auth_headers)
    assert res.status_code == 200
    assert res.json() == {
        "success": True,
        "message": "No mood data found to delete.",
        "entry_id": None,
        "deleted": 0,
    }


def test_users_are_isolated(client, auth_headers, auth_headers_b):
    entry_id = _log(client, auth_headers).json()["entry_id"]
    assert client.get("/api/moods", headers=auth_headers_b).json() == []
    res = client.delete(f"/api/moods/{entry_id}", headers=auth_headers_b)
    assert res.status_code == 404


def test_notes_over_limit_rejected(client, auth_headers):
    res = _log(client, auth_headers, notes="x" * 2001)
    assert res.status_code == 400
    assert res.json()["detail"] == "Notes must be at most 2000 characters."
    assert client.get("/api/moods", headers=auth_headers).json() == []


def test_notes_at_limit_stored_whole(client, auth_headers):
    entry_id = _log(client, auth_headers, notes="x" * 2000).json()["entry_id"]
    res = client.get(f"/api/moods/{entry_id}", headers=auth_headers)
    assert res.status_code == 200
    assert res.json()["notes"] == "x" * 2000


def test_get_single_entry(client, auth_headers, auth_headers_b):
    entry_id = _log(client, auth_headers, mood="bad").json()["entry_id"]
    res = client.get(f"/api/moods/{entry_id}", headers=auth_headers)
    assert res.status_code == 200
    assert res.json()["label"] == "Bad"
    assert client.get(f"/api/moods/{entry_id}", headers=auth_headers_b).status_code == 404
