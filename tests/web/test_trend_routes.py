"""Tests for trend analysis and chart routes."""

from datetime import timedelta
from unittest.mock import patch

from moods.dates import utc_today
from moods.storage import MoodStore, MoodStoreError


def _log_days_ago(client, headers, mood, days_ago):
    day = (utc_today() - timedelta(days=days_ago)).isoformat()
    res = client.post("/api/moods", headers=headers, json={"mood": mood, "date": day})
    assert res.status_code == 201


def test_analysis_empty(client, auth_headers):
    res = client.get("/api/trends/analysis", headers=auth_headers)
    assert res.status_code == 200
    data = res.json()
    assert data["time_range"] == "last7days"
    assert data["is_empty"] is True
    assert data["average_score"] is None
    assert data["period_end"] == utc_today().isoformat()


def test_analysis_with_entries(client, auth_headers):
    _log_days_ago(client, auth_headers, "great", 1)
    _log_days_ago(client, auth_headers, "neutral", 3)
    _log_days_ago(client, auth_headers, "awful", 10)

    res = client.get("/api/trends/analysis?time_range=last7days", headers=auth_headers)
    data = res.json()
    assert data["average_score"] == 4.0
    assert data["distribution"] == {"awful": 0, "bad": 0, "neutral": 1, "good": 0, "great": 1}

    res = client.get("/api/trends/analysis?time_range=last30days", headers=auth_headers)
    assert res.json()["distribution"]["awful"] == 1


def test_analysis_invalid_range(client, auth_headers):
    res = client.get("/api/trends/analysis?time_range=yesterday", headers=auth_headers)
    assert res.status_code == 422


def test_analysis_store_failure(client, auth_headers):
    with patch.object(MoodStore, "query", side_effect=MoodStoreError("database is locked")):
        res = client.get("/api/trends/analysis", headers=auth_headers)
    assert res.status_code == 503
    assert "unavailable" in res.json()["detail"]


def test_chart_distribution(client, auth_headers):
    _log_days_ago(client, auth_headers, "good", 0)
    _log_days_ago(client, auth_headers, "good", 2)
    _log_days_ago(client, auth_headers, "bad", 2)

    res = client.get("/api/trends/chart?time_range=weekly", headers=auth_headers)
    assert res.status_code == 200
    data = res.json()
    assert data["mode"] == "distribution"
    assert len(data["legend"]) == 5
    dates = [p["date"] for p in data["points"]]
    assert dates == sorted(dates)
    assert data["points"][0]["counts"] == {"awful": 0, "bad": 1, "neutral": 0, "good": 1, "great": 0}


def test_chart_average(client, auth_headers):
    _log_days_ago(client, auth_headers, "great", 1)
    _log_days_ago(client, auth_headers, "awful", 1)

    res = client.get("/api/trends/chart?time_range=monthly&mode=average", headers=auth_headers)
    (point,) = res.json()["points"]
    assert point["average_score"] == 3.0
    assert point["counts"] is None
    assert res.json()["legend"] == []


def test_chart_store_failure(client, auth_headers):
    with patch.object(MoodStore, "query", side_effect=MoodStoreError("database is locked")):
        res = client.get("/api/trends/chart", headers=auth_headers)
    assert res.status_code == 503
