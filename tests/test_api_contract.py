"""
Contract/behavior tests for src/api.py.

The module-level store registry is replaced with a fresh copy of the
fixture stores for every test, so mutations (mood logging, task toggles)
never leak between tests.
"""

import pytest
from fastapi.testclient import TestClient

import api as api_mod

WEEK = {"date": "2024-10-24"}


@pytest.fixture
def client(fixture_stores):
    api_mod.set_stores(fixture_stores)
    yield TestClient(api_mod.app)
    api_mod.set_stores(None)


def test_root(client):
    assert client.get("/").json()["status"] == "ok"


def test_weekly_insights_ranked_and_bounded(client):
    body = client.get("/api/v1/insights/weekly", params=WEEK).json()
    assert body["count"] == len(body["insights"]) == 8
    scores = [i["score"] for i in body["insights"]]
    assert scores == sorted(scores, reverse=True)
    first = body["insights"][0]
    assert set(first) >= {
        "id", "title", "pattern", "period", "score", "summary",
        "recommendations", "goal_correlation", "confidence",
    }
    assert first["period"] == "Oct 20 - Oct 26"


def test_single_insight(client):
    res = client.get("/api/v1/insights/101", params=WEEK)
    assert res.status_code == 200
    assert res.json()["insight"]["pattern"] == "productivity_pattern"


def test_single_insight_not_surfaced_is_404(client):
    res = client.get("/api/v1/insights/103", params=WEEK)
    assert res.status_code == 404
    assert "insight not found" in res.json()["detail"]


@pytest.mark.parametrize("method, path", [
    ("post", "/api/v1/insights"),
    ("put", "/api/v1/insights/101"),
    ("delete", "/api/v1/insights/101"),
])
def test_insight_mutation_is_405(client, method, path):
    kwargs = {} if method == "delete" else {"json": {"title": "manual"}}
    res = getattr(client, method)(path, **kwargs)
    assert res.status_code == 405
    assert "derived data" in res.json()["detail"]


def test_energy_breakdown(client):
    body = client.get("/api/v1/energy", params=WEEK).json()
    assert body["energy_score"] == 84
    assert body["sleep"]["contribution"] == 36
    assert body["hrv"]["contribution"] == 25
    assert body["energy_level"] == "high"
    assert body["correlation_strength"] > 0.85


def test_burnout_and_adjustments(client):
    assert client.get("/api/v1/burnout").json()["risk_tier"] == "moderate"
    plan = client.get("/api/v1/goals/adjustments").json()
    assert [d["type"] for d in plan["directives"]] == ["task-reduction", "mindfulness", "timeline"]
    assert plan["directives"][0]["severity"] == 25
    assert "duration" not in plan["directives"][0]


def test_burnout_for_past_date(client):
    body = client.get("/api/v1/burnout", params={"date": "2024-10-18"}).json()
    assert (body["average_score"], body["recent_score"]) == (3.14, 2.67)
    plan = client.get("/api/v1/goals/adjustments", params={"date": "2024-10-18"}).json()
    assert plan["directives"][0]["severity"] == 25


def test_weekly_summary(client):
    body = client.get("/api/v1/summary/weekly", params=WEEK).json()
    assert body["days"] == 7
    assert body["averages"]["sleep_score"] == 81


def test_goals_and_toggle(client):
    goals = client.get("/api/v1/goals").json()["goals"]
    assert goals[0]["progress"] == 33
    assert goals[0]["targetDate"] == "2024-11-30"

    res = client.post("/api/v1/goals/1/tasks/2/toggle")
    assert res.status_code == 200
    assert res.json()["goal"]["progress"] == 67


def test_toggle_unknown_goal_is_404(client):
    assert client.post("/api/v1/goals/42/tasks/1/toggle").status_code == 404


def test_log_mood_feeds_burnout(client):
    for _ in range(3):
        res = client.post("/api/v1/moods", json={"mood": "poor", "moodScore": 1, "note": "Exhausted"})
        assert res.status_code == 201
    assert res.json()["mood"]["moodLabel"] == "poor"
    # last 7: [5, 4, 4, 5, 1, 1, 1] -> decline well above 1.5
    assert client.get("/api/v1/burnout").json()["risk_tier"] == "high"


def test_log_mood_rejects_mismatch(client):
    res = client.post("/api/v1/moods", json={"mood": "great", "moodScore": 1})
    assert res.status_code == 422
