from datetime import timezone

import pytest
from fastapi.testclient import TestClient

from taskrecap.app import create_app
from taskrecap.core.dashboard import manager as manager_module
from taskrecap.core.dashboard.manager import AnalyticsSettings, DashboardManager
from taskrecap.handlers import get_registered_handlers
from taskrecap.models.entities import Project
from taskrecap.todoist.client import TodoistAuthError

from factories import make_raw

UTC = timezone.utc


class StubSource:
    def __init__(self, error=None):
        self.error = error

    async def fetch_completed_tasks(self, since=None):
        if self.error:
            raise self.error
        return [make_raw("t1", "2024-01-02T10:00:00Z", project_id="p1")]

    async def fetch_projects(self):
        return [Project(id="p1", name="Work", color="red")]


def _install(monkeypatch, source) -> None:
    manager = DashboardManager(source=source, settings=AnalyticsSettings(timezone=UTC))
    monkeypatch.setattr(manager_module, "_dashboard_manager", manager)


@pytest.fixture()
def client():
    with TestClient(create_app()) as test_client:
        yield test_client


def test_handlers_are_registered():
    handlers = get_registered_handlers()
    assert {"get_dashboard_stats", "get_recap", "aggregate_tasks"} <= set(handlers)
    assert handlers["get_recap"]["method"] == "GET"


def test_every_registered_handler_is_mounted():
    app = create_app()
    mounted = {
        (route.path, method)
        for route in app.routes
        for method in getattr(route, "methods", None) or ()
    }

    for info in get_registered_handlers().values():
        assert (f"/api{info['path']}", info["method"]) in mounted


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_stats_endpoint(monkeypatch, client):
    _install(monkeypatch, StubSource())

    response = client.post(
        "/api/dashboard/stats", json={"startDate": "2024-01-01", "endDate": "2024-01-03"}
    )

    payload = response.json()
    assert response.status_code == 200
    assert payload["success"] is True
    data = payload["data"]
    assert [d["count"] for d in data["dayStats"]] == [0, 1, 0]
    assert data["projectStats"][0]["projectKey"] == "p1"
    assert data["recap"]["bestDay"] == {"date": "2024-01-02", "count": 1}
    assert len(data["hourStats"]) == 24


def test_stats_endpoint_reports_auth_failure(monkeypatch, client):
    _install(monkeypatch, StubSource(error=TodoistAuthError("Authentication failed", 401)))

    payload = client.post("/api/dashboard/stats", json={}).json()

    assert payload["success"] is False
    assert "authentication failed" in payload["message"].lower()


def test_recap_endpoint(monkeypatch, client):
    _install(monkeypatch, StubSource())

    payload = client.get("/api/dashboard/recap").json()

    assert payload["success"] is True
    assert set(payload["data"]) == {"totalDone", "currentStreak", "bestDay", "topProject"}


def test_aggregate_endpoint_uses_supplied_payload(monkeypatch, client):
    _install(monkeypatch, StubSource(error=AssertionError("must not fetch")))

    response = client.post(
        "/api/dashboard/aggregate",
        json={
            "items": [
                {"task_id": 1, "completed_at": "2024-01-02T10:00:00Z", "project_id": "ghost"},
                {"task_id": 2, "completed_at": "not-a-date"},
            ],
            "projects": [],
            "startDate": "2024-01-01",
            "endDate": "2024-01-03",
        },
    )

    data = response.json()["data"]
    assert data["totalTasks"] == 1
    assert data["droppedTasks"] == 1
    assert data["projectStats"] == [
        {
            "projectKey": "unknown-ghost",
            "projectName": "Unknown/Archived (ghost)",
            "count": 1,
            "color": "#808080",
        }
    ]


def test_invalid_body_is_rejected(client):
    response = client.post("/api/dashboard/stats", json={"thresholdPercent": 3})
    assert response.status_code == 422


def test_aggregate_endpoint_accepts_threshold_overrides(monkeypatch, client):
    _install(monkeypatch, StubSource(error=AssertionError("must not fetch")))
    items = [
        {"task_id": i, "completed_at": "2024-01-02T10:00:00Z", "project_id": "big"}
        for i in range(9)
    ] + [{"task_id": 9, "completed_at": "2024-01-02T11:00:00Z", "project_id": "small"}]

    response = client.post(
        "/api/dashboard/aggregate",
        json={
            "items": items,
            "projects": [{"id": "big", "name": "Big"}, {"id": "small", "name": "Small"}],
            "startDate": "2024-01-01",
            "endDate": "2024-01-03",
            "thresholdPercent": 0.5,
            "minThresholdCount": 2,
        },
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert [(p["projectKey"], p["count"]) for p in data["projectStats"]] == [
        ("big", 9),
        ("other-projects", 1),
    ]
    assert [d["count"] for d in data["dayStats"]] == [0, 10, 0]


def test_aggregate_endpoint_rejects_unknown_keys(client):
    response = client.post("/api/dashboard/aggregate", json={"tasks": [], "projects": []})
    assert response.status_code == 422
