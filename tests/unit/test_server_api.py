"""Unit tests for the HTTP adapter."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from agent_workflow_engine.engine.config import EngineSettings
from agent_workflow_engine.server.app import create_app


@pytest.fixture
def client(settings: EngineSettings) -> TestClient:
    return TestClient(create_app(settings))


def test_health(client: TestClient) -> None:
    body = client.get("/api/v1/health").json()
    assert body["status"] == "ok"
    assert "version" in body


def test_run_campaign_then_lookup(client: TestClient) -> None:
    assert client.get("/api/v1/workflows").json() == []

    run = client.post(
        "/api/v1/campaigns/conference-followup", json={"conference": "DevSummit"}
    ).json()

    assert run["result"]["success"] is True
    assert run["result"]["data"]["emailsSent"] == 4
    assert run["workflow"]["status"] == "completed"
    send = run["workflow"]["steps"][2]
    assert send["id"] == "send_emails"
    assert send["max_retries"] == 3
    assert send["backoff_ms"] == 1000

    workflow_id = run["workflow"]["id"]
    fetched = client.get(f"/api/v1/workflows/{workflow_id}").json()
    assert fetched["id"] == workflow_id
    assert fetched["current_step"] == "send_emails"
    assert [w["id"] for w in client.get("/api/v1/workflows").json()] == [workflow_id]


def test_unknown_workflow_is_404(client: TestClient) -> None:
    resp = client.get("/api/v1/workflows/missing")
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Workflow not found"


def test_schedules_roundtrip(client: TestClient) -> None:
    created = client.post(
        "/api/v1/schedules",
        json={
            "task": {"action": "monitor_campaign_responses"},
            "scheduled_for": "2025-01-15T09:00:00+00:00",
            "description": "Check replies",
        },
    )
    assert created.status_code == 201
    schedule = created.json()
    assert schedule["status"] == "scheduled"
    assert schedule["task"] == {"action": "monitor_campaign_responses"}

    listed = client.get("/api/v1/schedules").json()
    assert [s["id"] for s in listed] == [schedule["id"]]
    fetched = client.get(f"/api/v1/schedules/{schedule['id']}").json()
    assert fetched["description"] == "Check replies"
    assert client.get("/api/v1/schedules/missing").status_code == 404
