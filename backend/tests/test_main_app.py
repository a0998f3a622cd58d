"""
backend/tests/test_main_app.py

Purpose:
    Smoke tests for the assembled application: routers wired, health check,
    error envelope and request-id middleware.
"""

from __future__ import annotations

from fastapi.testclient import TestClient

from odds_assistant.main import app


def test_health_and_request_id_header():
    with TestClient(app) as client:
        response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert len(response.headers["X-Request-ID"]) == 8


def test_manifest_lists_all_tool_routes():
    with TestClient(app) as client:
        body = client.get("/api/ai-plugin").json()

    assert set(body["paths"]) == {
        "/api/tools/get-odds",
        "/api/tools/get-blockchains",
        "/api/tools/get-user",
        "/api/tools/reddit",
        "/api/tools/twitter",
        "/api/tools/create-transaction",
        "/api/tools/coinflip",
    }


def test_unknown_route_uses_error_envelope():
    with TestClient(app) as client:
        response = client.get("/api/tools/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}
