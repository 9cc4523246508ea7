"""Tests for the liveness probe."""

from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health_reports_connected(client: AsyncClient):
    resp = await client.get("/api/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert data["database"] == "connected"
    assert "timestamp" in data


@pytest.mark.asyncio
async def test_health_reports_disconnected(app, client: AsyncClient, monkeypatch):
    monkeypatch.setattr(app.state.database, "ping", AsyncMock(return_value=False))

    resp = await client.get("/api/health")
    assert resp.status_code == 503
    assert resp.json()["database"] == "disconnected"
