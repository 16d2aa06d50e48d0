"""Tests for the operator health check."""
import pytest
from sqlalchemy.exc import OperationalError


@pytest.mark.asyncio
async def test_health_ok(client):
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "message": "Service is healthy"}


@pytest.mark.asyncio
async def test_health_reports_database_outage(client, db, monkeypatch):
    async def failing_execute(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    monkeypatch.setattr(db, "execute", failing_execute)

    response = await client.get("/api/v1/health")
    assert response.status_code == 503
    assert response.json() == {"status": "error", "message": "Database connection failed"}
