"""Health Probes - liveness always up, readiness follows database connectivity."""

from httpx import ASGITransport, AsyncClient

import vocabulary_api.infrastructure.database as db_module
from vocabulary_api.infrastructure.database import DatabaseSessionManager
from vocabulary_api.main import app


async def _get(path: str):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        return await c.get(path)


async def test_liveness_returns_200():
    res = await _get("/api/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_503_without_database(monkeypatch):
    monkeypatch.setattr(db_module, "db_manager", None)
    res = await _get("/api/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "database_unavailable"


async def test_readiness_200_with_database(monkeypatch):
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    monkeypatch.setattr(db_module, "db_manager", manager)
    res = await _get("/api/health/ready")
    await manager.dispose()
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"
