"""Service endpoints, app lifespan and CORS configuration."""

from fastapi.testclient import TestClient

import main
from conftest import FakePool
from core import db


def test_root(client):
    res = client.get("/")
    assert res.status_code == 200
    assert res.json() == {"message": "blogs api"}


def test_health_endpoints(client):
    for path in ("/health", "/health_check"):
        res = client.get(path)
        assert res.status_code == 200
        assert res.json() == {"status": "ok"}


def test_health_db_ok(client, fake_pool):
    fake_pool.row = {"ok": 1}
    res = client.get("/health/db")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}


def test_health_db_unavailable(client, fake_pool):
    fake_pool.error = ConnectionRefusedError()
    res = client.get("/health/db")
    assert res.status_code == 503
    assert res.json() == {"status": "unavailable"}


def test_request_without_pool_is_generic_500():
    app = main.create_app()
    client = TestClient(app, raise_server_exceptions=False)

    res = client.get("/blogs")

    assert res.status_code == 500
    assert res.json() == {"message": "Internal server error"}


def test_lifespan_owns_pool(monkeypatch, store):
    pool = FakePool()
    closed = []

    async def fake_create_pool():
        return pool

    async def fake_close_pool(p):
        closed.append(p)

    monkeypatch.setattr(db, "create_pool", fake_create_pool)
    monkeypatch.setattr(db, "close_pool", fake_close_pool)
    monkeypatch.setattr(main, "setup_logging", lambda: None)

    app = main.create_app()
    with TestClient(app) as client:
        assert app.state.db_pool is pool
        assert client.get("/blogs").json() == []

    assert closed == [pool]
    assert app.state.db_pool is None


def test_cors_origins_default(monkeypatch):
    monkeypatch.delenv("CORS_ORIGINS", raising=False)
    assert main.cors_origins() == main.DEFAULT_CORS_ORIGINS


def test_cors_origins_from_env(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example,,")
    assert main.cors_origins() == ["https://a.example", "https://b.example"]
