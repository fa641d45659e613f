# tests/test_app.py
import logging

from fastapi.testclient import TestClient

from app.config import Settings, load_env_file
from app.database import ProductStore
from app.main import create_app

HEADERS = {"X-API-Key": "k"}


class ServiceUnavailable(Exception):
    status = 503


class BrokenStore(ProductStore):
    def stats(self):
        raise RuntimeError("stats exploded")

    def search(self, term=None):
        raise ServiceUnavailable("search index offline")


def _client(store=None):
    app = create_app(settings=Settings(api_key="k"), store=store)
    return TestClient(app, raise_server_exceptions=False, headers=HEADERS)


def test_unhandled_error_becomes_500_with_message(caplog):
    client = _client(BrokenStore())
    with caplog.at_level(logging.ERROR, logger="app.errors"):
        r = client.get("/api/products/stats")
    assert r.status_code == 500
    assert r.json() == {"error": "stats exploded"}
    assert any("stats exploded" in rec.getMessage() for rec in caplog.records)


def test_unhandled_error_keeps_its_status():
    r = _client(BrokenStore()).get("/api/products/search", params={"name": "x"})
    assert r.status_code == 503
    assert r.json() == {"error": "search index offline"}


def test_requests_are_logged(caplog):
    client = _client()
    with caplog.at_level(logging.INFO, logger="app.main"):
        client.get("/api/products", params={"category": "kitchen"})
    lines = [rec.getMessage() for rec in caplog.records if rec.name == "app.main"]
    assert any(line.startswith("GET /api/products?category=kitchen @ ") for line in lines)


def test_apps_do_not_share_stores():
    a, b = _client(), _client()
    created = a.post("/api/products", json={
        "name": "Kettle", "description": "1.7L", "price": 35, "category": "kitchen", "inStock": True,
    }).json()
    assert a.get(f"/api/products/{created['id']}").status_code == 200
    assert b.get(f"/api/products/{created['id']}").status_code == 404


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("API_KEY", "from-env")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.example/, http://b.example")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    settings = Settings()
    assert settings.port == 8080
    assert settings.api_key == "from-env"
    assert settings.cors_origins == ["http://a.example", "http://b.example"]
    assert settings.log_level == "DEBUG"


def test_settings_defaults(monkeypatch):
    for var in ("PORT", "API_KEY", "CORS_ORIGINS", "LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    settings = Settings()
    assert settings.port == 3000
    assert settings.api_key is None
    assert settings.cors_origins == ["*"]


def test_env_file_fills_gaps_but_env_wins(monkeypatch, tmp_path):
    # setenv-then-delenv so monkeypatch restores whatever load_env_file writes
    for var in ("API_KEY", "PORT"):
        monkeypatch.setenv(var, "placeholder")
        monkeypatch.delenv(var)
    monkeypatch.setenv("PORT", "4000")
    env_file = tmp_path / ".env"
    env_file.write_text("API_KEY=from-file\nPORT=5000\n")

    assert load_env_file(env_file)
    settings = Settings()
    assert settings.api_key == "from-file"
    assert settings.port == 4000
