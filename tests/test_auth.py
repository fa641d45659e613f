# tests/test_auth.py
import pytest
from fastapi.testclient import TestClient

from app.auth import authenticate
from app.config import Settings
from app.database import ProductStore
from app.main import create_app

PROTECTED = [
    ("get", "/api/products"),
    ("get", "/api/products/search"),
    ("get", "/api/products/stats"),
    ("get", "/api/products/1"),
    ("post", "/api/products"),
    ("put", "/api/products/1"),
    ("delete", "/api/products/1"),
]


class SpyStore(ProductStore):
    """Records every store call so tests can prove a handler never ran."""

    def __init__(self):
        super().__init__()
        self.calls = []

    def list(self, category=None):
        self.calls.append("list")
        return super().list(category)

    def search(self, term=None):
        self.calls.append("search")
        return super().search(term)

    def stats(self):
        self.calls.append("stats")
        return super().stats()

    def get(self, product_id):
        self.calls.append("get")
        return super().get(product_id)

    def create(self, fields):
        self.calls.append("create")
        return super().create(fields)

    def delete(self, product_id):
        self.calls.append("delete")
        return super().delete(product_id)


def test_authenticate():
    assert authenticate("s3cret", "s3cret")
    assert not authenticate("s3cret ", "s3cret")
    assert not authenticate("S3CRET", "s3cret")
    assert not authenticate(None, "s3cret")
    # no configured secret: nothing gets in, not even an empty header
    assert not authenticate("", None)
    assert not authenticate("", "")
    assert not authenticate("anything", None)


@pytest.mark.parametrize("method,path", PROTECTED)
@pytest.mark.parametrize("headers", [{}, {"X-API-Key": "wrong"}])
def test_protected_routes_reject_and_never_dispatch(method, path, headers):
    store = SpyStore()
    client = TestClient(create_app(settings=Settings(api_key="right"), store=store))
    r = getattr(client, method)(path, headers=headers)
    assert r.status_code == 401
    assert r.json() == {"error": "Unauthorized"}
    assert store.calls == []
    assert len(store) == 3


def test_header_name_is_case_insensitive(anon_client):
    r = anon_client.get("/api/products", headers={"x-api-key": "test-secret"})
    assert r.status_code == 200


def test_missing_secret_locks_everything(monkeypatch):
    monkeypatch.delenv("API_KEY", raising=False)
    client = TestClient(create_app(settings=Settings(api_key=None)))
    assert client.get("/api/products", headers={"X-API-Key": ""}).status_code == 401
    assert client.get("/api/products", headers={"X-API-Key": "None"}).status_code == 401
    # root stays open
    assert client.get("/").status_code == 200
