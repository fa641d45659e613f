import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.database import ProductStore
from app.main import create_app

API_KEY = "test-secret"
HEADERS = {"X-API-Key": API_KEY}


@pytest.fixture
def store():
    return ProductStore()


@pytest.fixture
def app(store):
    return create_app(settings=Settings(api_key=API_KEY), store=store)


@pytest.fixture
def client(app):
    return TestClient(app, headers=HEADERS)


@pytest.fixture
def anon_client(app):
    return TestClient(app)
