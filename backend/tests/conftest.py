# tests/conftest.py
from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient

from sitefactory.api.dependencies import get_http_client
from sitefactory.config import Settings
from sitefactory.main import create_app
from sitefactory.stores import SqlProjectStore


class FakeUpstream:
    """Stands in for every third-party API; tests swap in a handler per case"""

    def __init__(self):
        self.requests = []
        self.handler = lambda request: httpx.Response(404, text="no handler configured")

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def migrations_dir(tmp_path) -> Path:
    """Empty migrations directory; tests drop .sql files in as needed"""
    path = tmp_path / "migrations"
    path.mkdir()
    return path


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings pointing at a throwaway database with every credential configured"""
    return Settings(
        _env_file=None,
        STORAGE_BACKEND="sqlite",
        DATA_PATH=tmp_path / "data",
        DATABASE_URL=f"sqlite:///{tmp_path / 'test-sitefactory.db'}",
        RATE_LIMIT_ENABLED=False,
        OPENAI_API_KEY="test-openai-key",
        GEMINI_API_KEY="test-gemini-key",
        SEARCH_ENDPOINT="https://search.example.test",
        SEARCH_API_KEY="test-search-key",
        SEARCH_INDEX="docs",
        PEXELS_API_KEY="test-pexels-key",
    )


@pytest.fixture
def store(tmp_path, migrations_dir):
    """A fresh embedded store"""
    sql_store = SqlProjectStore.from_url(f"sqlite:///{tmp_path / 'store.db'}", migrations_dir)
    yield sql_store
    sql_store.close()


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def app(test_settings, upstream):
    application = create_app(test_settings)
    mock_client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
    application.dependency_overrides[get_http_client] = lambda: mock_client
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """Test client; entering it runs the app lifespan"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def sample_project(client):
    """Create a sample project through the API"""
    response = client.post("/projects", json={"name": "Test Project"})
    assert response.status_code == 201
    return response.json()
