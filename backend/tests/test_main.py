# tests/test_main.py
import pytest
from fastapi.testclient import TestClient

from sitefactory.api.dependencies import get_store
from sitefactory.config import Settings
from sitefactory.errors import ConfigurationError
from sitefactory.main import create_app


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_cors_headers_on_every_response(client):
    for response in (client.get("/health"), client.get("/projects"), client.delete("/projects/424242")):
        assert response.headers["Access-Control-Allow-Origin"] == "*"
        assert response.headers["Access-Control-Allow-Methods"] == "GET,POST,PATCH,DELETE,OPTIONS"
        assert "Origin" in response.headers["Vary"]


def test_cors_headers_on_unhandled_errors(app):
    def broken_store():
        raise RuntimeError("store handle lost")

    app.dependency_overrides[get_store] = broken_store
    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/projects")

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}
    assert response.headers["Access-Control-Allow-Origin"] == "*"
    assert "Origin" in response.headers["Vary"]


def test_options_short_circuits(client):
    response = client.options("/projects", headers={"Origin": "http://localhost:5173"})

    assert response.status_code == 204
    assert response.content == b""
    assert response.headers["Access-Control-Allow-Origin"] == "*"


def test_configured_cors_origin(test_settings):
    test_settings.CORS_ORIGIN = "http://localhost:5173"
    with TestClient(create_app(test_settings)) as client:
        response = client.get("/health", headers={"Origin": "http://localhost:5173"})

    assert response.headers["Access-Control-Allow-Origin"] == "http://localhost:5173"


def test_ui_is_served(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert "project-form" in response.text


def test_missing_hosted_store_config_is_fatal(tmp_path):
    settings = Settings(
        _env_file=None,
        DATA_PATH=tmp_path / "data",
        STORAGE_BACKEND="supabase",
        SUPABASE_URL=None,
        SUPABASE_SERVICE_ROLE_KEY=None,
    )

    with pytest.raises(ConfigurationError):
        with TestClient(create_app(settings)):
            pass
