# tests/test_health.py
from fastapi.testclient import TestClient
from poi_finder.main import app


client = TestClient(app)


def test_health_check():
    response = client.get("/health/")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["app"] == "Nearest POI Finder"
    assert "version" in data
    assert "environment" in data


def test_health_reports_providers(monkeypatch):
    from poi_finder.core.config import settings

    monkeypatch.setattr(settings, "MAPS_API_KEY", None)
    data = client.get("/health/").json()
    assert data["places_provider"] == "static"
    assert data["directions"] is False

    monkeypatch.setattr(settings, "MAPS_API_KEY", "key")
    monkeypatch.setattr(settings, "USE_DIRECTIONS", True)
    data = client.get("/health/").json()
    assert data["places_provider"] == "google"
    assert data["directions"] is True
