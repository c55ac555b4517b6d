from fastapi.testclient import TestClient

from apps.api.main import app


def test_root_lists_endpoints():
    response = TestClient(app).get("/")
    assert response.status_code == 200
    assert response.json()["endpoints"]["generateCalendar"] == "POST /api/generate-calendar"


def test_health():
    response = TestClient(app).get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
