from fastapi.testclient import TestClient
from app.main import app

client = TestClient(app)


def test_root_reports_service_info():
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "running"


def test_liveness():
    response = client.get("/live")
    assert response.status_code == 200
    assert response.json() == {"status": "alive"}


def test_health_degraded_without_database():
    response = client.get("/health")
    assert response.status_code == 503
    data = response.json()
    assert data["status"] == "degraded"
    assert data["checks"]["database"] == "unhealthy"


def test_readiness_without_database():
    response = client.get("/ready")
    assert response.status_code == 503
    assert response.json()["reason"] == "database_unavailable"


def test_process_time_header():
    response = client.get("/live")
    assert "X-Process-Time" in response.headers
