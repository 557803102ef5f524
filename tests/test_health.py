def test_health_endpoint_returns_healthy(client):
    res = client.get("/health")

    assert res.status_code == 200
    data = res.json()
    assert data["status"] == "healthy"
    assert data["environment"] == "testing"
    assert data["version"] == "0.1.0"
    assert "uptime_seconds" in data


def test_detailed_health_reports_registry_and_store(client):
    data = client.get("/health/detailed").json()

    assert data["node_types"] == 9
    assert data["project_storage"] == "memory"
    assert data["project_count"] == 0


def test_ping(client):
    assert client.get("/ping").json() == {"message": "pong"}


def test_unknown_route_is_json_404(client):
    response = client.get("/api/does-not-exist")

    assert response.status_code == 404
    assert response.json()["success"] is False
