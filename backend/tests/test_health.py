"""
Lemon Health Check Tests
"""


def test_health_check(client):
    """Test the health check endpoint."""
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()

    assert data["status"] == "healthy"
    assert data["service"] == "Lemon Travel API"
    assert "timestamp" in data


def test_health_check_rejects_post(client):
    response = client.post("/health")

    assert response.status_code == 405
