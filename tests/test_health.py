"""Health endpoint."""

from crm.core.config import settings


def test_health(client):
    response = client.get(f"{settings.API_V1_STR}/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.json()["version"] == settings.VERSION
    assert response.json()["store"] == "ok"
