"""
Tests for /general/user/{id}:
- Existing, unknown and malformed identifiers
- Store failures
"""
from bson import ObjectId
from pymongo.errors import AutoReconnect

from app.core.config import settings
from tests.conftest import USER_ID, FakeCollection

USER_URL = f"{settings.API_PREFIX}/general/user"


def test_existing_user(client):
    response = client.get(f"{USER_URL}/{USER_ID}")

    assert response.status_code == 200
    data = response.json()
    assert data["_id"] == str(USER_ID)
    assert data["name"] == "Shelton"


def test_lookup_queries_by_object_id(client, fake_db):
    client.get(f"{USER_URL}/{USER_ID}")

    query, kwargs = fake_db[settings.USERS_COLLECTION].queries[-1]
    assert query == {"_id": USER_ID}
    assert kwargs["max_time_ms"] == settings.MONGODB_QUERY_TIMEOUT_MS


def test_unknown_user_returns_404(client):
    response = client.get(f"{USER_URL}/{ObjectId()}")

    assert response.status_code == 404
    data = response.json()
    assert data["code"] == "NOT_FOUND"
    assert data["message"]


def test_malformed_id_returns_404_without_querying(client, fake_db):
    response = client.get(f"{USER_URL}/not-an-object-id")

    assert response.status_code == 404
    data = response.json()
    assert data["code"] == "INVALID_IDENTIFIER"
    assert "not-an-object-id" in data["message"]
    assert fake_db[settings.USERS_COLLECTION].queries == []


def test_store_failure_returns_503(client, fake_db):
    fake_db.collections[settings.USERS_COLLECTION] = FakeCollection(
        error=AutoReconnect("connection reset by peer")
    )

    response = client.get(f"{USER_URL}/{USER_ID}")

    assert response.status_code == 503
    assert response.json()["code"] == "DATABASE_UNAVAILABLE"
