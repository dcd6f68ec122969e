from fastapi.testclient import TestClient
from app.main import app

client = TestClient(app)


def test_404_not_found():
    response = client.get("/non-existent-route")
    assert response.status_code == 404
    data = response.json()
    assert "message" in data
    assert "code" in data
    assert data["code"] == "HTTP_ERROR"


def test_validation_error_structure():
    # Temporary route with a typed query parameter
    @app.get("/test-validation")
    def read_item(price: int):
        return {"price": price}

    response = client.get("/test-validation", params={"price": "invalid"})
    assert response.status_code == 422
    data = response.json()
    assert data["code"] == "VALIDATION_ERROR"
    assert "details" in data
    assert len(data["details"]) > 0


def test_custom_exception():
    from app.core.exceptions import ResourceNotFoundError

    @app.get("/test-custom-error")
    def trigger_custom_error():
        raise ResourceNotFoundError(message="Item not found")

    response = client.get("/test-custom-error")
    assert response.status_code == 404
    data = response.json()
    assert data["code"] == "NOT_FOUND"
    assert data["message"] == "Item not found"


def test_invalid_identifier_is_a_not_found():
    from app.core.exceptions import InvalidIdentifierError, ResourceNotFoundError

    exc = InvalidIdentifierError("bad id")
    assert isinstance(exc, ResourceNotFoundError)
    assert exc.status_code == 404
    assert exc.code == "INVALID_IDENTIFIER"


def test_uninitialized_database_returns_500():
    # No dependency override and no lifespan: get_database() raises
    unsafe_client = TestClient(app, raise_server_exceptions=False)

    response = unsafe_client.get("/api/v1/general/dashboard", params={"date": "2021-11-15"})
    assert response.status_code == 500
    assert response.json()["code"] == "INTERNAL_ERROR"
