from fastapi.testclient import TestClient
from app.main import app
from app.core.config import settings

client = TestClient(app)

def test_404_not_found():
    response = client.get("/non-existent-route")
    assert response.status_code == 404
    data = response.json()
    assert "error" in data
    assert "code" in data
    assert data["code"] == "HTTP_ERROR"

def test_validation_error_structure():
    from app.db.supabase import require_store

    app.dependency_overrides[require_store] = lambda: object()
    try:
        response = client.post("/api/budget", json={"budget": "a lot"})
    finally:
        app.dependency_overrides.clear()
    assert response.status_code == 422
    data = response.json()
    assert data["code"] == "VALIDATION_ERROR"
    assert "details" in data
    assert len(data["details"]) > 0

def test_store_operation_error():
    from app.core.exceptions import StoreOperationError

    @app.get("/test-store-error")
    def trigger_store_error():
        raise StoreOperationError(message="JWT expired", details={"table": "users"})

    response = client.get("/test-store-error")
    assert response.status_code == 500
    data = response.json()
    assert data["code"] == "STORE_OPERATION_FAILED"
    assert data["error"] == "JWT expired"
    assert data["details"] == {"table": "users"}

def test_body_too_large(monkeypatch):
    monkeypatch.setattr(settings, "MAX_BODY_BYTES", 16)

    response = client.post("/api/users", json=[{"id": "u-001", "fullName": "Nguyen Van A"}])

    assert response.status_code == 413
    data = response.json()
    assert data["code"] == "PAYLOAD_TOO_LARGE"
    assert data["details"] == {"limit": 16}

def test_body_too_large_keeps_cors_headers(monkeypatch):
    monkeypatch.setattr(settings, "MAX_BODY_BYTES", 16)

    response = client.post(
        "/api/users",
        json=[{"id": "u-001", "fullName": "Nguyen Van A"}],
        headers={"Origin": "http://localhost:5173"},
    )

    assert response.status_code == 413
    assert response.headers.get("access-control-allow-origin") is not None

def test_chunked_body_too_large(monkeypatch):
    monkeypatch.setattr(settings, "MAX_BODY_BYTES", 16)

    response = client.post(
        "/api/users",
        content=iter([b'[{"id": "u-001", ', b'"fullName": "Nguyen Van A"}]']),
        headers={"Content-Type": "application/json"},
    )

    assert "content-length" not in response.request.headers
    assert response.status_code == 413
    assert response.json()["code"] == "PAYLOAD_TOO_LARGE"

def test_chunked_body_within_limit_reaches_handler(store_client, fake_store):
    response = store_client.post(
        "/api/budget",
        content=iter([b'{"budget": ', b'42}']),
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 200
    assert fake_store.upserts == [(settings.CONFIG_TABLE, {"key": "budget", "value": 42})]

def test_unhandled_error_masked_in_production(monkeypatch):
    @app.get("/test-unhandled-error")
    def trigger_unhandled_error():
        raise RuntimeError("connection string leaked here")

    monkeypatch.setattr(settings, "ENVIRONMENT", "production")
    quiet_client = TestClient(app, raise_server_exceptions=False)

    response = quiet_client.get("/test-unhandled-error")

    assert response.status_code == 500
    data = response.json()
    assert data["code"] == "INTERNAL_ERROR"
    assert data["error"] == "An internal error occurred. Please try again later."
    assert "leaked" not in response.text

def test_unhandled_error_shown_in_development(monkeypatch):
    @app.get("/test-unhandled-error-dev")
    def trigger_unhandled_error():
        raise RuntimeError("boom")

    monkeypatch.setattr(settings, "ENVIRONMENT", "development")
    quiet_client = TestClient(app, raise_server_exceptions=False)

    response = quiet_client.get("/test-unhandled-error-dev")

    assert response.status_code == 500
    assert response.json() == {"error": "boom", "code": "INTERNAL_ERROR", "details": None}

def test_startup_without_secrets(unconfigured):
    import app.db.supabase as supabase_db
    from utils.constants import STORE_SECRETS_MISSING_MESSAGE

    with TestClient(app) as started:
        assert started.get("/health").text == "OK"
        response = started.get("/api/supabase-status")
        assert response.status_code == 200
        assert response.json() == {"connected": False, "error": STORE_SECRETS_MISSING_MESSAGE}
        assert supabase_db._store is None

    assert supabase_db._store is None
