"""
Tests for registration, login and the token gate.
"""
from datetime import datetime, timedelta, timezone


def test_register_returns_token(client):
    response = client.post(
        "/api/auth/register",
        json={"name": "A", "email": "a@x.com", "password": "secret1"}
    )
    assert response.status_code == 201
    assert response.json()["token"]


def test_register_duplicate_email_conflicts(client, alice):
    response = client.post(
        "/api/auth/register",
        json={"name": "Other", "email": "a@x.com", "password": "secret9"}
    )
    assert response.status_code == 409
    assert response.json()["detail"] == "User already exists"


def test_register_reports_every_invalid_field(client):
    """
    All violations are reported together, not only the first one.
    """
    response = client.post(
        "/api/auth/register",
        json={"name": "", "email": "not-an-email", "password": "123"}
    )
    assert response.status_code == 400
    body = response.json()
    assert body["detail"] == "Validation error"
    fields = {error["loc"][-1] for error in body["errors"]}
    assert fields == {"name", "email", "password"}


def test_login_returns_working_token(client, alice):
    response = client.post("/api/auth/login", json={"email": "a@x.com", "password": "secret1"})
    assert response.status_code == 200
    token = response.json()["token"]

    response = client.get("/api/patients", headers={"x-auth-token": token})
    assert response.status_code == 200


def test_login_wrong_password_and_unknown_email_look_the_same(client, alice):
    wrong_password = client.post("/api/auth/login", json={"email": "a@x.com", "password": "nope123"})
    unknown_email = client.post("/api/auth/login", json={"email": "z@x.com", "password": "secret1"})
    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()


def test_missing_token_is_rejected(client):
    response = client.get("/api/patients")
    assert response.status_code == 401
    assert response.json() == {"detail": "No token, authorization denied", "code": "token_missing"}


def test_invalid_token_is_rejected(client):
    response = client.get("/api/patients", headers={"x-auth-token": "garbage"})
    assert response.status_code == 401
    assert response.json() == {"detail": "Token is not valid", "code": "token_invalid"}


def test_expired_token_is_rejected(client, alice):
    """
    A token past its one-hour lifetime is unauthenticated, not a stale identity.
    """
    issued_at = datetime.now(timezone.utc) - timedelta(hours=1, minutes=1)
    expired = client.app.state.token_service.issue(1, now=issued_at)

    response = client.get("/api/patients", headers={"x-auth-token": expired})
    assert response.status_code == 401
    assert response.json() == {"detail": "Token is not valid", "code": "token_invalid"}


def test_bearer_header_is_not_accepted(client, alice):
    token = alice["x-auth-token"]
    response = client.get("/api/patients", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["code"] == "token_missing"


def test_gate_protects_every_resource_route(client):
    routes = [
        ("post", "/api/patients"),
        ("get", "/api/patients"),
        ("get", "/api/patients/1"),
        ("put", "/api/patients/1"),
        ("delete", "/api/patients/1"),
        ("post", "/api/doctors"),
        ("get", "/api/doctors"),
        ("get", "/api/doctors/1"),
        ("put", "/api/doctors/1"),
        ("delete", "/api/doctors/1"),
        ("post", "/api/mappings"),
        ("get", "/api/mappings"),
        ("get", "/api/mappings/1"),
        ("delete", "/api/mappings/1"),
    ]
    for method, path in routes:
        if method in ("post", "put"):
            response = getattr(client, method)(path, json={})
        else:
            response = getattr(client, method)(path)
        assert response.status_code == 401, f"{method.upper()} {path}"


def test_login_unknown_email_still_checks_a_password_hash(client, alice, monkeypatch):
    """
    Unknown emails pay for a bcrypt verify too, so timing does not reveal registered emails.
    """
    from src.auth import service

    checked = []
    real_verify = service.verify_password_async

    async def recording_verify(password, password_hash):
        checked.append(password_hash)
        return await real_verify(password, password_hash)

    monkeypatch.setattr(service, "verify_password_async", recording_verify)

    response = client.post("/api/auth/login", json={"email": "z@x.com", "password": "secret1"})
    assert response.status_code == 401
    assert checked == [service.DUMMY_PASSWORD_HASH]
