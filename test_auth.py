"""
Login del administrador y protección de rutas con JWT.
"""
import os
from datetime import timedelta

import pytest

from app.core import security
from app.core.config import settings

ADMIN_PASSWORD = os.environ["ADMIN_PASSWORD"]
LOGIN_URL = "/api/v1/auth/login"
VERIFY_URL = "/api/v1/auth/verify"


def test_login_returns_token(client):
    response = client.post(LOGIN_URL, json={"username": "admin", "password": ADMIN_PASSWORD})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Login successful"
    assert body["token_type"] == "bearer"
    assert body["user"]["username"] == "admin"
    assert security.decode_access_token(body["token"])["sub"] == "admin"


def test_login_with_wrong_password(client):
    response = client.post(LOGIN_URL, json={"username": "admin", "password": "nope"})

    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Invalid credentials"}


def test_login_with_wrong_username(client):
    response = client.post(LOGIN_URL, json={"username": "root", "password": ADMIN_PASSWORD})
    assert response.status_code == 401


def test_login_requires_both_fields(client):
    response = client.post(LOGIN_URL, json={"username": "admin"})

    assert response.status_code == 400
    assert response.json()["error"] == "Username and password required"


def test_verify_with_bearer_header(client, admin_headers):
    response = client.get(VERIFY_URL, headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["user"] == {"id": 1, "username": "admin", "role": "admin"}


def test_verify_with_query_token(client):
    token = security.create_access_token(subject="admin")
    response = client.get(VERIFY_URL, params={"token": token})
    assert response.status_code == 200


def test_missing_token_is_forbidden(client):
    response = client.get(VERIFY_URL)

    assert response.status_code == 403
    assert response.json() == {"success": False, "error": "No token provided"}


def test_invalid_token_is_unauthorized(client):
    response = client.get(VERIFY_URL, headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401
    assert response.json()["error"] == "Invalid or expired token"


def test_expired_token_is_unauthorized(client):
    token = security.create_access_token(subject="admin", expires_delta=timedelta(minutes=-1))
    response = client.get(VERIFY_URL, headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_non_admin_token_cannot_write(client, catalog):
    token = security.create_access_token(subject="viewer", role="user")
    response = client.delete(
        f"/api/v1/videos/{catalog['free_movie']}",
        headers={"Authorization": f"Bearer {token}"},
    )

    assert response.status_code == 403
    assert response.json()["error"] == "Admin access required"


def test_logout(client, admin_headers):
    response = client.post("/api/v1/auth/logout", headers=admin_headers)
    assert response.json() == {"success": True, "message": "Logout successful"}


def test_admin_password_may_be_bcrypt_hash(monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_PASSWORD", security.get_password_hash("s3cret"))

    assert security.authenticate_admin("admin", "s3cret") == "admin"
    assert security.authenticate_admin("admin", "wrong") is None


@pytest.mark.parametrize("password,expected", [(ADMIN_PASSWORD, "admin"), ("", None), ("x", None)])
def test_plain_admin_password(password, expected):
    assert security.authenticate_admin("admin", password) == expected
