"""Tests pour l'authentification: inscription, connexion, profil et jetons."""

from __future__ import annotations

from diveatlas.core.http_constants import (
    HTTP_BAD_REQUEST,
    HTTP_CONFLICT,
    HTTP_CREATED,
    HTTP_OK,
    HTTP_UNAUTHORIZED,
)
from diveatlas.domain.auth import create_access_token, decode_token, hash_password, verify_password


def test_signup_login_me(client):
    r = client.post(
        "/auth/signup",
        json={"email": "Nemo@Example.com", "password": "secret123", "name": "Nemo"},
    )
    assert r.status_code == HTTP_CREATED
    assert r.json()["role"] == "USER"
    assert r.json()["email"] == "nemo@example.com"

    r = client.post("/auth/login", json={"email": "nemo@example.com", "password": "secret123"})
    assert r.status_code == HTTP_OK
    token = r.json()["access_token"]
    assert r.json()["token_type"] == "bearer"

    r = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == HTTP_OK
    assert r.json()["name"] == "Nemo"


def test_signup_duplicate_email(client):
    payload = {"email": "dory@example.com", "password": "secret123"}
    assert client.post("/auth/signup", json=payload).status_code == HTTP_CREATED
    r = client.post("/auth/signup", json=payload)
    assert r.status_code == HTTP_CONFLICT
    assert r.json()["error"] == "Email already registered"


def test_signup_short_password(client):
    r = client.post("/auth/signup", json={"email": "dory@example.com", "password": "123"})
    assert r.status_code == HTTP_BAD_REQUEST
    assert "password" in r.json()["details"]


def test_login_wrong_password(client, factory):
    user = factory.user()
    r = client.post("/auth/login", json={"email": user.email, "password": "wrong-password"})
    assert r.status_code == HTTP_UNAUTHORIZED
    assert r.json()["error"] == "Invalid credentials"


def test_me_requires_token(client):
    assert client.get("/auth/me").status_code == HTTP_UNAUTHORIZED


def test_token_for_deleted_user_is_rejected(client, factory):
    token = create_access_token(
        secret="test-secret",
        alg="HS256",
        expires_min=5,
        payload={"sub": "ghost", "email": "ghost@example.com", "role": "USER"},
    )
    r = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == HTTP_UNAUTHORIZED


def test_token_round_trip_and_expiry():
    token = create_access_token(
        "s", "HS256", 5, {"sub": "u1", "email": "a@example.com", "role": "GUIDE"}
    )
    data = decode_token(token, "s", "HS256")
    assert data is not None and data.sub == "u1" and data.role.value == "GUIDE"
    assert decode_token(token, "other", "HS256") is None
    expired = create_access_token("s", "HS256", -1, {"sub": "u1", "email": "a@example.com"})
    assert decode_token(expired, "s", "HS256") is None


def test_password_hashing():
    h = hash_password("secret123")
    assert verify_password("secret123", h)
    assert not verify_password("nope", h)
    assert not verify_password("secret123", "")
