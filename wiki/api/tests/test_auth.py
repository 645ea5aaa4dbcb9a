from __future__ import annotations

from fastapi.testclient import TestClient

from wiki.api.main import app
from wiki.api.security import hash_password, verify_password


def test_password_hashing():
    hashed = hash_password("s3cret-pass", iterations=1000)
    assert hashed.startswith("pbkdf2_sha256$1000$")
    assert verify_password("s3cret-pass", hashed)
    assert not verify_password("wrong-pass", hashed)
    assert not verify_password("s3cret-pass", "garbage")
    assert hash_password("s3cret-pass", iterations=1000) != hashed


def test_register_logs_in(make_user):
    alice = make_user("alice")
    r = alice.get("/api/auth/me")
    assert r.status_code == 200
    assert r.json()["username"] == "alice"
    assert "hashed_password" not in r.json()


def test_me_requires_login(client):
    r = client.get("/api/auth/me")
    assert r.status_code == 401
    assert r.json()["detail"]["code"] == "UNAUTHORIZED"


def test_duplicate_registration(make_user, client):
    make_user("alice")
    r = client.post(
        "/api/auth/register",
        json={"username": "alice", "email": "other@example.com", "password": "long-enough"},
    )
    assert r.status_code == 400
    assert r.json()["detail"]["code"] == "USERNAME_TAKEN"

    r = client.post(
        "/api/auth/register",
        json={"username": "alice2", "email": "ALICE@example.com", "password": "long-enough"},
    )
    assert r.status_code == 400
    assert r.json()["detail"]["code"] == "EMAIL_TAKEN"


def test_register_validation(client):
    r = client.post("/api/auth/register", json={"username": "al", "email": "al@example.com", "password": "long-enough"})
    assert r.status_code == 400
    assert r.json()["detail"]["field"] == "username"

    r = client.post("/api/auth/register", json={"username": "alice", "email": "nope", "password": "long-enough"})
    assert r.json()["detail"]["field"] == "email"

    r = client.post("/api/auth/register", json={"username": "alice", "email": "a@example.com", "password": "short"})
    assert r.json()["detail"]["field"] == "password"


def test_login_and_logout(make_user):
    make_user("alice", password="correct-horse")
    c = TestClient(app)

    r = c.post("/api/auth/login", json={"username": "alice", "password": "battery-staple"})
    assert r.status_code == 401
    assert r.json()["detail"]["code"] == "BAD_CREDENTIALS"

    r = c.post("/api/auth/login", json={"username": "nobody", "password": "correct-horse"})
    assert r.status_code == 401

    r = c.post("/api/auth/login", json={"username": "alice", "password": "correct-horse"})
    assert r.status_code == 200
    assert c.get("/api/auth/me").json()["username"] == "alice"

    assert c.post("/api/auth/logout").status_code == 200
    assert c.get("/api/auth/me").status_code == 401
