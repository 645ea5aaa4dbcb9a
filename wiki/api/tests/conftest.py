from __future__ import annotations

import os
import tempfile

# Settings are read at import time, so the environment must be ready first.
os.environ["DATA_DIR"] = tempfile.mkdtemp(prefix="wiki-tests-")
os.environ.pop("DATABASE_URL", None)
os.environ["SEED_DEMO"] = "0"
os.environ["SESSION_SECRET"] = "test-secret"
os.environ["PASSWORD_HASH_ITERATIONS"] = "1000"
os.environ["WIKILINKS_RESOLVE_PRIVATE"] = "0"

import pytest
from fastapi.testclient import TestClient

from wiki.api.db import Base, engine
from wiki.api.main import app


@pytest.fixture(autouse=True)
def fresh_db():
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    yield


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def make_user():
    """Return a TestClient logged in as a freshly registered user."""

    def _make(username: str = "alice", password: str = "correct-horse") -> TestClient:
        c = TestClient(app)
        r = c.post(
            "/api/auth/register",
            json={"username": username, "email": f"{username}@example.com", "password": password},
        )
        assert r.status_code == 201, r.text
        return c

    return _make


@pytest.fixture
def make_article():
    def _make(c: TestClient, title: str, content: str = "Body", **extra) -> dict:
        r = c.post("/api/articles", json={"title": title, "content": content, **extra})
        assert r.status_code == 201, r.text
        return r.json()

    return _make
