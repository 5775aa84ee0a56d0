"""
Shared pytest fixtures.

Configuration is read at import time, so the environment is set here before
any gridops module is imported: a throwaway SQLite file and a low bcrypt
work factor keep the suite fast and isolated from a developer database.
"""

import os
import tempfile

_TEST_DIR = tempfile.mkdtemp(prefix="gridops-tests-")
os.environ["ENV"] = "dev"
os.environ["DATABASE_PATH"] = os.path.join(_TEST_DIR, "gridops-test.db")
os.environ["SECRET_KEY"] = "gridops-test-signing-secret-0123456789"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ACCESS_TOKEN_MINUTES"] = "0"

import pytest
from fastapi.testclient import TestClient

from gridops.auth_context import AuthContext
from gridops.credentials import register
from gridops.db import TABLES, get_db, init_db
from gridops.main import app


@pytest.fixture(autouse=True)
def clean_db():
    """Fresh schema for every test; all rows wiped afterwards."""
    init_db()
    yield
    conn = get_db()
    try:
        for table in TABLES:
            conn.execute(f"DELETE FROM {table}")
        conn.commit()
    finally:
        conn.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def conn():
    """Direct storage connection for tests that bypass HTTP."""
    connection = get_db()
    yield connection
    connection.close()


@pytest.fixture
def signup(client):
    """
    Register a user over HTTP and return its Authorization headers.

    Usage:
        headers = signup("alice", "secret1")
    """
    def _signup(username: str, password: str = "pw-123456") -> dict:
        response = client.post("/user", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}
    return _signup


@pytest.fixture
def make_ctx(conn):
    """Register a user directly in storage and return its AuthContext."""
    def _make_ctx(username: str) -> AuthContext:
        user = register(conn, username, "pw-123456")
        return AuthContext(user_id=user.id, username=user.username)
    return _make_ctx
