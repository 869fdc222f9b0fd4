import os
import sys
import sqlite3
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from promptlib.config import Settings
from promptlib.db import Store
from promptlib.repository import user_repo

CALLBACK_SECRET = "test-callback-secret"


@pytest.fixture(scope="session")
def tmp_db_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("db") / "prompts_test.db"
    # Point the app to this temp DB
    os.environ["PROMPTLIB_DB_PATH"] = str(path)
    Store(str(path)).init_schema()
    return str(path)


@pytest.fixture()
def settings(tmp_db_path):
    return Settings(
        db_path=tmp_db_path,
        app_env="test",
        jwt_secret="test-secret",
        callback_secret=CALLBACK_SECRET,
        admin_emails=["admin@example.com"],
    )


@pytest.fixture()
def store(settings):
    s = Store(settings.db_path)
    yield s
    s.close()


@pytest.fixture()
def client(settings, store):
    from promptlib.api import create_app
    from fastapi.testclient import TestClient
    return TestClient(create_app(settings, store))


@pytest.fixture()
def signin_headers():
    return {"X-Auth-Callback-Secret": CALLBACK_SECRET}


@pytest.fixture()
def login(client, signin_headers):
    """Sign in through the API and return auth headers for the given email."""
    def _login(email: str, name: str = "Test User"):
        r = client.post(
            "/api/auth/signin",
            json={"provider": "google", "email": email, "name": name},
            headers=signin_headers,
        )
        assert r.status_code == 200, r.text
        return {"Authorization": f"Bearer {r.json()['access_token']}"}
    return _login


@pytest.fixture()
def add_user(store):
    def _add(email: str, name: str = "Test User") -> str:
        with store.connect() as conn:
            user_repo.upsert(conn, email, email, name)
            conn.commit()
        return email
    return _add


@pytest.fixture(autouse=True)
def _clean_db(tmp_db_path):
    # Clean tables before each test for isolation
    # Safety: ensure we only ever wipe the temp DB, never a real one
    assert os.environ.get("PROMPTLIB_DB_PATH") == tmp_db_path, "Refusing to clean non-temp DB"
    tables = ["saved_prompts", "prompts", "users", "operation_log"]
    conn = sqlite3.connect(tmp_db_path)
    try:
        for t in tables:
            conn.execute(f"DELETE FROM {t}")
        conn.commit()
    finally:
        conn.close()
    yield
