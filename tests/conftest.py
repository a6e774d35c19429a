import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("SECRET_KEY", "tests-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./messagely-tests.sqlite3")

from app.core.config import Settings
from app.main import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(
        SECRET_KEY="not-so-secret",
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'test.sqlite3'}",
        HASH_WORK_FACTOR=1,
    )


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as c:
        yield c


def register(client, username, password="secret1", **extra):
    payload = {
        "username": username,
        "password": password,
        "first_name": extra.get("first_name", username.title()),
        "last_name": extra.get("last_name", "Tester"),
        "phone": extra.get("phone", "555-0100"),
    }
    response = client.post("/api/auth/register/", json=payload)
    assert response.status_code == 200, response.text
    return response.json()["token"]


def bearer(token):
    return {"Authorization": f"Bearer {token}"}
