"""
Shared fixtures

Environment is set before the package is imported so settings pick it up.
"""
import os

os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ADMIN_USER"] = "admin"
os.environ["ADMIN_PASS"] = "123"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from fastapi.testclient import TestClient

from smartwifi.database import Database
from smartwifi.main import create_app
from smartwifi.models import Cafe

ADMIN_USER = "admin"
ADMIN_PASS = "123"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'smartwifi.db'}"


@pytest.fixture
async def database(database_url, anyio_backend):
    db = Database(database_url)
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
async def session(database, anyio_backend):
    async with database.session() as s:
        yield s


@pytest.fixture
async def cafe_id(session, anyio_backend):
    cafe = Cafe(name="Corner Cafe")
    session.add(cafe)
    await session.commit()
    return cafe.id


@pytest.fixture
def client(database_url):
    app = create_app(Database(database_url))
    with TestClient(app) as c:
        yield c


def call(client, action, data=None, token=None):
    """POST one action to the endpoint."""
    headers = {"Authorization": f"Bearer {token}"} if token else {}
    return client.post("/api/egsmart", json={"action": action, "data": data}, headers=headers)


@pytest.fixture
def token(client):
    response = call(client, "login", {"user": ADMIN_USER, "pass": ADMIN_PASS})
    assert response.status_code == 200
    return response.json()["token"]
