"""
Pytest configuration and fixtures for backend testing
"""

import os
import tempfile

import pytest
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import NullPool

# Set test environment before the app (and its engine) is imported
_TEST_DIR = tempfile.mkdtemp(prefix="coursehub-tests-")
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR}/coursehub.db"
os.environ["DB_CREATE_ALL"] = "true"
os.environ["AUTO_MIGRATE"] = "false"
os.environ.setdefault("STORAGE_TIMEOUT_SECONDS", "10")

from coursehub.main import app  # noqa: E402
from coursehub.db.config import (  # noqa: E402
    build_engine,
    build_session_factory,
    get_session,
    init_db,
)


@pytest.fixture(scope="session")
def test_client():
    """Synchronous client against the real app and its configured database"""
    with TestClient(app) as client:
        yield client


@pytest.fixture
async def engine(tmp_path):
    """Fresh SQLite file per test; NullPool gives each session its own connection"""
    db_url = f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"
    engine = build_engine(db_url, poolclass=NullPool)
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
async def test_app(session_factory):
    async def override_session():
        async with session_factory() as session:
            try:
                yield session
            finally:
                if session.in_transaction():
                    await session.rollback()

    app.dependency_overrides[get_session] = override_session
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def client(test_app):
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def course_payload():
    """Body the admin "Create Course" form sends"""
    return {
        "title": "Go Basics",
        "subtitle": "Learn Go",
        "price": 49,
        "description": "Types, slices and goroutines",
        "thumbnail_url": "https://img.example.com/go.png",
        "published": False,
    }


# Helper functions for tests
async def create_course(client, **overrides):
    payload = {
        "title": "Go Basics",
        "subtitle": "Learn Go",
        "price": 49,
        "description": "Types, slices and goroutines",
        "thumbnail_url": "",
        "published": False,
    }
    payload.update(overrides)
    r = await client.post("/api/courses", json=payload)
    assert r.status_code == 201, r.text
    return r.json()


async def publish(client, course_id, published=True):
    r = await client.patch(
        f"/api/courses/{course_id}", json={"published": published}
    )
    assert r.status_code == 200, r.text
    return r.json()


async def buy(client, course_id, name="Ann", email="ann@x.com"):
    return await client.post(
        "/api/orders",
        json={"course_id": course_id, "buyer_name": name, "buyer_email": email},
    )


def assert_error(response, status_code, kind):
    """Assert that response is an error envelope of the given kind"""
    assert response.status_code == status_code, response.text
    body = response.json()
    assert body["success"] is False
    assert body["kind"] == kind
    assert body["message"]
    return body


def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow running"
    )
