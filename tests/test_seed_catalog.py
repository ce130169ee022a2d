"""Seed script runs against the test database and always disposes the engine."""
import pytest

from coursehub.services.catalog import CatalogService
from scripts import seed_catalog


@pytest.fixture
def patched_seed(monkeypatch, engine, session_factory):
    closed = []

    async def fake_init_db():
        return None

    async def fake_close_db():
        closed.append(True)

    monkeypatch.setattr(seed_catalog, "SessionLocal", session_factory)
    monkeypatch.setattr(seed_catalog, "init_db", fake_init_db)
    monkeypatch.setattr(seed_catalog, "close_db", fake_close_db)
    return closed


@pytest.mark.asyncio
async def test_seed_then_reseed_closes_db(patched_seed, session_factory):
    await seed_catalog.seed_catalog()
    assert len(patched_seed) == 1

    # second run takes the "already seeded" path
    await seed_catalog.seed_catalog()
    assert len(patched_seed) == 2

    async with session_factory() as session:
        catalog = CatalogService(session)
        courses = await catalog.list_courses()
        published = await catalog.list_courses(published=True)
    assert len(courses) == len(seed_catalog.SEED_COURSES)
    assert [c.title for c in published] == ["Go Basics", "React for Beginners"]
