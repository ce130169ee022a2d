"""
Catalog Seeding Script

Creates a few demo courses with lessons for local development. The first two
courses are published so the storefront has something to show.

Usage: python -m scripts.seed_catalog
"""
import asyncio

from coursehub.db.config import SessionLocal, close_db, init_db
from coursehub.services.catalog import CatalogService


SEED_COURSES = [
    {
        "title": "Go Basics",
        "subtitle": "Types, slices, maps and goroutines",
        "price": 49,
        "description": "A practical introduction to the Go language.",
        "category": "Programming",
        "level": "Beginner",
        "publish": True,
        "lessons": [
            {"title": "Introduction", "order": 0, "free_preview": True},
            {"title": "Types and variables", "order": 1},
            {"title": "Concurrency", "order": 2},
        ],
    },
    {
        "title": "React for Beginners",
        "subtitle": "Components, state and effects",
        "price": 39.5,
        "description": "Build your first single page application.",
        "category": "Web",
        "level": "Beginner",
        "publish": True,
        "lessons": [
            {"title": "JSX", "order": 0, "free_preview": True},
            {"title": "Hooks", "order": 1},
        ],
    },
    {
        "title": "Advanced SQL",
        "subtitle": "Window functions and query plans",
        "price": 79,
        "category": "Data",
        "level": "Advanced",
        "publish": False,
        "lessons": [
            {"title": "Window functions", "order": 0},
        ],
    },
]


async def seed_catalog():
    """Seed the database with demo courses unless it already has some."""
    await init_db()

    try:
        async with SessionLocal() as session:
            catalog = CatalogService(session)
            existing = await catalog.list_courses()
            if existing:
                print(f"Catalog already seeded (found {len(existing)} courses)")
                return

            for entry in SEED_COURSES:
                fields = {
                    k: v for k, v in entry.items()
                    if k not in ("publish", "lessons")
                }
                course = await catalog.create_course(fields)
                for lesson in entry["lessons"]:
                    await catalog.add_lesson(course.id, lesson)
                if entry["publish"]:
                    await catalog.update_course(course.id, {"published": True})

            print(f"Successfully seeded {len(SEED_COURSES)} courses")
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio.run(seed_catalog())
