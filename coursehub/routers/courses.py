"""Courses router: catalog listing, admin course management and lessons.

Domain errors raised by the service propagate to the handlers registered in
``coursehub.main``; nothing here maps exceptions by hand.
"""
from __future__ import annotations
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from coursehub.db.config import get_session
from coursehub.models.schemas import (
    CourseCreate,
    CourseOut,
    CourseUpdate,
    LessonCreate,
    LessonOut,
)
from coursehub.services.catalog import CatalogService

router = APIRouter(prefix="/courses", tags=["Courses"])

# Helpers ------------------------------------------------------------------


async def _get_service(
    session: AsyncSession = Depends(get_session),
) -> CatalogService:
    return CatalogService(session)

# Routes -------------------------------------------------------------------


@router.get("", response_model=List[CourseOut])
async def list_courses(
    published: Optional[bool] = None,
    service: CatalogService = Depends(_get_service),
):
    """List courses; ``?published=true`` is the storefront view."""
    courses = await service.list_courses(published=published)
    return [c.to_dict() for c in courses]


@router.post(
    "",
    response_model=CourseOut,
    status_code=status.HTTP_201_CREATED,
)
async def create_course(
    payload: CourseCreate, service: CatalogService = Depends(_get_service)
):
    record = await service.create_course(payload.model_dump())
    return record.to_dict()


@router.get("/{course_id}", response_model=CourseOut)
async def get_course(
    course_id: int, service: CatalogService = Depends(_get_service)
):
    course = await service.get_course(course_id)
    return course.to_dict()


@router.patch("/{course_id}", response_model=CourseOut)
async def update_course(
    course_id: int,
    payload: CourseUpdate,
    service: CatalogService = Depends(_get_service),
):
    course = await service.update_course(
        course_id, payload.model_dump(exclude_unset=True)
    )
    return course.to_dict()


@router.delete("/{course_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_course(
    course_id: int, service: CatalogService = Depends(_get_service)
):
    await service.delete_course(course_id)
    return None


@router.get("/{course_id}/lessons", response_model=List[LessonOut])
async def list_lessons(
    course_id: int, service: CatalogService = Depends(_get_service)
):
    lessons = await service.list_lessons(course_id)
    return [lesson.to_dict() for lesson in lessons]


@router.post(
    "/{course_id}/lessons",
    response_model=LessonOut,
    status_code=status.HTTP_201_CREATED,
)
async def add_lesson(
    course_id: int,
    payload: LessonCreate,
    service: CatalogService = Depends(_get_service),
):
    # a course_id in the body is ignored, the path decides the owner
    lesson = await service.add_lesson(course_id, payload.model_dump())
    return lesson.to_dict()
