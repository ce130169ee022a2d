"""Repository layer for the catalog: courses and their lessons.

Provides an abstraction over direct SQLAlchemy session usage so that services
remain thin and testable. Methods only ``flush``; the calling service owns the
transaction and decides when to commit.
"""
from __future__ import annotations
from typing import Any, Dict, Optional, Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from coursehub.errors import CourseNotFoundError
from coursehub.models.persisted import CourseRecord, LessonRecord


class CourseRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    # CREATE -----------------------------------------------------------------
    async def create(self, **fields: Any) -> CourseRecord:
        record = CourseRecord(**fields)
        self.session.add(record)
        await self.session.flush()
        await self.session.refresh(record)
        return record

    # READ -------------------------------------------------------------------
    async def list(
        self, published: Optional[bool] = None
    ) -> Sequence[CourseRecord]:
        stmt = select(CourseRecord).order_by(
            CourseRecord.created_at, CourseRecord.id
        )
        if published is not None:
            stmt = stmt.where(CourseRecord.published == published)
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def get(self, pk: int, for_update: bool = False) -> CourseRecord:
        """Load one course.

        ``for_update`` takes the row lock on backends that support it, so
        publish toggles, lesson inserts and purchases on the same course are
        serialized.
        """
        stmt = select(CourseRecord).where(CourseRecord.id == pk)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        record = result.scalar_one_or_none()
        if not record:
            raise CourseNotFoundError(f"Course {pk} not found")
        return record

    async def count(self, published: Optional[bool] = None) -> int:
        stmt = select(func.count(CourseRecord.id))
        if published is not None:
            stmt = stmt.where(CourseRecord.published == published)
        return (await self.session.execute(stmt)).scalar_one()

    # UPDATE -----------------------------------------------------------------
    async def update_record(
        self, record: CourseRecord, fields: Dict[str, Any]
    ) -> CourseRecord:
        for name, value in fields.items():
            setattr(record, name, value)
        await self.session.flush()
        await self.session.refresh(record)
        return record

    # DELETE -----------------------------------------------------------------
    async def delete_record(self, record: CourseRecord) -> None:
        # explicit so the cascade does not depend on FK enforcement
        await self.session.execute(
            delete(LessonRecord).where(LessonRecord.course_id == record.id)
        )
        await self.session.delete(record)
        await self.session.flush()

    # LESSONS ----------------------------------------------------------------
    async def list_lessons(self, course_id: int) -> Sequence[LessonRecord]:
        result = await self.session.execute(
            select(LessonRecord)
            .where(LessonRecord.course_id == course_id)
            .order_by(LessonRecord.order_index, LessonRecord.id)
        )
        return result.scalars().all()

    async def add_lesson(self, course_id: int, **fields: Any) -> LessonRecord:
        record = LessonRecord(course_id=course_id, **fields)
        self.session.add(record)
        await self.session.flush()
        await self.session.refresh(record)
        return record

    async def count_lessons(self) -> int:
        result = await self.session.execute(select(func.count(LessonRecord.id)))
        return result.scalar_one()
