"""Catalog service: course and lesson management with publish gating.

Course lifecycle is ``draft -> published -> draft``, driven only by
``update_course``. Deletion is allowed from either state and takes the
course's lessons with it; orders are never touched.
"""
from __future__ import annotations
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Sequence

from coursehub.errors import ValidationError
from coursehub.models.persisted import CourseRecord, LessonRecord
from coursehub.repositories.course_repo import CourseRepository
from coursehub.services.base import BaseService, transactional

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
# Numeric(10, 2)
MAX_PRICE = Decimal("99999999.99")

COURSE_FIELDS = (
    "title",
    "subtitle",
    "price",
    "description",
    "thumbnail_url",
    "category",
    "level",
    "published",
)
# may not be cleared by an update
REQUIRED_COURSE_FIELDS = ("title", "price", "published")


def _clean_title(value: Any, field: str = "title") -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError.for_field(field, "Title is required")
    return value.strip()


def _clean_price(value: Any) -> Decimal:
    if isinstance(value, bool) or value is None:
        raise ValidationError.for_field("price", "Price must be a number")
    try:
        price = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError.for_field("price", "Price must be a number") from None
    if not price.is_finite():
        raise ValidationError.for_field("price", "Price must be a number")
    if price < 0:
        raise ValidationError.for_field("price", "Price must not be negative")
    if price > MAX_PRICE:
        raise ValidationError.for_field("price", "Price is too large")
    return price.quantize(CENT)


class CatalogService(BaseService):
    def __init__(self, session, timeout=None):
        super().__init__(session, timeout)
        self.courses = CourseRepository(session)

    # Courses ------------------------------------------------------------------

    @transactional
    async def list_courses(
        self, published: Optional[bool] = None
    ) -> Sequence[CourseRecord]:
        return await self.courses.list(published=published)

    @transactional
    async def get_course(self, course_id: int) -> CourseRecord:
        return await self.courses.get(course_id)

    @transactional
    async def create_course(self, fields: Dict[str, Any]) -> CourseRecord:
        """Create a draft course; a requested ``published`` value is ignored."""
        values = {k: fields.get(k) for k in COURSE_FIELDS if k != "published"}
        values["title"] = _clean_title(values.get("title"))
        values["price"] = _clean_price(values.get("price"))
        values["published"] = False
        record = await self.courses.create(**values)
        logger.info("Created draft course %s (%r)", record.id, record.title)
        return record

    @transactional
    async def update_course(
        self, course_id: int, fields: Dict[str, Any]
    ) -> CourseRecord:
        """Apply a partial update; keys missing from ``fields`` stay as they are."""
        changes = {k: v for k, v in fields.items() if k in COURSE_FIELDS}
        record = await self.courses.get(course_id, for_update=True)
        errors: List[Dict[str, str]] = []
        for name in REQUIRED_COURSE_FIELDS:
            if name in changes and changes[name] is None:
                errors.append({"field": name, "message": f"{name} cannot be null"})
        if errors:
            raise ValidationError("Invalid course update", fields=errors)
        if "title" in changes:
            changes["title"] = _clean_title(changes["title"])
        if "price" in changes:
            changes["price"] = _clean_price(changes["price"])
        if "published" in changes:
            changes["published"] = bool(changes["published"])

        was_published = record.published
        record = await self.courses.update_record(record, changes)
        if record.published != was_published:
            logger.info(
                "Course %s %s",
                record.id,
                "published" if record.published else "unpublished",
            )
        return record

    @transactional
    async def delete_course(self, course_id: int) -> None:
        record = await self.courses.get(course_id, for_update=True)
        await self.courses.delete_record(record)
        logger.info("Deleted course %s and its lessons", course_id)

    # Lessons ------------------------------------------------------------------

    @transactional
    async def list_lessons(self, course_id: int) -> Sequence[LessonRecord]:
        await self.courses.get(course_id)  # ensure exists
        return await self.courses.list_lessons(course_id)

    @transactional
    async def add_lesson(
        self, course_id: int, fields: Dict[str, Any]
    ) -> LessonRecord:
        title = _clean_title(fields.get("title"))
        order = fields.get("order")
        if order is None:
            order = 0
        if isinstance(order, bool) or not isinstance(order, int):
            raise ValidationError.for_field("order", "Order must be an integer")
        await self.courses.get(course_id, for_update=True)
        lesson = await self.courses.add_lesson(
            course_id,
            title=title,
            content=fields.get("content"),
            video_url=fields.get("video_url"),
            order_index=order,
            free_preview=bool(fields.get("free_preview", False)),
        )
        logger.info("Added lesson %s to course %s", lesson.id, course_id)
        return lesson
