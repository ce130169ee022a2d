"""SQLAlchemy ORM models for the catalog (courses, lessons) and order ledger.

Separate from the Pydantic models in ``schemas.py`` which describe the wire
format. This layer manages persistence concerns only.
"""
from __future__ import annotations
import enum
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, declarative_base, mapped_column

Base = declarative_base()

PRICE_TYPE = Numeric(10, 2)


class OrderStatus(str, enum.Enum):
    # rejected purchases raise instead of being stored
    COMPLETED = "completed"


class CourseRecord(Base):
    __tablename__ = "courses"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200))
    subtitle: Mapped[Optional[str]] = mapped_column(String(300), nullable=True)
    price: Mapped[Decimal] = mapped_column(PRICE_TYPE, default=Decimal("0"))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    thumbnail_url: Mapped[Optional[str]] = mapped_column(
        String(2048), nullable=True
    )
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    level: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    published: Mapped[bool] = mapped_column(
        Boolean, default=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "subtitle": self.subtitle,
            "price": self.price,
            "description": self.description,
            "thumbnail_url": self.thumbnail_url,
            "category": self.category,
            "level": self.level,
            "published": self.published,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


class LessonRecord(Base):
    """Lesson owned by exactly one course; removed together with it."""

    __tablename__ = "lessons"
    __table_args__ = (
        Index("ix_lessons_course_order", "course_id", "order_index"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    course_id: Mapped[int] = mapped_column(
        ForeignKey("courses.id", ondelete="CASCADE"), index=True
    )
    title: Mapped[str] = mapped_column(String(200))
    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    video_url: Mapped[Optional[str]] = mapped_column(
        String(2048), nullable=True
    )
    order_index: Mapped[int] = mapped_column(Integer, default=0)
    free_preview: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "course_id": self.course_id,
            "title": self.title,
            "content": self.content,
            "video_url": self.video_url,
            "order": self.order_index,
            "free_preview": self.free_preview,
            "created_at": self.created_at.isoformat(),
        }


class OrderRecord(Base):
    """Purchase ledger entry.

    ``course_id`` is a plain column, not a foreign key, so orders survive the
    deletion of their course. ``price`` and ``course_title`` are snapshots
    taken when the order was placed.
    """

    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    course_id: Mapped[int] = mapped_column(Integer, index=True)
    course_title: Mapped[str] = mapped_column(String(200))
    buyer_name: Mapped[str] = mapped_column(String(200))
    buyer_email: Mapped[str] = mapped_column(String(320))
    price: Mapped[Decimal] = mapped_column(PRICE_TYPE)
    status: Mapped[str] = mapped_column(
        String(32), default=OrderStatus.COMPLETED.value, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "course_id": self.course_id,
            "course_title": self.course_title,
            "buyer_name": self.buyer_name,
            "buyer_email": self.buyer_email,
            "price": self.price,
            "status": self.status,
            "created_at": self.created_at.isoformat(),
        }
