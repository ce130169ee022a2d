"""
Pydantic models for the HTTP contract.

Field names are snake_case and must match what the storefront and admin
panel send and read. Money travels as a JSON number.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, List, Optional

from pydantic import BaseModel, Field, PlainSerializer

Money = Annotated[
    Decimal,
    PlainSerializer(float, return_type=float, when_used="json"),
]


# Courses -------------------------------------------------------------------


class CourseCreate(BaseModel):
    """Admin "Create Course" form. ``published`` is accepted but ignored."""
    title: str = Field(..., min_length=1, max_length=200)
    subtitle: Optional[str] = Field(None, max_length=300)
    price: Decimal = Field(..., ge=0, description="Price in currency units")
    description: Optional[str] = None
    thumbnail_url: Optional[str] = Field(None, max_length=2048)
    category: Optional[str] = Field(None, max_length=100)
    level: Optional[str] = Field(None, max_length=50)
    published: Optional[bool] = Field(
        None, description="Ignored: new courses always start as drafts"
    )


class CourseUpdate(BaseModel):
    """Partial update; only keys present in the request body are applied.

    Unknown keys (``id``, ``created_at`` ...) sent back by the admin panel are
    ignored.
    """
    title: Optional[str] = Field(None, max_length=200)
    subtitle: Optional[str] = Field(None, max_length=300)
    price: Optional[Decimal] = Field(None, ge=0)
    description: Optional[str] = None
    thumbnail_url: Optional[str] = Field(None, max_length=2048)
    category: Optional[str] = Field(None, max_length=100)
    level: Optional[str] = Field(None, max_length=50)
    published: Optional[bool] = None


class CourseOut(BaseModel):
    id: int
    title: str
    subtitle: Optional[str]
    price: Money
    description: Optional[str]
    thumbnail_url: Optional[str]
    category: Optional[str]
    level: Optional[str]
    published: bool
    created_at: str
    updated_at: str


# Lessons -------------------------------------------------------------------


class LessonCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: Optional[str] = None
    video_url: Optional[str] = Field(None, max_length=2048)
    order: int = Field(0, description="Display order within the course")
    free_preview: bool = False


class LessonOut(BaseModel):
    id: int
    course_id: int
    title: str
    content: Optional[str]
    video_url: Optional[str]
    order: int
    free_preview: bool
    created_at: str


# Orders --------------------------------------------------------------------


class OrderCreate(BaseModel):
    course_id: int
    buyer_name: str = Field(..., min_length=1, max_length=200)
    buyer_email: str = Field(..., min_length=1, max_length=320)


class OrderOut(BaseModel):
    id: int
    status: str
    course_id: int
    course_title: str
    buyer_name: str
    buyer_email: str
    price: Money
    created_at: str


# Admin / service -------------------------------------------------------------


class AdminSummary(BaseModel):
    total_courses: int
    published_courses: int
    total_lessons: int
    total_sales: int
    revenue: Money


class FieldError(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    """Error envelope returned for every non-2xx response"""
    success: bool = False
    kind: str = Field(..., description="Machine-readable error kind")
    message: str = Field(..., description="Human-readable message")
    fields: List[FieldError] = Field(default_factory=list)
    timestamp: str
    path: str


class HealthCheckResponse(BaseModel):
    """Health check response model"""
    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Application version")
    environment: str = Field(..., description="Current environment")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Check timestamp")
    uptime: Optional[float] = Field(None, description="Uptime in seconds")
