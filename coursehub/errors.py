"""Domain error taxonomy.

Services raise these; the API layer in ``coursehub.main`` turns them into the
JSON error envelope using ``kind`` and ``status_code``. Storage driver errors
are translated into ``StorageTimeoutError`` / ``StorageConflictError`` before
they leave the service layer so driver text never reaches a client.
"""
from __future__ import annotations
from typing import Dict, List, Optional


class CourseHubError(Exception):
    """Base class for every error the API knows how to render."""

    kind = "InternalError"
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message}


class ValidationError(CourseHubError):
    kind = "ValidationError"
    status_code = 422
    default_message = "Invalid input"

    def __init__(
        self,
        message: Optional[str] = None,
        fields: Optional[List[Dict[str, str]]] = None,
    ):
        super().__init__(message)
        self.fields = fields or []

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(message, fields=[{"field": field, "message": message}])

    def to_dict(self) -> dict:
        body = super().to_dict()
        body["fields"] = self.fields
        return body


class NotFoundError(CourseHubError):
    kind = "NotFoundError"
    status_code = 404
    default_message = "Resource not found"


class CourseNotFoundError(NotFoundError):
    default_message = "Course not found"


class OrderNotFoundError(NotFoundError):
    default_message = "Order not found"


class IneligiblePurchaseError(CourseHubError):
    """Raised when a purchase targets a course that is not published."""

    kind = "IneligiblePurchaseError"
    status_code = 409
    default_message = "Course is not available for purchase"


class StorageConflictError(CourseHubError):
    kind = "StorageConflictError"
    status_code = 409
    default_message = "Storage conflict, please retry"


class StorageTimeoutError(CourseHubError):
    kind = "StorageTimeoutError"
    status_code = 503
    default_message = "Storage did not respond in time, please retry"


class InternalError(CourseHubError):
    pass
