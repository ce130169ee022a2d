"""Order service: records purchases against the live catalog.

``place_order`` reads the course under its row lock and writes the order in
the same transaction, so a concurrent unpublish is either seen (purchase
rejected) or ordered after the purchase commits. Rejected attempts leave no
row behind.
"""
from __future__ import annotations
import logging
from typing import Dict, List, Optional, Sequence

from coursehub.errors import IneligiblePurchaseError, ValidationError
from coursehub.models.persisted import OrderRecord
from coursehub.repositories.course_repo import CourseRepository
from coursehub.repositories.order_repo import OrderRepository
from coursehub.services.base import BaseService, transactional

logger = logging.getLogger(__name__)


class OrderService(BaseService):
    def __init__(self, session, timeout=None):
        super().__init__(session, timeout)
        self.courses = CourseRepository(session)
        self.orders = OrderRepository(session)

    @transactional
    async def place_order(
        self, course_id: int, buyer_name: str, buyer_email: str
    ) -> OrderRecord:
        errors: List[Dict[str, str]] = []
        if not buyer_name or not buyer_name.strip():
            errors.append({"field": "buyer_name", "message": "Buyer name is required"})
        if not buyer_email or not buyer_email.strip():
            errors.append({"field": "buyer_email", "message": "Buyer email is required"})
        if errors:
            raise ValidationError("Buyer name and email are required", fields=errors)

        course = await self.courses.get(course_id, for_update=True)
        if not course.published:
            logger.warning(
                "Rejected purchase of unpublished course %s", course_id
            )
            raise IneligiblePurchaseError(
                f"Course {course_id} is not published"
            )

        order = await self.orders.create_from_course(
            course, buyer_name.strip(), buyer_email.strip()
        )
        logger.info(
            "Order %s completed for course %s at %s",
            order.id,
            course.id,
            order.price,
        )
        return order

    @transactional
    async def get_order(self, order_id: int) -> OrderRecord:
        return await self.orders.get(order_id)

    @transactional
    async def list_orders(
        self, course_id: Optional[int] = None
    ) -> Sequence[OrderRecord]:
        return await self.orders.list(course_id=course_id)
