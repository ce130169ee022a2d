"""Admin summary: aggregate figures computed from the stores on every call."""
from __future__ import annotations
from decimal import Decimal

from coursehub.repositories.course_repo import CourseRepository
from coursehub.repositories.order_repo import OrderRepository
from coursehub.services.base import BaseService, transactional


class SummaryService(BaseService):
    def __init__(self, session, timeout=None):
        super().__init__(session, timeout)
        self.courses = CourseRepository(session)
        self.orders = OrderRepository(session)

    @transactional
    async def get_summary(self) -> dict:
        total_sales, revenue = await self.orders.sales_totals()
        return {
            "total_courses": await self.courses.count(),
            "published_courses": await self.courses.count(published=True),
            "total_lessons": await self.courses.count_lessons(),
            "total_sales": total_sales,
            "revenue": revenue.quantize(Decimal("0.01")),
        }
