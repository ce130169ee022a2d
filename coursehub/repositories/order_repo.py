"""Repository layer for the order ledger.

Orders are append-only: there is no update or delete here.
"""
from __future__ import annotations
from decimal import Decimal
from typing import Optional, Sequence, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from coursehub.errors import OrderNotFoundError
from coursehub.models.persisted import CourseRecord, OrderRecord, OrderStatus


class OrderRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_from_course(
        self,
        course: CourseRecord,
        buyer_name: str,
        buyer_email: str,
        status: OrderStatus = OrderStatus.COMPLETED,
    ) -> OrderRecord:
        """Insert an order carrying a snapshot of the course's price and title."""
        record = OrderRecord(
            course_id=course.id,
            course_title=course.title,
            buyer_name=buyer_name,
            buyer_email=buyer_email,
            price=course.price,
            status=status.value,
        )
        self.session.add(record)
        await self.session.flush()
        await self.session.refresh(record)
        return record

    async def get(self, pk: int) -> OrderRecord:
        result = await self.session.execute(
            select(OrderRecord).where(OrderRecord.id == pk)
        )
        record = result.scalar_one_or_none()
        if not record:
            raise OrderNotFoundError(f"Order {pk} not found")
        return record

    async def list(self, course_id: Optional[int] = None) -> Sequence[OrderRecord]:
        stmt = select(OrderRecord).order_by(
            OrderRecord.created_at.desc(), OrderRecord.id.desc()
        )
        if course_id is not None:
            stmt = stmt.where(OrderRecord.course_id == course_id)
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def sales_totals(
        self, status: OrderStatus = OrderStatus.COMPLETED
    ) -> Tuple[int, Decimal]:
        """Return ``(count, sum of price snapshots)`` for orders in ``status``."""
        result = await self.session.execute(
            select(func.count(OrderRecord.id), func.sum(OrderRecord.price))
            .where(OrderRecord.status == status.value)
        )
        count, total = result.one()
        return count, Decimal(str(total or 0))
