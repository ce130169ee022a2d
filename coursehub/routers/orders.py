"""Orders router: storefront checkout plus read access to the ledger."""
from __future__ import annotations
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from coursehub.db.config import get_session
from coursehub.models.schemas import OrderCreate, OrderOut
from coursehub.services.orders import OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])


async def _get_service(
    session: AsyncSession = Depends(get_session),
) -> OrderService:
    return OrderService(session)


@router.post("", response_model=OrderOut, status_code=status.HTTP_201_CREATED)
async def place_order(
    payload: OrderCreate, service: OrderService = Depends(_get_service)
):
    """Buy a published course. The response carries the order id and status."""
    order = await service.place_order(
        payload.course_id, payload.buyer_name, payload.buyer_email
    )
    return order.to_dict()


@router.get("", response_model=List[OrderOut])
async def list_orders(
    course_id: Optional[int] = None,
    service: OrderService = Depends(_get_service),
):
    orders = await service.list_orders(course_id=course_id)
    return [o.to_dict() for o in orders]


@router.get("/{order_id}", response_model=OrderOut)
async def get_order(
    order_id: int, service: OrderService = Depends(_get_service)
):
    order = await service.get_order(order_id)
    return order.to_dict()
