"""Admin router: dashboard summary."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from coursehub.db.config import get_session
from coursehub.models.schemas import AdminSummary
from coursehub.services.summary import SummaryService

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/summary", response_model=AdminSummary)
async def admin_summary(session: AsyncSession = Depends(get_session)):
    return await SummaryService(session).get_summary()
