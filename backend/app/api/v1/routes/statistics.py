"""
Statistics Routes
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_async_db
from app.features.tracker import HabitDataRepository, compute_statistics
from app.features.tracker.schemas import StatisticsResponse

router = APIRouter()


@router.get("", response_model=StatisticsResponse)
async def get_statistics(db: AsyncSession = Depends(get_async_db)):
    """Current streak, days with data and average achievement rate."""
    days = await HabitDataRepository(db).list_all()
    return StatisticsResponse(**compute_statistics(days))
