"""
Habit Data Routes

Per-day record of which goals were achieved.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_async_db
from app.features.tracker import HabitDataRepository
from app.features.tracker.schemas import HabitDataResponse, HabitDataUpsert

router = APIRouter()


@router.get("", response_model=list[HabitDataResponse])
async def list_habit_data(db: AsyncSession = Depends(get_async_db)):
    return await HabitDataRepository(db).list_all()


@router.get("/{date}", response_model=HabitDataResponse)
async def get_habit_data(date: str, db: AsyncSession = Depends(get_async_db)):
    habit = await HabitDataRepository(db).get_by_date(date)
    if not habit:
        raise HTTPException(status_code=404, detail=f"No habit data for {date}")
    return habit


@router.post("", response_model=HabitDataResponse)
async def upsert_habit_data(data: HabitDataUpsert, db: AsyncSession = Depends(get_async_db)):
    """Create or overwrite the habit data of a day."""
    fields = data.model_dump(exclude={"date"})
    return await HabitDataRepository(db).create_or_update(data.date, **fields)
