"""
Goal Routes

Endpoints for the current workout goal.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_async_db
from app.features.tracker import GoalRepository
from app.features.tracker.schemas import GoalResponse, GoalUpdate

router = APIRouter()


@router.get("/current", response_model=GoalResponse)
async def get_current_goal(db: AsyncSession = Depends(get_async_db)):
    """Get the most recently set goal."""
    goal = await GoalRepository(db).get_current()
    if not goal:
        raise HTTPException(status_code=404, detail="No goal set")
    return goal


@router.put("", response_model=GoalResponse)
async def set_goal(data: GoalUpdate, db: AsyncSession = Depends(get_async_db)):
    """Replace the current goal."""
    return await GoalRepository(db).set_current(
        distance=data.distance,
        heart_rate=data.heart_rate,
        duration=data.duration
    )
