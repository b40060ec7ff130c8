"""
Workout Routes

Manually logged workouts and the workout history.
Synced workouts are written by /smartwatch/sync/{brand}.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_async_db
from app.features.tracker import WorkoutRepository
from app.features.tracker.schemas import WorkoutCreate, WorkoutResponse

router = APIRouter()

MANUAL_SOURCE = "manual"


@router.get("", response_model=list[WorkoutResponse])
async def list_workouts(
    limit: Optional[int] = Query(None, ge=1, le=1000),
    db: AsyncSession = Depends(get_async_db)
):
    """List workouts, newest first."""
    return await WorkoutRepository(db).list_recent(limit=limit)


@router.post("", response_model=WorkoutResponse, status_code=201)
async def create_workout(data: WorkoutCreate, db: AsyncSession = Depends(get_async_db)):
    """Log a workout by hand."""
    repo = WorkoutRepository(db)
    workout_id = await repo.create_workout({**data.model_dump(), "source": MANUAL_SOURCE})
    return await repo.get_by_id(workout_id)
