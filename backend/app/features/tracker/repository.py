"""
Tracker repositories.

Data access layer for goals, workouts and habit data.
"""

import logging
from typing import Any

from sqlalchemy import select, desc
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.repository import BaseRepository
from .models import Goal, Workout, HabitData

logger = logging.getLogger(__name__)


class WorkoutConflictError(Exception):
    """Insert rejected by the (source, external_id) unique constraint."""

    def __init__(self, source: str | None, external_id: str | None):
        self.source = source
        self.external_id = external_id
        super().__init__(
            f"Workout {source}:{external_id} already exists"
        )


class GoalRepository(BaseRepository[Goal]):
    """Repository for workout goals."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Goal)

    async def get_current(self) -> Goal | None:
        """Most recently created goal, None if no goal was ever set."""
        goals = await self.get_all(
            order_by=[desc(Goal.created_at), desc(Goal.id)],
            limit=1
        )
        return goals[0] if goals else None

    async def set_current(self, distance: float, heart_rate: int, duration: int) -> Goal:
        """
        Store a new current goal.

        Previous goals are kept for history; the newest row wins.
        """
        goal = await self.create(
            distance=distance,
            heart_rate=heart_rate,
            duration=duration
        )
        await self.db.commit()
        return goal


class WorkoutRepository(BaseRepository[Workout]):
    """
    Repository for workouts.

    Also serves as the storage collaborator of the smartwatch sync:
    find_workouts_in_range() and create_workout().
    """

    def __init__(self, db: AsyncSession):
        super().__init__(db, Workout)

    async def list_recent(self, limit: int | None = None) -> list[Workout]:
        """Workouts ordered newest first (by date, then time)."""
        return await self.get_all(
            order_by=[desc(Workout.date), desc(Workout.time)],
            limit=limit
        )

    async def find_workouts_in_range(self, start_date: str, end_date: str) -> list[Workout]:
        """
        Get workouts whose date falls within [start_date, end_date].

        Dates are ISO strings, so lexical comparison is chronological.
        """
        result = await self.db.execute(
            select(Workout)
            .where(Workout.date >= start_date)
            .where(Workout.date <= end_date)
            .order_by(Workout.date, Workout.time)
        )
        return list(result.scalars().all())

    async def create_workout(self, fields: dict[str, Any]) -> int:
        """
        Insert and commit a single workout.

        Each workout is its own transaction so one failed insert never
        rolls back the others in a sync batch.

        Returns:
            ID of the persisted workout

        Raises:
            WorkoutConflictError: source/external_id already stored
        """
        workout = Workout(**fields)
        self.db.add(workout)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            if fields.get("external_id") is not None:
                raise WorkoutConflictError(fields.get("source"), fields.get("external_id"))
            raise
        except SQLAlchemyError:
            await self.db.rollback()
            raise
        await self.db.refresh(workout)
        return workout.id


class HabitDataRepository(BaseRepository[HabitData]):
    """Repository for per-day habit achievement."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, HabitData)

    async def list_all(self) -> list[HabitData]:
        return await self.get_all(order_by=desc(HabitData.date))

    async def get_by_date(self, date: str) -> HabitData | None:
        return await self.get_by(date=date)

    async def create_or_update(self, date: str, **fields) -> HabitData:
        """
        Upsert habit data for a day.

        Only fields that are passed are overwritten on an existing row.
        """
        existing = await self.get_by_date(date)
        if existing:
            entity = await self.update(existing, **fields)
        else:
            entity = await self.create(date=date, **fields)
        await self.db.commit()
        logger.debug(f"Habit data saved for {date}")
        return entity
